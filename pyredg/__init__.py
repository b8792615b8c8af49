"""
pyredg：型別化的 redux 風格工具。

提供 action creator、dispatch 綁定、reducer 建構器以及最小的參考 store。
"""
from .errors import (
    RedgError, ActionError, ConfigurationError,
    ErrorHandler, ErrorHandlerConfig, global_error_handler, handle_error
)
from .actions import (
    Action, EmptyAction, PayloadAction, AnyAction,
    ActionCreator, EmptyActionCreator, PayloadActionCreator,
    is_with_payload, is_ac_with_payload, is_with_type_field,
    define_action_creator, empty_action_creators, payload_action_creators,
    action_creators,
)
from .bindings import bind_action_creator, bind_action_creators, bind_action_creators_tree
from .reducers import create_reducer, slice_reducer, SliceBuilder
from .middleware import BaseMiddleware, LoggerMiddleware, ThunkMiddleware
from .store import Store, create_store, init_store
from .utils import choose, identity, is_string, object_map, to_bool

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "RedgError", "ActionError", "ConfigurationError",
    "ErrorHandler", "ErrorHandlerConfig", "global_error_handler", "handle_error",

    # Actions
    "Action", "EmptyAction", "PayloadAction", "AnyAction",
    "ActionCreator", "EmptyActionCreator", "PayloadActionCreator",
    "is_with_payload", "is_ac_with_payload", "is_with_type_field",
    "define_action_creator", "empty_action_creators", "payload_action_creators",
    "action_creators",

    # Bindings
    "bind_action_creator", "bind_action_creators", "bind_action_creators_tree",

    # Reducers
    "create_reducer", "slice_reducer", "SliceBuilder",

    # Middleware
    "BaseMiddleware", "LoggerMiddleware", "ThunkMiddleware",

    # Store
    "Store", "create_store", "init_store",

    # Utils
    "choose", "identity", "is_string", "object_map", "to_bool",
]
