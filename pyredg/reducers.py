"""
pyredg 的 Reducer 建構模組。

提供兩種建立 reducer 的方式：
- `create_reducer`：以 action 類型為鍵的處理函式表加上預設處理函式。
- `slice_reducer`：可鏈式呼叫的建構器，支援 `handle`、`default`、`match`。
"""
import logging
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Tuple

from immutables import Map

from .actions import is_ac_with_payload, is_with_payload, is_with_type_field
from .errors import ConfigurationError
from .types import S, HandlerMap, Predicate, Reducer
from .utils import choose, identity

logger = logging.getLogger(__name__)


def _action_type(action: Any) -> Any:
    # 同時接受 Action 物件與字典形式的 action
    if isinstance(action, Mapping):
        return action.get("type")
    return getattr(action, "type", None)


def _payload(action: Any) -> Any:
    if isinstance(action, Mapping):
        return action.get("payload")
    return getattr(action, "payload", None)


def create_reducer(initial_state: S) -> Callable[..., Reducer]:
    """
    建立 reducer 配置函式。

    Args:
        initial_state: 初始狀態，當 reducer 收到的 state 為 None 時使用

    Returns:
        `configure(handlers_by_type, default_handler=identity)`，返回實際的 reducer

    範例:
        >>> counter = create_reducer(0)({
        ...     "[Counter] Increment": lambda state, action: state + 1,
        ... })
        >>> counter(None, {"type": "[Counter] Increment"})
        1
    """
    def configure(
        handlers_by_type: HandlerMap,
        default_handler: Reducer = identity,
    ) -> Reducer:
        # 凍結處理函式表，之後對原映射的修改不影響 reducer
        handlers = Map(handlers_by_type)

        def reducer(state: Optional[S] = None, action: Any = None) -> S:
            if state is None:
                state = initial_state
            return choose(_action_type(action), handlers, default_handler, (state, action))

        # 設置 reducer 的初始狀態和處理器映射
        reducer.initial_state = initial_state  # type: ignore[attr-defined]
        reducer.handlers = handlers  # type: ignore[attr-defined]
        logger.debug("Created reducer handling %d action types", len(handlers))
        return reducer

    return configure


class SliceBuilder(Generic[S]):
    """
    建構 slice reducer 的可鏈式 API。

    每次建構都會使用新的實例，建構完成後不再保留或修改。
    """

    def __init__(self, initial_state: S):
        self.initial_state = initial_state
        self.handlers: Dict[str, Reducer] = {}
        self.matchers: List[Tuple[Predicate, Callable[..., S]]] = []
        self.default_handler: Optional[Reducer] = None

    def handle(self, action_creator: Any, handler: Callable[..., S]) -> "SliceBuilder[S]":
        """
        為某個 action creator 的類型註冊處理函式。

        帶負載的 action 會以 `handler(state, payload)` 呼叫，
        空 action 則以 `handler(state)` 呼叫。
        同一類型重複註冊時，後者覆蓋前者。

        Raises:
            ConfigurationError: `action_creator` 沒有字串類型的 `type`，
                或 `handler` 不可調用
        """
        if not is_with_type_field(action_creator) or isinstance(action_creator, Mapping):
            raise ConfigurationError(
                "handle() requires an action creator with a string 'type'",
                component="SliceBuilder.handle",
                action_creator=action_creator,
            )
        self._check_callable(handler, "SliceBuilder.handle")

        action_type = action_creator.type
        if action_type in self.handlers:
            logger.warning("Handler for action type '%s' overwritten", action_type)

        if is_ac_with_payload(action_creator):
            self.handlers[action_type] = lambda state, action: handler(state, _payload(action))
        else:
            self.handlers[action_type] = lambda state, action: handler(state)
        return self

    def default(self, handler: Reducer) -> "SliceBuilder[S]":
        """設置未匹配任何類型時使用的處理函式 `handler(state, action)`。"""
        self._check_callable(handler, "SliceBuilder.default")
        if self.default_handler is not None:
            logger.debug("Default handler overwritten")
        self.default_handler = handler
        return self

    def match(self, predicate: Predicate, handler: Callable[..., S]) -> "SliceBuilder[S]":
        """
        追加一個匹配器。

        匹配器會在主要分派之後、對所有 action（無論是否已被處理）依註冊順序執行。
        `predicate(action)` 為真時，帶負載的 action 以 `handler(state, payload)` 呼叫，
        否則以 `handler(state)` 呼叫；為假時狀態保持不變。
        """
        self._check_callable(predicate, "SliceBuilder.match")
        self._check_callable(handler, "SliceBuilder.match")
        self.matchers.append((predicate, handler))
        return self

    def build(self) -> Reducer:
        """以目前註冊的內容產生最終的 reducer。"""
        initial_state = self.initial_state
        configure = create_reducer(initial_state)
        if self.default_handler is not None:
            primary = configure(self.handlers, self.default_handler)
        else:
            primary = configure(self.handlers)
        matchers = tuple(self.matchers)

        def apply_matcher(state: S, action: Any, predicate: Predicate, handler: Callable[..., S]) -> S:
            if state is None:
                state = initial_state
            if not predicate(action):
                return state
            if is_with_payload(action):
                return handler(state, action.payload)
            return handler(state)

        def reducer(state: Optional[S] = None, action: Any = None) -> S:
            local_state = primary(state, action)
            for predicate, handler in matchers:
                local_state = apply_matcher(local_state, action, predicate, handler)
            return local_state

        reducer.initial_state = initial_state  # type: ignore[attr-defined]
        reducer.handlers = primary.handlers  # type: ignore[attr-defined]
        reducer.matchers = matchers  # type: ignore[attr-defined]
        return reducer

    @staticmethod
    def _check_callable(fn: Any, component: str) -> None:
        if not callable(fn):
            raise ConfigurationError(
                f"{component} expects a callable, got {type(fn).__name__}",
                component=component,
            )


def slice_reducer(initial_state: S) -> Callable[[Callable[[SliceBuilder[S]], Any]], Reducer]:
    """
    為狀態切片建立 reducer。

    Args:
        initial_state: 初始狀態

    Returns:
        接收建構函式 `builder(slice)` 並返回 reducer 的函式，也可當作裝飾器使用

    範例:
        >>> increment = define_action_creator("INC")
        >>> add = define_action_creator("ADD", lambda n: n)
        >>> @slice_reducer(0)
        ... def counter(slice):
        ...     slice.handle(increment, lambda s: s + 1).handle(add, lambda s, n: s + n)
        >>> counter(None, add(5))
        5
    """
    def build(builder: Callable[[SliceBuilder[S]], Any]) -> Reducer:
        slice_builder = SliceBuilder(initial_state)
        builder(slice_builder)
        return slice_builder.build()

    return build
