"""
參考 store 使用的中介軟體。

中介軟體有兩種形式：
- 鉤子物件：實作 `on_next` / `on_complete` / `on_error`，由 store 包裹在 dispatch 外層。
- 工廠：可調用物件 `middleware(store)(next_dispatch) -> dispatch`。
"""
import logging
from typing import Any, Callable

from .actions import ActionCreator
from .types import Dispatch, GetState, Thunk

logger = logging.getLogger(__name__)


def _describe(action: Any) -> str:
    action_type = getattr(action, "type", None)
    if action_type is None and isinstance(action, dict):
        action_type = action.get("type")
    return action_type if isinstance(action_type, str) else repr(action)


# ———— Base Middleware ————
class BaseMiddleware:
    """
    基礎中介類，定義所有中介可能實現的鉤子。
    """

    def on_next(self, action: Any, prev_state: Any) -> None:
        """
        在 action 發送給 reducer 之前調用。

        Args:
            action: 正在 dispatch 的 Action
            prev_state: dispatch 之前的 store.state
        """
        pass

    def on_complete(self, next_state: Any, action: Any) -> None:
        """
        在 reducer 處理完 action 之後調用。

        Args:
            next_state: dispatch 之後的最新 store.state
            action: 剛剛 dispatch 的 Action
        """
        pass

    def on_error(self, error: Exception, action: Any) -> None:
        """
        如果 dispatch 過程中拋出異常，則調用此鉤子。例外之後仍會被重新拋出。
        """
        pass


# ———— LoggerMiddleware ————
class LoggerMiddleware(BaseMiddleware):
    """
    日誌中介，記錄每個 action 發送前和發送後的 state。
    """

    def __init__(self, level: int = logging.INFO, log: logging.Logger = logger):
        self.level = level
        self.log = log

    def on_next(self, action: Any, prev_state: Any) -> None:
        self.log.log(self.level, "dispatching %s", _describe(action))
        self.log.log(self.level, "state before %s: %r", _describe(action), prev_state)

    def on_complete(self, next_state: Any, action: Any) -> None:
        self.log.log(self.level, "state after %s: %r", _describe(action), next_state)

    def on_error(self, error: Exception, action: Any) -> None:
        self.log.error("error in %s: %s", _describe(action), error)


# ———— ThunkMiddleware ————
class ThunkMiddleware(BaseMiddleware):
    """
    支援 dispatch 函數 (thunk)，thunk 以 `thunk(dispatch, get_state)` 呼叫，
    其返回值即為 dispatch 的返回值。

    範例:
        ```python
        def add_later(amount):
            def thunk(dispatch, get_state):
                if get_state() < 100:
                    dispatch(add(amount))
                return get_state()
            return thunk

        store.dispatch(add_later(5))
        ```
    """

    def __call__(self, store: Any) -> Callable[[Dispatch], Dispatch]:
        get_state: GetState = store.get_state

        def middleware(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                # action creator 本身不是 thunk，交由下一層拒絕
                if callable(action) and not isinstance(action, ActionCreator):
                    thunk: Thunk = action
                    return thunk(store.dispatch, get_state)
                return next_dispatch(action)
            return dispatch
        return middleware
