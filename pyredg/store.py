"""
與 redux 相容的最小參考 store。

Store 持有狀態，在每次 dispatch 時呼叫 reducer，
並透過 reactivex 的 Subject 通知訂閱者。
"""
import inspect
import logging
from typing import Any, Callable, Generic, List, Optional

from reactivex import Observable, Subject
from reactivex import operators as ops
from reactivex.abc import DisposableBase

from .actions import ActionCreator, define_action_creator, is_with_type_field
from .errors import ActionError, global_error_handler
from .types import S, Dispatch, Reducer

logger = logging.getLogger(__name__)

# 根 Actions
init_store = define_action_creator("[Root] Init Store")


class Store(Generic[S]):
    """
    狀態容器，管理應用狀態並通知訂閱者狀態變更。
    """

    def __init__(self, reducer: Reducer, preloaded_state: Optional[S] = None):
        """
        Args:
            reducer: 根 reducer
            preloaded_state: 可選的預載狀態，None 時由 reducer 提供初始狀態
        """
        self._reducer = reducer
        self._action_subject: Subject = Subject()
        self._state_subject: Subject = Subject()
        self._middleware: List[Any] = []
        self._dispatch: Dispatch = self._dispatch_core
        # 以初始化 action 取得初始狀態
        self._state: S = reducer(preloaded_state, init_store())

    def _update_state(self, new_state: S) -> None:
        old_state = self._state
        self._state = new_state
        # 通知訂閱者，傳遞舊狀態與新狀態的元組
        self._state_subject.on_next((old_state, new_state))

    def _dispatch_core(self, action: Any) -> Any:
        """
        核心的 dispatch 方法：執行 reducer 並更新狀態。

        Raises:
            ActionError: action 沒有字串類型的 `type`，或傳入的是 action creator 本身
        """
        if isinstance(action, ActionCreator):
            raise ActionError(
                "Dispatched an action creator; call it to create the action",
                action_type=action.type,
            )
        if not is_with_type_field(action):
            raise ActionError(
                "Actions must carry a string 'type'; use ThunkMiddleware to dispatch functions",
                action=action,
            )
        try:
            new_state = self._reducer(self._state, action)
        except Exception as err:
            # 回報後重新拋出，狀態維持不變
            global_error_handler.handle(err)
            raise
        logger.debug("Reduced %s", action)
        self._update_state(new_state)
        self._action_subject.on_next(action)
        return action

    def _apply_middleware_chain(self) -> Dispatch:
        """
        構建中介軟體鏈，第一個註冊的中介軟體位於最外層。
        """
        dispatch = self._dispatch_core
        for mw in reversed(self._middleware):
            if callable(mw):
                # 工廠形式
                dispatch = mw(self)(dispatch)
            else:
                dispatch = self._wrap_obj_middleware(mw, dispatch)
        return dispatch

    def _wrap_obj_middleware(self, mw: Any, next_dispatch: Dispatch) -> Dispatch:
        """
        包裹鉤子物件型中介軟體。
        """
        def dispatch(action: Any) -> Any:
            mw.on_next(action, self._state)
            try:
                result = next_dispatch(action)
            except Exception as err:
                mw.on_error(err, action)
                raise
            mw.on_complete(self._state, action)
            return result

        return dispatch

    def apply_middleware(self, *middlewares: Any) -> "Store[S]":
        """
        一次註冊多個中介軟體，並重建 dispatch 鏈。

        Args:
            *middlewares: 要註冊的中介軟體，可以是類或實例
        """
        for m in middlewares:
            inst = m() if inspect.isclass(m) else m
            self._middleware.append(inst)
        self._dispatch = self._apply_middleware_chain()
        return self

    def dispatch(self, action: Any) -> Any:
        """
        分發一個動作，觸發狀態更新。

        Returns:
            傳入的 Action；若由 ThunkMiddleware 處理則為 thunk 的返回值
        """
        return self._dispatch(action)

    def get_state(self) -> S:
        return self._state

    @property
    def state(self) -> S:
        """當前狀態的快照。"""
        return self._state

    @property
    def action_stream(self) -> Observable:
        """已被 reducer 處理的 action 流。"""
        return self._action_subject

    def select(self, selector: Optional[Callable[[S], Any]] = None) -> Observable:
        """
        選擇狀態的一部分進行觀察。

        Args:
            selector: 從整個狀態中取出所需部分的函數，None 表示整個狀態

        Returns:
            發送 `(舊值, 新值)` 的 Observable，只在新值變化時發出
        """
        if selector is None:
            selector = lambda state: state

        return self._state_subject.pipe(
            ops.map(lambda pair: (selector(pair[0]), selector(pair[1]))),
            ops.distinct_until_changed(lambda pair: pair[1]),
        )

    def subscribe(self, callback: Callable[[S], Any]) -> DisposableBase:
        """訂閱狀態變更，每次 dispatch 後以新狀態呼叫 `callback`。"""
        return self._state_subject.subscribe(on_next=lambda pair: callback(pair[1]))


def create_store(reducer: Reducer, preloaded_state: Optional[S] = None, *middlewares: Any) -> Store[S]:
    """
    創建一個新的 Store 實例。

    Args:
        reducer: 根 reducer
        preloaded_state: 可選的預載狀態
        *middlewares: 要套用的中介軟體

    Returns:
        Store: 新創建的 Store 實例
    """
    store: Store[S] = Store(reducer, preloaded_state)
    if middlewares:
        store.apply_middleware(*middlewares)
    return store
