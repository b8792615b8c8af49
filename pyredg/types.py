"""
pyredg 的共用類型定義。

集中定義泛型變數、reducer / dispatch 的函式簽名與 action 相關的協議，
供其他模組與使用者的類型註解引用。
"""
from typing import Any, Callable, Mapping, TypeVar, Union

from typing_extensions import Protocol, TypedDict, runtime_checkable

# 泛型變數
S = TypeVar("S")  # 狀態類型
P = TypeVar("P")  # 負載類型


class ActionDict(TypedDict, total=False):
    """與 redux 相容的字典形式 action。"""
    type: str
    payload: Any


@runtime_checkable
class TypedCallable(Protocol):
    """帶有 `type` 屬性的可調用對象（action creator、已綁定的 thunk 等）。"""
    type: str

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


# 函式簽名
Dispatch = Callable[[Any], Any]
GetState = Callable[[], Any]
Thunk = Callable[[Dispatch, GetState], Any]
Reducer = Callable[[Any, Any], Any]
HandlerMap = Mapping[str, Reducer]
Predicate = Callable[[Any], bool]
PayloadCreator = Callable[..., Any]
ActionEnum = Union[Mapping[str, str], Any]  # Mapping 或 enum.Enum 子類
