"""
pyredg 的 Action 定義模組。

此模組提供 Action 類別（空 action 與帶負載 action 兩種變體）
以及建立 action creator 的函式。
Actions 是描述狀態變更意圖的不可變對象。
"""
import abc
import enum
import logging
from typing import Any, Callable, Dict, Generic, Iterator, Mapping, Optional, Tuple, Union, overload

from typing_extensions import TypeGuard

from .errors import ActionError
from .types import P, ActionDict, ActionEnum, PayloadCreator
from .utils import is_string, object_map, to_bool

logger = logging.getLogger(__name__)


class Action:
    """
    Action 的不可變基礎類別。

    只有兩個具體變體：`EmptyAction` 與 `PayloadAction`。
    變體本身就是判別標記，不會出現在 action 的公開欄位中。
    """
    __slots__ = ("type",)

    def __init__(self, type: str):
        object.__setattr__(self, "type", type)

    def __setattr__(self, name, value):
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Cannot delete immutable instance attribute '{name}'")

    def to_dict(self) -> ActionDict:
        """轉為與 redux 相容的字典，判別標記不會被保留。"""
        return {"type": self.type}

    def __eq__(self, other):
        if isinstance(other, Action):
            return type(self) is type(other) and self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(self.to_dict().values()))

    def __reduce__(self):
        return (type(self), tuple(self.to_dict().values()))


class EmptyAction(Action):
    """只包含 `type` 欄位的 action。"""
    __slots__ = ()

    def __repr__(self):
        return f"EmptyAction(type='{self.type}')"


class PayloadAction(Action, Generic[P]):
    """
    帶負載的 action：`{type, payload}`。

    `payload` 可以是任何值，包含 None。
    """
    __slots__ = ("payload",)

    def __init__(self, type: str, payload: P):
        super().__init__(type)
        object.__setattr__(self, "payload", payload)

    def to_dict(self) -> ActionDict:
        return {"type": self.type, "payload": self.payload}

    def __repr__(self):
        return f"PayloadAction(type='{self.type}', payload={self.payload!r})"


AnyAction = Union[EmptyAction, PayloadAction[Any]]


def is_with_payload(action: Any) -> TypeGuard[PayloadAction[Any]]:
    """
    判斷 action 是否帶有負載。

    只有經由本模組建立的 `PayloadAction` 會返回 True；
    字典形式或其他結構相似的對象一律視為不帶負載。
    """
    return isinstance(action, PayloadAction)


def is_with_type_field(candidate: Any) -> bool:
    """檢查候選對象是否具有字串類型的 `type` 欄位（屬性或映射鍵）。"""
    if candidate is None:
        return False
    if isinstance(candidate, Mapping):
        return is_string(candidate.get("type"))
    try:
        return is_string(getattr(candidate, "type", None))
    except Exception:  # 自訂 __getattr__ 可能拋出任意例外
        return False


class ActionCreator(abc.ABC):
    """
    Action creator 的基礎類別。

    可直接透過 `type` 與 `with_payload` 檢查，不需要呼叫。
    """
    __slots__ = ("type",)

    def __init__(self, action_type: str):
        object.__setattr__(self, "type", action_type)

    def __setattr__(self, name, value):
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    @property
    def with_payload(self) -> bool:
        return False

    @abc.abstractmethod
    def __call__(self, *args: Any, **kwargs: Any) -> Action:
        ...


class EmptyActionCreator(ActionCreator):
    """無參數的 action creator，返回 `EmptyAction`。"""
    __slots__ = ()

    def __call__(self) -> EmptyAction:
        return EmptyAction(self.type)

    def __repr__(self):
        return f"EmptyActionCreator(type='{self.type}')"


class PayloadActionCreator(ActionCreator, Generic[P]):
    """將所有參數轉交給 `creator`，並把結果包裝成 `payload`。"""
    __slots__ = ("creator",)

    def __init__(self, action_type: str, creator: Callable[..., P]):
        super().__init__(action_type)
        object.__setattr__(self, "creator", creator)

    @property
    def with_payload(self) -> bool:
        return True

    def __call__(self, *args: Any, **kwargs: Any) -> PayloadAction[P]:
        return PayloadAction(self.type, self.creator(*args, **kwargs))

    def __repr__(self):
        name = getattr(self.creator, "__name__", type(self.creator).__name__)
        return f"PayloadActionCreator(type='{self.type}', creator={name})"


def is_ac_with_payload(action_creator: Any) -> TypeGuard[PayloadActionCreator[Any]]:
    """判斷 action creator 是否產生帶負載的 action。"""
    return isinstance(action_creator, PayloadActionCreator)


@overload
def define_action_creator(action_type: str) -> EmptyActionCreator:
    ...


@overload
def define_action_creator(action_type: str, creator: Callable[..., P]) -> PayloadActionCreator[P]:
    ...


def define_action_creator(
    action_type: str,
    creator: Optional[Callable[..., Any]] = None,
) -> ActionCreator:
    """
    定義一個 action creator。

    Args:
        action_type: Action 的類型標識符
        creator: 可選的負載建立函式，接收呼叫 action creator 時的所有參數

    Returns:
        未提供 `creator` 時返回 `EmptyActionCreator`，否則返回 `PayloadActionCreator`

    範例:
        >>> increment = define_action_creator("[Counter] Increment")
        >>> increment()
        EmptyAction(type='[Counter] Increment')
        >>> add = define_action_creator("[Counter] Add", lambda amount: amount)
        >>> add(5)
        PayloadAction(type='[Counter] Add', payload=5)
    """
    if not to_bool(creator):
        return EmptyActionCreator(action_type)
    return PayloadActionCreator(action_type, creator)


def _enum_items(action_enum: ActionEnum) -> Iterator[Tuple[str, str]]:
    # 同時支援 Enum 類別與一般映射
    if isinstance(action_enum, type) and issubclass(action_enum, enum.Enum):
        for member in action_enum:
            yield member.name, member.value
    else:
        yield from action_enum.items()


def empty_action_creators(action_enum: ActionEnum) -> Dict[str, EmptyActionCreator]:
    """
    依照 action 枚舉建立一組空 action creator。

    Args:
        action_enum: 鍵為名稱、值為 action 類型字串的映射或 Enum 類別

    Returns:
        與枚舉鍵相同、值為 `EmptyActionCreator` 的字典
    """
    return {
        key: define_action_creator(action_type)
        for key, action_type in _enum_items(action_enum)
    }


def payload_action_creators(
    empty_creators: Dict[str, ActionCreator],
    payload_creators: Mapping[str, PayloadCreator],
) -> Dict[str, ActionCreator]:
    """
    以負載建立函式取代對應的空 action creator。

    只處理同時存在於兩個映射中的鍵，action 類型沿用 `empty_creators` 中
    已註冊的值。注意 `empty_creators` 會被原地修改並返回。
    值為 None 等假值的鍵與 `define_action_creator` 相同，會得到空 action creator。

    Args:
        empty_creators: `empty_action_creators` 的結果
        payload_creators: 鍵對應負載建立函式的映射

    Returns:
        更新後的 `empty_creators`

    Raises:
        ActionError: 已宣告鍵對應的負載建立函式為真值但不可調用
    """
    declared = {}
    for key, creator in payload_creators.items():
        if key not in empty_creators:
            logger.debug("Ignoring payload creator '%s': no such action declared", key)
            continue
        if to_bool(creator) and not callable(creator):
            raise ActionError(
                f"Payload creator for '{key}' is not callable",
                action_type=empty_creators[key].type,
                key=key,
            )
        declared[key] = creator

    empty_creators.update(
        object_map(
            declared,
            lambda key, creator: (key, define_action_creator(empty_creators[key].type, creator)),
        )
    )
    return empty_creators


def action_creators(
    action_enum: ActionEnum,
    payload_creators: Optional[Mapping[str, PayloadCreator]] = None,
) -> Dict[str, ActionCreator]:
    """
    為 action 枚舉建立 action creator 集合，可選擇性地合併負載建立函式。

    範例:
        >>> counter = action_creators(
        ...     {"increment": "[Counter] Increment", "add": "[Counter] Add"},
        ...     {"add": lambda amount: amount},
        ... )
        >>> counter["add"](3)
        PayloadAction(type='[Counter] Add', payload=3)
    """
    creators = empty_action_creators(action_enum)
    if payload_creators:
        return payload_action_creators(creators, payload_creators)
    logger.debug("Created %d empty action creators", len(creators))
    return creators
