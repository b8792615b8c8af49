"""
pyredg 的通用工具函式。

此模組提供 action / reducer 核心所需的小型函式：
淺層映射、布林轉換、字串判斷以及 `switch` 的函式化替代。
"""
from typing import Any, Callable, Dict, Mapping, Sequence, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")
K2 = TypeVar("K2")
V2 = TypeVar("V2")
T = TypeVar("T")


def identity(value: T, *_: Any) -> T:
    """返回第一個參數本身，其餘參數忽略。"""
    return value


def to_bool(value: Any) -> bool:
    """標準真值轉換。"""
    return bool(value)


def is_string(value: Any) -> bool:
    """判斷給定值是否為字串。"""
    return isinstance(value, str)


def object_map(
    mapping: Mapping[K, V],
    fn: Callable[[K, V], Tuple[K2, V2]],
) -> Dict[K2, V2]:
    """
    對映射中的每個 (key, value) 套用函式並收集結果，保持原有順序。

    Args:
        mapping: 原始映射
        fn: 接收 (key, value) 並返回新的 (key, value) 的函式

    Returns:
        新的字典

    範例:
        >>> object_map({"a": 1, "b": 2}, lambda k, v: (k.upper(), v * 10))
        {'A': 10, 'B': 20}
    """
    return dict(fn(key, value) for key, value in mapping.items())


def choose(
    key: Any,
    actions: Mapping[Any, Callable[..., T]],
    default_action: Callable[..., T] = lambda *_: None,
    args: Sequence[Any] = (),
) -> T:
    """
    `switch` 語句的函式化替代。

    若 `key` 存在於 `actions` 中則呼叫對應函式，否則呼叫 `default_action`，
    兩者都以 `args` 作為參數。
    """
    if key in actions:
        return actions[key](*args)
    return default_action(*args)
