"""
將 action creator 或 thunk 綁定到 store 的 dispatch 函式。

綁定後的函式會自動把結果送入 dispatch，並保留一個 `type` 屬性，
方便在除錯或追蹤時辨識來源。
"""
from typing import Any, Callable, Dict, Mapping, Optional

from .actions import is_with_type_field
from .types import Dispatch, TypedCallable
from .utils import object_map


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__name__", None) or type(fn).__name__


def bind_action_creator(
    action_creator_or_thunk: Callable[..., Any],
    dispatch: Dispatch,
    type_hint: Optional[str] = None,
) -> TypedCallable:
    """
    將 action creator 或 thunk 與 dispatch 綁定。

    Args:
        action_creator_or_thunk: 任意 action creator 或 thunk
        dispatch: store 的 dispatch 函式
        type_hint: 當被綁定對象沒有 `type` 欄位時使用的名稱

    Returns:
        呼叫時等同 `dispatch(action_creator_or_thunk(*args, **kwargs))` 的函式，
        附帶 `type` 屬性：優先沿用原對象的 `type`，其次為 `type_hint`，
        最後為 `"<函式名稱>()"`。
    """
    def bound_action_creator(*args: Any, **kwargs: Any) -> Any:
        return dispatch(action_creator_or_thunk(*args, **kwargs))

    if is_with_type_field(action_creator_or_thunk):
        bound_action_creator.type = action_creator_or_thunk.type  # type: ignore[attr-defined]
    elif type_hint is not None:
        bound_action_creator.type = type_hint  # type: ignore[attr-defined]
    else:
        bound_action_creator.type = f"{_callable_name(action_creator_or_thunk)}()"  # type: ignore[attr-defined]

    bound_action_creator.__wrapped__ = action_creator_or_thunk  # type: ignore[attr-defined]
    return bound_action_creator


def bind_action_creators(
    action_creators: Mapping[str, Callable[..., Any]],
    dispatch: Dispatch,
    tree_name: Optional[str] = None,
) -> Dict[str, TypedCallable]:
    """
    將整組 action creator / thunk 綁定到 dispatch。

    缺少 `type` 欄位的項目會以 `"<tree_name>.<key>()"`（或 `"<key>()"`）命名。

    Args:
        action_creators: 鍵對應 action creator 或 thunk 的映射
        dispatch: store 的 dispatch 函式
        tree_name: 可選的群組名稱

    Returns:
        與輸入同鍵的已綁定函式字典
    """
    return object_map(
        action_creators,
        lambda key, creator: (
            key,
            bind_action_creator(
                creator,
                dispatch,
                f"{tree_name}.{key}()" if tree_name else f"{key}()",
            ),
        ),
    )


def bind_action_creators_tree(
    ac_tree: Mapping[str, Mapping[str, Callable[..., Any]]],
    dispatch: Dispatch,
) -> Dict[str, Dict[str, TypedCallable]]:
    """
    綁定一整棵 action creator 樹（兩層：群組 -> action creator）。

    每個群組的鍵會作為該群組的 `tree_name`。
    """
    return object_map(
        ac_tree,
        lambda key, group: (key, bind_action_creators(group, dispatch, key)),
    )
