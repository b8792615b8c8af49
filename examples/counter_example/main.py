import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from pyredg import (
    LoggerMiddleware,
    ThunkMiddleware,
    bind_action_creators_tree,
    create_store,
)
from counter_actions import counter_actions, load_count_request, load_count_success
from counter_reducers import counter_reducer


def load_count(fake_value):
    """模擬從 API 載入數據的 thunk。"""
    def thunk(dispatch, get_state):
        dispatch(load_count_request())
        dispatch(load_count_success(fake_value))
        return get_state().count
    return thunk


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    store = create_store(counter_reducer, None, ThunkMiddleware, LoggerMiddleware())

    # 訂閱狀態變化
    store.select(lambda state: state.count).subscribe(
        on_next=lambda t: print(f"計數變化: {t[0]} -> {t[1]}")
    )

    bound = bind_action_creators_tree(
        {"counter": counter_actions, "api": {"load_count": load_count}},
        store.dispatch,
    )

    print("\n==== 開始測試基本操作 ====")
    bound["counter"]["increment"]()
    bound["counter"]["increment_by"](5)
    bound["counter"]["decrement"]()
    bound["counter"]["reset"](10)

    print("\n==== 開始測試 thunk ====")
    print(f"{bound['api']['load_count'].type} -> {bound['api']['load_count'](42)}")

    print("\n==== 最終狀態 ====")
    print(store.state)
