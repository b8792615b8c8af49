import time
from typing import Optional

from pydantic import BaseModel
from pyredg import slice_reducer
from counter_actions import (
    increment,
    decrement,
    reset,
    increment_by,
    load_count_request,
    load_count_success,
    load_count_failure,
)

# ====== Model Definition ======
class CounterState(BaseModel):
    count: int = 0
    loading: bool = False
    error: Optional[str] = None
    last_updated: Optional[float] = None
    history: tuple = ()


# ====== Utility Functions ======
def with_count(state: CounterState, count: int) -> CounterState:
    return state.model_copy(update={"count": count, "last_updated": time.time()})


# ====== Reducer ======
@slice_reducer(CounterState())
def counter_reducer(slice):
    (
        slice
        .handle(increment, lambda state: with_count(state, state.count + 1))
        .handle(decrement, lambda state: with_count(state, state.count - 1))
        .handle(reset, with_count)
        .handle(increment_by, lambda state, amount: with_count(state, state.count + amount))
        .handle(load_count_request, lambda state: state.model_copy(update={"loading": True, "error": None}))
        .handle(
            load_count_success,
            lambda state, count: with_count(state, count).model_copy(update={"loading": False}),
        )
        .handle(
            load_count_failure,
            lambda state, error: state.model_copy(update={"loading": False, "error": error}),
        )
        # 所有 [Counter] action 都記錄到歷史中，無論是否已被處理
        .match(
            lambda action: action.type.startswith("[Counter]"),
            lambda state, *_: state.model_copy(update={"history": state.history + (state.count,)}),
        )
    )
