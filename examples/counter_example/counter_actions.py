import enum

from pyredg import action_creators


class CounterActionType(str, enum.Enum):
    increment = "[Counter] Increment"
    decrement = "[Counter] Decrement"
    reset = "[Counter] Reset"
    increment_by = "[Counter] Increment By"
    load_count_request = "[Counter] Load Count Request"
    load_count_success = "[Counter] Load Count Success"
    load_count_failure = "[Counter] Load Count Failure"


# 只有需要負載的 action 才提供負載建立函式
counter_actions = action_creators(
    CounterActionType,
    {
        "reset": lambda value=0: value,
        "increment_by": lambda amount: amount,
        "load_count_success": lambda count: count,
        "load_count_failure": lambda error: str(error),
    },
)

increment = counter_actions["increment"]
decrement = counter_actions["decrement"]
reset = counter_actions["reset"]
increment_by = counter_actions["increment_by"]
load_count_request = counter_actions["load_count_request"]
load_count_success = counter_actions["load_count_success"]
load_count_failure = counter_actions["load_count_failure"]
