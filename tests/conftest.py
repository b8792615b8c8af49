"""共用測試 fixtures。"""

import pytest

from pyredg import action_creators


class RecordingDispatch:
    """記錄每次呼叫的 dispatch，返回固定標記以便檢查返回值。"""

    def __init__(self):
        self.calls = []

    def __call__(self, action):
        self.calls.append(action)
        return ("dispatched", action)


@pytest.fixture
def dispatch():
    return RecordingDispatch()


@pytest.fixture
def counter_actions():
    return action_creators(
        {
            "increment": "[Counter] Increment",
            "decrement": "[Counter] Decrement",
            "add": "[Counter] Add",
            "reset": "[Counter] Reset",
        },
        {
            "add": lambda amount: amount,
            "reset": lambda value=0: value,
        },
    )
