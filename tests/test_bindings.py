"""Dispatch 綁定的測試。"""

import pytest

from pyredg import (
    bind_action_creator,
    bind_action_creators,
    bind_action_creators_tree,
    define_action_creator,
)


def test_bound_creator_dispatches_result_once(dispatch):
    add = define_action_creator("ADD", lambda n: n)
    bound = bind_action_creator(add, dispatch)

    result = bound(3)

    assert dispatch.calls == [add(3)]
    assert result == ("dispatched", add(3))


def test_bound_creator_copies_existing_type(dispatch):
    bound = bind_action_creator(define_action_creator("PING"), dispatch, "ignored()")
    assert bound.type == "PING"


def test_thunk_uses_type_hint_or_name(dispatch):
    def load_user(user_id):
        return {"type": "LOAD", "id": user_id}

    assert bind_action_creator(load_user, dispatch, "users.load()").type == "users.load()"
    assert bind_action_creator(load_user, dispatch).type == "load_user()"


def test_callable_object_without_name_uses_class_name(dispatch):
    class Loader:
        def __call__(self):
            return "thunk"

    bound = bind_action_creator(Loader(), dispatch)
    assert bound.type == "Loader()"
    assert bound() == ("dispatched", "thunk")


def test_bound_creator_forwards_kwargs(dispatch):
    creator = define_action_creator("SET", lambda key, value=None: (key, value))
    bind_action_creator(creator, dispatch)("a", value=1)
    assert dispatch.calls[0].payload == ("a", 1)


def test_exceptions_propagate_from_creator_and_dispatch():
    def failing_dispatch(action):
        raise RuntimeError("store down")

    bound = bind_action_creator(define_action_creator("X"), failing_dispatch)
    with pytest.raises(RuntimeError, match="store down"):
        bound()

    def failing_thunk():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        bind_action_creator(failing_thunk, lambda action: action)()


def test_bind_action_creators_dispatches_independently(dispatch, counter_actions):
    bound = bind_action_creators(counter_actions, dispatch)

    assert set(bound) == set(counter_actions)
    bound["increment"]()
    bound["add"](2)
    bound["increment"]()

    assert dispatch.calls == [
        {"type": "[Counter] Increment"},
        {"type": "[Counter] Add", "payload": 2},
        {"type": "[Counter] Increment"},
    ]


def test_bind_action_creators_labels_thunks(dispatch):
    thunks = {"refresh": lambda: "r", "ping": define_action_creator("PING")}

    assert bind_action_creators(thunks, dispatch)["refresh"].type == "refresh()"
    labelled = bind_action_creators(thunks, dispatch, "app")
    assert labelled["refresh"].type == "app.refresh()"
    assert labelled["ping"].type == "PING"


def test_bind_action_creators_tree(dispatch, counter_actions):
    tree = {
        "counter": counter_actions,
        "session": {"logout": lambda: "bye"},
    }
    bound = bind_action_creators_tree(tree, dispatch)

    assert set(bound) == {"counter", "session"}
    assert bound["counter"]["add"].type == "[Counter] Add"
    assert bound["session"]["logout"].type == "session.logout()"
    assert bound["session"]["logout"]() == ("dispatched", "bye")
