"""工具函式的測試。"""

from pyredg import choose, identity, is_string, object_map, to_bool


def test_identity_ignores_extra_arguments():
    state = {"a": 1}
    assert identity(state, {"type": "X"}) is state


def test_to_bool_and_is_string():
    assert to_bool(lambda: None) is True
    assert to_bool(None) is False
    assert is_string("x") and not is_string(b"x")


def test_object_map_preserves_order():
    result = object_map({"b": 2, "a": 1}, lambda k, v: (k * 2, v + 1))
    assert list(result.items()) == [("bb", 3), ("aa", 2)]


def test_choose():
    actions = {"add": lambda a, b: a + b}

    assert choose("add", actions, lambda a, b: None, (1, 2)) == 3
    assert choose("sub", actions, lambda a, b: a - b, (1, 2)) == -1
    assert choose("sub", actions) is None
