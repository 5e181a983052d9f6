"""ObservableValue notification semantics."""
from __future__ import annotations

from cofi.utils.observable import ObservableValue


def test_notifies_only_on_change():
    value = ObservableValue(False)
    seen: list = []
    value.subscribe(seen.append)

    assert value.set(False) is False
    assert value.set(True) is True
    assert value.set(True) is False

    assert seen == [True]


def test_failing_listener_does_not_block_others():
    value = ObservableValue(0)
    seen: list = []

    def broken(_):
        raise RuntimeError("listener bug")

    value.subscribe(broken)
    value.subscribe(seen.append)
    value.set(3)

    assert seen == [3]
    assert value.value == 3


def test_unsubscribe_is_idempotent():
    value = ObservableValue("a")
    seen: list = []
    unsubscribe = value.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    value.set("b")

    assert seen == []
    assert value.read_only().value == "b"


def test_read_only_view_exposes_value_and_subscribe_only():
    view = ObservableValue(True).read_only()

    assert view.value is True
    assert not hasattr(view, "set")
    assert "__bool__" not in type(view).__dict__
