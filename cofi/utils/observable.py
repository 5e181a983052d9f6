"""Minimal observable value holders shared by the shell and its pages."""
from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

from cofi.utils.logging import get_logger

T = TypeVar("T")
Listener = Callable[[T], None]

LOG = get_logger("cofi.observable")


class ObservableValue(Generic[T]):
    """Mutable value that notifies subscribers when it changes.

    Only the owner should call `set`; consumers get a `ReadOnlyObservable`.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: List[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def set(self, value: T) -> bool:
        """Store `value`; returns True when observers were notified."""
        if value == self._value:
            return False
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                LOG.exception("Observer %r failed handling value %r", listener, value)
        return True

    def read_only(self) -> "ReadOnlyObservable[T]":
        return ReadOnlyObservable(self)


class ReadOnlyObservable(Generic[T]):
    """View exposing `value` and `subscribe` without any way to assign."""

    __slots__ = ("_source",)

    def __init__(self, source: ObservableValue[T]) -> None:
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._source.subscribe(listener)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ReadOnlyObservable value={self._source.value!r}>"


__all__ = ["ObservableValue", "ReadOnlyObservable"]
