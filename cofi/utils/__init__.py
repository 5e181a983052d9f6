"""Utility helpers."""
from .observable import ObservableValue, ReadOnlyObservable

__all__ = [
    "ObservableValue",
    "ReadOnlyObservable",
]
