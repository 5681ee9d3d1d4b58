from collections.abc import Sequence
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class LazySequence(Sequence, Generic[T]):
    """Indexable, re-iterable view that builds each item on access."""

    def __init__(self, indices: range, factory: Callable[[int], T]):
        self._indices = indices
        self._factory = factory

    def __len__(self):
        return len(self._indices)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return LazySequence(self._indices[idx], self._factory)
        return self._factory(self._indices[idx])

    def __iter__(self):
        for idx in self._indices:
            yield self._factory(idx)

    def __repr__(self):
        return f"LazySequence({self._indices!r})"
