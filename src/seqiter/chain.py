"""Caller-owned wrapper exposing the sequence operations as chainable methods."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from . import methods
from .values import SequenceInfo, as_sequence, sequence_info


class Chain:
    """Wraps one receiver; sequence-returning methods give a new ``Chain``.

    >>> Chain([85, 92, 78]).map(lambda s: s + 5).filter(lambda s: s >= 90).value
    [90, 97]
    """

    __slots__ = ("_seq",)

    def __init__(self, seq: Sequence) -> None:
        self._seq = as_sequence(seq, where="Chain")

    def __repr__(self) -> str:
        return f"Chain({self._seq!r})"

    def __len__(self) -> int:
        return len(self._seq)

    @property
    def value(self) -> Sequence:
        return self._seq

    @property
    def info(self) -> SequenceInfo:
        return sequence_info(self._seq)

    def to_list(self) -> list:
        return [self._seq[i] for i in range(len(self._seq))]

    def map(self, transform: Callable[..., object]) -> "Chain":
        return Chain(methods.map_(self._seq, transform))

    def filter(self, predicate: Callable[..., object]) -> "Chain":
        return Chain(methods.filter_(self._seq, predicate))

    def flat_map(self, transform: Callable[..., object]) -> "Chain":
        return Chain(methods.flat_map(self._seq, transform))

    def flat(self, depth: float = 1) -> "Chain":
        return Chain(methods.flat(self._seq, depth))

    def slice(self, start: object = None, end: object = None) -> "Chain":
        return Chain(methods.slice_(self._seq, start, end))

    def concat(self, *items: object) -> "Chain":
        return Chain(methods.concat(self._seq, *items))

    def reverse(self) -> "Chain":
        return Chain(methods.reverse(self._seq))

    def sort(self, compare: Callable[..., object] | None = None) -> "Chain":
        return Chain(methods.sort(self._seq, compare))

    def for_each(self, visitor: Callable[..., object]) -> None:
        methods.for_each(self._seq, visitor)

    def find(self, predicate: Callable[..., object]) -> object:
        return methods.find(self._seq, predicate)

    def find_index(self, predicate: Callable[..., object]) -> int:
        return methods.find_index(self._seq, predicate)

    def find_last(self, predicate: Callable[..., object]) -> object:
        return methods.find_last(self._seq, predicate)

    def find_last_index(self, predicate: Callable[..., object]) -> int:
        return methods.find_last_index(self._seq, predicate)

    def some(self, predicate: Callable[..., object]) -> bool:
        return methods.some(self._seq, predicate)

    def every(self, predicate: Callable[..., object]) -> bool:
        return methods.every(self._seq, predicate)

    def reduce(self, reducer: Callable[..., object], *initial: object) -> object:
        return methods.reduce(self._seq, reducer, *initial)

    def reduce_right(self, reducer: Callable[..., object], *initial: object) -> object:
        return methods.reduce_right(self._seq, reducer, *initial)

    def includes(self, search: object, from_index: object = 0) -> bool:
        return methods.includes(self._seq, search, from_index)

    def index_of(self, search: object, from_index: object = 0) -> int:
        return methods.index_of(self._seq, search, from_index)

    def last_index_of(self, search: object, from_index: object = None) -> int:
        return methods.last_index_of(self._seq, search, from_index)

    def join(self, separator: str = ",") -> str:
        return methods.join(self._seq, separator)
