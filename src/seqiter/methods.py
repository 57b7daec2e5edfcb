"""Non-mutating higher-order sequence operations.

Every operation takes the receiver as its first argument, validates it before
anything else, then validates the callback, and only then starts a single
ascending (or, for the ``*_last``/``*_right`` variants, descending) scan.
Callback exceptions are never caught here.
"""

from __future__ import annotations

import functools
import logging
import math
import numbers
import os
from collections.abc import Callable, Sequence
from typing import Final

import jax

from .errors import EmptyReduceError
from .values import as_callback, as_sequence, collect, is_nan, same_value_zero, strict_equals

logger = logging.getLogger(__name__)

_MISSING: Final = object()
_SORT_ORDERINGS: Final[tuple[str, ...]] = ("string", "natural")


def _sort_default_from_env() -> str:
    raw = os.environ.get("SEQITER_SORT_DEFAULT", "string").strip().lower()
    if raw not in _SORT_ORDERINGS:
        logger.warning("unknown SEQITER_SORT_DEFAULT %r, using string ordering", raw)
        return "string"
    return raw


_SORT_DEFAULT: Final[str] = _sort_default_from_env()


def _to_integer(value: object) -> float:
    """Truncate a bound toward zero; values with no numeric reading count as 0."""
    if isinstance(value, jax.Array):
        value = value.item()
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _resolve_bound(value: object, length: int, default: int) -> int:
    if value is None:
        return default
    k = _to_integer(value)
    if k < 0:
        return int(max(length + k, 0))
    return int(min(k, length))


def _resolve_from_index(from_index: object, length: int) -> int:
    k = _to_integer(from_index)
    if k < 0:
        k = max(length + k, 0)
    return int(min(k, length))


def _is_nested(item: object) -> bool:
    if isinstance(item, jax.Array):
        return item.ndim >= 1
    return isinstance(item, (list, tuple))


def map_(seq: Sequence, transform: Callable[..., object]) -> Sequence:
    """Apply ``transform(element, index, seq)`` to every element.

    The result always has the receiver's length.
    """
    seq = as_sequence(seq, where="map_")
    fn = as_callback(transform, where="map_")
    return collect(seq, [fn(seq[i], i, seq) for i in range(len(seq))])


def filter_(seq: Sequence, predicate: Callable[..., object]) -> Sequence:
    seq = as_sequence(seq, where="filter_")
    fn = as_callback(predicate, where="filter_")
    kept = []
    for i in range(len(seq)):
        item = seq[i]
        if fn(item, i, seq):
            kept.append(item)
    return collect(seq, kept)


def for_each(seq: Sequence, visitor: Callable[..., object]) -> None:
    """Call ``visitor`` once per element, in ascending order.

    The visitor's return value is ignored; iteration cannot be stopped early.
    """
    seq = as_sequence(seq, where="for_each")
    fn = as_callback(visitor, where="for_each")
    for i in range(len(seq)):
        fn(seq[i], i, seq)


def find(seq: Sequence, predicate: Callable[..., object]) -> object:
    """First element matching ``predicate``, or ``None``."""
    seq = as_sequence(seq, where="find")
    fn = as_callback(predicate, where="find")
    for i in range(len(seq)):
        item = seq[i]
        if fn(item, i, seq):
            return item
    return None


def find_index(seq: Sequence, predicate: Callable[..., object]) -> int:
    seq = as_sequence(seq, where="find_index")
    fn = as_callback(predicate, where="find_index")
    for i in range(len(seq)):
        if fn(seq[i], i, seq):
            return i
    return -1


def find_last(seq: Sequence, predicate: Callable[..., object]) -> object:
    seq = as_sequence(seq, where="find_last")
    fn = as_callback(predicate, where="find_last")
    for i in range(len(seq) - 1, -1, -1):
        item = seq[i]
        if fn(item, i, seq):
            return item
    return None


def find_last_index(seq: Sequence, predicate: Callable[..., object]) -> int:
    seq = as_sequence(seq, where="find_last_index")
    fn = as_callback(predicate, where="find_last_index")
    for i in range(len(seq) - 1, -1, -1):
        if fn(seq[i], i, seq):
            return i
    return -1


def some(seq: Sequence, predicate: Callable[..., object]) -> bool:
    seq = as_sequence(seq, where="some")
    fn = as_callback(predicate, where="some")
    for i in range(len(seq)):
        if fn(seq[i], i, seq):
            return True
    return False


def every(seq: Sequence, predicate: Callable[..., object]) -> bool:
    seq = as_sequence(seq, where="every")
    fn = as_callback(predicate, where="every")
    for i in range(len(seq)):
        if not fn(seq[i], i, seq):
            return False
    return True


def reduce(seq: Sequence, reducer: Callable[..., object], initial: object = _MISSING) -> object:
    """Fold ``reducer(accumulator, element, index, seq)`` left to right.

    Without ``initial`` the first element seeds the accumulator and folding
    starts at index 1; an empty receiver then raises ``EmptyReduceError``.
    """
    seq = as_sequence(seq, where="reduce")
    fn = as_callback(reducer, where="reduce", maximum=4, minimum=2)
    length = len(seq)
    k = 0
    if initial is _MISSING:
        if length == 0:
            raise EmptyReduceError("reduce")
        accumulator = seq[0]
        k = 1
    else:
        accumulator = initial
    for i in range(k, length):
        accumulator = fn(accumulator, seq[i], i, seq)
    return accumulator


def reduce_right(seq: Sequence, reducer: Callable[..., object], initial: object = _MISSING) -> object:
    seq = as_sequence(seq, where="reduce_right")
    fn = as_callback(reducer, where="reduce_right", maximum=4, minimum=2)
    k = len(seq) - 1
    if initial is _MISSING:
        if k < 0:
            raise EmptyReduceError("reduce_right")
        accumulator = seq[k]
        k -= 1
    else:
        accumulator = initial
    for i in range(k, -1, -1):
        accumulator = fn(accumulator, seq[i], i, seq)
    return accumulator


def includes(seq: Sequence, search: object, from_index: object = 0) -> bool:
    """Membership under SameValueZero: NaN is found, ``0.0`` matches ``-0.0``.

    A negative ``from_index`` counts back from the end and is clamped to 0.
    """
    seq = as_sequence(seq, where="includes")
    length = len(seq)
    if length == 0:
        return False
    for i in range(_resolve_from_index(from_index, length), length):
        if same_value_zero(seq[i], search):
            return True
    return False


def index_of(seq: Sequence, search: object, from_index: object = 0) -> int:
    seq = as_sequence(seq, where="index_of")
    length = len(seq)
    if length == 0 or is_nan(search):
        return -1
    for i in range(_resolve_from_index(from_index, length), length):
        if strict_equals(seq[i], search):
            return i
    return -1


def last_index_of(seq: Sequence, search: object, from_index: object = None) -> int:
    seq = as_sequence(seq, where="last_index_of")
    length = len(seq)
    if length == 0 or is_nan(search):
        return -1
    if from_index is None:
        k = length - 1
    else:
        k = _to_integer(from_index)
        k = min(k, length - 1) if k >= 0 else length + k
        if k < 0:
            return -1
    for i in range(int(k), -1, -1):
        if strict_equals(seq[i], search):
            return i
    return -1


def slice_(seq: Sequence, start: object = None, end: object = None) -> Sequence:
    """Copy of ``seq[start:end]`` with both bounds clamped into ``[0, len]``.

    Out-of-range bounds never raise; ``start >= end`` gives an empty result.
    """
    seq = as_sequence(seq, where="slice_")
    length = len(seq)
    lo = _resolve_bound(start, length, 0)
    hi = _resolve_bound(end, length, length)
    return collect(seq, [seq[i] for i in range(lo, hi)])


def concat(seq: Sequence, *items: object) -> Sequence:
    seq = as_sequence(seq, where="concat")
    out = [seq[i] for i in range(len(seq))]
    for item in items:
        if _is_nested(item):
            out.extend(item)
        else:
            out.append(item)
    return collect(seq, out)


def _display(item: object) -> str:
    if isinstance(item, jax.Array) and item.ndim == 0:
        item = item.item()
    if item is None:
        return ""
    if isinstance(item, bool):
        return "true" if item else "false"
    if _is_nested(item):
        return join(item, ",")
    return str(item)


def join(seq: Sequence, separator: str = ",") -> str:
    seq = as_sequence(seq, where="join")
    return separator.join(_display(seq[i]) for i in range(len(seq)))


def reverse(seq: Sequence) -> Sequence:
    seq = as_sequence(seq, where="reverse")
    return collect(seq, [seq[i] for i in range(len(seq) - 1, -1, -1)])


def _flatten_into(out: list, items, depth: float) -> None:
    for item in items:
        if depth >= 1 and _is_nested(item):
            _flatten_into(out, item, depth - 1)
        else:
            out.append(item)


def flat(seq: Sequence, depth: float = 1) -> Sequence:
    """Flatten nested lists, tuples and arrays up to ``depth`` levels.

    Pass ``math.inf`` to flatten completely.
    """
    seq = as_sequence(seq, where="flat")
    out: list = []
    _flatten_into(out, (seq[i] for i in range(len(seq))), depth)
    return collect(seq, out)


def flat_map(seq: Sequence, transform: Callable[..., object]) -> Sequence:
    seq = as_sequence(seq, where="flat_map")
    fn = as_callback(transform, where="flat_map")
    out: list = []
    for i in range(len(seq)):
        result = fn(seq[i], i, seq)
        if _is_nested(result):
            out.extend(result)
        else:
            out.append(result)
    return collect(seq, out)


def _sign(value: object) -> int:
    if isinstance(value, jax.Array):
        value = value.item()
    if not isinstance(value, numbers.Real) or math.isnan(value):
        return 0
    return (value > 0) - (value < 0)


def _default_sort_key(item: object):
    # None sorts after everything else
    if item is None:
        return (1, "")
    if _SORT_DEFAULT == "natural":
        return (0, item.item() if isinstance(item, jax.Array) else item)
    return (0, _display(item))


def sort(seq: Sequence, compare: Callable[..., object] | None = None) -> Sequence:
    """Stable sorted copy of ``seq``.

    ``compare(a, b)`` returns a negative, zero or positive number. Without it,
    elements are ordered by their string form unless ``SEQITER_SORT_DEFAULT``
    is ``natural``.
    """
    seq = as_sequence(seq, where="sort")
    items = [seq[i] for i in range(len(seq))]
    if compare is None:
        return collect(seq, sorted(items, key=_default_sort_key))
    fn = as_callback(compare, where="sort", maximum=2, minimum=2)
    key = functools.cmp_to_key(lambda a, b: _sign(fn(a, b)))
    return collect(seq, sorted(items, key=key))
