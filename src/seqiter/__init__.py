"""seqiter public API."""

from .chain import Chain
from .errors import EmptyReduceError, InvalidReceiverError, NotCallableError, SeqIterError
from .methods import (
    concat,
    every,
    filter_,
    find,
    find_index,
    find_last,
    find_last_index,
    flat,
    flat_map,
    for_each,
    includes,
    index_of,
    join,
    last_index_of,
    map_,
    reduce,
    reduce_right,
    reverse,
    slice_,
    some,
    sort,
)
from .values import BoxedArray, SequenceInfo, SequenceKind, same_value_zero, sequence_info, strict_equals

__all__ = [
    "map_",
    "filter_",
    "for_each",
    "find",
    "find_index",
    "find_last",
    "find_last_index",
    "some",
    "every",
    "reduce",
    "reduce_right",
    "includes",
    "index_of",
    "last_index_of",
    "slice_",
    "concat",
    "join",
    "reverse",
    "flat",
    "flat_map",
    "sort",
    "Chain",
    "BoxedArray",
    "SequenceInfo",
    "SequenceKind",
    "sequence_info",
    "same_value_zero",
    "strict_equals",
    "SeqIterError",
    "InvalidReceiverError",
    "NotCallableError",
    "EmptyReduceError",
]
