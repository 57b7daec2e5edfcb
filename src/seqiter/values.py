"""Sequence value model, equality rules and callback adaptation."""

from __future__ import annotations

import cmath
import inspect
import logging
import math
import numbers
import os
import types
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

import jax
import jax.numpy as jnp

from .errors import InvalidReceiverError, NotCallableError

logger = logging.getLogger(__name__)

_RESTACK_ARRAY_RESULTS: Final[bool] = os.environ.get("SEQITER_DISABLE_ARRAY_RESTACK", "0") != "1"

_POSITIONAL_KINDS: Final = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

# C-implemented callables, bound or unbound (`len`, `str.strip`, `str.__add__`, `"".join`).
_BUILTIN_CALLABLE_TYPES: Final = (
    types.BuiltinFunctionType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
)


class BoxedArray(list):
    """List result produced from an array receiver whose items do not restack."""


class SequenceKind(str, Enum):
    LIST = "list"
    TUPLE = "tuple"
    TEXT = "text"
    ARRAY = "array"
    OTHER = "other"


@dataclass(frozen=True)
class SequenceInfo:
    kind: SequenceKind
    length: int
    dtype: str | None


@dataclass(frozen=True)
class CallbackInfo:
    name: str | None
    arity: int


def is_array(value: object) -> bool:
    return isinstance(value, jax.Array)


def is_array_like(value: object) -> bool:
    if isinstance(value, jax.Array):
        return True
    return isinstance(value, numbers.Number)


def _is_sequence(value: object) -> bool:
    if is_array(value):
        return value.ndim >= 1
    return isinstance(value, Sequence)


def kind_of(value: object) -> SequenceKind:
    if is_array(value):
        return SequenceKind.ARRAY
    if isinstance(value, list):
        return SequenceKind.LIST
    if isinstance(value, tuple):
        return SequenceKind.TUPLE
    if isinstance(value, str):
        return SequenceKind.TEXT
    return SequenceKind.OTHER


def as_sequence(value: object, *, where: str = "operation") -> Sequence:
    """Validate a receiver and return it in indexable form.

    ``jax`` arrays must have rank >= 1 and are walked along their leading
    axis. Objects exposing ``__array__`` (numpy arrays) are converted with
    ``jnp.asarray``. Anything else must be a ``collections.abc.Sequence``.
    """
    if value is None:
        raise InvalidReceiverError(where, value)
    if not is_array(value) and not isinstance(value, Sequence) and hasattr(value, "__array__"):
        value = jnp.asarray(value)
    if not _is_sequence(value):
        raise InvalidReceiverError(where, value)
    return value


def sequence_info(value: object) -> SequenceInfo:
    seq = as_sequence(value, where="sequence_info")
    dtype = str(seq.dtype) if is_array(seq) else None
    return SequenceInfo(kind=kind_of(seq), length=len(seq), dtype=dtype)


def _empty_like(template: jax.Array) -> jax.Array:
    return jnp.zeros((0, *template.shape[1:]), dtype=template.dtype)


def collect(template: Sequence, items: list) -> Sequence:
    """Build an owned result container matching the receiver's flavour."""
    kind = kind_of(template)
    if kind is SequenceKind.TUPLE:
        return tuple(items)
    if kind is not SequenceKind.ARRAY:
        return list(items)

    if not _RESTACK_ARRAY_RESULTS:
        return BoxedArray(items)
    if not items:
        return _empty_like(template)
    if not all(is_array_like(item) for item in items):
        return BoxedArray(items)
    try:
        return jnp.stack([jnp.asarray(item) for item in items])
    except (TypeError, ValueError) as exc:
        logger.debug("array result does not restack, boxing %d items: %s", len(items), exc)
        return BoxedArray(items)


def is_nan(value: object) -> bool:
    if isinstance(value, jax.Array):
        return value.ndim == 0 and bool(jnp.isnan(value))
    if isinstance(value, (bool, numbers.Integral)):
        return False
    if isinstance(value, numbers.Real):
        return math.isnan(float(value))
    if isinstance(value, numbers.Complex):
        return cmath.isnan(complex(value))
    return False


def _is_boolean(value: object) -> bool:
    if isinstance(value, jax.Array):
        return value.dtype == jnp.bool_
    return isinstance(value, bool)


def _scalar_array_equals(a: object, b: object) -> bool:
    for side in (a, b):
        if isinstance(side, jax.Array):
            if side.ndim != 0:
                return a is b
        elif not isinstance(side, numbers.Number):
            return False
    return bool(jnp.asarray(a) == jnp.asarray(b))


def strict_equals(a: object, b: object) -> bool:
    """Equality with no type coercion between booleans and numbers.

    NaN is never equal to anything, itself included.
    """
    if is_nan(a) or is_nan(b):
        return False
    if _is_boolean(a) != _is_boolean(b):
        return False
    if isinstance(a, jax.Array) or isinstance(b, jax.Array):
        return _scalar_array_equals(a, b)
    return bool(a == b)


def same_value_zero(a: object, b: object) -> bool:
    """Equality where NaN matches NaN and +0 matches -0."""
    a_nan = is_nan(a)
    b_nan = is_nan(b)
    if a_nan or b_nan:
        return a_nan and b_nan
    return strict_equals(a, b)


def _is_builtin_callable(fn: object) -> bool:
    if isinstance(fn, _BUILTIN_CALLABLE_TYPES):
        return True
    return isinstance(fn, type) and fn.__module__ == "builtins"


def callback_info(fn: object, *, maximum: int, minimum: int) -> CallbackInfo:
    """Number of leading ``(element, index, sequence)`` style arguments ``fn`` takes.

    Builtins and callables without an inspectable signature get ``minimum``.
    """
    name = getattr(fn, "__name__", None)
    if not isinstance(name, str):
        name = None
    if _is_builtin_callable(fn):
        return CallbackInfo(name=name, arity=minimum)
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return CallbackInfo(name=name, arity=minimum)

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return CallbackInfo(name=name, arity=maximum)
        if param.kind in _POSITIONAL_KINDS:
            count += 1
    return CallbackInfo(name=name, arity=min(count, maximum))


def as_callback(fn: object, *, where: str, maximum: int = 3, minimum: int = 1) -> Callable[..., object]:
    """Check ``fn`` is callable and adapt it to receive the full argument tuple."""
    if not callable(fn):
        raise NotCallableError(where, fn)
    arity = callback_info(fn, maximum=maximum, minimum=minimum).arity
    if arity >= maximum:
        return fn

    def call(*args):
        return fn(*args[:arity])

    return call
