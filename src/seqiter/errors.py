"""Structured error types for receiver, callback and fold failures."""

from __future__ import annotations


class SeqIterError(Exception):
    """Base class for structured seqiter errors."""


class InvalidReceiverError(SeqIterError, TypeError):
    """Operation invoked without a usable sequence."""

    def __init__(self, operation: str, receiver: object) -> None:
        self.operation = operation
        self.receiver = receiver
        if receiver is None:
            message = f"{operation} called on None"
        else:
            message = f"{operation} called on non-sequence {type(receiver).__name__}"
        super().__init__(message)


class NotCallableError(SeqIterError, TypeError):
    """Callback supplied to an operation is not invocable."""

    def __init__(self, operation: str, callback: object) -> None:
        self.operation = operation
        self.callback = callback
        super().__init__(f"{callback!r} is not a function")


class EmptyReduceError(SeqIterError, TypeError):
    """Fold over an empty sequence without an initial value."""

    def __init__(self, operation: str = "reduce") -> None:
        self.operation = operation
        super().__init__("Reduce of empty array with no initial value")
