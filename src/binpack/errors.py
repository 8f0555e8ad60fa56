"""
Binpack Error Model

This module provides the error taxonomy for the binpack marshaling engine.
Every error aborts the current encode/decode call; nothing is retried or
rolled back internally.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Binpack error codes."""

    UNKNOWN = 1

    # Layout errors (100-199)
    MISSING_LENGTH_PREFIX = 100
    UNKNOWN_LENGTH_PREFIX_KIND = 101
    UNSUPPORTED_SHAPE = 102
    INVALID_BYTE_ORDER = 103

    # Value errors (200-299)
    SEQUENCE_TOO_LARGE = 200
    INSUFFICIENT_CAPACITY = 201
    SCALAR_OUT_OF_RANGE = 202
    FIXED_LENGTH_MISMATCH = 203
    NEGATIVE_LENGTH = 204

    # I/O errors (300-399)
    IO_WRITE = 300
    IO_READ = 301
    SHORT_READ = 302
    TRAILING_DATA = 303


class BinpackError(Exception):
    """
    Base class for all binpack errors.

    Carries a machine-readable code plus free-form details so callers can
    branch on either the exception class or ``code``.
    """

    code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a binpack error.

        Args:
            message: Error message
            code: Error code, defaults to the class code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidByteOrderError(BinpackError, ValueError):
    """A byte order name is neither 'little' nor 'big'."""

    code = ErrorCode.INVALID_BYTE_ORDER

    def __init__(self, value: Any):
        super().__init__(f"invalid byte order {value!r}, expected 'little' or 'big'",
                         details={"byte_order": repr(value)})


class MissingLengthPrefixError(BinpackError):
    """A variable-length sequence field has no ``lenprefix`` annotation."""

    code = ErrorCode.MISSING_LENGTH_PREFIX

    def __init__(self, field: str, owner: str = ""):
        where = f"{owner}.{field}" if owner else field
        super().__init__(f"variable-length field {where!r} is missing a lenprefix annotation",
                         details={"field": where})


class UnknownLengthPrefixKindError(BinpackError):
    """The declared ``lenprefix`` kind is not one of the eight integer kinds."""

    code = ErrorCode.UNKNOWN_LENGTH_PREFIX_KIND

    def __init__(self, kind: str, field: str = ""):
        super().__init__(f"unknown lenprefix kind {kind!r}",
                         details={"kind": kind, "field": field} if field else {"kind": kind})


class SequenceTooLargeError(BinpackError):
    """Element count does not fit in the declared length prefix."""

    code = ErrorCode.SEQUENCE_TOO_LARGE

    def __init__(self, length: int, kind: str, maximum: int, field: str = ""):
        details = {"length": length, "kind": kind, "max": maximum}
        if field:
            details["field"] = field
        super().__init__(f"sequence of {length} elements exceeds {kind} length prefix (max {maximum})",
                         details=details)


class InsufficientCapacityError(BinpackError):
    """Decode target holds a sequence smaller than the decoded count."""

    code = ErrorCode.INSUFFICIENT_CAPACITY

    def __init__(self, capacity: int, required: int, field: str = ""):
        details = {"capacity": capacity, "required": required}
        if field:
            details["field"] = field
        super().__init__(f"not enough space in sequence: capacity {capacity}, need {required}",
                         details=details)


class UnsupportedShapeError(BinpackError):
    """The value or type hint is not a shape the engine can traverse."""

    code = ErrorCode.UNSUPPORTED_SHAPE

    def __init__(self, shape: Any, reason: str = ""):
        name = getattr(shape, "__name__", None) or repr(shape)
        message = f"unsupported shape: {name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, details={"shape": name})


class ScalarRangeError(BinpackError):
    """Integer value does not fit in its declared scalar kind."""

    code = ErrorCode.SCALAR_OUT_OF_RANGE

    def __init__(self, value: Any, kind: str):
        super().__init__(f"value {value!r} out of range for {kind}",
                         details={"value": repr(value), "kind": kind})


class FixedLengthMismatchError(BinpackError):
    """A fixed sequence was given a value of the wrong length."""

    code = ErrorCode.FIXED_LENGTH_MISMATCH

    def __init__(self, expected: int, actual: int):
        super().__init__(f"fixed sequence expects {expected} elements, got {actual}",
                         details={"expected": expected, "actual": actual})


class NegativeLengthError(BinpackError):
    """A signed length prefix decoded to a negative count."""

    code = ErrorCode.NEGATIVE_LENGTH

    def __init__(self, length: int, field: str = ""):
        super().__init__(f"negative sequence length {length}",
                         details={"length": length, "field": field} if field else {"length": length})


class IOWriteError(BinpackError):
    """The byte sink failed to accept data."""

    code = ErrorCode.IO_WRITE


class IOReadError(BinpackError):
    """The byte source failed to produce data."""

    code = ErrorCode.IO_READ


class ShortReadError(IOReadError):
    """The byte source ended before the requested number of bytes."""

    code = ErrorCode.SHORT_READ

    def __init__(self, requested: int, available: int):
        super().__init__(f"short read: wanted {requested} bytes, got {available}",
                         details={"requested": requested, "available": available})


class TrailingDataError(BinpackError):
    """Bytes remained after a strict decode."""

    code = ErrorCode.TRAILING_DATA

    def __init__(self, remaining: int):
        super().__init__(f"{remaining} trailing bytes after decode", details={"remaining": remaining})


__all__ = [
    "ErrorCode",
    "BinpackError",
    "InvalidByteOrderError",
    "MissingLengthPrefixError",
    "UnknownLengthPrefixKindError",
    "SequenceTooLargeError",
    "InsufficientCapacityError",
    "UnsupportedShapeError",
    "ScalarRangeError",
    "FixedLengthMismatchError",
    "NegativeLengthError",
    "IOWriteError",
    "IOReadError",
    "ShortReadError",
    "TrailingDataError",
]
