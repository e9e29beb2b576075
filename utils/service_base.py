"""
Shared service-layer result types.

This module provides a minimal, dependency-free foundation for building
services in each app. Services return a ``ServiceResult`` for expected
outcomes instead of raising, and classify every failure with one of the
``ErrorKind`` values below.

Guidelines
- Return structured results instead of raising for expected outcomes.
- Reserve exceptions for truly exceptional/unrecoverable scenarios.
- Every ErrorKind maps to exactly one HTTP status (see ERROR_STATUS).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Closed set of failure classifications."""

    NONE = "None"
    BAD_REQUEST = "BadRequest"
    NOT_FOUND = "NotFound"
    ALREADY_EXIST = "AlreadyExist"
    CONFLICT = "Conflict"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    UNSUPPORTED_MEDIA_TYPE = "UnsupportedMediaType"
    FORBIDDEN = "Forbidden"


ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.NONE: 200,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXIST: 409,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: 415,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}

DEFAULT_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.NONE: "Ok",
    ErrorKind.BAD_REQUEST: "Bad request!",
    ErrorKind.NOT_FOUND: "Data not found!",
    ErrorKind.ALREADY_EXIST: "Already exist!",
    ErrorKind.CONFLICT: "Conflict!",
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: "Unsupported Media Type!",
    ErrorKind.FORBIDDEN: "Access Denied!",
    ErrorKind.INTERNAL_SERVER_ERROR: "Internal server error!",
}

_unmapped = [kind for kind in ErrorKind if kind not in ERROR_STATUS or kind not in DEFAULT_MESSAGES]
if _unmapped:
    raise RuntimeError(f"ErrorKind values without a status/message mapping: {_unmapped}")


def status_for(kind: ErrorKind) -> int:
    """Return the canonical HTTP status for an error kind."""
    return ERROR_STATUS[kind]


@dataclass(frozen=True)
class ResultError:
    """
    Structured error carried by every ServiceResult.

    ``kind`` is the authoritative classifier; ``code`` is the cached HTTP
    status of that kind. Use the factory classmethods so that the two never
    disagree: callers may override the message, never the status.
    """

    kind: ErrorKind
    message: Optional[str] = None
    code: Optional[int] = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, "code", ERROR_STATUS[self.kind])

    @classmethod
    def of(cls, kind: ErrorKind, message: Optional[str] = None) -> "ResultError":
        return cls(kind=kind, message=message if message is not None else DEFAULT_MESSAGES[kind])

    @classmethod
    def none(cls, message: str = "Ok") -> "ResultError":
        return cls.of(ErrorKind.NONE, message)

    @classmethod
    def bad_request(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def not_found(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.NOT_FOUND, message)

    @classmethod
    def already_exist(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.ALREADY_EXIST, message)

    @classmethod
    def conflict(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.CONFLICT, message)

    @classmethod
    def internal_server_error(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.INTERNAL_SERVER_ERROR, message)

    @classmethod
    def unsupported_media_type(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.UNSUPPORTED_MEDIA_TYPE, message)

    @classmethod
    def access_denied(cls, message: Optional[str] = None) -> "ResultError":
        return cls.of(ErrorKind.FORBIDDEN, message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "kind": self.kind.value}


def error_from_status(status: int, message: Optional[str] = None) -> ResultError:
    """
    Translate an upstream HTTP status into a ResultError.

    Used for responses of external collaborators. Any status without a
    dedicated kind becomes InternalServerError.
    """
    if 200 <= status < 300:
        return ResultError.none()
    if status == 400:
        return ResultError.bad_request(message)
    if status == 404:
        return ResultError.not_found(message)
    if status == 409:
        return ResultError.conflict(message)
    if status == 415:
        return ResultError.unsupported_media_type(message)
    return ResultError.internal_server_error(message)


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value. A failure may still carry a best-effort
            value (e.g. ``False`` for a failed delete); callers should not
            build new logic on reading it.
        error: ResultError; kind NONE on success

    Examples:
        >>> result = ServiceResult.success(product)
        >>> if result.ok:
        ...     return result.value

        >>> result = ServiceResult.failure(ResultError.not_found("Product 123 not found"))
        >>> result.error.code
        404
    """

    ok: bool
    value: Optional[T] = None
    error: ResultError = field(default_factory=ResultError.none)

    @classmethod
    def success(cls, value: Optional[T] = None) -> "ServiceResult[T]":
        return cls(ok=True, value=value, error=ResultError.none())

    @classmethod
    def failure(cls, error: ResultError, value: Optional[T] = None) -> "ServiceResult[T]":
        if error.kind is ErrorKind.NONE:
            raise ValueError("A failed ServiceResult cannot carry ErrorKind.NONE")
        return cls(ok=False, value=value, error=error)

    @property
    def error_detail(self) -> Optional[str]:
        return self.error.message

    def map(self, func: Callable[[T], Any]) -> "ServiceResult":
        """
        Transform the success value if ok=True, otherwise pass through error.
        """
        if self.ok:
            return ServiceResult.success(func(self.value))
        return self

    def flat_map(self, func: Callable[[T], "ServiceResult"]) -> "ServiceResult":
        """
        Chain service operations that return ServiceResult.
        """
        if self.ok:
            return func(self.value)
        return self


def service_ok(value: Optional[T] = None) -> ServiceResult[T]:
    return ServiceResult.success(value)


def service_err(error: ResultError, value: Optional[T] = None) -> ServiceResult[T]:
    return ServiceResult.failure(error, value)
