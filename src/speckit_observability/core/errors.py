"""Application error taxonomy.

Every kind shares one structural contract (code, status code, context,
timestamp) so callers can handle them uniformly through ``AppError`` or
match on ``kind`` when they need the richer context.
"""

import traceback
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any, ClassVar

from speckit_observability.core.models import utc_timestamp


class ErrorKind(StrEnum):
    """Discriminant naming each error kind."""

    APP = "AppError"
    VALIDATION = "ValidationError"
    NOT_FOUND = "NotFoundError"
    UNAUTHORIZED = "UnauthorizedError"
    FORBIDDEN = "ForbiddenError"
    CONFLICT = "ConflictError"
    DATABASE = "DatabaseError"
    NETWORK = "NetworkError"


class AppError(Exception):
    """Base application error with a machine-readable code and HTTP status.

    All attributes are read-only once constructed.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.APP

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int = 500,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._code = code
        self._status_code = status_code
        self._context = MappingProxyType(dict(context)) if context is not None else None
        self._timestamp = utc_timestamp()

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> str:
        return self._code

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def context(self) -> Mapping[str, Any] | None:
        return self._context

    @property
    def timestamp(self) -> str:
        return self._timestamp

    def __str__(self) -> str:
        return self._message

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape used by log exports and HTTP bodies."""
        stack = None
        if self.__traceback__ is not None:
            stack = "".join(traceback.format_exception(self))
        return {
            "name": self.name,
            "message": self.message,
            "code": self.code,
            "statusCode": self.status_code,
            "context": dict(self._context) if self._context is not None else None,
            "timestamp": self.timestamp,
            "stack": stack,
        }


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", 400, {"field": field, "value": value})


class NotFoundError(AppError):
    """A named resource, optionally identified by ID, does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        suffix = f" with ID {resource_id}" if resource_id else ""
        super().__init__(
            f"{resource}{suffix} not found",
            "NOT_FOUND",
            404,
            {"resource": resource, "id": resource_id},
        )


class UnauthorizedError(AppError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, "UNAUTHORIZED", 401)


class ForbiddenError(AppError):
    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, "FORBIDDEN", 403)


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT

    def __init__(
        self, message: str, conflict_details: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(message, "CONFLICT", 409, {"conflictDetails": conflict_details})


class DatabaseError(AppError):
    kind = ErrorKind.DATABASE

    def __init__(self, message: str, query: str | None = None, params: Any = None) -> None:
        super().__init__(message, "DATABASE_ERROR", 500, {"query": query, "params": params})


class NetworkError(AppError):
    kind = ErrorKind.NETWORK

    def __init__(self, message: str, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message, "NETWORK_ERROR", 503, {"url": url, "status": status})


def error_message(error: BaseException) -> str:
    """Return the human-readable message carried by an exception.

    ``KeyError`` quotes its key in ``str()``; the bare key is used instead.
    An exception whose ``str()`` fails is described by its type name.
    """
    if isinstance(error, AppError):
        return error.message
    if isinstance(error, KeyError) and len(error.args) == 1 and isinstance(error.args[0], str):
        return error.args[0]
    try:
        return str(error)
    except Exception:
        return type(error).__name__
