"""Error hierarchy and the result contract returned by the gateway.

Services raise one of the typed errors below. The gateway converts them into
``Result`` objects so callers always receive a describable failure instead of
an uncaught exception:

    DocVaultError
    ├── NotFoundError          : document/folder/version/annotation missing
    ├── PermissionDeniedError  : caller lacks the required level or ownership
    ├── ValidationFailedError  : bad input shape, rejected before any write
    └── ConflictError          : operation would break a stored invariant
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"


class DocVaultError(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION_FAILED

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context: Dict[str, Any] = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "kind": self.kind.value}
        payload.update({key: str(value) for key, value in self.context.items()})
        return payload

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind.value}: {self.message})"


class NotFoundError(DocVaultError):
    kind = ErrorKind.NOT_FOUND


class PermissionDeniedError(DocVaultError):
    kind = ErrorKind.PERMISSION_DENIED


class ValidationFailedError(DocVaultError):
    kind = ErrorKind.VALIDATION_FAILED


class ConflictError(DocVaultError):
    kind = ErrorKind.CONFLICT


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[DocVaultError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DocVaultError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return self.error.to_dict()
        return {"value": _plain(self.value)}


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value
