"""Error kinds and the result contract returned by service operations.

Services never raise to the pages. Every mutating or lookup operation returns
a :class:`Result` and the page decides whether to show an inline message, a
toast or a "not found" state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories shared by validation, lookups and auth."""

    REQUIRED = "Required"
    TOO_SHORT = "TooShort"
    INVALID = "Invalid"
    INCONSISTENT = "Inconsistent"
    NOT_FOUND = "NotFound"
    DUPLICATE = "Duplicate"
    DUPLICATE_USER = "DuplicateUser"
    AUTH_FAILED = "AuthFailed"
    UNEXPECTED = "Unexpected"


@dataclass
class Result(Generic[T]):
    """Outcome of a service call.

    ``field_errors`` is populated only for validation failures and maps the
    form field name to the message shown next to it.
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""
    field_errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def success(cls, value: Any = None, message: str = "") -> "Result[Any]":
        return cls(ok=True, value=value, message=message)

    @classmethod
    def fail(
        cls,
        error: ErrorKind,
        message: str,
        field_errors: Optional[Dict[str, str]] = None,
    ) -> "Result[Any]":
        return cls(
            ok=False, error=error, message=message, field_errors=field_errors or {}
        )

    def __iter__(self):
        # Allows ``success, message = result`` like the older tuple contract.
        yield self.ok
        yield self.message
