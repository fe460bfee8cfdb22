"""Success/failure results returned by handlers and the pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Category of a failed request."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILURE = "failure"
    UNEXPECTED = "unexpected"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Error:
    """A single error carried by a failed result."""

    code: str
    description: str
    kind: ErrorKind = ErrorKind.FAILURE
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def validation(
        cls, code: str, description: str, *, field_name: str | None = None
    ) -> Error:
        metadata = {"field": field_name} if field_name else {}
        return cls(code, description, ErrorKind.VALIDATION, metadata)

    @classmethod
    def not_found(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorKind.NOT_FOUND)

    @classmethod
    def conflict(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorKind.CONFLICT)

    @classmethod
    def failure(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorKind.FAILURE)

    @classmethod
    def unexpected(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorKind.UNEXPECTED)


class Result(Generic[T]):
    """Either a value or one or more errors."""

    __slots__ = ("_errors", "_value")

    def __init__(self, value: T | None = None, errors: Iterable[Error] = ()) -> None:
        self._value = value
        self._errors = tuple(errors)

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, errors: Error | Iterable[Error]) -> Result[T]:
        if isinstance(errors, Error):
            errors = (errors,)
        errors = tuple(errors)
        if not errors:
            raise ValueError("A failed result needs at least one error")
        return cls(errors=errors)

    @property
    def is_error(self) -> bool:
        return bool(self._errors)

    @property
    def value(self) -> T:
        """The success value. Raises ValueError on a failed result."""
        if self._errors:
            raise ValueError(f"Result has errors: {self._errors[0].code}")
        return self._value  # type: ignore[return-value]

    @property
    def errors(self) -> tuple[Error, ...]:
        return self._errors

    @property
    def first_error(self) -> Error | None:
        return self._errors[0] if self._errors else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._value == other._value and self._errors == other._errors

    def __repr__(self) -> str:
        if self._errors:
            return f"Result.fail({list(self._errors)!r})"
        return f"Result.ok({self._value!r})"
