"""Request validators and the startup-time validator table."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from neba_pipeline.messages import Request

TRequest = TypeVar("TRequest", bound=Request)


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A single field-level validation failure."""

    field: str
    message: str
    code: str = "invalid"


class Validator(Generic[TRequest]):
    """Validates one request type.

    Subclasses set ``request_type`` and implement ``validate``.
    """

    request_type: ClassVar[type[Request]]

    async def validate(self, request: TRequest) -> list[ValidationFailure]:
        raise NotImplementedError


Predicate = Callable[[Any], bool | Awaitable[bool]]


@dataclass(frozen=True, slots=True)
class Rule:
    field: str
    predicate: Predicate
    message: str
    code: str = "invalid"


class RuleValidator(Validator[TRequest]):
    """Validator built from ``(field, predicate, message)`` rules.

    Each predicate receives the field's value; sync and async predicates
    are both accepted. Every rule runs, so all failures are reported.
    """

    def __init__(self, request_type: type[TRequest], rules: Iterable[Rule]) -> None:
        self.request_type = request_type
        self._rules = tuple(rules)

    async def validate(self, request: TRequest) -> list[ValidationFailure]:
        failures = []
        for rule in self._rules:
            outcome = rule.predicate(getattr(request, rule.field, None))
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if not outcome:
                failures.append(ValidationFailure(rule.field, rule.message, rule.code))
        return failures


class ValidatorRegistry:
    """Validators keyed by request type.

    Register during startup, then ``freeze()``; lookups after freezing come
    from a precomputed table. A validator registered for a base class also
    applies to its subclasses.
    """

    def __init__(self, validators: Iterable[Validator[Any]] = ()) -> None:
        self._by_type: dict[type[Request], list[Validator[Any]]] = {}
        self._table: dict[type[Request], tuple[Validator[Any], ...]] = {}
        self._frozen = False
        for validator in validators:
            self.register(validator)

    def register(self, validator: Validator[Any]) -> None:
        if self._frozen:
            raise RuntimeError("Validator registry is frozen")
        self._by_type.setdefault(validator.request_type, []).append(validator)

    def freeze(self) -> ValidatorRegistry:
        self._frozen = True
        return self

    def _resolve(self, request_type: type[Request]) -> tuple[Validator[Any], ...]:
        found: list[Validator[Any]] = []
        for klass in request_type.__mro__:
            found.extend(self._by_type.get(klass, ()))
        return tuple(found)

    def for_type(self, request_type: type[Request]) -> tuple[Validator[Any], ...]:
        if not self._frozen:
            return self._resolve(request_type)
        validators = self._table.get(request_type)
        if validators is None:
            validators = self._table[request_type] = self._resolve(request_type)
        return validators
