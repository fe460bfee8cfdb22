"""Tests for validators and the validator registry."""

from dataclasses import dataclass

import pytest

from neba_pipeline import (
    Command,
    Rule,
    RuleValidator,
    ValidationFailure,
    Validator,
    ValidatorRegistry,
)


@dataclass(frozen=True)
class RecordAward(Command):
    bowler: str
    score: int


@dataclass(frozen=True)
class RecordHighBlock(RecordAward):
    games: int = 5


class ScoreValidator(Validator[RecordAward]):
    request_type = RecordAward

    async def validate(self, request: RecordAward) -> list[ValidationFailure]:
        if request.score <= 0:
            return [ValidationFailure("score", "Score must be positive", "score.range")]
        return []


async def known_bowler(name: str) -> bool:
    return name in {"Jane", "Ravi"}


class TestRuleValidator:
    async def test_reports_every_failing_rule(self) -> None:
        validator = RuleValidator(
            RecordAward,
            [
                Rule("bowler", bool, "Bowler is required", "bowler.required"),
                Rule("score", lambda s: s <= 300 * 5, "Score too high"),
            ],
        )

        failures = await validator.validate(RecordAward("", 9999))

        assert failures == [
            ValidationFailure("bowler", "Bowler is required", "bowler.required"),
            ValidationFailure("score", "Score too high", "invalid"),
        ]

    async def test_async_predicate(self) -> None:
        validator = RuleValidator(
            RecordAward, [Rule("bowler", known_bowler, "Unknown bowler")]
        )

        assert await validator.validate(RecordAward("Jane", 1200)) == []
        assert len(await validator.validate(RecordAward("Nobody", 1200))) == 1


class TestValidatorRegistry:
    def test_lookup_by_type(self) -> None:
        validator = ScoreValidator()
        registry = ValidatorRegistry([validator]).freeze()

        assert registry.for_type(RecordAward) == (validator,)

    def test_base_class_validators_apply_to_subclasses(self) -> None:
        base = ScoreValidator()
        games = RuleValidator(RecordHighBlock, [Rule("games", lambda g: g == 5, "5 games")])
        registry = ValidatorRegistry([base, games]).freeze()

        assert registry.for_type(RecordHighBlock) == (games, base)
        assert registry.for_type(RecordAward) == (base,)

    def test_unregistered_type_has_none(self) -> None:
        registry = ValidatorRegistry().freeze()
        assert registry.for_type(RecordAward) == ()

    def test_frozen_registry_rejects_registration(self) -> None:
        registry = ValidatorRegistry().freeze()
        with pytest.raises(RuntimeError):
            registry.register(ScoreValidator())
