"""Tests for the request logging behavior."""

from dataclasses import dataclass
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from neba_pipeline import Error, Query, RequestLoggingBehavior, Result


@dataclass(frozen=True)
class GetBowler(Query):
    bowler_id: str


@pytest.fixture
def behavior() -> RequestLoggingBehavior:
    return RequestLoggingBehavior()


class TestRequestLoggingBehavior:
    async def test_success_logged_and_result_unchanged(
        self, behavior: RequestLoggingBehavior
    ) -> None:
        expected = Result.ok({"id": "42"})

        async def next_stage() -> Result[Any]:
            return expected

        with capture_logs() as logs:
            result = await behavior.handle(GetBowler("42"), next_stage)

        assert result is expected
        events = [log["event"] for log in logs]
        assert events == ["request.started", "request.succeeded"]
        assert logs[-1]["duration_ms"] >= 0

    async def test_failure_result_logged_as_error(
        self, behavior: RequestLoggingBehavior
    ) -> None:
        failure: Result[Any] = Result.fail(Error.not_found("Bowler.NotFound", "missing"))

        async def next_stage() -> Result[Any]:
            return failure

        with capture_logs() as logs:
            result = await behavior.handle(GetBowler("42"), next_stage)

        assert result is failure
        failed = logs[-1]
        assert failed["event"] == "request.failed"
        assert failed["log_level"] == "error"
        assert failed["errors"][0]["code"] == "Bowler.NotFound"

    async def test_exception_logged_and_reraised(
        self, behavior: RequestLoggingBehavior
    ) -> None:
        async def next_stage() -> Result[Any]:
            raise RuntimeError("database offline")

        with capture_logs() as logs, pytest.raises(RuntimeError, match="offline"):
            await behavior.handle(GetBowler("42"), next_stage)

        assert logs[-1]["event"] == "request.raised"

    async def test_correlation_id_bound_during_request(
        self, behavior: RequestLoggingBehavior
    ) -> None:
        seen: dict[str, Any] = {}

        async def next_stage() -> Result[Any]:
            seen.update(structlog.contextvars.get_contextvars())
            return Result.ok(None)

        await behavior.handle(GetBowler("42"), next_stage)

        assert seen["request_name"] == "GetBowler"
        assert len(seen["correlation_id"]) == 32
        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    async def test_existing_correlation_id_reused(
        self, behavior: RequestLoggingBehavior
    ) -> None:
        seen: dict[str, Any] = {}

        async def next_stage() -> Result[Any]:
            seen.update(structlog.contextvars.get_contextvars())
            return Result.ok(None)

        with structlog.contextvars.bound_contextvars(correlation_id="req-abc"):
            await behavior.handle(GetBowler("42"), next_stage)

        assert seen["correlation_id"] == "req-abc"
