"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from scuttle.domain.types import FailureCode
from scuttle.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="stats")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure(
            "stats", FailureCode.NOT_A_MEMBER, "Not here", guild_id="G1"
        )
        assert result.ok is False
        assert result.error == ServiceError(
            code="NOT_A_MEMBER", message="Not here", detail={"guild_id": "G1"}
        )

    def test_failure_code_is_plain_string(self) -> None:
        result = ServiceResult.failure("broadcast", FailureCode.NO_TARGETS, "none")
        assert result.error is not None
        assert type(result.error.code) is str

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="stats")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_round_trip(self) -> None:
        result = ServiceResult.failure("rankings", FailureCode.NO_RANKINGS_DATA, "empty")
        restored = ServiceResult.model_validate_json(result.model_dump_json())
        assert restored == result
