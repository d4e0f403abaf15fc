"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from checkoutxml.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="decode", data={"document": "RequestReceivedResponse"})
        assert result.ok is True
        assert result.op == "decode"
        assert result.data == {"document": "RequestReceivedResponse"}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="DECODE_ERROR", message="Malformed XML")
        result = ServiceResult(ok=False, op="decode", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "DECODE_ERROR"
        assert result.error.message == "Malformed XML"

    def test_with_warnings(self) -> None:
        result = ServiceResult(
            ok=True,
            op="decode",
            warnings=["Tax table 'Missing Table' not found"],
        )
        assert len(result.warnings) == 1

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="render", data={"kind": "archive-order"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "render"
        assert parsed["data"]["kind"] == "archive-order"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="decode")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="API_ERROR",
            message="Bad Signature",
            detail={"serial_number": "3c394432-8270-411b-9239-98c2c499f87f"},
        )
        assert error.detail["serial_number"] == "3c394432-8270-411b-9239-98c2c499f87f"

    def test_default_detail(self) -> None:
        error = ServiceError(code="CHECKOUT_ERROR", message="bad")
        assert error.detail == {}
