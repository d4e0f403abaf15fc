"""Tests for BaseService and its error mapping."""

import pytest

from checkoutxml.domain.errors import (
    CheckoutApiError,
    CheckoutError,
    DecodeError,
    DispatchError,
    InactiveAccountError,
    InvalidValueError,
)
from checkoutxml.frontend import Frontend
from checkoutxml.services.base import BaseService
from checkoutxml.services.commands import CommandService
from checkoutxml.services.inbound import InboundService


class TestBaseService:
    def test_frontend_stored(self, frontend: Frontend) -> None:
        service = BaseService(frontend)
        assert service._frontend is frontend

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (CheckoutApiError("Bad Signature"), "API_ERROR"),
            (InactiveAccountError("Inactive"), "API_ERROR"),
            (DecodeError("Malformed"), "DECODE_ERROR"),
            (DispatchError("Unknown root"), "UNKNOWN_DOCUMENT"),
            (InvalidValueError("Negative quantity"), "INVALID_VALUE"),
            (CheckoutError("Other"), "CHECKOUT_ERROR"),
        ],
    )
    def test_failure_codes(self, error: CheckoutError, code: str) -> None:
        result = BaseService._failure("decode", error)
        assert result.ok is False
        assert result.op == "decode"
        assert result.error is not None
        assert result.error.code == code

    def test_api_error_detail(self) -> None:
        error = CheckoutApiError("Bad Signature", serial_number="s-1", warnings=["w"])
        result = BaseService._failure("decode", error)
        assert result.error is not None
        assert result.error.message == "Bad Signature (serial number s-1)"
        assert result.error.detail == {"serial_number": "s-1", "warnings": ["w"]}


@pytest.mark.parametrize("service_cls", [InboundService, CommandService], ids=lambda c: c.__name__)
def test_inherits_base_service(service_cls: type) -> None:
    assert issubclass(service_cls, BaseService)
