"""BaseService: common construction and error mapping for services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from checkoutxml.domain.errors import (
    CheckoutApiError,
    CheckoutError,
    DecodeError,
    DispatchError,
    InvalidValueError,
)
from checkoutxml.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from checkoutxml.frontend import Frontend

_ERROR_CODES: dict[type[CheckoutError], str] = {
    CheckoutApiError: "API_ERROR",
    DecodeError: "DECODE_ERROR",
    DispatchError: "UNKNOWN_DOCUMENT",
    InvalidValueError: "INVALID_VALUE",
}


class BaseService:
    """Services receive a :class:`Frontend` at construction time."""

    def __init__(self, frontend: Frontend) -> None:
        self._frontend = frontend

    @staticmethod
    def _failure(op: str, exc: CheckoutError) -> ServiceResult:
        code = next(
            (code for cls, code in _ERROR_CODES.items() if isinstance(exc, cls)),
            "CHECKOUT_ERROR",
        )
        detail: dict[str, object] = {}
        if isinstance(exc, CheckoutApiError):
            detail = {"serial_number": exc.serial_number, "warnings": exc.warnings}
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=str(exc), detail=detail),
        )
