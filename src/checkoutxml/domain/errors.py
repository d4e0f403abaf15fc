"""Error taxonomy for the mapping engine.

Every failure is surfaced to the caller; nothing is retried or recovered.

- :class:`InvalidValueError`: a value was rejected at assignment,
  construction, or encode time.
- :class:`DecodeError`: an inbound document is structurally unusable.
- :class:`DispatchError`: a root tag or a polymorphic variant is unknown.
- :class:`CheckoutApiError`: the API answered with an ``<error>`` document.
"""

from __future__ import annotations


class CheckoutError(Exception):
    """Base class for all checkoutxml errors."""


class InvalidValueError(CheckoutError, ValueError):
    """A domain value failed validation."""


class DecodeError(CheckoutError):
    """An inbound XML document is malformed or misses mandatory content."""


class DispatchError(CheckoutError):
    """No encoder or decoder is registered for the given type or tag."""


class CheckoutApiError(CheckoutError):
    """Protocol-level error reported by the API in an ``<error>`` document.

    Attributes:
        serial_number: Serial number of the failed request.
        message: Error text from ``<error-message>``.
        response_code: HTTP status reported alongside the document, if known.
        warnings: Entries of ``<warning-messages>``.
    """

    def __init__(
        self,
        message: str,
        *,
        serial_number: str | None = None,
        response_code: int | None = None,
        warnings: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.serial_number = serial_number
        self.response_code = response_code
        self.warnings = list(warnings or [])

    def __str__(self) -> str:
        if self.serial_number:
            return f"{self.message} (serial number {self.serial_number})"
        return self.message


class InactiveAccountError(CheckoutApiError):
    """The merchant account is not active yet."""
