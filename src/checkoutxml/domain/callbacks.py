"""Documents the merchant sends back in answer to inbound callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.money import MoneyLike, require_money


@dataclass(frozen=True)
class NotificationAcknowledgement:
    """Confirms receipt of a notification so the API stops resending it."""

    serial_number: str | None = None

    @classmethod
    def for_notification(cls, notification: object) -> NotificationAcknowledgement:
        """Acknowledge *notification* by its serial number."""
        return cls(getattr(notification, "serial_number", None))


@dataclass(frozen=True)
class MerchantCodeResult:
    """Outcome of validating one coupon or gift-certificate code."""

    kind: str
    code: str
    valid: bool
    calculated_amount: MoneyLike | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in ("coupon", "gift-certificate"):
            msg = f"Merchant code kind must be 'coupon' or 'gift-certificate', got {self.kind!r}"
            raise InvalidValueError(msg)
        if self.calculated_amount is not None:
            require_money(self.calculated_amount, "Calculated amount")


class MerchantCalculationResult:
    """Shipping, tax, and code results for one address and shipping method."""

    def __init__(
        self,
        *,
        address_id: str,
        shipping_name: str | None = None,
        shipping_rate: MoneyLike | None = None,
        shippable: bool | None = None,
        total_tax: MoneyLike | None = None,
    ) -> None:
        self.address_id = address_id
        self.shipping_name = shipping_name
        self.shipping_rate = (
            None if shipping_rate is None else require_money(shipping_rate, "Shipping rate")
        )
        self.shippable = shippable
        self.total_tax = None if total_tax is None else require_money(total_tax, "Total tax")
        self.merchant_code_results: list[MerchantCodeResult] = []

    def add_code_result(self, result: MerchantCodeResult) -> MerchantCodeResult:
        self.merchant_code_results.append(result)
        return result


@dataclass
class MerchantCalculationResults:
    """Answer to a merchant-calculation callback."""

    results: list[MerchantCalculationResult] = field(default_factory=list)

    def create_result(self, **attrs: object) -> MerchantCalculationResult:
        result = MerchantCalculationResult(**attrs)  # type: ignore[arg-type]
        self.results.append(result)
        return result
