"""Tests for synchronous responses, polling responses, and callbacks."""

from __future__ import annotations

import pytest

from checkoutxml.deserialization import decode
from checkoutxml.domain.addresses import AnonymousAddress
from checkoutxml.domain.errors import CheckoutApiError, DecodeError, DispatchError, InactiveAccountError
from checkoutxml.domain.notifications import (
    ChargebackAmountNotification,
    CheckoutRedirectResponse,
    MerchantCalculationCallback,
    NotificationDataResponse,
    NotificationDataTokenResponse,
    NotificationHistoryResponse,
    RequestReceivedResponse,
    RiskInformationNotification,
    SubscriptionRequestReceivedResponse,
)
from tests.conftest import NS
from tests.deserialization.documents import CHARGEBACK, RISK


def _strip_declaration(xml: str) -> str:
    return xml.split("?>", 1)[1]


class TestSimpleResponses:
    def test_checkout_redirect(self) -> None:
        response = decode(
            f'<checkout-redirect {NS} serial-number="981283ea-c324-44bb-a10c-fc3b2eba5707">'
            "<redirect-url>https://checkout.google.com/view/buy?o=shoppingcart&amp;shoppingcart=8572</redirect-url>"
            "</checkout-redirect>"
        )
        assert isinstance(response, CheckoutRedirectResponse)
        assert response.serial_number == "981283ea-c324-44bb-a10c-fc3b2eba5707"
        assert response.redirect_url == (
            "https://checkout.google.com/view/buy?o=shoppingcart&shoppingcart=8572"
        )

    def test_request_received(self) -> None:
        response = decode(f'<request-received {NS} serial-number="bea6bc1b" />')
        assert response == RequestReceivedResponse(serial_number="bea6bc1b")

    def test_subscription_request_received(self) -> None:
        response = decode(
            f'<subscription-request-received {NS} serial-number="s1">'
            "<new-google-order-number>617234568721451</new-google-order-number>"
            "</subscription-request-received>"
        )
        assert isinstance(response, SubscriptionRequestReceivedResponse)
        assert response.new_google_order_number == "617234568721451"

    def test_redirect_without_url(self) -> None:
        with pytest.raises(DecodeError, match="redirect-url"):
            decode(f'<checkout-redirect {NS} serial-number="s" />')


class TestErrorDocuments:
    def test_raises_api_error(self) -> None:
        xml = (
            f'<error {NS} serial-number="3c394432-8270-411b-9239-98c2c499f87f">'
            "<error-message>Bad username and/or password for API Access.</error-message>"
            "<warning-messages><string>Deprecated field</string><string>Slow down</string>"
            "</warning-messages></error>"
        )
        with pytest.raises(CheckoutApiError) as excinfo:
            decode(xml)
        error = excinfo.value
        assert not isinstance(error, InactiveAccountError)
        assert error.message == "Bad username and/or password for API Access."
        assert error.serial_number == "3c394432-8270-411b-9239-98c2c499f87f"
        assert error.warnings == ["Deprecated field", "Slow down"]
        assert "3c394432" in str(error)

    def test_inactive_account(self) -> None:
        xml = (
            f'<error {NS} serial-number="s">'
            "<error-message>Merchant account is not active.</error-message></error>"
        )
        with pytest.raises(InactiveAccountError):
            decode(xml)

    def test_error_without_message_is_malformed(self) -> None:
        with pytest.raises(DecodeError):
            decode(f'<error {NS} serial-number="s" />')


class TestPollingResponses:
    def test_notification_history(self) -> None:
        xml = (
            f'<notification-history-response {NS} serial-number="h1"><notifications>'
            + _strip_declaration(CHARGEBACK)
            + _strip_declaration(RISK)
            + "</notifications><next-page-token>page-2</next-page-token>"
            "</notification-history-response>"
        )
        response = decode(xml)
        assert isinstance(response, NotificationHistoryResponse)
        assert response.next_page_token == "page-2"
        assert [type(n) for n in response.notifications] == [
            ChargebackAmountNotification,
            RiskInformationNotification,
        ]

    def test_notification_data_token(self) -> None:
        response = decode(
            f"<notification-data-token-response {NS}>"
            "<continue-token>CmYYpsWgqPKxzgEQ</continue-token>"
            "</notification-data-token-response>"
        )
        assert response == NotificationDataTokenResponse(continue_token="CmYYpsWgqPKxzgEQ")

    def test_notification_data(self) -> None:
        xml = (
            f'<notification-data-response {NS} serial-number="d1">'
            "<continue-token>next</continue-token>"
            "<notifications>" + _strip_declaration(CHARGEBACK) + "</notifications>"
            "<has-more-notifications>true</has-more-notifications>"
            "</notification-data-response>"
        )
        response = decode(xml)
        assert isinstance(response, NotificationDataResponse)
        assert response.continue_token == "next"
        assert response.has_more_notifications is True
        assert len(response.notifications) == 1

    def test_unknown_nested_notification(self) -> None:
        xml = (
            f"<notification-data-response {NS}><continue-token>t</continue-token>"
            "<notifications><teleport-notification /></notifications>"
            "</notification-data-response>"
        )
        with pytest.raises(DispatchError, match="teleport-notification"):
            decode(xml)


CALLBACK = f"""<merchant-calculation-callback {NS} serial-number="39830412-8c3e-4bb9-8daf-6bdb07ce8744">
  <shopping-cart>
    <items>
      <item>
        <item-name>Dry Food Pack</item-name>
        <item-description>Emergency rations</item-description>
        <unit-price currency="USD">35.00</unit-price>
        <quantity>1</quantity>
      </item>
    </items>
  </shopping-cart>
  <buyer-id>294873009217523</buyer-id>
  <buyer-language>en_US</buyer-language>
  <calculate>
    <addresses>
      <anonymous-address id="739030698069958">
        <country-code>US</country-code>
        <city>Mountain View</city>
        <region>CA</region>
        <postal-code>94043</postal-code>
      </anonymous-address>
    </addresses>
    <tax>true</tax>
    <shipping>
      <method name="SuperShip" />
      <method name="UPS Ground" />
    </shipping>
    <merchant-code-strings>
      <merchant-code-string code="FirstVisitCoupon" />
    </merchant-code-strings>
  </calculate>
</merchant-calculation-callback>"""


class TestMerchantCalculationCallback:
    def test_decodes_request(self) -> None:
        callback = decode(CALLBACK)
        assert isinstance(callback, MerchantCalculationCallback)
        assert callback.serial_number == "39830412-8c3e-4bb9-8daf-6bdb07ce8744"
        assert callback.buyer_language == "en_US"
        assert callback.tax is True
        assert callback.shipping_methods == ["SuperShip", "UPS Ground"]
        assert callback.merchant_code_strings == ["FirstVisitCoupon"]
        assert callback.anonymous_addresses == [
            AnonymousAddress(
                address_id="739030698069958",
                city="Mountain View",
                region="CA",
                postal_code="94043",
                country_code="US",
            )
        ]
        assert [item.name for item in callback.shopping_cart.items] == ["Dry Food Pack"]

    def test_without_calculate_block(self) -> None:
        start = CALLBACK.index("<calculate>")
        end = CALLBACK.index("</calculate>") + len("</calculate>")
        callback = decode(CALLBACK[:start] + CALLBACK[end:])
        assert callback.tax is False
        assert callback.anonymous_addresses == []
        assert callback.shipping_methods == []
