"""Tests for tax tables, areas, shipping methods, and checkout-flow settings."""

from __future__ import annotations

from collections.abc import Callable
from xml.etree import ElementTree as ET

import pytest

from checkoutxml.domain.addresses import AnonymousAddress
from checkoutxml.domain.areas import PostalArea, UsCountryArea, UsStateArea, UsZipArea, WorldArea
from checkoutxml.domain.errors import DispatchError
from checkoutxml.domain.shipping import (
    CarrierCalculatedShipping,
    FlatRateShipping,
    MerchantCalculatedShipping,
    PickupShipping,
)
from checkoutxml.domain.tax import TaxTable
from checkoutxml.domain.units import Dimension
from checkoutxml.serialization import encode
from checkoutxml.serialization.checkout import (
    encode_area,
    encode_shipping_method,
    encode_tax_tables,
)
from tests.conftest import parse, simple_checkout, usd


def _render(build: Callable[..., ET.Element | None], *args: object) -> str:
    parent = ET.Element("parent")
    element = build(parent, *args)
    assert element is not None
    return ET.tostring(element, encoding="unicode")


class TestAreas:
    @pytest.mark.parametrize(
        ("area", "xml"),
        [
            (WorldArea(), "<world-area />"),
            (
                UsCountryArea("CONTINENTAL_48"),
                '<us-country-area country-area="CONTINENTAL_48" />',
            ),
            (UsStateArea("NY"), "<us-state-area><state>NY</state></us-state-area>"),
            (UsZipArea("100*"), "<us-zip-area><zip-pattern>100*</zip-pattern></us-zip-area>"),
            (PostalArea("GB"), "<postal-area><country-code>GB</country-code></postal-area>"),
            (
                PostalArea("GB", "SW*"),
                "<postal-area><country-code>GB</country-code>"
                "<postal-code-pattern>SW*</postal-code-pattern></postal-area>",
            ),
        ],
    )
    def test_each_variant(self, area: object, xml: str) -> None:
        assert _render(encode_area, area) == xml

    def test_unknown_variant(self) -> None:
        with pytest.raises(DispatchError):
            encode_area(ET.Element("parent"), "NY")  # type: ignore[arg-type]


class TestTaxTables:
    def test_default_and_alternate(self, tax_tables: list[TaxTable]) -> None:
        assert _render(encode_tax_tables, tax_tables) == (
            '<tax-tables merchant-calculated="false">'
            "<default-tax-table><tax-rules><default-tax-rule>"
            "<shipping-taxed>true</shipping-taxed><rate>0.08375</rate>"
            "<tax-area><us-state-area><state>NY</state></us-state-area></tax-area>"
            "</default-tax-rule></tax-rules></default-tax-table>"
            "<alternate-tax-tables>"
            '<alternate-tax-table name="Some Table" standalone="true"><alternate-tax-rules>'
            "<alternate-tax-rule><rate>0.05</rate><tax-area><world-area /></tax-area>"
            "</alternate-tax-rule></alternate-tax-rules></alternate-tax-table>"
            "</alternate-tax-tables></tax-tables>"
        )

    def test_alternate_rules_never_carry_shipping_taxed(self) -> None:
        default, alternate = TaxTable(), TaxTable("Alt")
        alternate.create_rule(0.1, WorldArea(), shipping_taxed=True)
        element = encode_tax_tables(ET.Element("parent"), [default, alternate])
        assert element is not None
        assert element.find(".//alternate-tax-rule/shipping-taxed") is None

    def test_merchant_calculated_flag(self) -> None:
        element = encode_tax_tables(ET.Element("parent"), [TaxTable(merchant_calculated=True)])
        assert element is not None
        assert element.get("merchant-calculated") == "true"
        assert element.find("alternate-tax-tables") is None

    def test_no_tables_no_element(self) -> None:
        parent = ET.Element("parent")
        assert encode_tax_tables(parent, []) is None
        assert len(parent) == 0

    def test_checkout_places_tax_tables_first(self, tax_tables: list[TaxTable]) -> None:
        command = simple_checkout(tax_tables)
        command.continue_shopping_url = "https://example.com/"
        flow = parse(encode(command)).find(
            "checkout-flow-support/merchant-checkout-flow-support"
        )
        assert flow is not None
        assert [child.tag for child in flow] == [
            "tax-tables",
            "continue-shopping-url",
            "shipping-methods",
        ]


class TestShippingMethods:
    def test_flat_rate_with_restrictions(self) -> None:
        method = FlatRateShipping("UPS Ground", usd("5.00"))
        method.add_allowed_area(UsCountryArea("CONTINENTAL_48"))
        method.add_excluded_area(UsStateArea("AK"))
        assert _render(encode_shipping_method, method) == (
            '<flat-rate-shipping name="UPS Ground">'
            '<price currency="USD">5.00</price>'
            "<shipping-restrictions><allow-us-po-box>true</allow-us-po-box>"
            '<allowed-areas><us-country-area country-area="CONTINENTAL_48" /></allowed-areas>'
            "<excluded-areas><us-state-area><state>AK</state></us-state-area></excluded-areas>"
            "</shipping-restrictions></flat-rate-shipping>"
        )

    def test_restrictions_omitted_without_areas(self) -> None:
        method = FlatRateShipping("Standard", usd("3.00"))
        method.shipping_restrictions_allow_us_po_box = False
        assert _render(encode_shipping_method, method) == (
            '<flat-rate-shipping name="Standard"><price currency="USD">3.00</price>'
            "</flat-rate-shipping>"
        )

    def test_pickup(self) -> None:
        assert _render(encode_shipping_method, PickupShipping("Store", usd("0.00"))) == (
            '<pickup name="Store"><price currency="USD">0.00</price></pickup>'
        )

    def test_merchant_calculated_address_filters(self) -> None:
        method = MerchantCalculatedShipping("Express", usd("10.00"))
        method.add_address_filters_allowed_area(WorldArea())
        method.address_filters_allow_us_po_box = False
        element = encode_shipping_method(ET.Element("parent"), method)
        assert [child.tag for child in element] == ["price", "address-filters"]
        assert element.findtext("address-filters/allow-us-po-box") == "false"
        assert element.find("address-filters/allowed-areas/world-area") is not None

    def test_carrier_calculated(self) -> None:
        method = CarrierCalculatedShipping()
        method.create_option(
            shipping_company="UPS",
            shipping_type="Ground",
            price=usd("12.00"),
            carrier_pickup="REGULAR_PICKUP",
            additional_fixed_charge=usd("1.50"),
            additional_variable_charge_percent=15.0,
        )
        method.create_package(
            AnonymousAddress(
                address_id="ABC", city="Ann Arbor", region="MI", postal_code="48104", country_code="US"
            ),
            delivery_address_category="RESIDENTIAL",
            height=Dimension(1),
            length=Dimension(2),
            width=Dimension("0.5"),
        )
        assert _render(encode_shipping_method, method) == (
            "<carrier-calculated-shipping><carrier-calculated-shipping-options>"
            "<carrier-calculated-shipping-option>"
            '<price currency="USD">12.00</price>'
            "<shipping-company>UPS</shipping-company><shipping-type>Ground</shipping-type>"
            "<carrier-pickup>REGULAR_PICKUP</carrier-pickup>"
            '<additional-fixed-charge currency="USD">1.50</additional-fixed-charge>'
            "<additional-variable-charge-percent>15.0</additional-variable-charge-percent>"
            "</carrier-calculated-shipping-option></carrier-calculated-shipping-options>"
            "<shipping-packages><shipping-package>"
            '<ship-from id="ABC"><city>Ann Arbor</city><region>MI</region>'
            "<country-code>US</country-code><postal-code>48104</postal-code></ship-from>"
            "<delivery-address-category>RESIDENTIAL</delivery-address-category>"
            '<height unit="IN" value="1" /><length unit="IN" value="2" />'
            '<width unit="IN" value="0.5" />'
            "</shipping-package></shipping-packages></carrier-calculated-shipping>"
        )

    def test_unknown_method(self) -> None:
        with pytest.raises(DispatchError):
            encode_shipping_method(ET.Element("parent"), object())  # type: ignore[arg-type]


class TestCheckoutFlow:
    def test_full_flow_order(self) -> None:
        command = simple_checkout()
        command.edit_cart_url = "https://example.com/cart"
        command.continue_shopping_url = "https://example.com/"
        command.request_buyer_phone_number = True
        command.merchant_calculations_url = "https://example.com/calc"
        command.accept_merchant_coupons = True
        command.accept_gift_certificates = False
        command.platform_id = "971865505315434"
        command.analytics_data = "SW5zZXJ0IDxhbmFseXRpY3MtZGF0YT4gdmFsdWUgaGVyZS4="
        command.add_shipping_method(FlatRateShipping("Standard", usd("3.00")))
        purl = command.create_parameterized_url("https://track.example.com/")
        purl.create_url_parameter("orderID", "order-id")
        purl.create_url_parameter("total", "order-total")

        flow = parse(encode(command)).find(
            "checkout-flow-support/merchant-checkout-flow-support"
        )
        assert flow is not None
        assert [child.tag for child in flow] == [
            "continue-shopping-url",
            "edit-cart-url",
            "request-buyer-phone-number",
            "merchant-calculations",
            "platform-id",
            "shipping-methods",
            "analytics-data",
            "parameterized-urls",
        ]
        calculations = flow.find("merchant-calculations")
        assert calculations is not None
        assert [(c.tag, c.text) for c in calculations] == [
            ("merchant-calculations-url", "https://example.com/calc"),
            ("accept-merchant-coupons", "true"),
            ("accept-gift-certificates", "false"),
        ]
        params = flow.findall("parameterized-urls/parameterized-url/parameters/url-parameter")
        assert [p.attrib for p in params] == [
            {"name": "orderID", "type": "order-id"},
            {"name": "total", "type": "order-total"},
        ]
