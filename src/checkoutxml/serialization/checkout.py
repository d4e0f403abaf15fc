"""Checkout-flow encoders: tax tables, shipping methods, areas, tracking URLs."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from checkoutxml.domain.areas import PostalArea, UsCountryArea, UsStateArea, UsZipArea, WorldArea
from checkoutxml.domain.errors import DispatchError
from checkoutxml.domain.shipping import (
    CarrierCalculatedShipping,
    FlatRateShipping,
    MerchantCalculatedShipping,
    PickupShipping,
)
from checkoutxml.domain.units import format_decimal
from checkoutxml.serialization.cart import encode_shopping_cart
from checkoutxml.serialization.document import bool_text, money_element, sub

if TYPE_CHECKING:
    from checkoutxml.domain.areas import Area
    from checkoutxml.domain.commands import CheckoutCommand
    from checkoutxml.domain.fulfillment import ParameterizedUrl
    from checkoutxml.domain.shipping import (
        CarrierCalculatedShippingOption,
        ShippingMethod,
        ShippingPackage,
    )
    from checkoutxml.domain.tax import TaxTable
    from checkoutxml.domain.units import Dimension


# --- Areas ---


def encode_area(parent: ET.Element, area: Area) -> ET.Element:
    """Append the element for *area* to *parent*."""
    match area:
        case UsZipArea(pattern=pattern):
            element = sub(parent, "us-zip-area")
            sub(element, "zip-pattern", pattern)
        case UsCountryArea(region=region):
            element = sub(parent, "us-country-area", country_area=region.value)
        case UsStateArea(state=state):
            element = sub(parent, "us-state-area")
            sub(element, "state", state)
        case WorldArea():
            element = sub(parent, "world-area")
        case PostalArea(country_code=country_code, postal_code_pattern=pattern):
            element = sub(parent, "postal-area")
            sub(element, "country-code", country_code)
            if pattern is not None:
                sub(element, "postal-code-pattern", pattern)
        case _:
            msg = f"Cannot encode area of type {type(area).__name__}"
            raise DispatchError(msg)
    return element


def _encode_area_filter(
    parent: ET.Element,
    tag: str,
    allowed: list[Area],
    excluded: list[Area],
    allow_us_po_box: bool,
) -> None:
    """``shipping-restrictions`` / ``address-filters``; omitted when no areas are set."""
    if not allowed and not excluded:
        return
    element = sub(parent, tag)
    sub(element, "allow-us-po-box", bool_text(allow_us_po_box))
    if allowed:
        allowed_el = sub(element, "allowed-areas")
        for area in allowed:
            encode_area(allowed_el, area)
    if excluded:
        excluded_el = sub(element, "excluded-areas")
        for area in excluded:
            encode_area(excluded_el, area)


# --- Tax tables ---


def encode_tax_tables(parent: ET.Element, tables: list[TaxTable]) -> ET.Element | None:
    """The first table becomes the default table, the rest alternates.

    Default rules carry ``shipping-taxed``; alternate rules never do.
    """
    if not tables:
        return None
    default, *alternates = tables
    element = sub(parent, "tax-tables", merchant_calculated=bool_text(default.merchant_calculated))

    rules_el = sub(sub(element, "default-tax-table"), "tax-rules")
    for rule in default.rules:
        rule_el = sub(rules_el, "default-tax-rule")
        sub(rule_el, "shipping-taxed", bool_text(rule.shipping_taxed))
        sub(rule_el, "rate", str(rule.rate))
        encode_area(sub(rule_el, "tax-area"), rule.area)

    if alternates:
        alternates_el = sub(element, "alternate-tax-tables")
        for table in alternates:
            table_el = sub(
                alternates_el,
                "alternate-tax-table",
                name=table.name,
                standalone=bool_text(table.standalone),
            )
            alt_rules_el = sub(table_el, "alternate-tax-rules")
            for rule in table.rules:
                rule_el = sub(alt_rules_el, "alternate-tax-rule")
                sub(rule_el, "rate", str(rule.rate))
                encode_area(sub(rule_el, "tax-area"), rule.area)
    return element


# --- Shipping ---


def _encode_dimension(parent: ET.Element, tag: str, dimension: Dimension | None) -> None:
    if dimension is not None:
        sub(parent, tag, unit=dimension.unit, value=format_decimal(dimension.value))


def _encode_carrier_option(parent: ET.Element, option: CarrierCalculatedShippingOption) -> None:
    element = sub(parent, option.xml_tag)
    if option.price is not None:
        money_element(element, "price", option.price)
    sub(element, "shipping-company", option.shipping_company.value)
    sub(element, "shipping-type", option.shipping_type)
    if option.carrier_pickup is not None:
        sub(element, "carrier-pickup", option.carrier_pickup.value)
    if option.additional_fixed_charge is not None:
        money_element(element, "additional-fixed-charge", option.additional_fixed_charge)
    if option.additional_variable_charge_percent is not None:
        sub(
            element,
            "additional-variable-charge-percent",
            str(option.additional_variable_charge_percent),
        )


def _encode_package(parent: ET.Element, package: ShippingPackage) -> None:
    element = sub(parent, "shipping-package")
    origin = package.ship_from
    ship_from = sub(element, "ship-from", id=origin.address_id or "")
    sub(ship_from, "city", origin.city or "")
    sub(ship_from, "region", origin.region or "")
    sub(ship_from, "country-code", origin.country_code or "")
    sub(ship_from, "postal-code", origin.postal_code or "")
    if package.delivery_address_category is not None:
        sub(element, "delivery-address-category", package.delivery_address_category.value)
    _encode_dimension(element, "height", package.height)
    _encode_dimension(element, "length", package.length)
    _encode_dimension(element, "width", package.width)


def encode_shipping_method(parent: ET.Element, method: ShippingMethod) -> ET.Element:
    """Append the element for *method* to ``<shipping-methods>``."""
    match method:
        case PickupShipping():
            element = sub(parent, method.xml_tag, name=method.name or "")
            if method.price is not None:
                money_element(element, "price", method.price)
        case MerchantCalculatedShipping():
            element = sub(parent, method.xml_tag, name=method.name or "")
            if method.price is not None:
                money_element(element, "price", method.price)
            _encode_area_filter(
                element,
                "shipping-restrictions",
                method.shipping_restrictions_allowed_areas,
                method.shipping_restrictions_excluded_areas,
                method.shipping_restrictions_allow_us_po_box,
            )
            _encode_area_filter(
                element,
                "address-filters",
                method.address_filters_allowed_areas,
                method.address_filters_excluded_areas,
                method.address_filters_allow_us_po_box,
            )
        case FlatRateShipping():
            element = sub(parent, method.xml_tag, name=method.name or "")
            if method.price is not None:
                money_element(element, "price", method.price)
            _encode_area_filter(
                element,
                "shipping-restrictions",
                method.shipping_restrictions_allowed_areas,
                method.shipping_restrictions_excluded_areas,
                method.shipping_restrictions_allow_us_po_box,
            )
        case CarrierCalculatedShipping():
            element = sub(parent, method.xml_tag)
            options_el = sub(element, "carrier-calculated-shipping-options")
            for option in method.carrier_calculated_shipping_options:
                _encode_carrier_option(options_el, option)
            packages_el = sub(element, "shipping-packages")
            for package in method.shipping_packages:
                _encode_package(packages_el, package)
        case _:
            msg = f"Cannot encode shipping method of type {type(method).__name__}"
            raise DispatchError(msg)
    return element


# --- Parameterized URLs ---


def encode_parameterized_urls(parent: ET.Element, urls: list[ParameterizedUrl]) -> None:
    if not urls:
        return
    element = sub(parent, "parameterized-urls")
    for purl in urls:
        url_el = sub(element, "parameterized-url", url=purl.url)
        params_el = sub(url_el, "parameters")
        for param in purl.url_parameters:
            sub(params_el, "url-parameter", name=param.name, type=param.parameter_type.value)


# --- Whole checkout ---


def encode_checkout(root: ET.Element, command: CheckoutCommand) -> None:
    """Fill a ``<checkout-shopping-cart>`` root."""
    encode_shopping_cart(root, command.shopping_cart)

    flow = sub(sub(root, "checkout-flow-support"), "merchant-checkout-flow-support")
    encode_tax_tables(flow, command.tax_tables)
    if command.continue_shopping_url is not None:
        sub(flow, "continue-shopping-url", command.continue_shopping_url)
    if command.edit_cart_url is not None:
        sub(flow, "edit-cart-url", command.edit_cart_url)
    if command.request_buyer_phone_number is not None:
        sub(flow, "request-buyer-phone-number", bool_text(command.request_buyer_phone_number))
    if command.merchant_calculations_url is not None:
        calculations = sub(flow, "merchant-calculations")
        sub(calculations, "merchant-calculations-url", command.merchant_calculations_url)
        if command.accept_merchant_coupons is not None:
            sub(calculations, "accept-merchant-coupons", bool_text(command.accept_merchant_coupons))
        if command.accept_gift_certificates is not None:
            sub(
                calculations,
                "accept-gift-certificates",
                bool_text(command.accept_gift_certificates),
            )
    if command.platform_id is not None:
        sub(flow, "platform-id", command.platform_id)

    methods_el = sub(flow, "shipping-methods")
    for method in command.shipping_methods:
        encode_shipping_method(methods_el, method)

    if command.analytics_data is not None:
        sub(flow, "analytics-data", command.analytics_data)
    encode_parameterized_urls(flow, command.parameterized_urls)
