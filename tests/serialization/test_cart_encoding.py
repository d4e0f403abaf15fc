"""Tests for item, cart, subscription, and private-data encoding."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime
from xml.etree import ElementTree as ET

import pytest

from checkoutxml.domain.commands import CheckoutCommand
from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.tax import TaxTable
from checkoutxml.domain.units import Weight
from checkoutxml.serialization import encode
from checkoutxml.serialization.cart import encode_item, encode_private_data, to_tag_name
from tests.conftest import NS, body, parse, simple_checkout, usd

REQUIRED_TAGS = ["item-name", "item-description", "unit-price", "quantity"]
OPTIONAL_TAGS = [
    "merchant-item-id",
    "item-weight",
    "merchant-private-item-data",
    "tax-table-selector",
    "digital-content",
]


def _private_xml(data: dict) -> str:
    root = ET.Element("data")
    encode_private_data(root, data)
    return ET.tostring(root, encoding="unicode")


class TestShoppingCart:
    def test_minimal_checkout_document(self) -> None:
        xml = encode(simple_checkout())
        assert body(xml) == (
            f"<checkout-shopping-cart {NS}>"
            "<shopping-cart><items><item>"
            "<item-name>Dry Food Pack AA1453</item-name>"
            "<item-description>A pack of highly nutritious dried food for emergency</item-description>"
            '<unit-price currency="USD">35.00</unit-price>'
            "<quantity>1</quantity>"
            "</item></items></shopping-cart>"
            "<checkout-flow-support><merchant-checkout-flow-support>"
            "<shipping-methods />"
            "</merchant-checkout-flow-support></checkout-flow-support>"
            "</checkout-shopping-cart>"
        )

    def test_expiration_and_private_data_precede_items(self) -> None:
        command = simple_checkout()
        command.shopping_cart.expires_at = datetime(2007, 12, 31, 23, 59, 59, tzinfo=UTC)
        command.shopping_cart.private_data = {"session": "abc"}
        cart = parse(encode(command)).find("shopping-cart")
        assert cart is not None
        assert [child.tag for child in cart] == ["cart-expiration", "merchant-private-data", "items"]
        assert cart.findtext("cart-expiration/good-until-date") == "2007-12-31T23:59:59+00:00"
        assert cart.findtext("merchant-private-data/session") == "abc"

    def test_items_keep_insertion_order(self) -> None:
        command = simple_checkout()
        command.shopping_cart.create_item(
            name="Second", description="b", unit_price=usd("1.00"), quantity=2
        )
        names = [el.text for el in parse(encode(command)).iter("item-name")]
        assert names == ["Dry Food Pack AA1453", "Second"]


class TestItemOptionalTags:
    @pytest.mark.parametrize(
        "present",
        [
            combo
            for size in range(len(OPTIONAL_TAGS) + 1)
            for combo in itertools.combinations(OPTIONAL_TAGS, size)
        ],
        ids=lambda combo: "+".join(combo) or "required-only",
    )
    def test_each_subset_of_optional_tags(self, present: tuple[str, ...]) -> None:
        table = TaxTable("Some Table")
        command = CheckoutCommand(tax_tables=[TaxTable(), table])
        item = command.shopping_cart.create_item(
            name="Widget", description="A widget", unit_price=usd("9.99"), quantity=3
        )
        if "merchant-item-id" in present:
            item.merchant_item_id = "W-1"
        if "item-weight" in present:
            item.weight = Weight(2.2)
        if "merchant-private-item-data" in present:
            item.private_data = {"note": "gift"}
        if "tax-table-selector" in present:
            item.tax_table = table
        if "digital-content" in present:
            item.create_digital_content(key="1456-1514")

        item_el = parse(encode(command)).find("shopping-cart/items/item")
        assert item_el is not None
        assert [child.tag for child in item_el] == REQUIRED_TAGS + list(present)

    @pytest.mark.parametrize("missing", ["name", "description", "unit_price", "quantity"])
    def test_missing_required_value(self, missing: str) -> None:
        command = simple_checkout()
        item = command.shopping_cart.items[0]
        setattr(item, f"_{missing}" if missing in ("unit_price", "quantity") else missing, None)
        with pytest.raises(InvalidValueError, match=missing):
            encode(command)

    def test_weight_attributes(self) -> None:
        command = simple_checkout()
        command.shopping_cart.items[0].weight = Weight(2.2)
        weight = parse(encode(command)).find(".//item-weight")
        assert weight is not None
        assert weight.attrib == {"unit": "LB", "value": "2.2"}

    def test_digital_content_children(self) -> None:
        root = ET.Element("items")
        command = simple_checkout()
        item = command.shopping_cart.items[0]
        item.create_digital_content(
            description="Download link follows",
            email_delivery=False,
            key="1456-1514-3657-2198",
            url="https://example.com/download",
            display_disposition="OPTIMISTIC",
        )
        element = encode_item(root, item).find("digital-content")
        assert element is not None
        assert [(child.tag, child.text) for child in element] == [
            ("description", "Download link follows"),
            ("email-delivery", "false"),
            ("key", "1456-1514-3657-2198"),
            ("url", "https://example.com/download"),
            ("display-disposition", "OPTIMISTIC"),
        ]


class TestSubscriptionEncoding:
    def _command(self) -> CheckoutCommand:
        table = TaxTable("Some Table")
        command = CheckoutCommand(tax_tables=[TaxTable(), table])
        item = command.shopping_cart.create_item(
            name="Subscription", description="Monthly plan", unit_price=usd("0.00"), quantity=1
        )
        subscription = item.create_subscription(period="MONTHLY", type="google")
        subscription.add_payment(usd("1.00"))
        subscription.create_recurrent_item(
            name="An interesting subscription",
            description="Charged every month",
            unit_price=usd("1.00"),
            quantity=1,
            tax_table=table,
        )
        return command

    def test_subscription_block(self) -> None:
        item = parse(encode(self._command())).find("shopping-cart/items/item")
        assert item is not None
        subscription = item.find("subscription")
        assert subscription is not None
        assert subscription.attrib == {"period": "MONTHLY", "type": "google"}
        assert [child.tag for child in subscription] == ["payments", "recurrent-item"]
        charge = subscription.find("payments/subscription-payment/maximum-charge")
        assert charge is not None
        assert (charge.text, charge.get("currency")) == ("1.00", "USD")

    def test_recurrent_item_has_no_nested_subscription(self) -> None:
        recurrent = parse(encode(self._command())).find(".//recurrent-item")
        assert recurrent is not None
        assert recurrent.findtext("item-name") == "An interesting subscription"
        assert recurrent.findtext("tax-table-selector") == "Some Table"
        assert recurrent.find("subscription") is None

    def test_attribute_order_and_times(self) -> None:
        command = self._command()
        subscription = command.shopping_cart.items[0].subscription
        assert subscription is not None
        subscription.start_date = datetime(2008, 1, 1, tzinfo=UTC)
        subscription.no_charge_after = datetime(2009, 1, 1, tzinfo=UTC)
        subscription.payments[0].times = 12
        xml = body(encode(command))
        assert (
            '<subscription no-charge-after="2009-01-01T00:00:00+00:00" period="MONTHLY" '
            'start-date="2008-01-01T00:00:00+00:00" type="google">'
        ) in xml
        assert '<subscription-payment times="12">' in xml

    def test_period_and_type_required(self) -> None:
        command = simple_checkout()
        command.shopping_cart.items[0].create_subscription(period="MONTHLY")
        with pytest.raises(InvalidValueError, match="period and a type"):
            encode(command)


class TestPrivateData:
    def test_scalars_mappings_and_lists(self) -> None:
        xml = _private_xml(
            {
                "note": "hi",
                "count": 5,
                "flag": True,
                "empty": None,
                "nested": {"inner": "x"},
                "tags": ["a", "b"],
            }
        )
        assert xml == (
            "<data><note>hi</note><count>5</count><flag>true</flag><empty />"
            "<nested><inner>x</inner></nested><tags>a</tags><tags>b</tags></data>"
        )

    def test_nested_list_flattened_once(self) -> None:
        assert _private_xml({"tags": ["a", ["b", "c"]]}) == (
            "<data><tags>a</tags><tags>b</tags><tags>c</tags></data>"
        )

    def test_list_of_mappings_repeats_tag(self) -> None:
        assert _private_xml({"line": [{"sku": "1"}, {"sku": "2"}]}) == (
            "<data><line><sku>1</sku></line><line><sku>2</sku></line></data>"
        )

    def test_third_level_list_rejected_on_assignment(self) -> None:
        cart = simple_checkout().shopping_cart
        with pytest.raises(InvalidValueError, match="tags"):
            cart.private_data = {"tags": [["a", ["b"]]]}
        with pytest.raises(InvalidValueError, match="deeper"):
            cart.items[0].private_data = {"a": [[[1]]]}
        assert cart.private_data is None

    @pytest.mark.parametrize(
        ("key", "tag"),
        [("my key", "my-key"), ("a  b", "a--b"), ("price($)", "price"), ("ns:tag_1", "ns:tag_1")],
    )
    def test_key_sanitizing(self, key: str, tag: str) -> None:
        assert to_tag_name(key) == tag

    def test_key_with_no_usable_characters(self) -> None:
        with pytest.raises(InvalidValueError):
            to_tag_name("$$$")
