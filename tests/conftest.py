"""Shared pytest fixtures and test helpers for checkoutxml tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime
from pathlib import Path
from xml.etree import ElementTree as ET

import pytest
from click.testing import CliRunner

from checkoutxml.config.settings import CheckoutSettings
from checkoutxml.domain.areas import UsStateArea, WorldArea
from checkoutxml.domain.commands import CheckoutCommand
from checkoutxml.domain.money import Money
from checkoutxml.domain.tax import TaxTable
from checkoutxml.frontend import Frontend
from checkoutxml.serialization.document import CHECKOUT_NAMESPACE, XML_DECLARATION

NS = f'xmlns="{CHECKOUT_NAMESPACE}"'


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test in an empty directory with no config env vars set."""
    for name in (
        "CHECKOUTXML_CONFIG",
        "CHECKOUTXML_MERCHANT__MERCHANT_ID",
        "CHECKOUTXML_MERCHANT__USE_SANDBOX",
        "CHECKOUTXML_CODEC__STRICT_TAX_TABLE_SELECTOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


class StaticTaxTables:
    """Tax-table factory returning the same tables for every moment."""

    def __init__(self, tables: list[TaxTable]) -> None:
        self.tables = tables
        self.requested: list[datetime] = []

    def effective_tax_tables_at(self, when: datetime) -> list[TaxTable]:
        self.requested.append(when)
        return self.tables


@pytest.fixture
def tax_tables() -> list[TaxTable]:
    """A default table taxing shipping in NY plus an alternate named "Some Table"."""
    default = TaxTable()
    default.create_rule(0.08375, UsStateArea("NY"), shipping_taxed=True)
    alternate = TaxTable("Some Table", standalone=True)
    alternate.create_rule(0.05, WorldArea())
    return [default, alternate]


@pytest.fixture
def frontend(tax_tables: list[TaxTable]) -> Frontend:
    settings = CheckoutSettings.load(merchant={"merchant_id": "1234567890"})
    return Frontend(settings, tax_table_factory=StaticTaxTables(tax_tables))


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def usd(text: str) -> Money:
    return Money.parse(text, "USD")


def body(xml: str) -> str:
    """Strip the XML declaration, asserting it is present."""
    assert xml.startswith(XML_DECLARATION)
    return xml[len(XML_DECLARATION) :]


def parse(xml: str) -> ET.Element:
    """Parse an encoded document with the checkout namespace removed from tags."""
    root = ET.fromstring(body(xml))
    for element in root.iter():
        element.tag = element.tag.split("}", 1)[-1]
    return root


def simple_checkout(tables: list[TaxTable] | None = None) -> CheckoutCommand:
    """A checkout with one complete item."""
    command = CheckoutCommand(tax_tables=tables or [])
    command.shopping_cart.create_item(
        name="Dry Food Pack AA1453",
        description="A pack of highly nutritious dried food for emergency",
        unit_price=usd("35.00"),
        quantity=1,
    )
    return command
