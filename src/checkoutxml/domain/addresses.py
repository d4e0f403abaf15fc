"""Buyer and ship-from addresses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnonymousAddress:
    """The partial address sent in merchant-calculation callbacks.

    Also used as the ship-from location of a shipping package.
    """

    address_id: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country_code: str | None = None


@dataclass(frozen=True)
class Address(AnonymousAddress):
    """A full postal address with contact details."""

    contact_name: str | None = None
    company_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    email: str | None = None
    phone: str | None = None
    fax: str | None = None
