"""Shipping methods offered at checkout.

``ShippingMethod`` is a closed union of four variants. Pickup, flat-rate and
merchant-calculated methods are :class:`DeliveryMethod` subclasses with a
name and a price; carrier-calculated shipping instead carries carrier
options and package descriptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from checkoutxml.domain.addresses import AnonymousAddress
from checkoutxml.domain.areas import Area, require_area
from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.money import MoneyLike, require_money
from checkoutxml.domain.types import (
    CarrierPickup,
    DeliveryAddressCategory,
    ShippingCompany,
    coerce_enum,
)
from checkoutxml.domain.units import Dimension


class DeliveryMethod(ABC):
    """A named shipping option with a price."""

    def __init__(self, name: str | None = None, price: MoneyLike | None = None) -> None:
        self.name = name
        self._price: MoneyLike | None = None
        if price is not None:
            self.price = price

    @property
    @abstractmethod
    def xml_tag(self) -> str:
        """Element name of this method inside ``<shipping-methods>``."""

    @property
    def price(self) -> MoneyLike | None:
        return self._price

    @price.setter
    def price(self, value: MoneyLike) -> None:
        self._price = require_money(value, f"{type(self).__name__} price")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, price={self.price!r})"


class PickupShipping(DeliveryMethod):
    """The buyer collects the order."""

    xml_tag = "pickup"


class _RestrictedDeliveryMethod(DeliveryMethod):
    """Delivery method limited to allowed areas minus excluded areas."""

    def __init__(self, name: str | None = None, price: MoneyLike | None = None) -> None:
        super().__init__(name, price)
        self.shipping_restrictions_allowed_areas: list[Area] = []
        self.shipping_restrictions_excluded_areas: list[Area] = []
        self.shipping_restrictions_allow_us_po_box = True

    def add_allowed_area(self, area: Area) -> Area:
        self.shipping_restrictions_allowed_areas.append(require_area(area, "Allowed area"))
        return area

    def add_excluded_area(self, area: Area) -> Area:
        self.shipping_restrictions_excluded_areas.append(require_area(area, "Excluded area"))
        return area


class FlatRateShipping(_RestrictedDeliveryMethod):
    """A fixed shipping price."""

    xml_tag = "flat-rate-shipping"


class MerchantCalculatedShipping(_RestrictedDeliveryMethod):
    """Price computed by the merchant-calculation callback.

    ``price`` is the fallback used when the callback is unavailable. Address
    filters decide which addresses the callback is asked about at all.
    """

    xml_tag = "merchant-calculated-shipping"

    def __init__(self, name: str | None = None, price: MoneyLike | None = None) -> None:
        super().__init__(name, price)
        self.address_filters_allowed_areas: list[Area] = []
        self.address_filters_excluded_areas: list[Area] = []
        self.address_filters_allow_us_po_box = True

    def add_address_filters_allowed_area(self, area: Area) -> Area:
        self.address_filters_allowed_areas.append(require_area(area, "Address filter area"))
        return area

    def add_address_filters_excluded_area(self, area: Area) -> Area:
        self.address_filters_excluded_areas.append(require_area(area, "Address filter area"))
        return area


class CarrierCalculatedShippingOption(DeliveryMethod):
    """One carrier service level, such as UPS "Ground".

    The shipping company doubles as the option's ``name``.
    """

    xml_tag = "carrier-calculated-shipping-option"

    def __init__(
        self,
        *,
        shipping_company: ShippingCompany | str,
        shipping_type: str,
        price: MoneyLike,
        carrier_pickup: CarrierPickup | str | None = None,
        additional_fixed_charge: MoneyLike | None = None,
        additional_variable_charge_percent: float | None = None,
    ) -> None:
        company = coerce_enum(ShippingCompany, shipping_company, "shipping company")
        super().__init__(company.value, price)
        self.shipping_company = company
        self.shipping_type = shipping_type
        self._carrier_pickup: CarrierPickup | None = None
        self._additional_fixed_charge: MoneyLike | None = None
        if carrier_pickup is not None:
            self.carrier_pickup = carrier_pickup
        if additional_fixed_charge is not None:
            self.additional_fixed_charge = additional_fixed_charge
        self.additional_variable_charge_percent = additional_variable_charge_percent

    @property
    def carrier_pickup(self) -> CarrierPickup | None:
        return self._carrier_pickup

    @carrier_pickup.setter
    def carrier_pickup(self, value: CarrierPickup | str) -> None:
        self._carrier_pickup = coerce_enum(CarrierPickup, value, "carrier pickup")

    @property
    def additional_fixed_charge(self) -> MoneyLike | None:
        return self._additional_fixed_charge

    @additional_fixed_charge.setter
    def additional_fixed_charge(self, value: MoneyLike) -> None:
        self._additional_fixed_charge = require_money(value, "Additional fixed charge")


class ShippingPackage:
    """Where a package ships from and how big it is."""

    def __init__(
        self,
        ship_from: AnonymousAddress,
        *,
        delivery_address_category: DeliveryAddressCategory | str | None = None,
        height: Dimension | None = None,
        length: Dimension | None = None,
        width: Dimension | None = None,
    ) -> None:
        if not isinstance(ship_from, AnonymousAddress):
            msg = f"Ship-from must be an address, got {ship_from!r}"
            raise InvalidValueError(msg)
        self.ship_from = ship_from
        self.delivery_address_category = (
            coerce_enum(DeliveryAddressCategory, delivery_address_category, "address category")
            if delivery_address_category is not None
            else None
        )
        for label, value in (("height", height), ("length", length), ("width", width)):
            if value is not None and not isinstance(value, Dimension):
                msg = f"Package {label} must be a Dimension, got {value!r}"
                raise InvalidValueError(msg)
        self.height = height
        self.length = length
        self.width = width


class CarrierCalculatedShipping:
    """Rates quoted live by the carriers for the described packages."""

    xml_tag = "carrier-calculated-shipping"

    def __init__(self) -> None:
        self.carrier_calculated_shipping_options: list[CarrierCalculatedShippingOption] = []
        self.shipping_packages: list[ShippingPackage] = []

    def create_option(self, **attrs: Any) -> CarrierCalculatedShippingOption:
        option = CarrierCalculatedShippingOption(**attrs)
        self.carrier_calculated_shipping_options.append(option)
        return option

    def create_package(self, ship_from: AnonymousAddress, **attrs: Any) -> ShippingPackage:
        package = ShippingPackage(ship_from, **attrs)
        self.shipping_packages.append(package)
        return package


type ShippingMethod = (
    PickupShipping | FlatRateShipping | MerchantCalculatedShipping | CarrierCalculatedShipping
)

SHIPPING_METHOD_TYPES: tuple[type, ...] = (
    PickupShipping,
    FlatRateShipping,
    MerchantCalculatedShipping,
    CarrierCalculatedShipping,
)
