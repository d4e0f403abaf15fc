"""Geographic areas used by tax rules and shipping restrictions.

``Area`` is a closed union. Encoders and decoders match on the concrete
variant; there is no abstract base to instantiate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from checkoutxml.domain.errors import InvalidValueError
from checkoutxml.domain.types import UsCountryRegion, coerce_enum

_STATE_RE = re.compile(r"[A-Z]{2}")
_COUNTRY_RE = re.compile(r"[A-Z]{2}")


@dataclass(frozen=True)
class WorldArea:
    """Every location in the world."""


@dataclass(frozen=True)
class UsCountryArea:
    """A region of the United States (continental 48, all 50, or everything)."""

    region: UsCountryRegion

    def __post_init__(self) -> None:
        object.__setattr__(self, "region", coerce_enum(UsCountryRegion, self.region, "region"))


@dataclass(frozen=True)
class UsStateArea:
    """A single US state given by its two-letter upper-case code."""

    state: str

    def __post_init__(self) -> None:
        if not isinstance(self.state, str) or not _STATE_RE.fullmatch(self.state):
            msg = f"Invalid US state {self.state!r}; expected a two-letter upper-case code"
            raise InvalidValueError(msg)


@dataclass(frozen=True)
class UsZipArea:
    """US zip codes matching *pattern* (digits, optionally ending in ``*``)."""

    pattern: str

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str) or not self.pattern:
            msg = f"Invalid zip pattern {self.pattern!r}"
            raise InvalidValueError(msg)


@dataclass(frozen=True)
class PostalArea:
    """A country, optionally narrowed to postal codes matching a pattern."""

    country_code: str
    postal_code_pattern: str | None = None

    def __post_init__(self) -> None:
        country_code = self.country_code
        if not isinstance(country_code, str) or not _COUNTRY_RE.fullmatch(country_code):
            msg = f"Invalid country code {country_code!r}; expected ISO 3166 alpha-2"
            raise InvalidValueError(msg)


type Area = WorldArea | UsCountryArea | UsStateArea | UsZipArea | PostalArea

AREA_TYPES: tuple[type, ...] = (WorldArea, UsCountryArea, UsStateArea, UsZipArea, PostalArea)


def require_area(value: object, field_name: str) -> Area:
    """Return *value* if it is one of the area variants, else raise."""
    if not isinstance(value, AREA_TYPES):
        msg = f"{field_name} must be an area, got {value!r}"
        raise InvalidValueError(msg)
    return value  # type: ignore[return-value]
