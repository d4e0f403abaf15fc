"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, checkoutxml.toml only contains
overrides. A sandbox integration needs only [merchant] id and key.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from checkoutxml.domain.types import PurchaseType


class MerchantConfig(BaseModel):
    """[merchant] section."""

    model_config = {"frozen": True}

    merchant_id: str = ""
    merchant_key: str = Field(default="", repr=False)
    use_sandbox: bool = True
    purchase_type: PurchaseType = PurchaseType.MERCHANT


class CodecConfig(BaseModel):
    """[codec] section."""

    model_config = {"frozen": True}

    strict_tax_table_selector: bool = False

