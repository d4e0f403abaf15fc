"""Unified settings: CLI flags, environment, and TOML in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs:   CLI flags or explicit overrides
  2. Env vars:      ``CHECKOUTXML_*`` prefix, ``__`` for nested sections
  3. TOML file:     ``checkoutxml.toml`` discovered via walk-up
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from checkoutxml.config.discovery import find_config, read_toml
from checkoutxml.config.models import CodecConfig, MerchantConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``checkoutxml.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            try:
                self._data = read_toml(toml_path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ValueError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path must reach settings_customise_sources, which pydantic calls
# as a classmethod during __init__.
_tls = threading.local()


class CheckoutSettings(BaseSettings):
    """Settings for the library and the CLI.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        merchant: Credentials and endpoint selection.
        codec: Encoder/decoder behaviour switches.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CHECKOUTXML_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    merchant: MerchantConfig = Field(default_factory=MerchantConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> CheckoutSettings:
        """Build settings, reading *config_path* or the discovered TOML file."""
        toml_path = Path(config_path) if config_path else find_config(start)
        if toml_path is not None and not toml_path.is_file():
            toml_path = None
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
