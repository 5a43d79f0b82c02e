"""
Centralized settings for cryptoconf.

Uses Pydantic BaseSettings for environment variable integration and
validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (CRYPTOCONF_*)
3. .env file
4. Default values

Example:
    from cryptoconf.config import get_config

    config = get_config()
    print(config.report_format)  # From CRYPTOCONF_REPORT_FORMAT or default

    # Override at runtime
    config = get_config(log_level="debug")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CryptoconfConfig(BaseSettings):
    """
    Central settings for cryptoconf.

    All settings can be overridden via environment variables
    prefixed with CRYPTOCONF_.

    Example:
        export CRYPTOCONF_LOG_LEVEL=debug
        export CRYPTOCONF_CATALOG_FILE=./toolkit.catalog.yaml
    """

    model_config = SettingsConfigDict(
        env_prefix="CRYPTOCONF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level for cryptoconf",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log shippers, text for console)",
    )

    # Catalog
    catalog_file: Optional[str] = Field(
        default=None,
        description="Alternative catalog YAML (built-in mbed-crypto catalog if unset)",
    )

    # Selection sources
    header_prefix: str = Field(
        default="MBEDCRYPTO_",
        description="Prefix stripped from names read out of a C config header",
    )
    env_selection_prefix: str = Field(
        default="CRYPTOCONF_SET_",
        description="Environment variables with this prefix are read as selections",
    )

    # Reporting
    report_format: Literal["text", "json"] = Field(
        default="text",
        description="Output format of 'cryptoconf check'",
    )

    @field_validator("catalog_file")
    @classmethod
    def expand_path(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ and environment variables in paths."""
        if v is None:
            return v
        return os.path.expanduser(os.path.expandvars(v))

    def get_catalog_path(self) -> Optional[Path]:
        return Path(self.catalog_file) if self.catalog_file else None


# Global singleton
_config: Optional[CryptoconfConfig] = None


def get_config(**overrides) -> CryptoconfConfig:
    """
    Get the global settings instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.
    """
    global _config

    if overrides or _config is None:
        _config = CryptoconfConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global settings (for testing)."""
    global _config
    _config = None
