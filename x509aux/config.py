# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""Configuration management for x509aux."""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="X509AUX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Extension flags
    synchronize_extension_flags: bool = Field(
        default=False,
        description="Guard extension flag computation with a per-wrapper lock",
    )
    unlimited_path_length: int = Field(
        default=2**31 - 1,
        description="basic_constraints value for a CA without pathLenConstraint",
    )

    # Name comparison
    canonical_name_matching: bool = Field(
        default=True,
        description="Compare distinguished names in canonical form (case/whitespace folded)",
    )


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding x509aux.

    Args:
        level: Logging level name (default: settings.log_level)
    """
    logging.basicConfig(
        level=level or settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


# Global settings instance
settings = Settings()
