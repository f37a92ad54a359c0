#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management

Values are read from environment variables (prefix PAGEFLOW_) and from an
optional .env file at the repository root. Defaults live in constants.py.
"""

from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    API_HOST,
    API_PORT,
    BROWSER_ARGS,
    DEVICE_SCALE_FACTOR,
    FALLBACK_RUN_FONT,
    MAX_UPLOAD_SIZE_MB,
    NAVIGATION_TIMEOUT_MS,
    PDF_DEFAULT_MARGIN,
    SCREENSHOT_QUALITY,
    SCREENSHOT_TYPE,
    TEXT_HIDE_SETTLE_MS,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="PAGEFLOW_",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Browser ==========
    headless: bool = True
    browser_args: List[str] = Field(default_factory=lambda: list(BROWSER_ARGS))
    navigation_timeout_ms: int = NAVIGATION_TIMEOUT_MS
    device_scale_factor: float = DEVICE_SCALE_FACTOR

    # ========== Background capture ==========
    screenshot_type: str = SCREENSHOT_TYPE  # jpeg | png
    screenshot_quality: int = SCREENSHOT_QUALITY  # jpeg only
    text_hide_settle_ms: int = TEXT_HIDE_SETTLE_MS

    # ========== Document output ==========
    fallback_font: str = FALLBACK_RUN_FONT
    pdf_margin: str = PDF_DEFAULT_MARGIN

    # ========== API ==========
    api_host: str = API_HOST
    api_port: int = API_PORT
    max_upload_size_mb: int = MAX_UPLOAD_SIZE_MB

    # Optional chromium executable (system browser instead of the bundled one)
    chromium_executable: Optional[str] = None

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def screenshot_options(self) -> dict:
        """Keyword arguments for a background capture call"""
        options = {"type": self.screenshot_type}
        if self.screenshot_type == "jpeg":
            options["quality"] = self.screenshot_quality
        return options


# Global settings instance
settings = Settings()
