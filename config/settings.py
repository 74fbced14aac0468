#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management

Session defaults for the instruction stream builder. Every value can be
overridden through the environment (DOCSTREAM_*) or a .env file.
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    DEFAULT_IMAGE_ROW_SPACING,
    DEFAULT_TEXT_LINE_SPACING,
    DEFAULT_LINE_WIDTH,
    LOG_LEVEL,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

HEX_DIGITS = "0123456789ABCDEF"


def normalize_hex_color(value: str) -> str:
    """
    Normalize a color to 6 uppercase hex digits without "#".

    Raises:
        ValueError: not a 6-digit hex string
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid hex color: {value!r}")
    normalized = value.lstrip("#").upper()
    if len(normalized) != 6 or any(c not in HEX_DIGITS for c in normalized):
        raise ValueError(f"Invalid hex color: {value!r}")
    return normalized


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="DOCSTREAM_",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields from .env that aren't defined in model
    )

    # ========== Typography defaults ==========
    # resetFont() / resetTextColor() append exactly these values
    default_font_family: str = DEFAULT_FONT_FAMILY
    default_font_size: float = DEFAULT_FONT_SIZE
    default_text_color: str = DEFAULT_TEXT_COLOR

    # ========== Builder shorthands ==========
    image_row_spacing: float = DEFAULT_IMAGE_ROW_SPACING
    text_line_spacing: float = DEFAULT_TEXT_LINE_SPACING
    line_style_width: float = DEFAULT_LINE_WIDTH

    # ========== Logging ==========
    log_level: str = LOG_LEVEL
    log_file: Optional[str] = None

    @field_validator("default_text_color")
    @classmethod
    def _normalize_color(cls, value: str) -> str:
        return normalize_hex_color(value)

    @field_validator("default_font_size")
    @classmethod
    def _positive_size(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("default_font_size must be positive")
        return value

    def default_font(self):
        """Font appended by resetFont()"""
        from core.stream.payloads import Font
        return Font(family=self.default_font_family, size_pt=self.default_font_size)

    def default_color(self):
        """Color appended by resetTextColor()"""
        from core.stream.payloads import Color
        return Color(hex=self.default_text_color)

    def describe(self) -> dict:
        """Configuration summary (for CLI output and logs)"""
        return {
            "default_font": f"{self.default_font_family} {self.default_font_size}pt",
            "default_text_color": self.default_text_color,
            "image_row_spacing": self.image_row_spacing,
            "text_line_spacing": self.text_line_spacing,
            "line_style_width": self.line_style_width,
            "log_level": self.log_level,
        }


# Global settings instance
settings = Settings()
