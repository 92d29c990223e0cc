"""Configuration loaded from environment variables."""

from __future__ import annotations

import os

from rdfuri.relativizer import FormMask, parse_form_mask


class Config:
    """Default configuration for the command line interface."""

    # Reference forms used by "rdfuri relativize" when no --form is given
    DEFAULT_FLAGS = os.getenv(
        "RDFURI_DEFAULT_FLAGS", "same_document,relative,parent,absolute",
    )

    # Level for the "rdfuri" logger when --verbose is not given
    LOG_LEVEL = os.getenv("RDFURI_LOG_LEVEL", "WARNING").upper()

    # "text" or "json"
    OUTPUT_FORMAT = os.getenv("RDFURI_OUTPUT_FORMAT", "text")

    @classmethod
    def default_flags(cls) -> FormMask:
        return parse_form_mask(cls.DEFAULT_FLAGS)


class TestConfig(Config):
    """Configuration overrides for testing."""

    TESTING = True
    DEFAULT_FLAGS = "all"
    LOG_LEVEL = "DEBUG"
    OUTPUT_FORMAT = "text"
