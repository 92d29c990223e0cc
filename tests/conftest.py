"""Shared fixtures for rdfuri tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from rdfuri import URI
from rdfuri.config import TestConfig

# Base URI of the examples in RFC 2396 appendix C
RFC_BASE = "http://a/b/c/d;p?q"


@pytest.fixture()
def rfc_base():
    """The RFC 2396 appendix C base URI."""
    return URI(RFC_BASE)


@pytest.fixture()
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture()
def cli_obj():
    """Context object selecting the test configuration."""
    return {"config": TestConfig}
