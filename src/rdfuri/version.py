"""Version information for :mod:`rdfuri`."""

__all__ = [
    "VERSION",
    "get_version",
]

VERSION = "0.1.0"


def get_version() -> str:
    """Get the :mod:`rdfuri` version string."""
    return VERSION
