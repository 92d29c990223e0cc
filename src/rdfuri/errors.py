"""Exceptions raised while building URI values.

Every failure in parsing, resolution or relativization is reported as a
:class:`MalformedURIError` carrying an :class:`ErrorKind`, the name of the
offending component and the input that violated it.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of URI syntax violations."""

    NO_SCHEME_FOUND = "no_scheme_found"
    CANNOT_RELATIVIZE_OPAQUE_BASE = "cannot_relativize_opaque_base"
    INVALID_SCHEME_NAME = "invalid_scheme_name"
    INVALID_HOST = "invalid_host"
    INVALID_PORT = "invalid_port"
    INVALID_USERINFO = "invalid_userinfo"
    INVALID_PATH_CHARACTER = "invalid_path_character"
    INVALID_QUERY_CHARACTER = "invalid_query_character"
    INVALID_FRAGMENT_CHARACTER = "invalid_fragment_character"
    INVALID_ESCAPE_SEQUENCE = "invalid_escape_sequence"
    ILLEGAL_COMPONENT_COMBINATION = "illegal_component_combination"


class RdfUriError(Exception):
    """Base exception for rdfuri errors."""

    pass


class MalformedURIError(RdfUriError, ValueError):
    """Raised when a string or a set of components is not a valid URI.

    Attributes:
        kind: The :class:`ErrorKind` of the violation
        component: Name of the offending component (``"path"``, ``"host"``...)
        value: The input that violated the grammar
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        component: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.component = component
        self.value = value

    def __repr__(self) -> str:
        return f"MalformedURIError({self.kind.name}, {str(self)!r})"


# Component name -> kind used for a disallowed (non-escape) character
CHARACTER_ERRORS = {
    "path": ErrorKind.INVALID_PATH_CHARACTER,
    "query": ErrorKind.INVALID_QUERY_CHARACTER,
    "fragment": ErrorKind.INVALID_FRAGMENT_CHARACTER,
    "userinfo": ErrorKind.INVALID_USERINFO,
}
