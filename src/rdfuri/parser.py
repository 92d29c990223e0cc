"""
Segment parser for RFC 2396 URI references.

Splits a reference string into scheme, authority (userinfo, host, port),
path, query and fragment in a single left-to-right pass, and validates a
set of components against the URI invariants.

The parser works on :class:`URIParts`, a frozen staging record. Nothing
here builds a :class:`~rdfuri.uri.URI`; a URI value is only created from
parts that passed :func:`validate_parts`, so a failed parse never leaves a
partially populated value behind.

Usage:
    from rdfuri.parser import parse_reference

    parts = parse_reference("http://example.org/a/b?x#y")
    parts.host   # 'example.org'
    parts.query  # 'x'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from rdfuri import grammar
from rdfuri.errors import CHARACTER_ERRORS, ErrorKind, MalformedURIError

logger = logging.getLogger(__name__)

MAX_PORT = 65535

# Schemes shorter than this are taken for DOS drive letters ("C:\...")
MIN_SCHEME_LENGTH = 2


@dataclass(frozen=True)
class URIParts:
    """The seven syntactic components of a URI reference.

    ``None`` means the component did not occur at all; an empty string
    means its delimiter occurred with nothing after it (``"?"``, ``"#"``,
    ``"//"``).
    """

    scheme: Optional[str] = None
    userinfo: Optional[str] = None
    host: Optional[str] = None
    port: int = -1
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def is_hierarchical(self) -> bool:
        """A host (possibly empty) means the ``//`` authority form was used."""
        return self.host is not None

    @property
    def is_empty_reference(self) -> bool:
        """No scheme, no authority and an empty path (``""``, ``"?y"``, ``"#s"``)."""
        return self.scheme is None and self.host is None and not self.path


# ── Splitting ────────────────────────────────────────────────────


def scheme_end(reference: str) -> int:
    """Return the index of the colon ending the scheme, or -1.

    The colon must come before any ``/``, ``?`` or ``#`` and leave at least
    two characters of scheme, so ``C:/dir`` is a relative path and not a
    URI with scheme ``C``.
    """
    colon = reference.find(":")
    if colon < MIN_SCHEME_LENGTH:
        return -1
    for delimiter in "/?#":
        index = reference.find(delimiter)
        if index != -1 and index < colon:
            return -1
    return colon


def _find_first(text: str, delimiters: str, start: int = 0) -> int:
    """Index of the first of *delimiters* at or after *start*, else ``len(text)``."""
    for index in range(start, len(text)):
        if text[index] in delimiters:
            return index
    return len(text)


def split_authority(authority: str) -> Tuple[Optional[str], str, int]:
    """Split ``[userinfo "@"] host [":" port]`` into its three parts.

    Returns:
        ``(userinfo, host, port)`` with ``port == -1`` when absent or empty

    Raises:
        MalformedURIError: If the port is not all digits or out of range
    """
    userinfo = None
    if "@" in authority:
        userinfo, _, authority = authority.rpartition("@")

    host, colon, port_text = authority.partition(":")
    port = -1
    if colon and port_text:
        if not all(grammar.is_digit(c) for c in port_text):
            raise MalformedURIError(
                ErrorKind.INVALID_PORT,
                f"{port_text} is invalid. Port should only contain digits!",
                component="port",
                value=port_text,
            )
        port = int(port_text)
    return userinfo, host, port


def split_reference(reference: str) -> URIParts:
    """Split *reference* into components without checking their characters.

    Only the scheme position and the port digits are checked here, since
    they decide how the rest of the string is cut.
    """
    scheme = None
    index = 0
    colon = scheme_end(reference)
    if colon != -1:
        scheme = reference[:colon]
        if not grammar.is_conformant_scheme_name(scheme):
            raise MalformedURIError(
                ErrorKind.INVALID_SCHEME_NAME,
                f"The scheme '{scheme}' is not conformant.",
                component="scheme",
                value=scheme,
            )
        if colon == len(reference) - 1:
            raise MalformedURIError(
                ErrorKind.INVALID_SCHEME_NAME,
                f"A bare scheme name is not a URI: '{reference}'",
                component="scheme",
                value=reference,
            )
        index = colon + 1

    userinfo = host = None
    port = -1
    if reference.startswith("//", index):
        index += 2
        end = _find_first(reference, "/?#", index)
        userinfo, host, port = split_authority(reference[index:end])
        index = end

    rest = reference[index:]
    if scheme is not None and host is None:
        # Opaque part: "?" belongs to it, only "#" splits off the fragment
        path, hash_mark, fragment = rest.partition("#")
        return URIParts(
            scheme=scheme,
            path=path,
            fragment=fragment if hash_mark else None,
        )

    end = _find_first(rest, "?#")
    path = rest[:end]
    query = fragment = None
    rest = rest[end:]
    if rest.startswith("?"):
        query, hash_mark, fragment = rest[1:].partition("#")
        if not hash_mark:
            fragment = None
    elif rest.startswith("#"):
        fragment = rest[1:]

    return URIParts(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )


# ── Validation ───────────────────────────────────────────────────


def _check_characters(component: str, text: str, allowed) -> None:
    bad = grammar.find_bad_escape(text)
    if bad != -1:
        raise MalformedURIError(
            ErrorKind.INVALID_ESCAPE_SEQUENCE,
            f"{component.capitalize()} contains invalid escape sequence "
            f"at position {bad}: '{text}'",
            component=component,
            value=text,
        )
    bad = grammar.find_bad_char(text, allowed)
    if bad != -1:
        raise MalformedURIError(
            CHARACTER_ERRORS[component],
            f"{component.capitalize()} '{text}' contains invalid character: "
            f"{text[bad]!r}",
            component=component,
            value=text,
        )


def _illegal(message: str, component: str, value: Optional[str]) -> MalformedURIError:
    return MalformedURIError(
        ErrorKind.ILLEGAL_COMPONENT_COMBINATION,
        message,
        component=component,
        value=value,
    )


def validate_parts(parts: URIParts) -> URIParts:
    """Check every URI invariant on *parts* and return them unchanged.

    Raises:
        MalformedURIError: On the first violated invariant
    """
    if parts.scheme is not None and not grammar.is_conformant_scheme_name(
        parts.scheme
    ):
        raise MalformedURIError(
            ErrorKind.INVALID_SCHEME_NAME,
            f"The scheme '{parts.scheme}' is not conformant.",
            component="scheme",
            value=parts.scheme,
        )

    if parts.host is None:
        if parts.userinfo is not None:
            raise _illegal(
                "Userinfo may not be specified if host is not specified!",
                "userinfo",
                parts.userinfo,
            )
        if parts.port != -1:
            raise _illegal(
                "Port may not be specified if host is not specified!",
                "port",
                str(parts.port),
            )
    elif parts.host and not grammar.is_well_formed_address(parts.host):
        raise MalformedURIError(
            ErrorKind.INVALID_HOST,
            f"Host is not a well formed address in '{parts.host}'",
            component="host",
            value=parts.host,
        )

    if parts.port != -1 and not 0 <= parts.port <= MAX_PORT:
        raise MalformedURIError(
            ErrorKind.INVALID_PORT,
            f"Invalid port number: {parts.port}",
            component="port",
            value=str(parts.port),
        )

    if parts.userinfo is not None:
        _check_characters("userinfo", parts.userinfo, grammar.is_userinfo_char)

    if parts.path is not None:
        _check_characters("path", parts.path, grammar.is_path_char)
        if parts.is_hierarchical:
            if "?" in parts.path:
                raise MalformedURIError(
                    ErrorKind.INVALID_PATH_CHARACTER,
                    f"Path '{parts.path}' contains invalid character: '?'",
                    component="path",
                    value=parts.path,
                )
            if parts.path and not parts.path.startswith("/"):
                raise _illegal(
                    "Path must be empty or start with '/' when an authority "
                    f"is present: '{parts.path}'",
                    "path",
                    parts.path,
                )
        elif parts.scheme is not None and parts.path.startswith("//"):
            raise _illegal(
                f"Opaque part cannot start with '//': '{parts.path}'",
                "path",
                parts.path,
            )

    if parts.query is not None:
        if not parts.is_hierarchical and parts.scheme is not None:
            raise _illegal(
                "Query string can only be set for a hierarchical URI!",
                "query",
                parts.query,
            )
        if parts.path is None:
            raise _illegal(
                "Query string cannot be set when path is null!",
                "query",
                parts.query,
            )
        _check_characters("query", parts.query, grammar.is_uric)

    if parts.fragment is not None:
        if parts.path is None:
            raise _illegal(
                "Fragment cannot be set when path is null!",
                "fragment",
                parts.fragment,
            )
        _check_characters("fragment", parts.fragment, grammar.is_uric)

    return parts


def parse_reference(reference: str) -> URIParts:
    """Split and validate a URI reference, which may be relative.

    Raises:
        MalformedURIError: If *reference* is not a URI reference
    """
    parts = validate_parts(split_reference(reference))
    logger.debug("Parsed %r into %s", reference, parts)
    return parts
