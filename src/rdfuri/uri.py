"""
The :class:`URI` value type.

A URI is parsed once, from a string or from a base and a reference, and
never changes afterwards. Its components follow RFC 2396::

    scheme ":" "//" [userinfo "@"] host [":" port] path ["?" query] ["#" fragment]

URIs without the ``//`` authority (``mailto:``, ``urn:``) are opaque:
everything after the scheme up to ``#`` is kept as the path.

Usage:
    from rdfuri import URI, FormMask

    base = URI("http://example.org/a/b/c")
    base.resolve("../d").path              # '/a/d'
    base.relativize("http://example.org/a/b/x", FormMask.RELATIVE)  # 'x'
"""

from __future__ import annotations

import unicodedata
from dataclasses import replace
from functools import cached_property
from typing import Optional, Tuple, Union

from rdfuri.errors import ErrorKind, MalformedURIError
from rdfuri.parser import URIParts, validate_parts
from rdfuri.relativizer import ancestor_directories, relativize
from rdfuri.resolver import resolve_parts


class URI:
    """An immutable, validated absolute URI.

    Equality compares every component literally: no case folding and no
    percent-encoding normalization, and an absent component is never
    equal to an empty one.

    Attributes:
        scheme: The scheme name, as written
        userinfo: Text before ``@`` in the authority, or ``None``
        host: The host, ``""`` for an empty authority, ``None`` if opaque
        port: The port number, -1 when not given
        path: The path (the opaque part for opaque URIs)
        query: Text after ``?``, or ``None``
        fragment: Text after ``#``, or ``None``
    """

    def __init__(
        self,
        reference: Union[str, "URI"],
        base: Optional["URI"] = None,
    ) -> None:
        if isinstance(reference, URI):
            parts = reference._parts
        else:
            parts = resolve_parts(base._parts if base is not None else None, reference)
        self._set_parts(parts)

    def _set_parts(self, parts: URIParts) -> None:
        self._parts = parts
        self._string = _serialize(parts)
        self._hash = hash(self._string)

    @classmethod
    def _from_valid_parts(cls, parts: URIParts) -> "URI":
        uri = cls.__new__(cls)
        uri._set_parts(parts)
        return uri

    @classmethod
    def from_parts(
        cls,
        scheme: str,
        host: Optional[str] = None,
        path: Optional[str] = None,
        query: Optional[str] = None,
        fragment: Optional[str] = None,
        userinfo: Optional[str] = None,
        port: int = -1,
    ) -> "URI":
        """Build a URI from its components.

        Raises:
            MalformedURIError: If the scheme is missing, a component is
                invalid or the combination of components is not allowed
        """
        if not scheme:
            raise MalformedURIError(
                ErrorKind.NO_SCHEME_FOUND,
                "Scheme is required!",
                component="scheme",
                value=scheme,
            )
        if path is not None:
            if "?" in path and query is not None:
                raise MalformedURIError(
                    ErrorKind.ILLEGAL_COMPONENT_COMBINATION,
                    "Query string cannot be specified in path and query string!",
                    component="query",
                    value=path,
                )
            if "#" in path and fragment is not None:
                raise MalformedURIError(
                    ErrorKind.ILLEGAL_COMPONENT_COMBINATION,
                    "Fragment cannot be specified in both the path and fragment!",
                    component="fragment",
                    value=path,
                )
        parts = URIParts(
            scheme=scheme,
            userinfo=userinfo,
            host=host,
            port=port,
            path=path,
            query=query,
            fragment=fragment,
        )
        return cls._from_valid_parts(validate_parts(parts))

    @classmethod
    def from_scheme_specific_part(cls, scheme: str, scheme_specific_part: str) -> "URI":
        """Build a URI from ``scheme`` and everything after its colon."""
        if not scheme:
            raise MalformedURIError(
                ErrorKind.NO_SCHEME_FOUND,
                "Cannot construct URI with null/empty scheme!",
                component="scheme",
                value=scheme,
            )
        if not scheme_specific_part:
            raise MalformedURIError(
                ErrorKind.ILLEGAL_COMPONENT_COMBINATION,
                "Cannot construct URI with null/empty scheme-specific part!",
                component="path",
                value=scheme_specific_part,
            )
        return cls(f"{scheme}:{scheme_specific_part}")

    # ── Components ───────────────────────────────────────────────

    @property
    def scheme(self) -> Optional[str]:
        return self._parts.scheme

    @property
    def userinfo(self) -> Optional[str]:
        return self._parts.userinfo

    @property
    def host(self) -> Optional[str]:
        return self._parts.host

    @property
    def port(self) -> int:
        return self._parts.port

    @property
    def path(self) -> Optional[str]:
        return self._parts.path

    @property
    def query(self) -> Optional[str]:
        return self._parts.query

    @property
    def fragment(self) -> Optional[str]:
        return self._parts.fragment

    @property
    def is_hierarchical(self) -> bool:
        """True when the URI has a ``//`` authority, even an empty one."""
        return self._parts.is_hierarchical

    @property
    def parts(self) -> URIParts:
        return self._parts

    @property
    def scheme_specific_part(self) -> str:
        """Everything after ``scheme:``."""
        return _serialize(replace(self._parts, scheme=None))

    def get_path(self, include_query: bool = False, include_fragment: bool = False) -> str:
        """Return the path, optionally followed by ``?query`` and ``#fragment``."""
        text = self.path or ""
        if include_query and self.query is not None:
            text += f"?{self.query}"
        if include_fragment and self.fragment is not None:
            text += f"#{self.fragment}"
        return text

    # ── Derived values ───────────────────────────────────────────

    @cached_property
    def ancestor_directories(self) -> Tuple[str, ...]:
        """The directory of the path, its parent and grandparent."""
        return ancestor_directories(self.path)

    @cached_property
    def _is_nfc(self) -> bool:
        return unicodedata.is_normalized("NFC", self._string)

    def is_normal_form_c(self) -> bool:
        """Check whether the serialized URI is in Unicode Normalization Form C."""
        return self._is_nfc

    # ── Operations ───────────────────────────────────────────────

    def resolve(self, reference: str) -> "URI":
        """Resolve *reference* against this URI."""
        return URI(reference, base=self)

    def relativize(self, target: Union[str, "URI"], flags: int) -> str:
        """Return the shortest reference to *target* allowed by *flags*.

        See :func:`rdfuri.relativizer.relativize`.
        """
        return relativize(self, str(target), flags)

    # ── Value semantics ──────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URI):
            return NotImplemented
        return self._parts == other._parts

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"URI({self._string!r})"


def _serialize(parts: URIParts) -> str:
    """Render components back into a URI string."""
    pieces = []
    if parts.scheme is not None:
        pieces.append(f"{parts.scheme}:")
    if parts.host is not None:
        pieces.append("//")
        if parts.userinfo is not None:
            pieces.append(f"{parts.userinfo}@")
        pieces.append(parts.host)
        if parts.port != -1:
            pieces.append(f":{parts.port}")
    if parts.path is not None:
        pieces.append(parts.path)
    if parts.query is not None:
        pieces.append(f"?{parts.query}")
    if parts.fragment is not None:
        pieces.append(f"#{parts.fragment}")
    return "".join(pieces)
