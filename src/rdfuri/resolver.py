"""
Resolution of URI references against a base URI (RFC 2396 section 5.2).

:func:`resolve_parts` takes the components of a base URI and a reference
string and returns the components of the resolved absolute URI. The
cases are tried in the RFC's order and the first one that applies wins:

1. empty reference (``""``, ``"?y"``, ``"#s"``): the base document itself
2. reference with a scheme: already absolute
3. network-path reference (``"//g"``): only the base scheme is inherited
4. absolute-path reference (``"/g"``): base scheme and authority
5. relative-path reference: merged onto the base directory and normalized

Examples from RFC 2396 appendix C, base ``http://a/b/c/d;p?q``::

    g       -> http://a/b/c/g
    ../g    -> http://a/b/g
    ../../../g -> http://a/../g
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from rdfuri.errors import ErrorKind, MalformedURIError
from rdfuri.parser import URIParts, parse_reference, validate_parts

logger = logging.getLogger(__name__)


def merge_paths(base_path: Optional[str], reference_path: str) -> str:
    """Append *reference_path* to the directory of *base_path*.

    The directory is everything up to and including the last ``/``; a
    base path without any ``/`` merges onto ``/``.
    """
    directory = "/"
    if base_path is not None:
        last_slash = base_path.rfind("/")
        if last_slash != -1:
            directory = base_path[: last_slash + 1]
    return directory + reference_path


def remove_dot_segments(path: str) -> str:
    """Remove ``.`` and ``<segment>/..`` from a merged path.

    A ``..`` with no preceding segment other than ``..`` is kept, so
    references climbing above the root are not clamped::

        >>> remove_dot_segments("/b/c/./g")
        '/b/c/g'
        >>> remove_dot_segments("/b/c/../../../g")
        '/../g'
    """
    index = path.find("/./")
    while index != -1:
        path = path[: index + 1] + path[index + 3 :]
        index = path.find("/./")

    if path.endswith("/."):
        path = path[:-1]

    index = path.find("/../", 1)
    while index > 0:
        seg_start = path.rfind("/", 0, index)
        if seg_start != -1 and path[seg_start + 1 : index] != "..":
            path = path[:seg_start] + path[index + 3 :]
            index = seg_start
        else:
            index += 4
        index = path.find("/../", index)

    if path.endswith("/.."):
        index = len(path) - 3
        seg_start = path.rfind("/", 0, index)
        if seg_start != -1 and path[seg_start + 1 : index] != "..":
            path = path[: seg_start + 1]

    return path


def resolve_parts(base: Optional[URIParts], reference: str) -> URIParts:
    """Parse *reference* and resolve it against *base*.

    Without a base the reference must be an absolute URI.

    Raises:
        MalformedURIError: If *reference* cannot be parsed, has no scheme
            and there is no base, or is relative to an opaque base
    """
    if base is None:
        if not reference:
            raise MalformedURIError(
                ErrorKind.NO_SCHEME_FOUND,
                "Cannot initialize URI with empty parameters.",
                component="scheme",
                value=reference,
            )
        parts = parse_reference(reference)
        if parts.scheme is None:
            raise MalformedURIError(
                ErrorKind.NO_SCHEME_FOUND,
                f"No scheme found in URI '{reference}'",
                component="scheme",
                value=reference,
            )
        return parts

    if not reference:
        return base

    parts = parse_reference(reference)
    if (
        parts.scheme is None
        and not base.is_hierarchical
        and not reference.startswith("#")
    ):
        raise MalformedURIError(
            ErrorKind.CANNOT_RELATIVIZE_OPAQUE_BASE,
            f"Cannot apply relative URI '{reference}' to an opaque URI",
            component="path",
            value=reference,
        )

    # Empty reference: the current document. Unlike the RFC, a query on
    # its own ("?y") also counts.
    if parts.is_empty_reference:
        logger.debug("Resolving %r as a same-document reference", reference)
        return validate_parts(
            replace(
                base,
                query=parts.query if parts.query is not None else base.query,
                fragment=parts.fragment,
            )
        )

    if parts.scheme is not None:
        logger.debug("Reference %r is absolute", reference)
        return parts

    if parts.is_hierarchical:
        logger.debug("Resolving %r as a network-path reference", reference)
        return replace(parts, scheme=base.scheme)

    authority = dict(
        scheme=base.scheme,
        userinfo=base.userinfo,
        host=base.host,
        port=base.port,
    )
    if parts.path.startswith("/"):
        logger.debug("Resolving %r as an absolute-path reference", reference)
        return validate_parts(replace(parts, **authority))

    path = remove_dot_segments(merge_paths(base.path, parts.path))
    logger.debug("Merged %r onto %r giving %r", reference, base.path, path)
    return validate_parts(replace(parts, path=path, **authority))
