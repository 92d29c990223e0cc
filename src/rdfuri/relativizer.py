"""
Relativization: the inverse of :mod:`rdfuri.resolver`.

Given a base URI and an absolute target, :func:`relativize` finds the
shortest reference that resolves back to the target, restricted to the
reference forms the caller allows through :class:`FormMask`.
"""

from __future__ import annotations

import logging
from enum import IntFlag
from typing import TYPE_CHECKING, Optional, Tuple

from rdfuri.parser import URIParts, parse_reference, scheme_end

if TYPE_CHECKING:
    from rdfuri.uri import URI

logger = logging.getLogger(__name__)


class FormMask(IntFlag):
    """Reference forms a caller accepts from :func:`relativize`."""

    NONE = 0
    #: ``"#frag"`` or ``""`` for the base document itself
    SAME_DOCUMENT = 1
    #: ``"//host/path"``, only the scheme is shared
    NETWORK = 2
    #: ``"/path"``, scheme and authority are shared
    ABSOLUTE = 4
    #: ``"name"`` within the base directory
    RELATIVE = 8
    #: ``"../name"``
    PARENT = 16
    #: ``"../../name"``
    GRANDPARENT = 32

    ALL = SAME_DOCUMENT | NETWORK | ABSOLUTE | RELATIVE | PARENT | GRANDPARENT


def parse_form_mask(text: str) -> FormMask:
    """Parse flag names separated by ``,`` or ``|`` (``"relative,parent"``).

    Raises:
        ValueError: On an unknown flag name
    """
    mask = FormMask.NONE
    for name in text.replace("|", ",").split(","):
        name = name.strip().upper().replace("-", "_")
        if not name:
            continue
        if name not in FormMask.__members__:
            raise ValueError(f"Unknown reference form: {name!r}")
        mask |= FormMask[name]
    return mask


# One row per climb level: (bit that makes the level usable,
# bits that allow searching at this level or deeper)
CLIMB_PERMISSIONS = (
    (FormMask.RELATIVE, FormMask.RELATIVE | FormMask.PARENT | FormMask.GRANDPARENT),
    (FormMask.PARENT, FormMask.PARENT | FormMask.GRANDPARENT),
    (FormMask.GRANDPARENT, FormMask.GRANDPARENT),
)

# Reference when the target is the ancestor directory itself
EXACT_REFERENCES = (".", "..", "../..")

# Prefix of a reference into the ancestor directory
CLIMB_PREFIXES = ("", "../", "../../")


def _strip_last_segment(path: str) -> str:
    """Cut *path* back to, and including, the ``/`` before its last segment."""
    last_slash = path.rfind("/", 0, len(path) - 1)
    return path[: last_slash + 1]


def ancestor_directories(path: Optional[str]) -> Tuple[str, ...]:
    """Return the directory of *path*, its parent and its grandparent.

    Missing ancestors are empty strings, and a ``None`` path has none::

        >>> ancestor_directories("/a/b/c/d")
        ('/a/b/c/', '/a/b/', '/a/')
    """
    if path is None:
        return ("",) * len(CLIMB_PERMISSIONS)
    # The sentinel segment makes a trailing "/" count as a directory
    current = path + "a"
    directories = []
    for _ in CLIMB_PERMISSIONS:
        current = _strip_last_segment(current) if current else ""
        directories.append(current)
    return tuple(directories)


def _authority(parts: URIParts) -> str:
    userinfo = f"{parts.userinfo}@" if parts.userinfo is not None else ""
    port = f":{parts.port}" if parts.port != -1 else ""
    return f"//{userinfo}{parts.host}{port}"


def _directory_reference(
    directories: Tuple[str, ...], path: str, tail: str, flags: int
) -> Optional[str]:
    for level, (usable, reach) in enumerate(CLIMB_PERMISSIONS):
        if not flags & reach:
            break
        directory = directories[level]
        if not directory:
            break
        if not flags & usable:
            continue
        if not path.startswith(directory):
            continue

        remainder = path[len(directory):]
        if not remainder:
            return EXACT_REFERENCES[level] + tail
        if level == 0 and (remainder.startswith("/") or scheme_end(remainder) != -1):
            # "/y" would read back as an absolute path, "a:b" as scheme "a"
            return "./" + remainder + tail
        return CLIMB_PREFIXES[level] + remainder + tail
    return None


def relativize(base: "URI", target: str, flags: int) -> str:
    """Return the shortest allowed reference from *base* to *target*.

    Args:
        base: The URI the reference will be resolved against
        target: An absolute URI string
        flags: Combination of :class:`FormMask` bits

    Returns:
        A reference that resolves against *base* to *target*, or *target*
        itself when no allowed form is shorter

    Raises:
        MalformedURIError: If *target* is not a valid absolute URI
    """
    parts = parse_reference(target)
    if not parts.is_hierarchical:
        return target

    same_scheme = parts.scheme == base.scheme
    same_authority = (
        same_scheme
        and parts.host == base.host
        and parts.userinfo == base.userinfo
        and parts.port == base.port
    )
    same_resource = (
        same_authority and parts.path == base.path and parts.query == base.query
    )

    fragment = f"#{parts.fragment}" if parts.fragment is not None else ""
    if same_resource and flags & FormMask.SAME_DOCUMENT:
        return fragment

    tail = fragment
    if parts.query is not None:
        tail = f"?{parts.query}{fragment}"

    if same_authority:
        reference = _directory_reference(
            base.ancestor_directories, parts.path, tail, flags
        )
        if reference is not None:
            logger.debug("Relativized %r to %r against %s", target, reference, base)
            return reference

        if flags & FormMask.ABSOLUTE and parts.path.startswith("/"):
            return parts.path + tail

    if same_scheme and flags & FormMask.NETWORK:
        return _authority(parts) + parts.path + tail

    logger.debug("No allowed reference form shorter than %r", target)
    return target
