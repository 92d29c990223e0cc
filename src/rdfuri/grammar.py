"""
Character classes and validators of the RFC 2396 URI grammar.

All functions are pure predicates over ASCII characters and strings. They
never raise; :mod:`rdfuri.parser` turns a ``False`` into a
:class:`~rdfuri.errors.MalformedURIError` with the reason.
"""

from typing import Callable

RESERVED_CHARACTERS = ";/?:@&=+$,[]"

# Characters that may follow the first letter of a scheme besides alphanumerics
SCHEME_CHARACTERS = "+-."

# Characters allowed in userinfo besides unreserved ones
USERINFO_CHARACTERS = ";:&=+$,"

# Never unreserved, even though only some of them are reserved
EXCLUDED_CHARACTERS = "#%[]"

# Reserved characters that cannot appear inside a path segment
PATH_EXCLUDED = "#[]"

MAX_ADDRESS_LENGTH = 255


# ── Single characters ────────────────────────────────────────────


def is_digit(char: str) -> bool:
    """Check for an ASCII decimal digit."""
    return "0" <= char <= "9"


def is_hex(char: str) -> bool:
    """Check for an ASCII hexadecimal digit (either case)."""
    return is_digit(char) or "a" <= char <= "f" or "A" <= char <= "F"


def is_alpha(char: str) -> bool:
    """Check for an ASCII letter."""
    return "a" <= char <= "z" or "A" <= char <= "Z"


def is_alphanumeric(char: str) -> bool:
    """Check for an ASCII letter or digit."""
    return is_alpha(char) or is_digit(char)


def is_reserved_char(char: str) -> bool:
    """Check membership in the reserved set ``;/?:@&=+$,[]``."""
    return char in RESERVED_CHARACTERS


def is_unreserved_char(char: str) -> bool:
    """Check for a character that is neither reserved nor in ``#%[]``."""
    return not is_reserved_char(char) and char not in EXCLUDED_CHARACTERS


def is_uric(char: str) -> bool:
    """Check for a character allowed unescaped in path, query or fragment."""
    return is_reserved_char(char) or is_unreserved_char(char)


def is_path_char(char: str) -> bool:
    """Like :func:`is_uric` but without the ``[]`` delimiters."""
    return is_uric(char) and char not in PATH_EXCLUDED


def is_userinfo_char(char: str) -> bool:
    return is_unreserved_char(char) or char in USERINFO_CHARACTERS


def is_scheme_char(char: str) -> bool:
    return is_alphanumeric(char) or char in SCHEME_CHARACTERS


# ── Scanning helpers ─────────────────────────────────────────────


def is_escape_at(text: str, index: int) -> bool:
    """Check that ``text[index]`` starts a complete ``%HH`` triple."""
    return (
        index + 2 < len(text)
        and text[index] == "%"
        and is_hex(text[index + 1])
        and is_hex(text[index + 2])
    )


def find_bad_escape(text: str) -> int:
    """Return the index of the first malformed ``%`` escape, or -1."""
    index = text.find("%")
    while index != -1:
        if not is_escape_at(text, index):
            return index
        index = text.find("%", index + 3)
    return -1


def find_bad_char(text: str, allowed: Callable[[str], bool]) -> int:
    """Return the index of the first character not accepted by *allowed*.

    ``%`` characters are skipped; escapes are checked by
    :func:`find_bad_escape`.
    """
    for index, char in enumerate(text):
        if char != "%" and not allowed(char):
            return index
    return -1


# ── Whole strings ────────────────────────────────────────────────


def is_conformant_scheme_name(scheme: str) -> bool:
    """Check ``scheme = alpha *( alpha | digit | "+" | "-" | "." )``."""
    if not scheme or not is_alpha(scheme[0]):
        return False
    return all(is_scheme_char(c) for c in scheme[1:])


def is_well_formed_address(address: str) -> bool:
    """Check that *address* is an IPv4 address or a host name.

    A right-most label starting with a digit means the address must be
    four dot-separated decimal runs, since a top-level domain label
    always starts with a letter (RFC 2396 section 3.2.2). Host names are
    dot-separated labels of alphanumerics and ``-`` that start and end
    with an alphanumeric.

    Examples::

        >>> is_well_formed_address("www.example.org")
        True
        >>> is_well_formed_address("10.0.0.1")
        True
        >>> is_well_formed_address("10.0.1")
        False
    """
    if not address or len(address) > MAX_ADDRESS_LENGTH:
        return False
    if address.startswith((".", "-")):
        return False

    index = address.rfind(".")
    if address.endswith("."):
        index = address.rfind(".", 0, index)

    length = len(address)
    if index + 1 < length and is_digit(address[index + 1]):
        dots = 0
        for i, char in enumerate(address):
            if char == ".":
                if not is_digit(address[i - 1]):
                    return False
                if i + 1 < length and not is_digit(address[i + 1]):
                    return False
                dots += 1
            elif not is_digit(char):
                return False
        return dots == 3

    if address.endswith("-"):
        return False
    for i, char in enumerate(address):
        if char == ".":
            if not is_alphanumeric(address[i - 1]):
                return False
            if i + 1 < length and not is_alphanumeric(address[i + 1]):
                return False
        elif not is_alphanumeric(char) and char != "-":
            return False
    return True


def is_uri_string(text: str) -> bool:
    """Check that every character is reserved, unreserved or a ``%HH`` escape."""
    return find_bad_escape(text) == -1 and find_bad_char(text, is_uric) == -1
