from enum import Enum
import string
from typing import Any

import ldap

from .types import ENCODING

#: Characters that must be backslash-escaped inside a DN attribute value
RESERVED_CHARS: frozenset[str] = frozenset(',#+<>;"=\\')
#: Characters allowed in the ``\XX`` hex escapes we pass through untouched
HEX_DIGITS: frozenset[str] = frozenset(string.hexdigits)


def to_text(value: Any) -> str:
    """
    Convert a single attribute value to ``str``.

    ``bytes`` are decoded as UTF-8, ``None`` becomes ``""``, booleans become
    ``TRUE`` or ``FALSE`` (the LDAP Boolean syntax), :py:class:`enum.Enum`
    members become their symbolic name, and everything else goes through
    ``str()``.

    Args:
        value: the value to convert

    Returns:
        The text representation of ``value``.

    """
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(ENCODING)
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, Enum):
        return value.name
    return str(value)


def escape(value: str | bytes) -> str:
    r"""
    Escape the special DN characters in a single attribute value.

    Each of ``, # + < > ; " = \`` is prefixed with a backslash; every other
    character is passed through untouched.  No other normalization is done.

    Example:
        >>> escape("a=b#c\\")
        'a\\=b\\#c\\\\'

    Args:
        value: the attribute value to escape

    Returns:
        The escaped value, suitable for embedding in a DN.

    """
    if isinstance(value, bytes):
        value = value.decode(ENCODING)
    return "".join(f"\\{c}" if c in RESERVED_CHARS else c for c in value)


def read_escape(value: str, index: int) -> tuple[str, int]:
    r"""
    Read the escape sequence whose backslash is at ``value[index]``.

    A backslash followed by two hex digits (``\2C``) is an RFC 4514 hex
    escape.  We do not decode those; the whole sequence is returned as it is
    so that it survives a trip through :py:func:`unescape`.  Any other
    backslash makes the single character after it literal.

    Args:
        value: the escaped text
        index: the position of the backslash in ``value``

    Raises:
        ldap.INVALID_DN_SYNTAX: the backslash is the last character of ``value``

    Returns:
        A tuple of the text the sequence stands for and the index just after
        the sequence.

    """
    pair = value[index + 1 : index + 3]
    if len(pair) == 2 and all(h in HEX_DIGITS for h in pair):  # noqa: PLR2004
        return value[index : index + 3], index + 3
    if index + 1 >= len(value):
        msg = f"dangling escape at end of '{value}'"
        raise invalid_dn_syntax(msg)
    return value[index + 1], index + 2


def unescape(value: str) -> str:
    r"""
    Undo :py:func:`escape`: a backslash makes the character after it literal.
    Hex escapes such as ``\2C`` are left as they are.

    Args:
        value: an escaped attribute value

    Raises:
        ldap.INVALID_DN_SYNTAX: ``value`` ends with a lone backslash

    Returns:
        The unescaped value.

    """
    chars: list[str] = []
    i = 0
    while i < len(value):
        if value[i] == "\\":
            text, i = read_escape(value, i)
            chars.append(text)
        else:
            chars.append(value[i])
            i += 1
    return "".join(chars)


def invalid_dn_syntax(info: str) -> Exception:
    """
    Build the ``ldap.INVALID_DN_SYNTAX`` exception we raise for malformed DNs.

    Args:
        info: a human readable description of what was wrong

    Returns:
        An ``ldap.INVALID_DN_SYNTAX`` instance, ready to be raised.

    """
    return ldap.INVALID_DN_SYNTAX(  # type: ignore[attr-defined]
        {
            "result": 34,
            "desc": "Invalid DN syntax",
            "ctrls": [],
            "info": info,
        }
    )
