from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .escape import escape, invalid_dn_syntax, read_escape, to_text
from .logging import logger
from .types import DnComponent, DnComponents


def _join(dn: str, base: str) -> str:
    if not dn:
        return base
    if not base:
        return dn
    return f"{dn},{base}"


@dataclass(frozen=True)
class DnSpec(ABC):
    """
    The things :py:func:`construct_dn` knows how to turn into a DN.

    This is a closed set of variants: :py:class:`EmptyDn`, :py:class:`RawDn`
    and :py:class:`ComponentsDn`.  Each one knows how to render itself on top
    of a base DN.  Use :py:meth:`from_value` to build the right variant from a
    plain Python value.
    """

    @abstractmethod
    def to_dn(self, base: str = "") -> str:
        """
        Render this DN on top of ``base``.
        """

    @classmethod
    def from_value(cls, value: Any) -> DnSpec:
        """
        Build a :py:class:`DnSpec` from a plain value.

        * ``None``, ``""`` and ``b""`` become :py:class:`EmptyDn`
        * ``str`` and ``bytes`` become :py:class:`RawDn`
        * a list or tuple of ``(name, value)`` pairs, or a mapping, becomes
          :py:class:`ComponentsDn`.  Mappings are discouraged: their iteration
          order becomes the order of the components.
        * :py:class:`DnSpec` instances are returned as they are

        Args:
            value: the value to convert

        Raises:
            TypeError: ``value`` is none of the above, or one of the
                components is not a ``(name, value)`` pair

        Returns:
            The matching :py:class:`DnSpec` variant.

        """
        if isinstance(value, DnSpec):
            return value
        if value is None:
            return EmptyDn()
        if isinstance(value, (str, bytes)):
            return RawDn(to_text(value)) if value else EmptyDn()
        if isinstance(value, Mapping):
            value = list(value.items())
        if isinstance(value, (list, tuple)):
            components: list[DnComponent] = []
            for item in value:
                if not isinstance(item, (list, tuple)) or len(item) != 2:  # noqa: PLR2004
                    msg = f"DN components must be (name, value) pairs: {item!r}"
                    raise TypeError(msg)
                components.append((to_text(item[0]), to_text(item[1])))
            return ComponentsDn(tuple(components))
        msg = f"Cannot build a DN from a {type(value).__name__}: {value!r}"
        raise TypeError(msg)


@dataclass(frozen=True)
class EmptyDn(DnSpec):
    """
    No DN at all; rendering yields the base unchanged.
    """

    def to_dn(self, base: str = "") -> str:
        return base


@dataclass(frozen=True)
class RawDn(DnSpec):
    """
    A pre-formatted DN segment.  The caller is responsible for escaping it;
    we use it exactly as given.
    """

    text: str  #: the DN segment, e.g. ``uid=user,ou=People``

    def to_dn(self, base: str = "") -> str:
        return _join(self.text, base)


@dataclass(frozen=True)
class ComponentsDn(DnSpec):
    """
    An ordered list of ``(name, value)`` pairs, most specific first.  Values
    are converted with :py:func:`ldap_codec.escape.to_text` and escaped with
    :py:func:`ldap_codec.escape.escape` when rendered; names are converted but
    not escaped.
    """

    components: tuple[DnComponent, ...]  #: the ``(name, value)`` pairs

    def to_dn(self, base: str = "") -> str:
        dn = ",".join(
            f"{to_text(name)}={escape(to_text(value))}"
            for name, value in self.components
        )
        return _join(dn, base)


def construct_dn(spec: Any, base: str | bytes | None = "") -> str:
    """
    Construct a DN string from ``spec``, appended to ``base``.

    Example:
        >>> construct_dn([("uid", "user"), ("ou", "People")])
        'uid=user,ou=People'
        >>> construct_dn([("uid", "user"), ("ou", "People")], "dc=example,dc=org")
        'uid=user,ou=People,dc=example,dc=org'
        >>> construct_dn("uid=user,ou=People", "dc=example,dc=org")
        'uid=user,ou=People,dc=example,dc=org'
        >>> construct_dn(None, "dc=example,dc=org")
        'dc=example,dc=org'

    Args:
        spec: a :py:class:`DnSpec`, or anything :py:meth:`DnSpec.from_value`
            accepts

    Keyword Args:
        base: the DN to append to

    Raises:
        TypeError: ``spec`` is not something we can build a DN from

    Returns:
        The DN as a string.

    """
    base = to_text(base) if base is not None else ""
    dn = DnSpec.from_value(spec).to_dn(base)
    logger.debug("construct_dn spec=%r base=%r dn=%r", spec, base, dn)
    return dn


def _component(
    dn: str, position: int, key: str | None, value: list[str]
) -> DnComponent:
    if key is None:
        msg = f"component {position} of '{dn}' has no '=' separator"
        raise invalid_dn_syntax(msg)
    if not key:
        msg = f"component {position} of '{dn}' has an empty attribute name"
        raise invalid_dn_syntax(msg)
    if not value:
        msg = f"component {position} of '{dn}' has an empty value"
        raise invalid_dn_syntax(msg)
    return (key, "".join(value))


def _tokenize(dn: str) -> list[tuple[DnComponent, int]]:
    """
    Split ``dn`` into components, pairing each with the index in ``dn`` just
    after the comma that ends it (``len(dn)`` for the last one).
    """
    tokens: list[tuple[DnComponent, int]] = []
    key: str | None = None
    current: list[str] = []
    i = 0
    while i < len(dn):
        c = dn[i]
        if c == "\\":
            text, i = read_escape(dn, i)
            current.append(text)
            continue
        if c == "=" and key is None:
            key = "".join(current)
            current = []
        elif c == ",":
            tokens.append((_component(dn, len(tokens) + 1, key, current), i + 1))
            key = None
            current = []
        else:
            current.append(c)
        i += 1
    tokens.append((_component(dn, len(tokens) + 1, key, current), len(dn)))
    return tokens


def parse_dn(dn: str | bytes | None) -> DnComponents:
    r"""
    Split a DN into its ordered list of ``(name, value)`` pairs.

    We scan ``dn`` left to right.  A backslash makes the next character
    literal, the first unescaped ``=`` of a component separates the name from
    the value, and an unescaped ``,`` ends the component.  Values are returned
    unescaped, so ``parse_dn(construct_dn(components)) == components``.

    Hex escapes (``\2C``) are not decoded: they are kept in the value exactly
    as they appear in ``dn``.

    Example:
        >>> parse_dn("uid=user,ou=People,dc=example,dc=org")
        [('uid', 'user'), ('ou', 'People'), ('dc', 'example'), ('dc', 'org')]
        >>> parse_dn(r"cn=Smith\, John,ou=People")
        [('cn', 'Smith, John'), ('ou', 'People')]

    Args:
        dn: the DN to parse

    Raises:
        ldap.INVALID_DN_SYNTAX: a component has no ``=``, an empty name or an
            empty value, or the DN ends with a lone backslash.  Nothing is
            returned for the components that did parse.

    Returns:
        The components of ``dn``, most specific first.

    """
    if not dn:
        return []
    dn = to_text(dn)
    components = [component for component, _ in _tokenize(dn)]
    logger.debug("parse_dn dn=%r components=%r", dn, components)
    return components


def rdn(dn: str | bytes | None) -> DnComponent | None:
    """
    Return the leaf ``(name, value)`` pair of ``dn``, or ``None`` for the
    root DN.

    Raises:
        ldap.INVALID_DN_SYNTAX: ``dn`` is not well-formed

    """
    components = parse_dn(dn)
    return components[0] if components else None


def naming_attribute(dn: str | bytes | None) -> str | None:
    """
    Return the name of the attribute ``dn`` is named by, e.g. ``uid`` for
    ``uid=user,ou=People,dc=example,dc=org``.

    Raises:
        ldap.INVALID_DN_SYNTAX: ``dn`` is not well-formed

    """
    leaf = rdn(dn)
    return leaf[0] if leaf else None


def parent_dn(dn: str | bytes | None) -> str:
    r"""
    Return ``dn`` without its leaf component.  The rest of ``dn`` is returned
    exactly as it was given, escapes included, so
    ``parent_dn(r"uid=x,cn=\ lead,dc=org") == r"cn=\ lead,dc=org"``.
    Single-component and root DNs have an empty parent.

    Raises:
        ldap.INVALID_DN_SYNTAX: ``dn`` is not well-formed

    """
    if not dn:
        return ""
    dn = to_text(dn)
    tokens = _tokenize(dn)
    if len(tokens) < 2:  # noqa: PLR2004
        return ""
    return dn[tokens[0][1] :]
