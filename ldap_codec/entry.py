from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from .escape import to_text
from .logging import logger
from .types import CIFriendlyEntry, FriendlyEntry

if TYPE_CHECKING:
    from .types import WireAttributes, WireEntry


def _attribute_items(attributes: WireAttributes) -> Iterable[tuple[object, list]]:
    if isinstance(attributes, Mapping):
        return attributes.items()
    return attributes


def marshal_entry(
    entry: WireEntry, case_insensitive: bool = False
) -> FriendlyEntry | CIFriendlyEntry:
    """
    Convert a single wire entry to a friendly ``dict``.

    A wire entry is a ``(dn, attributes)`` record like the ones
    ``LDAPObject.search_s`` returns.  ``attributes`` may be either a mapping or
    an ordered list of ``(name, values)`` pairs, and names, values and the DN
    may each be ``str`` or ``bytes``.

    The friendly form has a ``"dn"`` key holding the DN as a ``str``, and one
    key per attribute holding the list of its values as ``str``, in their
    original order.  Attribute names keep the case they were given in.

    Example:
        >>> marshal_entry(("uid=user,ou=People", {"uid": [b"user"]}))
        {'dn': 'uid=user,ou=People', 'uid': ['user']}

    Note:
        If an attribute name appears more than once in ``attributes`` the last
        occurrence wins and a warning is logged.  LDAP never sends such
        entries.  Likewise an attribute named ``dn`` replaces the ``"dn"``
        key.  With ``case_insensitive=True``, names that differ only in case
        (``cn`` and ``CN``, or ``DN``) count as the same name.

    Args:
        entry: the ``(dn, attributes)`` record to convert

    Keyword Args:
        case_insensitive: if ``True``, return a ``CaseInsensitiveDict`` so
            that ``result["UID"]`` finds ``uid``

    Returns:
        The friendly entry.

    """
    dn, attributes = entry
    dn = to_text(dn)
    data: FriendlyEntry | CIFriendlyEntry = (
        CIFriendlyEntry() if case_insensitive else {}
    )
    data["dn"] = dn
    for key, values in _attribute_items(attributes):
        name = to_text(key)
        if name in data:
            logger.warning(
                "marshal_entry.duplicate_attribute dn=%s attribute=%s", dn, name
            )
        data[name] = [to_text(v) for v in values]
    return data


def marshal_entries(
    entries: Iterable[WireEntry], case_insensitive: bool = False
) -> list[FriendlyEntry | CIFriendlyEntry]:
    """
    Convert several wire entries with :py:func:`marshal_entry`, keeping their
    order.

    Example:
        >>> marshal_entries([("uid=user,ou=People", [("uid", [b"user"])])])
        [{'dn': 'uid=user,ou=People', 'uid': ['user']}]

    """
    return [
        marshal_entry(entry, case_insensitive=case_insensitive) for entry in entries
    ]
