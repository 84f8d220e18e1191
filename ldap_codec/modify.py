from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any, NamedTuple

import ldap

from .escape import to_text
from .logging import logger
from .types import ENCODING

if TYPE_CHECKING:
    from .types import ModifyTuple


class ModifyKind(IntEnum):
    """
    The kind of a modify operation.  The members are equal to the
    ``python-ldap`` constants, so they can be used anywhere those are.
    """

    ADD = ldap.MOD_ADD  # type: ignore[attr-defined]
    DELETE = ldap.MOD_DELETE  # type: ignore[attr-defined]
    REPLACE = ldap.MOD_REPLACE  # type: ignore[attr-defined]


class WireModifyOp(NamedTuple):
    """
    A single entry of a modlist suitable for ``LDAPObject.modify_s``.

    Since this is a tuple of ``(mod_op, mod_type, mod_vals)``, a list of these
    can be handed directly to ``python-ldap``.
    """

    op: ModifyKind  #: what to do
    attr: str  #: the name of the attribute to change
    values: list[bytes]  #: the values to add or replace; empty for deletes


@dataclass(frozen=True)
class Add:
    """
    Add ``value`` (a single value or a list of them) to the attribute
    ``field``.
    """

    field: str
    value: Any


@dataclass(frozen=True)
class Delete:
    """
    Delete the attribute ``field`` entirely.
    """

    field: str


@dataclass(frozen=True)
class Replace:
    """
    Replace all values of the attribute ``field`` with ``value`` (a single
    value or a list of them).
    """

    field: str
    value: Any


ModifyIntent = Add | Delete | Replace


def wrap(value: Any) -> list[str]:
    """
    Wrap ``value`` in a list unless it already is one, converting every item to
    ``str`` with :py:func:`ldap_codec.escape.to_text`.

    Example:
        >>> wrap("hello")
        ['hello']
        >>> wrap(["hello", b"world"])
        ['hello', 'world']
        >>> wrap(123)
        ['123']

    Args:
        value: a single value, or a list or tuple of values

    Returns:
        A list of ``str`` values.

    """
    if isinstance(value, (list, tuple)):
        return [to_text(v) for v in value]
    return [to_text(value)]


def intent_from_tuple(value: Any) -> ModifyIntent:
    """
    Build a :py:data:`ModifyIntent` from its tuple shorthand:

    * ``("add", (field, value))``
    * ``("delete", field)``
    * ``("replace", (field, value))``

    The operation may also be given as a :py:class:`ModifyKind` or as one of
    the ``ldap.MOD_*`` constants.

    Args:
        value: the tuple to convert

    Raises:
        TypeError: ``value`` does not have one of the shapes above

    Returns:
        The matching :py:class:`Add`, :py:class:`Delete` or
        :py:class:`Replace`.

    """
    if not isinstance(value, tuple) or len(value) != 2:  # noqa: PLR2004
        msg = f"Unrecognized modify operation: {value!r}"
        raise TypeError(msg)
    op, args = value
    if isinstance(op, str):
        try:
            op = ModifyKind[op.upper()]
        except KeyError:
            msg = f"Unrecognized modify operation '{op}' in {value!r}"
            raise TypeError(msg) from None
    if op == ModifyKind.DELETE and isinstance(args, (str, bytes)):
        return Delete(to_text(args))
    if (
        op in (ModifyKind.ADD, ModifyKind.REPLACE)
        and isinstance(args, tuple)
        and len(args) == 2  # noqa: PLR2004
    ):
        field, field_value = args
        if op == ModifyKind.ADD:
            return Add(to_text(field), field_value)
        return Replace(to_text(field), field_value)
    msg = f"Unrecognized modify operation: {value!r}"
    raise TypeError(msg)


def _encode(value: Any) -> list[bytes]:
    return [v.encode(ENCODING) for v in wrap(value)]


def convert_modify(intent: ModifyIntent | ModifyTuple) -> WireModifyOp:
    """
    Convert a friendly modify operation into a modlist entry for
    ``LDAPObject.modify_s``.

    Example:
        >>> convert_modify(Add("description", "This is a description"))
        WireModifyOp(op=<ModifyKind.ADD: 0>, attr='description', values=[b'This is a description'])
        >>> convert_modify(("delete", "description"))
        WireModifyOp(op=<ModifyKind.DELETE: 1>, attr='description', values=[])

    Args:
        intent: an :py:class:`Add`, :py:class:`Delete` or :py:class:`Replace`,
            or the tuple shorthand accepted by :py:func:`intent_from_tuple`

    Raises:
        TypeError: ``intent`` is not a modify operation we know about

    Returns:
        The modlist entry.

    """  # noqa: E501
    if isinstance(intent, tuple) and not isinstance(intent, WireModifyOp):
        intent = intent_from_tuple(intent)
    if isinstance(intent, Add):
        op = WireModifyOp(ModifyKind.ADD, to_text(intent.field), _encode(intent.value))
    elif isinstance(intent, Delete):
        op = WireModifyOp(ModifyKind.DELETE, to_text(intent.field), [])
    elif isinstance(intent, Replace):
        op = WireModifyOp(
            ModifyKind.REPLACE, to_text(intent.field), _encode(intent.value)
        )
    else:
        msg = f"Unrecognized modify operation: {intent!r}"
        raise TypeError(msg)
    logger.debug("convert_modify intent=%r op=%r", intent, op)
    return op


def convert_modifies(
    intents: Iterable[ModifyIntent | ModifyTuple]
) -> list[WireModifyOp]:
    """
    Convert each of ``intents`` with :py:func:`convert_modify`, keeping their
    order.  The result can be passed as the ``modlist`` to
    ``LDAPObject.modify_s``.

    Raises:
        TypeError: one of ``intents`` is not a modify operation we know about

    """
    return [convert_modify(intent) for intent in intents]
