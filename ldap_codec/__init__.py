__version__ = "1.0.0"

from .dn import (
    ComponentsDn,
    DnSpec,
    EmptyDn,
    RawDn,
    construct_dn,
    naming_attribute,
    parent_dn,
    parse_dn,
    rdn,
)
from .entry import marshal_entries, marshal_entry
from .escape import RESERVED_CHARS, escape, to_text, unescape
from .modify import (
    Add,
    Delete,
    ModifyIntent,
    ModifyKind,
    Replace,
    WireModifyOp,
    convert_modifies,
    convert_modify,
    intent_from_tuple,
    wrap,
)
from .types import DnComponent, DnComponents, FriendlyEntry, WireEntry
