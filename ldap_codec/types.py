from collections.abc import Mapping, Sequence

from case_insensitive_dict import CaseInsensitiveDict

#: The character encoding used for every bytes <-> str conversion
ENCODING = "utf-8"

# ====================================
# Types
# ====================================

# Distinguished names
DnComponent = tuple[str, str]
DnComponents = list[DnComponent]

# Wire entries, as returned by ``LDAPObject.search_s``
WireValue = str | bytes
WireAttributes = (
    Mapping[WireValue, list[WireValue]] | Sequence[tuple[WireValue, list[WireValue]]]
)
WireEntry = tuple[WireValue, WireAttributes]

# Friendly entries
FriendlyEntry = dict[str, str | list[str]]
CIFriendlyEntry = CaseInsensitiveDict[str, str | list[str]]

# Modify intents, in their tuple shorthand, e.g. ("add", ("cn", "x"))
ModifyTuple = tuple[str, tuple[str, object] | str]
