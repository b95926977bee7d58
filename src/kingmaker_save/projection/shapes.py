"""
Shape variants of save fields that change form between item types and
game versions.

Each ambiguous field is inspected once and mapped to a small closed enum;
projectors then branch over the enum instead of probing nullable fields.
"""

from enum import Enum
from typing import Any, Dict, List, Tuple

from ..save_data import ReferenceResolver, SourceNode

# Keys under which a wrapped enchantment collection keeps its entries
ENCHANTMENT_WRAPPER_KEYS = ("m_Facts", "m_Enchantments", "Facts", "facts")
SLOT_ITEM_KEY = "m_Item"
ITEM_BLUEPRINT_KEYS = ("m_Blueprint", "Blueprint")


class EnchantmentShape(Enum):
    """Form of an item's enchantments field."""

    ARRAY = "array"
    """A direct array of enchantment entries."""

    WRAPPED = "wrapped"
    """An object holding the array under one of ENCHANTMENT_WRAPPER_KEYS."""

    NONE = "none"
    """Null, a scalar, a missing reference or an unrecognized object."""


def enchantment_shape(node: SourceNode) -> EnchantmentShape:
    """Classify an already-resolved enchantments field."""
    if isinstance(node, list):
        return EnchantmentShape.ARRAY
    if isinstance(node, dict) and any(key in node for key in ENCHANTMENT_WRAPPER_KEYS):
        return EnchantmentShape.WRAPPED
    return EnchantmentShape.NONE


def enchantment_entries(node: SourceNode, resolver: ReferenceResolver) -> List[Any]:
    """Return the raw enchantment entries of an item's enchantments field.

    Args:
        node: The enchantments field as found on the item (may be a reference)
        resolver: Resolver of the document the item belongs to

    Returns:
        Entry list; empty for every shape other than ARRAY and WRAPPED
    """
    resolved = resolver.resolve(node)
    shape = enchantment_shape(resolved)
    if shape is EnchantmentShape.ARRAY:
        return list(resolved)
    if shape is EnchantmentShape.WRAPPED:
        for key in ENCHANTMENT_WRAPPER_KEYS:
            if key in resolved:
                # Only one level of unwrapping; the inner value must be an array
                return list(resolver.resolve_list(resolved[key]))
    return []


class SlotShape(Enum):
    """Form of an equipment slot node."""

    WRAPPED = "wrapped"
    """A slot object that points at its item through m_Item."""

    DIRECT = "direct"
    """The slot node is the item itself."""

    EMPTY = "empty"
    """Nothing equipped, or a node that is neither of the above."""


def slot_shape(node: SourceNode) -> SlotShape:
    """Classify an already-resolved slot node."""
    if not isinstance(node, dict):
        return SlotShape.EMPTY
    if SLOT_ITEM_KEY in node:
        return SlotShape.WRAPPED
    if any(key in node for key in ITEM_BLUEPRINT_KEYS):
        return SlotShape.DIRECT
    return SlotShape.EMPTY


def slot_item(node: SourceNode, resolver: ReferenceResolver) -> SourceNode:
    """Return the resolved item held by a slot, or None when empty."""
    slot = resolver.resolve(node)
    shape = slot_shape(slot)
    if shape is SlotShape.WRAPPED:
        return resolver.resolve_object(slot[SLOT_ITEM_KEY])
    if shape is SlotShape.DIRECT:
        return slot
    return None


class SlotCountShape(Enum):
    """How a spellbook records its spell slots."""

    SPONTANEOUS = "spontaneous"
    """A flat per-level count array with at least one non-zero count."""

    PREPARED = "prepared"
    """Per-level lists of memorized slots, counted by length."""

    NONE = "none"


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def slot_count_shape(spontaneous: SourceNode, memorized: SourceNode) -> SlotCountShape:
    """Classify the slot fields of an already-resolved spellbook."""
    if isinstance(spontaneous, list) and any(_is_count(c) and c > 0 for c in spontaneous):
        return SlotCountShape.SPONTANEOUS
    if isinstance(memorized, list) and memorized:
        return SlotCountShape.PREPARED
    return SlotCountShape.NONE


class PerLevelShape(Enum):
    """Form of a per-spell-level list in a spellbook."""

    INDEXED = "indexed"
    """A list whose position is the spell level."""

    KEYED = "keyed"
    """A list of {"Key": level, "Value": ...} entries."""

    NONE = "none"


def per_level_shape(node: SourceNode) -> PerLevelShape:
    """Classify an already-resolved per-level list."""
    if not isinstance(node, list) or not node:
        return PerLevelShape.NONE
    if all(isinstance(entry, dict) and "Key" in entry for entry in node):
        return PerLevelShape.KEYED
    return PerLevelShape.INDEXED


def per_level_values(node: SourceNode, resolver: ReferenceResolver) -> Dict[int, Any]:
    """Map spell level to the resolved per-level value of a spellbook list."""
    resolved = resolver.resolve(node)
    shape = per_level_shape(resolved)
    levels: Dict[int, Any] = {}
    if shape is PerLevelShape.INDEXED:
        for level, value in enumerate(resolved):
            levels[level] = resolver.resolve(value)
    elif shape is PerLevelShape.KEYED:
        for entry in resolved:
            level = entry.get("Key")
            if _is_count(level):
                levels[level] = resolver.resolve(entry.get("Value"))
    return levels


def key_value_entries(node: SourceNode, resolver: ReferenceResolver) -> List[Tuple[Any, SourceNode]]:
    """Return (key, resolved value) pairs of a serialized dictionary.

    Serialized dictionaries appear as arrays of {"Key", "Value"} objects;
    entries without a Value are treated as being the value themselves.
    """
    pairs: List[Tuple[Any, SourceNode]] = []
    for entry in resolver.resolve_list(node):
        entry = resolver.resolve(entry)
        if not isinstance(entry, dict):
            continue
        if "Value" in entry:
            pairs.append((entry.get("Key"), resolver.resolve(entry["Value"])))
        else:
            pairs.append((None, entry))
    return pairs
