"""Assemble the full special-token table for an encoding descriptor.

The table is the descriptor's base special tokens plus one
``<|reserved_N|>`` placeholder for every ID in its reserved range.  IDs
already claimed by a named base token keep their name; only the gaps are
filled, so the resulting ID set is exactly ``base ∪ range``.
"""

from __future__ import annotations

from .constants import RESERVED_TOKEN_TEMPLATE
from .encodings import EncodingDescriptor
from .errors import CoreConstructionFailed


def reserved_token_name(token_id: int) -> str:
    """Placeholder name for *token_id*, e.g. ``<|reserved_200014|>``."""
    return RESERVED_TOKEN_TEMPLATE.format(id=token_id)


def build_special_tokens(descriptor: EncodingDescriptor) -> dict[str, int]:
    """Return a fresh ``token -> id`` dict for *descriptor*.

    The returned dict is owned by the caller; the descriptor is not
    touched.

    Raises
    ------
    CoreConstructionFailed
        If two base tokens share an ID, or a generated placeholder name
        is already used by a base token at a different ID.
    """
    id_to_name: dict[int, str] = {}
    for name, token_id in descriptor.special_tokens.items():
        if token_id in id_to_name:
            raise CoreConstructionFailed(
                f"Duplicate special token ID {token_id}: "
                f"{id_to_name[token_id]!r} and {name!r}"
            )
        id_to_name[token_id] = name

    specials = dict(descriptor.special_tokens)
    if descriptor.reserved_range is None:
        return specials

    for token_id in descriptor.reserved_range:
        if token_id in id_to_name:
            continue
        name = reserved_token_name(token_id)
        if name in specials:
            raise CoreConstructionFailed(
                f"Reserved token {name!r} is already assigned to ID "
                f"{specials[name]}"
            )
        specials[name] = token_id
    return specials
