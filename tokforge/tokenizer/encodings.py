"""Encoding catalog: maps a variant name to its immutable descriptor.

The catalog is a plain table keyed by :class:`EncodingName`.  Each
descriptor carries everything a loader needs (split pattern, base
special tokens, reserved-range policy, vocabulary location), so adding a
variant is a new table entry rather than a new branch in the loaders.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .constants import (
    CL100K_PATTERN,
    CL100K_SPECIAL_TOKENS,
    CL100K_VOCAB_SHA256,
    CL100K_VOCAB_URL,
    O200K_BASE_RESERVED,
    O200K_HARMONY_RESERVED,
    O200K_HARMONY_SPECIAL_TOKENS,
    O200K_PATTERN,
    O200K_SPECIAL_TOKENS,
    O200K_VOCAB_SHA256,
    O200K_VOCAB_URL,
)
from .errors import UnknownEncodingName


class EncodingName(str, Enum):
    """Closed set of encoding variants."""

    O200K_HARMONY = "o200k_harmony"
    O200K_BASE = "o200k_base"
    CL100K_BASE = "cl100k_base"


@dataclass(frozen=True)
class ReservedRange:
    """Closed interval ``[lo, hi]`` of IDs held for synthetic tokens."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo < 0:
            raise ValueError(f"Reserved range must start at >= 0, got {self.lo}")
        if self.lo > self.hi:
            raise ValueError(
                f"Reserved range is empty: lo ({self.lo}) > hi ({self.hi})"
            )

    def __len__(self) -> int:
        return self.hi - self.lo + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.lo, self.hi + 1))

    def __contains__(self, token_id: object) -> bool:
        return isinstance(token_id, int) and self.lo <= token_id <= self.hi


@dataclass(frozen=True)
class EncodingDescriptor:
    """Everything needed to build one encoding variant.

    ``special_tokens`` is wrapped in a read-only mapping on construction
    so a descriptor taken from the catalog can be shared between threads.
    """

    name: EncodingName
    pattern: str
    special_tokens: Mapping[str, int] = field(default_factory=dict)
    reserved_range: ReservedRange | None = None
    vocab_url: str | None = None
    vocab_hash: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "special_tokens", MappingProxyType(dict(self.special_tokens))
        )


ENCODING_CATALOG: Mapping[EncodingName, EncodingDescriptor] = MappingProxyType(
    {
        EncodingName.O200K_HARMONY: EncodingDescriptor(
            name=EncodingName.O200K_HARMONY,
            pattern=O200K_PATTERN,
            special_tokens=O200K_HARMONY_SPECIAL_TOKENS,
            reserved_range=ReservedRange(*O200K_HARMONY_RESERVED),
            vocab_url=O200K_VOCAB_URL,
            vocab_hash=O200K_VOCAB_SHA256,
        ),
        EncodingName.O200K_BASE: EncodingDescriptor(
            name=EncodingName.O200K_BASE,
            pattern=O200K_PATTERN,
            special_tokens=O200K_SPECIAL_TOKENS,
            reserved_range=ReservedRange(*O200K_BASE_RESERVED),
            vocab_url=O200K_VOCAB_URL,
            vocab_hash=O200K_VOCAB_SHA256,
        ),
        EncodingName.CL100K_BASE: EncodingDescriptor(
            name=EncodingName.CL100K_BASE,
            pattern=CL100K_PATTERN,
            special_tokens=CL100K_SPECIAL_TOKENS,
            vocab_url=CL100K_VOCAB_URL,
            vocab_hash=CL100K_VOCAB_SHA256,
        ),
    }
)


def resolve_encoding(name: str | EncodingName) -> EncodingDescriptor:
    """Look up the descriptor for *name*.  Performs no I/O.

    Raises
    ------
    UnknownEncodingName
        If *name* is not one of :class:`EncodingName`.
    """
    try:
        key = EncodingName(name)
    except ValueError:
        raise UnknownEncodingName(str(name)) from None
    return ENCODING_CATALOG[key]


def known_encodings() -> list[str]:
    """Names accepted by :func:`resolve_encoding`, in catalog order."""
    return [name.value for name in ENCODING_CATALOG]
