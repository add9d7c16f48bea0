"""User-facing :class:`BPETokenizer` and the builder that produces it.

``build_tokenizer`` is the single construction point both loaders go
through.  It validates the ID invariants first and only then hands the
tables to :class:`tiktoken.Encoding`, which compiles the split pattern
and builds the BPE core.  If any step fails nothing is returned, so a
caller can never hold a half-built tokenizer.

Usage::

    tok = load_from_file("o200k_base.tiktoken", "o200k_harmony")
    ids = tok.encode("hello <|start|>", allowed_special="all")
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from types import MappingProxyType
from typing import Literal

import tiktoken

from .encodings import EncodingName
from .errors import CoreConstructionFailed
from .validation import validate_construction_inputs


class BPETokenizer:
    """Immutable, fully constructed BPE tokenizer.

    Owns its special-token table and compiled split pattern through the
    wrapped ``tiktoken.Encoding``.  Instances are created by
    :func:`build_tokenizer`; construct them directly only with an
    encoding that has already been validated.
    """

    __slots__ = ("_encoding", "_pattern", "_special_tokens", "_vocab_size")

    def __init__(
        self,
        encoding: tiktoken.Encoding,
        special_tokens: Mapping[str, int],
        vocab_size: int,
        pattern: str,
    ) -> None:
        self._encoding = encoding
        self._pattern = pattern
        self._special_tokens = MappingProxyType(dict(special_tokens))
        self._vocab_size = vocab_size

    def __setattr__(self, key: str, value: object) -> None:
        if hasattr(self, "_vocab_size"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(key, value)

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"vocab_size={self.vocab_size}, "
            f"num_special_tokens={self.num_special_tokens})"
        )

    # ── Vocabulary info ────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._encoding.name

    @property
    def pattern(self) -> str:
        """The pre-tokenization split regex."""
        return self._pattern

    @property
    def vocab_size(self) -> int:
        """Number of learned BPE tokens (excluding special tokens)."""
        return self._vocab_size

    @property
    def n_vocab(self) -> int:
        """Size of the ID space: highest token ID + 1."""
        return self._encoding.n_vocab

    @property
    def special_tokens(self) -> Mapping[str, int]:
        """Read-only ``token -> id`` table (base + reserved)."""
        return self._special_tokens

    @property
    def num_special_tokens(self) -> int:
        return len(self._special_tokens)

    # ── Encode / decode ────────────────────────────────────────────

    def encode(
        self,
        text: str,
        *,
        allowed_special: Literal["all"] | Collection[str] = frozenset(),
    ) -> list[int]:
        """Encode *text* to token IDs."""
        return self._encoding.encode(text, allowed_special=allowed_special)

    def decode(self, ids: list[int]) -> str:
        """Decode token *ids* back to text."""
        return self._encoding.decode(ids)

    # ── Access to underlying encoding ──────────────────────────────

    @property
    def inner(self) -> tiktoken.Encoding:
        """The underlying ``tiktoken.Encoding`` instance."""
        return self._encoding


def build_tokenizer(
    name: str | EncodingName,
    vocab: Mapping[bytes, int],
    special_tokens: Mapping[str, int],
    pattern: str,
) -> BPETokenizer:
    """Construct a tokenizer from parsed parts.

    Raises
    ------
    CoreConstructionFailed
        If ranks or special IDs are duplicated, a special ID collides
        with a vocabulary rank, or tiktoken rejects the inputs (for
        example an invalid split pattern).
    """
    report = validate_construction_inputs(vocab, special_tokens)
    if not report.ok:
        raise CoreConstructionFailed(report.summary())

    encoding_name = name.value if isinstance(name, EncodingName) else name
    try:
        encoding = tiktoken.Encoding(
            encoding_name,
            pat_str=pattern,
            mergeable_ranks=dict(vocab),
            special_tokens=dict(special_tokens),
        )
    except (ValueError, OverflowError) as exc:
        raise CoreConstructionFailed(str(exc)) from exc
    return BPETokenizer(
        encoding, special_tokens, vocab_size=len(vocab), pattern=pattern
    )
