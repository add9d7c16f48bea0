"""Pre-construction checks for tokenizer inputs.

Verifies the ID invariants a BPE tokenizer relies on before anything is
handed to tiktoken: vocabulary ranks are unique, special-token IDs are
unique, and no special-token ID collides with a vocabulary rank.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field

# Cap on how many offending IDs a summary lists.
_MAX_LISTED: int = 10


@dataclass
class ValidationReport:
    """Results of checking a vocabulary against its special tokens."""

    vocab_size: int = 0
    num_special_tokens: int = 0

    duplicate_ranks: list[int] = field(default_factory=list)
    duplicate_special_ids: list[int] = field(default_factory=list)
    # special token -> colliding vocabulary rank
    collisions: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not (
            self.duplicate_ranks or self.duplicate_special_ids or self.collisions
        )

    def summary(self) -> str:
        lines = [
            f"Vocab size: {self.vocab_size}",
            f"Special tokens: {self.num_special_tokens}",
        ]
        if self.duplicate_ranks:
            lines.append(
                f"Duplicate vocabulary ranks: {_format_ids(self.duplicate_ranks)}"
            )
        if self.duplicate_special_ids:
            lines.append(
                f"Duplicate special token IDs: "
                f"{_format_ids(self.duplicate_special_ids)}"
            )
        if self.collisions:
            shown = list(self.collisions.items())[:_MAX_LISTED]
            pairs = ", ".join(f"{tok}={rank}" for tok, rank in shown)
            more = len(self.collisions) - len(shown)
            if more > 0:
                pairs += f" (+{more} more)"
            lines.append(f"Special tokens colliding with vocabulary: {pairs}")
        return "\n".join(lines)


def _format_ids(ids: list[int]) -> str:
    shown = ", ".join(str(i) for i in ids[:_MAX_LISTED])
    if len(ids) > _MAX_LISTED:
        shown += f" (+{len(ids) - _MAX_LISTED} more)"
    return shown


def _duplicates(values: list[int]) -> list[int]:
    return sorted(v for v, n in Counter(values).items() if n > 1)


def validate_construction_inputs(
    vocab: Mapping[bytes, int],
    special_tokens: Mapping[str, int],
) -> ValidationReport:
    """Check *vocab* and *special_tokens* for ID collisions.

    Returns
    -------
    ValidationReport
        ``report.ok`` is True when every invariant holds.
    """
    report = ValidationReport(
        vocab_size=len(vocab),
        num_special_tokens=len(special_tokens),
    )
    report.duplicate_ranks = _duplicates(list(vocab.values()))
    report.duplicate_special_ids = _duplicates(list(special_tokens.values()))

    ranks = set(vocab.values())
    report.collisions = {
        token: token_id
        for token, token_id in sorted(special_tokens.items(), key=lambda kv: kv[1])
        if token_id in ranks
    }
    return report
