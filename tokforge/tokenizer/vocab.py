"""Strict parser for ``.tiktoken`` vocabulary files.

Each non-blank line holds a base64-encoded token and its integer rank,
separated by a single space::

    IQ== 0
    Ig== 1

Any malformed line, repeated token, or unreadable file is reported as
:class:`InvalidVocabFile`.  Parsing is purely local; nothing here can
reach the network.
"""

from __future__ import annotations

import base64
import binascii
from pathlib import Path

from .constants import MAX_RANK
from .errors import InvalidVocabFile


def parse_vocab_bytes(
    data: bytes,
    source: str | Path | None = None,
) -> dict[bytes, int]:
    """Parse raw vocabulary *data* into a ``token -> rank`` mapping.

    *source* is only used to label errors.
    """
    ranks: dict[bytes, int] = {}
    for lineno, raw in enumerate(data.splitlines(), start=1):
        if not raw.strip():
            continue
        parts = raw.split()
        if len(parts) != 2:
            raise InvalidVocabFile(
                f"expected '<base64 token> <rank>', got {raw[:60]!r}",
                path=source,
                line=lineno,
            )
        encoded, rank_text = parts
        try:
            token = base64.b64decode(encoded, validate=True)
        except binascii.Error as exc:
            raise InvalidVocabFile(
                f"bad base64 token {encoded[:60]!r}: {exc}",
                path=source,
                line=lineno,
            ) from exc
        if rank_text.startswith(b"-") and rank_text[1:].isdigit():
            raise InvalidVocabFile(
                f"rank must be non-negative, got {rank_text[:30].decode()}",
                path=source,
                line=lineno,
            )
        if not rank_text.isdigit():
            raise InvalidVocabFile(
                f"rank is not an integer: {rank_text[:30]!r}",
                path=source,
                line=lineno,
            )
        rank = int(rank_text)
        if rank > MAX_RANK:
            raise InvalidVocabFile(
                f"rank {rank} exceeds the maximum of {MAX_RANK}",
                path=source,
                line=lineno,
            )
        if token in ranks:
            raise InvalidVocabFile(
                f"token {token!r} appears more than once "
                f"(ranks {ranks[token]} and {rank})",
                path=source,
                line=lineno,
            )
        ranks[token] = rank

    if not ranks:
        raise InvalidVocabFile("file contains no tokens", path=source)
    return ranks


def parse_vocab_file(path: str | Path) -> dict[bytes, int]:
    """Read and parse the vocabulary file at *path*."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InvalidVocabFile(
            f"cannot read file: {exc.strerror or exc}", path=path
        ) from exc
    return parse_vocab_bytes(data, source=path)
