"""Offline loading from a local vocabulary file.

No lock, no cache and no network: the only I/O is reading *path*.  Every
call builds its own vocabulary and special-token table, so any number
of threads may load in parallel.
"""

from __future__ import annotations

from pathlib import Path

from .encodings import EncodingName
from .pipeline import run_load
from .state import LoadProgress
from .vocab import parse_vocab_file
from .wrapper import BPETokenizer


def load_from_file(
    path: str | Path,
    name: str | EncodingName,
    *,
    progress: LoadProgress | None = None,
) -> BPETokenizer:
    """Build the *name* tokenizer from the vocabulary file at *path*.

    Raises
    ------
    UnknownEncodingName
        If *name* is not a known encoding.  Checked before *path* is
        touched.
    InvalidVocabFile
        If *path* is missing, unreadable or malformed.
    CoreConstructionFailed
        If the vocabulary and special tokens violate an ID invariant.
    """
    return run_load(name, lambda _descriptor: parse_vocab_file(path), progress)
