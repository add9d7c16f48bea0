"""Resolve -> acquire vocabulary -> construct, shared by both loaders."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .encodings import EncodingDescriptor, EncodingName, resolve_encoding
from .special_tokens import build_special_tokens
from .state import LoadProgress, LoadState
from .wrapper import BPETokenizer, build_tokenizer

_log = logging.getLogger("tokforge.loader")

VocabSource = Callable[[EncodingDescriptor], dict[bytes, int]]


def run_load(
    name: str | EncodingName,
    acquire_vocab: VocabSource,
    progress: LoadProgress | None = None,
) -> BPETokenizer:
    """Drive one load request through its states.

    *acquire_vocab* is only called once *name* has resolved, so an
    unknown name never reaches the filesystem or the network.
    """
    if progress is None:
        progress = LoadProgress(str(getattr(name, "value", name)))
    progress.advance(LoadState.RESOLVING)
    try:
        descriptor = resolve_encoding(name)

        progress.advance(LoadState.VOCAB_ACQUIRING)
        vocab = acquire_vocab(descriptor)

        progress.advance(LoadState.CONSTRUCTING)
        specials = build_special_tokens(descriptor)
        tokenizer = build_tokenizer(
            descriptor.name, vocab, specials, descriptor.pattern
        )
    except Exception as exc:
        _log.debug(
            "Load of %r failed in %s: %s", progress.label, progress.state.value, exc
        )
        progress.fail(exc)
        raise

    progress.advance(LoadState.READY)
    _log.info(
        "Loaded %s (%d tokens, %d special)",
        tokenizer.name,
        tokenizer.vocab_size,
        tokenizer.num_special_tokens,
    )
    return tokenizer
