"""Online loading by encoding name, serialized through the load guard.

The guard is held for the whole resolve + download/cache + construct
sequence, not just the download, so a second caller cannot start
redundant work while the first is still building.  The guard is global:
loads of different encodings are serialized too.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from . import guard
from .cache import fetch_vocab
from .config import LoaderConfig
from .encodings import EncodingDescriptor, EncodingName
from .pipeline import run_load
from .state import LoadProgress
from .vocab import parse_vocab_bytes
from .wrapper import BPETokenizer

_log = logging.getLogger("tokforge.loader")

Pipeline = Callable[[str, LoaderConfig], BPETokenizer]


def load_from_name(
    name: str | EncodingName,
    config: LoaderConfig | None = None,
    *,
    progress: LoadProgress | None = None,
) -> BPETokenizer:
    """Resolve, fetch (through the cache) and build *name*.

    Not synchronized on its own; call it through :func:`load_safe`.
    """
    config = config or LoaderConfig()

    def acquire(descriptor: EncodingDescriptor) -> dict[bytes, int]:
        url, expected_hash = config.vocab_source(descriptor)
        data = fetch_vocab(url, expected_hash, config.cache_dir)
        return parse_vocab_bytes(data, source=url)

    return run_load(name, acquire, progress)


def load_safe(
    name: str | EncodingName,
    *,
    config: LoaderConfig | None = None,
    pipeline: Pipeline | None = None,
) -> BPETokenizer:
    """Thread-safe online load of *name*.

    Blocks while another thread holds the load guard.  Errors from
    *pipeline* (default :func:`load_from_name`) are re-raised unchanged
    and the guard is released on every path.
    """
    config = config or LoaderConfig()
    pipeline = pipeline or load_from_name
    label = getattr(name, "value", name)
    _log.debug("Waiting for load guard: %s", label)
    with guard.acquire():
        _log.debug("Load guard acquired: %s", label)
        return pipeline(label, config)
