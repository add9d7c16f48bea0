"""Lifecycle tracking for a single load request."""

from __future__ import annotations

import logging
from enum import Enum

_log = logging.getLogger("tokforge.loader")


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    RESOLVING = "resolving"
    VOCAB_ACQUIRING = "vocab_acquiring"
    CONSTRUCTING = "constructing"
    READY = "ready"
    ERROR = "error"


_TRANSITIONS: dict[LoadState, frozenset[LoadState]] = {
    LoadState.NOT_LOADED: frozenset({LoadState.RESOLVING}),
    LoadState.RESOLVING: frozenset({LoadState.VOCAB_ACQUIRING, LoadState.ERROR}),
    LoadState.VOCAB_ACQUIRING: frozenset({LoadState.CONSTRUCTING, LoadState.ERROR}),
    LoadState.CONSTRUCTING: frozenset({LoadState.READY, LoadState.ERROR}),
    LoadState.READY: frozenset(),
    LoadState.ERROR: frozenset(),
}


class LoadProgress:
    """Tracks one request through ``NOT_LOADED -> ... -> READY | ERROR``.

    ``READY`` and ``ERROR`` are terminal; a failed request is retried by
    starting a new one with a fresh ``LoadProgress``.
    """

    def __init__(self, label: str = "") -> None:
        self.label = label
        self.state = LoadState.NOT_LOADED
        self.history: list[LoadState] = [LoadState.NOT_LOADED]
        self.error: BaseException | None = None

    @property
    def done(self) -> bool:
        return self.state in (LoadState.READY, LoadState.ERROR)

    def advance(self, state: LoadState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal load transition {self.state.value} -> {state.value}"
                + (f" for {self.label!r}" if self.label else "")
            )
        _log.debug("%s: %s -> %s", self.label, self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def fail(self, exc: BaseException) -> None:
        """Move to ``ERROR`` and remember *exc*."""
        self.error = exc
        self.advance(LoadState.ERROR)
