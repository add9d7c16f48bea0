"""Exception hierarchy for tokenizer loading.

Every failure a loader can report is a :class:`LoadError` subclass, split
by who can fix it: the caller (:class:`ConfigurationError`), the data on
disk (:class:`VocabFileError`) or the vocabulary/special-token tables
themselves (:class:`ConstructionError`).  Transport errors raised while
downloading are not wrapped and reach the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path


class LoadError(Exception):
    """Base class for all tokenizer loading failures."""


class ConfigurationError(LoadError):
    """The request itself is invalid; retrying will not help."""


class VocabFileError(LoadError):
    """The vocabulary data could not be read or parsed."""


class ConstructionError(LoadError):
    """The parsed inputs violate a tokenizer invariant."""


class UnknownEncodingName(ConfigurationError):
    """Raised when a name is not in the encoding catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown encoding name: {name!r}")


class InvalidVocabFile(VocabFileError):
    """Raised when a vocabulary file is missing, unreadable or malformed.

    ``line`` is the 1-based line number of the offending entry, or
    ``None`` when the failure is not tied to a single line.
    """

    def __init__(
        self,
        details: str,
        *,
        path: str | Path | None = None,
        line: int | None = None,
    ) -> None:
        self.details = details
        self.path = None if path is None else str(path)
        self.line = line
        where = self.path or "<bytes>"
        if line is not None:
            where = f"{where}:{line}"
        super().__init__(f"Invalid vocabulary file {where}: {details}")


class CoreConstructionFailed(ConstructionError):
    """Raised when the tokenizer cannot be built from its inputs."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Tokenizer construction failed: {details}")
