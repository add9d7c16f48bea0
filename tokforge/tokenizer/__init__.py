"""tokforge tokenizer loading.

Builds tiktoken BPE tokenizers for a closed catalog of encodings, either
online (by name, downloaded and cached under a process-wide guard) or
offline (from a local ``.tiktoken`` file, no network, fully parallel).
Special-token tables are assembled per encoding, including reserved
``<|reserved_N|>`` ranges, and checked for ID collisions before
construction.
"""

from __future__ import annotations

from .config import LoaderConfig
from .encodings import (
    ENCODING_CATALOG,
    EncodingDescriptor,
    EncodingName,
    ReservedRange,
    known_encodings,
    resolve_encoding,
)
from .errors import (
    ConfigurationError,
    ConstructionError,
    CoreConstructionFailed,
    InvalidVocabFile,
    LoadError,
    UnknownEncodingName,
    VocabFileError,
)
from .offline import load_from_file
from .online import load_from_name, load_safe
from .special_tokens import build_special_tokens
from .state import LoadProgress, LoadState
from .validation import ValidationReport, validate_construction_inputs
from .wrapper import BPETokenizer, build_tokenizer

__all__ = [
    "BPETokenizer",
    "ConfigurationError",
    "ConstructionError",
    "CoreConstructionFailed",
    "ENCODING_CATALOG",
    "EncodingDescriptor",
    "EncodingName",
    "InvalidVocabFile",
    "LoadError",
    "LoadProgress",
    "LoadState",
    "LoaderConfig",
    "ReservedRange",
    "UnknownEncodingName",
    "ValidationReport",
    "VocabFileError",
    "build_special_tokens",
    "build_tokenizer",
    "known_encodings",
    "load_from_file",
    "load_from_name",
    "load_safe",
    "resolve_encoding",
    "validate_construction_inputs",
]

__version__ = "0.1.0"
