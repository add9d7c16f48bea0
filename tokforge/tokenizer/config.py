"""LoaderConfig dataclass controlling where online loads fetch and cache."""

from __future__ import annotations

import os
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from .constants import CACHE_DIR_ENV, DEFAULT_CACHE_SUBDIR, TIKTOKEN_CACHE_DIR_ENV
from .encodings import EncodingDescriptor, resolve_encoding


def default_cache_dir() -> Path:
    """``$TOKFORGE_CACHE_DIR``, else ``$TIKTOKEN_CACHE_DIR``, else a temp dir."""
    for env in (CACHE_DIR_ENV, TIKTOKEN_CACHE_DIR_ENV):
        value = os.environ.get(env)
        if value:
            return Path(value)
    return Path(tempfile.gettempdir()) / DEFAULT_CACHE_SUBDIR


@dataclass
class LoaderConfig:
    """Configuration for online tokenizer loading.

    Validates overrides in ``__post_init__`` so a typo in an encoding
    name is caught before any download starts.
    """

    cache_dir: Path = field(default_factory=default_cache_dir)
    verify_hash: bool = True
    # encoding name -> mirror URL or local path
    vocab_url_overrides: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        if self.vocab_url_overrides is None:
            self.vocab_url_overrides = {}
        for name, url in self.vocab_url_overrides.items():
            resolve_encoding(name)
            if not url:
                raise ValueError(f"Empty vocabulary URL override for {name!r}")

    def vocab_source(self, descriptor: EncodingDescriptor) -> tuple[str, str | None]:
        """Return ``(url, expected_sha256)`` for *descriptor*.

        Overridden sources are not hash-checked; their content is not
        the published blob.
        """
        override = self.vocab_url_overrides.get(descriptor.name.value)
        if override is not None:
            return override, None
        if descriptor.vocab_url is None:
            raise ValueError(
                f"Encoding {descriptor.name.value!r} has no vocabulary URL; "
                f"set vocab_url_overrides or load it from a file"
            )
        return descriptor.vocab_url, descriptor.vocab_hash if self.verify_hash else None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoaderConfig":
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        data = asdict(self)
        data["cache_dir"] = str(self.cache_dir)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
