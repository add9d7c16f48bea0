"""Shared fixtures: tiny byte-level vocabularies written in .tiktoken format."""

from __future__ import annotations

import base64
from collections.abc import Callable
from pathlib import Path

import pytest


def encode_vocab(ranks: dict[bytes, int]) -> bytes:
    lines = [
        f"{base64.b64encode(token).decode()} {rank}"
        for token, rank in sorted(ranks.items(), key=lambda kv: kv[1])
    ]
    return ("\n".join(lines) + "\n").encode()


@pytest.fixture()
def byte_vocab() -> dict[bytes, int]:
    """256 single bytes plus two merges."""
    ranks = {bytes([i]): i for i in range(256)}
    ranks[b"he"] = 256
    ranks[b"ll"] = 257
    return ranks


@pytest.fixture()
def make_vocab_file(tmp_path: Path) -> Callable[..., Path]:
    def _make(ranks: dict[bytes, int], name: str = "vocab.tiktoken") -> Path:
        path = tmp_path / name
        path.write_bytes(encode_vocab(ranks))
        return path

    return _make


@pytest.fixture()
def vocab_file(make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]) -> Path:
    return make_vocab_file(byte_vocab)


@pytest.fixture()
def vocab_bytes(byte_vocab: dict[bytes, int]) -> bytes:
    return encode_vocab(byte_vocab)
