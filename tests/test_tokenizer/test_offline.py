"""Tests for offline loading from a local vocabulary file."""

from __future__ import annotations

import socket
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from tokforge.tokenizer import guard, offline
from tokforge.tokenizer.constants import (
    CL100K_SPECIAL_TOKENS,
    O200K_HARMONY_SPECIAL_TOKENS,
)
from tokforge.tokenizer.errors import (
    ConfigurationError,
    ConstructionError,
    CoreConstructionFailed,
    InvalidVocabFile,
    UnknownEncodingName,
)
from tokforge.tokenizer.offline import load_from_file
from tokforge.tokenizer.state import LoadProgress, LoadState


@pytest.fixture()
def no_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail the test on any socket connection or vocabulary download."""

    def forbidden(*args: object, **kwargs: object) -> None:
        raise AssertionError("network access attempted")

    monkeypatch.setattr(socket.socket, "connect", forbidden)
    monkeypatch.setattr(socket, "create_connection", forbidden)
    monkeypatch.setattr("tokforge.tokenizer.cache.read_file", forbidden)
    monkeypatch.setattr("tokforge.tokenizer.cache.fetch_vocab", forbidden)
    monkeypatch.setattr("tokforge.tokenizer.online.fetch_vocab", forbidden)


class TestLoadFromFile:
    def test_harmony_cardinality(self, vocab_file: Path) -> None:
        tok = load_from_file(vocab_file, "o200k_harmony")
        assert tok.name == "o200k_harmony"
        assert tok.num_special_tokens == len(O200K_HARMONY_SPECIAL_TOKENS) + 1075
        assert tok.vocab_size == 258

    def test_harmony_special_id_set(self, vocab_file: Path) -> None:
        tok = load_from_file(vocab_file, "o200k_harmony")
        ids = list(tok.special_tokens.values())
        assert len(ids) == len(set(ids))
        assert set(ids) == set(O200K_HARMONY_SPECIAL_TOKENS.values()) | set(
            range(200_014, 201_089)
        )
        assert not set(ids) & set(range(tok.vocab_size))

    def test_default_variant_has_no_reserved_tokens(self, vocab_file: Path) -> None:
        tok = load_from_file(vocab_file, "cl100k_base")
        assert dict(tok.special_tokens) == CL100K_SPECIAL_TOKENS

    def test_o200k_base(self, vocab_file: Path) -> None:
        tok = load_from_file(vocab_file, "o200k_base")
        assert tok.special_tokens["<|endofprompt|>"] == 200_018
        assert tok.n_vocab == 201_089

    def test_str_path(self, vocab_file: Path) -> None:
        assert load_from_file(str(vocab_file), "cl100k_base").vocab_size == 258

    def test_does_not_take_the_guard(self, vocab_file: Path) -> None:
        with guard.acquire():
            tok = load_from_file(vocab_file, "cl100k_base")
        assert tok.vocab_size == 258


class TestNoNetwork:
    @pytest.mark.usefixtures("no_network")
    @pytest.mark.parametrize("name", ["o200k_harmony", "o200k_base", "cl100k_base"])
    def test_success_path(self, vocab_file: Path, name: str) -> None:
        assert load_from_file(vocab_file, name).name == name

    @pytest.mark.usefixtures("no_network")
    def test_failure_paths(self, tmp_path: Path, vocab_file: Path) -> None:
        with pytest.raises(InvalidVocabFile):
            load_from_file(tmp_path / "missing.tiktoken", "o200k_harmony")
        with pytest.raises(UnknownEncodingName):
            load_from_file(vocab_file, "gpt2")


class TestUnknownEncoding:
    def test_fails_before_filesystem(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[object] = []
        monkeypatch.setattr(offline, "parse_vocab_file", lambda p: calls.append(p))

        with pytest.raises(UnknownEncodingName) as excinfo:
            load_from_file(tmp_path / "does-not-exist.tiktoken", "no_such_encoding")
        assert excinfo.value.name == "no_such_encoding"
        assert isinstance(excinfo.value, ConfigurationError)
        assert calls == []

    def test_nonexistent_path_reports_name_not_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_from_file(tmp_path / "nope", "unknown")


class TestInvalidVocab:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidVocabFile):
            load_from_file(tmp_path / "missing.tiktoken", "o200k_harmony")

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.tiktoken"
        path.write_bytes(b"this is not a vocabulary\n")
        with pytest.raises(InvalidVocabFile):
            load_from_file(path, "cl100k_base")

    def test_rank_out_of_range(
        self, make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]
    ) -> None:
        byte_vocab[b"big"] = 2**40
        path = make_vocab_file(byte_vocab)
        with pytest.raises(InvalidVocabFile, match="exceeds"):
            load_from_file(path, "cl100k_base")


class TestConstructionFailure:
    def test_vocab_collides_with_special(
        self, make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]
    ) -> None:
        byte_vocab[b"<|return|>-ish"] = 200_002
        path = make_vocab_file(byte_vocab)
        with pytest.raises(CoreConstructionFailed, match="<\\|return\\|>=200002"):
            load_from_file(path, "o200k_harmony")

    def test_vocab_collides_with_reserved_range(
        self, make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]
    ) -> None:
        byte_vocab[b"late"] = 200_500
        path = make_vocab_file(byte_vocab)
        with pytest.raises(ConstructionError, match="reserved_200500"):
            load_from_file(path, "o200k_harmony")

    def test_same_file_fine_for_variant_without_that_id(
        self, make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]
    ) -> None:
        byte_vocab[b"late"] = 200_500
        path = make_vocab_file(byte_vocab)
        assert load_from_file(path, "cl100k_base").vocab_size == 259

    def test_duplicate_ranks(
        self, make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]
    ) -> None:
        byte_vocab[b"dup"] = 42
        path = make_vocab_file(byte_vocab)
        with pytest.raises(CoreConstructionFailed):
            load_from_file(path, "cl100k_base")


class TestProgress:
    def test_ready(self, vocab_file: Path) -> None:
        progress = LoadProgress("o200k_harmony")
        load_from_file(vocab_file, "o200k_harmony", progress=progress)
        assert progress.history == [
            LoadState.NOT_LOADED,
            LoadState.RESOLVING,
            LoadState.VOCAB_ACQUIRING,
            LoadState.CONSTRUCTING,
            LoadState.READY,
        ]

    @pytest.mark.parametrize(
        ("name", "use_missing", "failed_in"),
        [
            ("gpt2", False, LoadState.RESOLVING),
            ("cl100k_base", True, LoadState.VOCAB_ACQUIRING),
        ],
    )
    def test_error_state(
        self,
        tmp_path: Path,
        vocab_file: Path,
        name: str,
        use_missing: bool,
        failed_in: LoadState,
    ) -> None:
        progress = LoadProgress(name)
        path = tmp_path / "missing" if use_missing else vocab_file
        with pytest.raises(Exception) as excinfo:
            load_from_file(path, name, progress=progress)
        assert progress.state is LoadState.ERROR
        assert progress.history[-2] is failed_in
        assert progress.error is excinfo.value

    def test_construction_error_state(
        self, make_vocab_file: Callable[..., Path], byte_vocab: dict[bytes, int]
    ) -> None:
        byte_vocab[b"clash"] = 100_257
        progress = LoadProgress()
        with pytest.raises(CoreConstructionFailed):
            load_from_file(make_vocab_file(byte_vocab), "cl100k_base", progress=progress)
        assert progress.history[-2:] == [LoadState.CONSTRUCTING, LoadState.ERROR]

    def test_progress_cannot_be_reused(self, vocab_file: Path) -> None:
        progress = LoadProgress()
        load_from_file(vocab_file, "cl100k_base", progress=progress)
        with pytest.raises(RuntimeError):
            load_from_file(vocab_file, "cl100k_base", progress=progress)


class TestParallel:
    def test_many_threads(self, vocab_file: Path) -> None:
        names = ["o200k_harmony", "o200k_base", "cl100k_base"] * 4
        with ThreadPoolExecutor(max_workers=len(names)) as pool:
            results = list(pool.map(lambda n: load_from_file(vocab_file, n), names))
        for name, tok in zip(names, results):
            assert tok.name == name
        harmony = [t for t in results if t.name == "o200k_harmony"]
        assert all(dict(t.special_tokens) == dict(harmony[0].special_tokens) for t in harmony)
