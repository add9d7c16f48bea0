"""On-disk cache for downloaded vocabulary blobs.

Blobs are stored under ``cache_dir`` keyed by the SHA-1 of their URL.
Writes go to a temporary file in the same directory and are moved into
place with ``os.replace``, so a reader never sees a truncated blob.
Callers must hold the load guard; concurrent writers are not expected.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from tiktoken.load import check_hash, read_file

_log = logging.getLogger("tokforge.cache")


def cache_path_for(url: str, cache_dir: str | Path) -> Path:
    return Path(cache_dir) / hashlib.sha1(url.encode()).hexdigest()


def _read_cached(path: Path, expected_hash: str | None) -> bytes | None:
    try:
        data = path.read_bytes()
    except (FileNotFoundError, NotADirectoryError):
        return None
    if expected_hash is None or check_hash(data, expected_hash):
        return data
    _log.warning("Discarding cached blob %s: hash mismatch", path)
    path.unlink(missing_ok=True)
    return None


def _write_atomic(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def fetch_vocab(
    url: str,
    expected_hash: str | None,
    cache_dir: str | Path,
) -> bytes:
    """Return the vocabulary blob at *url*, downloading it at most once.

    Raises
    ------
    ValueError
        If a freshly downloaded blob does not match *expected_hash*.
    OSError, requests.RequestException
        Propagated unchanged from the transport or the filesystem.
    """
    path = cache_path_for(url, cache_dir)
    data = _read_cached(path, expected_hash)
    if data is not None:
        _log.debug("Cache hit for %s (%s)", url, path)
        return data

    _log.info("Downloading vocabulary %s", url)
    data = read_file(url)
    if expected_hash is not None and not check_hash(data, expected_hash):
        raise ValueError(
            f"Hash mismatch for data downloaded from {url} "
            f"(expected {expected_hash}). This may indicate a corrupted "
            f"download or a compromised mirror."
        )
    try:
        _write_atomic(path, data)
    except OSError as exc:
        # Non-fatal: the blob in hand has already passed its hash check.
        _log.warning("Could not write vocabulary cache %s: %s", path, exc)
    return data
