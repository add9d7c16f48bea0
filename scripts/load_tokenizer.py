"""Load a tokenizer online or offline and print a summary.

Usage:
    python -m scripts.load_tokenizer --name o200k_harmony
    python -m scripts.load_tokenizer --name o200k_harmony --file o200k_base.tiktoken
    python -m scripts.load_tokenizer --name cl100k_base --threads 8
    python -m scripts.load_tokenizer --name o200k_base --config loader.yaml -v
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tokforge.tokenizer import (
    BPETokenizer,
    LoadError,
    LoaderConfig,
    known_encodings,
    load_from_file,
    load_safe,
)


def _setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    log = logging.getLogger("tokforge")
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


def _print_summary(tok: BPETokenizer) -> None:
    reserved = sum(1 for t in tok.special_tokens if t.startswith("<|reserved_"))
    print(f"  Encoding:       {tok.name}")
    print(f"  BPE tokens:     {tok.vocab_size:,}")
    print(f"  Special tokens: {tok.num_special_tokens:,} ({reserved:,} reserved)")
    print(f"  ID space:       {tok.n_vocab:,}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Load a BPE tokenizer by name or from a local vocabulary file"
    )
    parser.add_argument(
        "--name",
        required=True,
        help=f"Encoding name ({', '.join(known_encodings())})",
    )
    parser.add_argument(
        "--file", "-f",
        default=None,
        help="Local .tiktoken vocabulary file (offline, no network)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML LoaderConfig for online loading",
    )
    parser.add_argument(
        "--threads", "-t",
        type=int,
        default=1,
        help="Number of concurrent load calls (default: 1)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    if args.threads < 1:
        parser.error("--threads must be >= 1")
    _setup_logging(args.verbose)

    if args.file:
        mode = f"offline ({args.file})"

        def load() -> BPETokenizer:
            return load_from_file(args.file, args.name)
    else:
        config = LoaderConfig.from_yaml(args.config) if args.config else LoaderConfig()
        mode = f"online (cache: {config.cache_dir})"

        def load() -> BPETokenizer:
            return load_safe(args.name, config=config)

    print("=" * 60)
    print(f"Loading {args.name}: {mode}, {args.threads} thread(s)")
    print("=" * 60)

    t_start = time.time()
    try:
        with ThreadPoolExecutor(max_workers=args.threads) as pool:
            futures = [pool.submit(load) for _ in range(args.threads)]
            results = [f.result() for f in futures]
    except LoadError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    elapsed = time.time() - t_start

    _print_summary(results[0])
    distinct = {(r.name, r.n_vocab, tuple(sorted(r.special_tokens.items()))) for r in results}
    print(f"  Loaded in:      {elapsed:.2f}s ({len(distinct)} distinct result(s))")


if __name__ == "__main__":
    main()
