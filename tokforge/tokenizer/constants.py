"""Central constants describing every encoding variant tokforge can build.

Split patterns, special-token tables, reserved ID intervals and the
public vocabulary locations all live here so that the catalog, the
loaders and the tests import from a single source of truth.
"""

from __future__ import annotations

# ── Reserved-token naming ──────────────────────────────────────────
# Placeholder tokens carry their absolute ID, e.g. ``<|reserved_200014|>``.
RESERVED_TOKEN_TEMPLATE: str = "<|reserved_{id}|>"

# ── Ranks ──────────────────────────────────────────────────────────
# The BPE core stores ranks as unsigned 32-bit integers.
MAX_RANK: int = 2**32 - 1

# ── Pre-tokenization regexes ───────────────────────────────────────
# cl100k_base (GPT-4).  Digits are grouped in runs of up to three.
CL100K_PATTERN: str = (
    r"(?i:'s|'t|'re|'ve|'m|'ll|'d)"
    r"|[^\r\n\p{L}\p{N}]?\p{L}+"
    r"|\p{N}{1,3}"
    r"| ?[^\s\p{L}\p{N}]+[\r\n]*"
    r"|\s*[\r\n]+"
    r"|\s+(?!\S)"
    r"|\s+"
)

# o200k_base (GPT-4o).  Case-aware word splitting with contractions
# folded into the word; shared by o200k_harmony.
O200K_PATTERN: str = "|".join(
    [
        r"[^\r\n\p{L}\p{N}]?[\p{Lu}\p{Lt}\p{Lm}\p{Lo}\p{M}]*[\p{Ll}\p{Lm}\p{Lo}\p{M}]+(?i:'s|'t|'re|'ve|'m|'ll|'d)?",
        r"[^\r\n\p{L}\p{N}]?[\p{Lu}\p{Lt}\p{Lm}\p{Lo}\p{M}]+[\p{Ll}\p{Lm}\p{Lo}\p{M}]*(?i:'s|'t|'re|'ve|'m|'ll|'d)?",
        r"\p{N}{1,3}",
        r" ?[^\s\p{L}\p{N}]+[\r\n/]*",
        r"\s*[\r\n]+",
        r"\s+(?!\S)",
        r"\s+",
    ]
)

# ── Base special tokens ────────────────────────────────────────────
CL100K_SPECIAL_TOKENS: dict[str, int] = {
    "<|endoftext|>": 100_257,
    "<|fim_prefix|>": 100_258,
    "<|fim_middle|>": 100_259,
    "<|fim_suffix|>": 100_260,
    "<|endofprompt|>": 100_276,
}

O200K_SPECIAL_TOKENS: dict[str, int] = {
    "<|endoftext|>": 199_999,
    "<|endofprompt|>": 200_018,
}

# Harmony response format.  Named tokens sit in 199998-200013 with
# reserved fillers in the gaps; the open-ended reserved block follows.
O200K_HARMONY_SPECIAL_TOKENS: dict[str, int] = {
    "<|startoftext|>": 199_998,
    "<|endoftext|>": 199_999,
    "<|reserved_200000|>": 200_000,
    "<|reserved_200001|>": 200_001,
    "<|return|>": 200_002,
    "<|constrain|>": 200_003,
    "<|reserved_200004|>": 200_004,
    "<|channel|>": 200_005,
    "<|start|>": 200_006,
    "<|end|>": 200_007,
    "<|message|>": 200_008,
    "<|reserved_200009|>": 200_009,
    "<|reserved_200010|>": 200_010,
    "<|reserved_200011|>": 200_011,
    "<|call|>": 200_012,
    "<|reserved_200013|>": 200_013,
}

# ── Reserved ID intervals (closed) ─────────────────────────────────
O200K_HARMONY_RESERVED: tuple[int, int] = (200_014, 201_088)  # 1075 IDs
O200K_BASE_RESERVED: tuple[int, int] = (199_998, 201_088)

# ── Public vocabulary blobs ────────────────────────────────────────
VOCAB_BASE_URL: str = "https://openaipublic.blob.core.windows.net/encodings"
CL100K_VOCAB_URL: str = f"{VOCAB_BASE_URL}/cl100k_base.tiktoken"
CL100K_VOCAB_SHA256: str = (
    "223921b76ee99bde995b7ff738513eef100fb51d18c93597a113bcffe865b2a7"
)
O200K_VOCAB_URL: str = f"{VOCAB_BASE_URL}/o200k_base.tiktoken"
O200K_VOCAB_SHA256: str = (
    "446a9538cb6c348e3516120d7c08b09f57c36495e2acfffe59a5bf8b0cfb1a2d"
)

# ── Cache ──────────────────────────────────────────────────────────
CACHE_DIR_ENV: str = "TOKFORGE_CACHE_DIR"
TIKTOKEN_CACHE_DIR_ENV: str = "TIKTOKEN_CACHE_DIR"
DEFAULT_CACHE_SUBDIR: str = "tokforge-cache"
