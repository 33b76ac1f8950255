"""Hyphenation options, environment defaults, and .env loading.

WHY: Every knob that changes segmentation output (separator, minimum word
length, rule mode, onset toggles, synizesis merging, the nasal/aspirate
correction) lives in one frozen, hashable options object. The rule
engine's cache keys on it, so two calls with equal options must share
entries and no caller may mutate options mid-run.

HOW: python-dotenv loads the .env file on import. HyphenationOptions is a
frozen dataclass validated in __post_init__. default_options() reads the
GREEK_HYPHEN_* environment variables at call time and applies keyword
overrides on top.

RULES:
- SOFT_HYPHEN (U+00AD) is the default separator
- min_length must be a non-negative int; separator must be a str
- Boolean env values accept 1/true/yes/on (case-insensitive)
- A malformed GREEK_HYPHEN_MIN_LENGTH raises ValueError naming the variable
- CACHE_ENABLED and LEXICON_DIR are read once on import
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

# Load .env from the directory the program is run from
load_dotenv()

SOFT_HYPHEN = "\u00ad"
"""Invisible unless the line breaks there."""

DEFAULT_MIN_LENGTH = 2

_TRUE_VALUES = {"1", "true", "yes", "on"}

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_SEPARATOR = "GREEK_HYPHEN_SEPARATOR"
ENV_MIN_LENGTH = "GREEK_HYPHEN_MIN_LENGTH"
ENV_USE_RULES = "GREEK_HYPHEN_USE_RULES"
ENV_QUICK_SYNIZESIS = "GREEK_HYPHEN_QUICK_SYNIZESIS"
ENV_CACHE = "GREEK_HYPHEN_CACHE"
ENV_LEXICON_DIR = "GREEK_HYPHEN_LEXICON_DIR"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


CACHE_ENABLED = _parse_bool(os.getenv(ENV_CACHE, "true"))
LEXICON_DIR: Optional[str] = os.getenv(ENV_LEXICON_DIR) or None


@dataclass(frozen=True)
class HyphenationOptions:
    """Everything that affects the segmented output of a word.

    WHY: The options are part of every cache key, so they must be
    immutable and hashable.

    RULES:
    - separator: string inserted at each syllable boundary
    - min_length: words with fewer tokens than this are left untouched
    - use_rules: route words through the exception rules first
    - combine_dn / combine_kv / combine_pf / combine_fk: each adds one
      extra legal onset pair (δν, κβ, πφ, φκ and their Latin spellings)
    - quick_synizesis: plain mode keeps synizesis-prone vowel pairs together
    - nasal_aspirate_fix: re-split nasal+stop before an aspirate 'h'
    """

    separator: str = SOFT_HYPHEN
    min_length: int = DEFAULT_MIN_LENGTH
    use_rules: bool = False
    combine_dn: bool = False
    combine_kv: bool = False
    combine_pf: bool = False
    combine_fk: bool = True
    quick_synizesis: bool = False
    nasal_aspirate_fix: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str):
            raise ValueError(
                "separator must be a string, got {}".format(type(self.separator).__name__)
            )
        if isinstance(self.min_length, bool) or not isinstance(self.min_length, int):
            raise ValueError(
                "min_length must be an integer, got {!r}".format(self.min_length)
            )
        if self.min_length < 0:
            raise ValueError(
                "min_length must not be negative, got {}".format(self.min_length)
            )


OPTION_NAMES = frozenset(f.name for f in fields(HyphenationOptions))


def load_options_from_env(environ: Optional[Mapping[str, str]] = None) -> HyphenationOptions:
    """Build HyphenationOptions from GREEK_HYPHEN_* variables.

    WHY: Deployments set defaults once (for example a visible '-' separator
    for debugging) instead of passing flags everywhere.

    HOW: Reads the given mapping (os.environ by default). Unset variables
    keep the dataclass defaults.

    Raises:
        ValueError: If GREEK_HYPHEN_MIN_LENGTH is not a non-negative integer.
    """
    env = os.environ if environ is None else environ
    kwargs: dict = {}

    if ENV_SEPARATOR in env:
        kwargs["separator"] = env[ENV_SEPARATOR]

    raw_min = env.get(ENV_MIN_LENGTH, "").strip()
    if raw_min:
        try:
            kwargs["min_length"] = int(raw_min)
        except ValueError:
            raise ValueError(
                "{} must be an integer, got {!r}".format(ENV_MIN_LENGTH, raw_min)
            )

    if ENV_USE_RULES in env:
        kwargs["use_rules"] = _parse_bool(env[ENV_USE_RULES])
    if ENV_QUICK_SYNIZESIS in env:
        kwargs["quick_synizesis"] = _parse_bool(env[ENV_QUICK_SYNIZESIS])

    return HyphenationOptions(**kwargs)


def default_options(**overrides: Any) -> HyphenationOptions:
    """Return the environment defaults with keyword overrides applied.

    Raises:
        ValueError: On an unknown option name or an invalid value.
    """
    unknown = set(overrides) - OPTION_NAMES
    if unknown:
        raise ValueError("Unknown option(s): {}".format(", ".join(sorted(unknown))))
    return replace(load_options_from_env(), **overrides)
