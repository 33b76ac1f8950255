"""Shared test fixtures for the greek_hyphen test suite.

WHY: Almost every test needs the packaged lexicon, options with a visible
separator, and a fresh Hyphenator. Centralizing them keeps expectations
readable ("κα-λη-μέ-ρα" instead of soft hyphens) and avoids reloading
the lexicon in every test.

HOW: The packaged lexicon is loaded once per session. Option and
lexicon-directory factories build per-test variations. An autouse
fixture clears GREEK_HYPHEN_* variables so a developer's environment
cannot change expected output.

RULES:
- Tests use "-" as the separator unless they test the default
- Each test gets its own Hyphenator and cache (no shared mutable state)
- Custom lexicon files are written under tmp_path
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from greek_hyphen.config import HyphenationOptions
from greek_hyphen.core.cache import HyphenationCache
from greek_hyphen.core.tokenizer import Tokenizer
from greek_hyphen.lexicon import DATA_DIR, Lexicon, load_lexicon
from greek_hyphen.segmenter import Hyphenator

ENV_VARS = (
    "GREEK_HYPHEN_SEPARATOR",
    "GREEK_HYPHEN_MIN_LENGTH",
    "GREEK_HYPHEN_USE_RULES",
    "GREEK_HYPHEN_QUICK_SYNIZESIS",
    "GREEK_HYPHEN_CACHE",
    "GREEK_HYPHEN_LEXICON_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove GREEK_HYPHEN_* variables for every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def lexicon() -> Lexicon:
    """The packaged lexicon, loaded once."""
    return load_lexicon()


@pytest.fixture
def tokenizer(lexicon) -> Tokenizer:
    return Tokenizer(lexicon)


@pytest.fixture
def make_options() -> Callable[..., HyphenationOptions]:
    """Factory for options with '-' as separator and keyword overrides."""

    def _make(**kwargs: Any) -> HyphenationOptions:
        kwargs.setdefault("separator", "-")
        return HyphenationOptions(**kwargs)

    return _make


@pytest.fixture
def hyphenator(lexicon) -> Hyphenator:
    """A Hyphenator with its own cache."""
    return Hyphenator(lexicon, HyphenationCache())


@pytest.fixture
def packaged_document() -> Callable[[str], Dict[str, Any]]:
    """Load a packaged lexicon document as a fresh dict for editing."""

    def _load(name: str) -> Dict[str, Any]:
        with open(DATA_DIR / "{}.json".format(name), encoding="utf-8") as f:
            return json.load(f)

    return _load


@pytest.fixture
def lexicon_dir(tmp_path) -> Callable[..., Path]:
    """Write lexicon override documents into tmp_path and return the dir.

    Dict values are dumped as JSON; str values are written verbatim so
    tests can produce broken JSON.
    """

    def _write(**documents: Any) -> Path:
        for name, content in documents.items():
            path = tmp_path / "{}.json".format(name)
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")
        return tmp_path

    return _write
