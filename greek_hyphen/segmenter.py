"""Entry point: split text into words and hyphenate each one.

WHY: Callers hand over whole strings (sentences, captions, paragraphs).
Syllabification only makes sense per word, and punctuation and spaces
must come back exactly as they went in.

HOW: The Hyphenator tokenizes the input once. Every maximal run of
non-punctuation tokens is a word. A word with at least min_length tokens
goes to the rule engine (use_rules) or the plain syllabifier; shorter
words and all punctuation are copied through.

RULES:
- Output minus separators equals the input
- One Tokenizer and one RuleEngine per Hyphenator, sharing its cache
- cache=None disables memoization entirely
- options=None means default_options() (environment-aware)
- The module-level hyphenate() shares one lazily built Hyphenator
"""

from __future__ import annotations

import threading
from typing import List, Optional, Sequence

from greek_hyphen import config
from greek_hyphen.config import HyphenationOptions, default_options
from greek_hyphen.core.cache import HyphenationCache
from greek_hyphen.core.ir import SpeechSound, join_sounds
from greek_hyphen.core.plain import syllabify
from greek_hyphen.core.rules import RuleEngine
from greek_hyphen.core.tokenizer import Tokenizer
from greek_hyphen.lexicon import Lexicon, default_lexicon, load_lexicon


class Hyphenator:
    """Hyphenates text with one lexicon and an optional shared cache.

    Rule mode memoizes only through an injected cache. The default is
    cache=None, so a bare Hyphenator() recomputes every word; pass
    HyphenationCache() to memoize. The module-level hyphenate() gets a
    cache unless GREEK_HYPHEN_CACHE is false.
    """

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        cache: Optional[HyphenationCache] = None,
    ) -> None:
        self.lexicon = lexicon if lexicon is not None else default_lexicon()
        self.cache = cache
        self.tokenizer = Tokenizer(self.lexicon)
        self.rules = RuleEngine(self.lexicon, self.tokenizer, cache)

    def hyphenate(self, text: str, options: Optional[HyphenationOptions] = None) -> str:
        """Insert syllable separators into every eligible word of text."""
        if options is None:
            options = default_options()
        sounds = self.tokenizer.tokenize(text, options.nasal_aspirate_fix)

        out: List[str] = []
        word: List[SpeechSound] = []
        for sound in sounds:
            if sound.is_punctuation:
                out.append(self._hyphenate_word(word, options))
                out.append(sound.text)
                word = []
            else:
                word.append(sound)
        out.append(self._hyphenate_word(word, options))
        return "".join(out)

    def _hyphenate_word(self, word: Sequence[SpeechSound], options: HyphenationOptions) -> str:
        if len(word) < options.min_length:
            return join_sounds(word)
        if options.use_rules:
            return self.rules.segment(word, options)
        return syllabify(word, self.lexicon, options)


_DEFAULT_HYPHENATOR: Optional[Hyphenator] = None
_DEFAULT_LOCK = threading.Lock()


def default_hyphenator() -> Hyphenator:
    """Return the shared Hyphenator, building it on first use.

    It uses GREEK_HYPHEN_LEXICON_DIR when set and keeps a process-lifetime
    cache unless GREEK_HYPHEN_CACHE is false.
    """
    global _DEFAULT_HYPHENATOR
    with _DEFAULT_LOCK:
        if _DEFAULT_HYPHENATOR is None:
            lexicon = load_lexicon(config.LEXICON_DIR) if config.LEXICON_DIR else default_lexicon()
            cache = HyphenationCache() if config.CACHE_ENABLED else None
            _DEFAULT_HYPHENATOR = Hyphenator(lexicon, cache)
        return _DEFAULT_HYPHENATOR


def hyphenate(text: str, options: Optional[HyphenationOptions] = None) -> str:
    """Hyphenate text with the shared default Hyphenator."""
    return default_hyphenator().hyphenate(text, options)
