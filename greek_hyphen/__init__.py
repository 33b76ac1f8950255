"""Greek and Greeklish syllable hyphenation.

WHY: Typesetting and caption tools need to know where Greek words may
break. Greek is also routinely written in Latin letters (Greeklish), so
both alphabets, and words mixing them, must segment the same way.

HOW: Three layers:
  lexicon: JSON grammar, onset whitelist, synizesis pairs and exception
    rules, validated with jsonschema and compiled once
  core: tokenizer, plain syllabifier, rule engine, cache
  segmenter: splits text into words and routes each to a mode

RULES:
- hyphenate() only inserts separators; it never changes the text
- A broken lexicon fails at load time, never mid-text
"""

from greek_hyphen.config import SOFT_HYPHEN, HyphenationOptions, default_options
from greek_hyphen.core.cache import HyphenationCache, MaxEntries, NoEviction
from greek_hyphen.lexicon import LexiconError, load_lexicon
from greek_hyphen.segmenter import Hyphenator, hyphenate

__version__ = "0.1.0"

__all__ = [
    "SOFT_HYPHEN",
    "HyphenationCache",
    "HyphenationOptions",
    "Hyphenator",
    "LexiconError",
    "MaxEntries",
    "NoEviction",
    "default_options",
    "hyphenate",
    "load_lexicon",
]
