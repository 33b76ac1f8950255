"""Linguistic data for the hyphenator: grammar, onsets, synizesis, rules.

WHY: The syllabifiers only need four capabilities from their data. This
package owns the JSON resources, their schemas, and the compiled Lexicon
object that exposes those capabilities.

HOW: load_lexicon() reads and validates the packaged files (or a user
override directory) and returns a Lexicon. default_lexicon() keeps one
packaged Lexicon for the process.

RULES:
- Loading either succeeds completely or raises LexiconError
- Nothing in this package segments text
"""

from greek_hyphen.lexicon.errors import LexiconError
from greek_hyphen.lexicon.loader import (
    DATA_DIR,
    SCHEMA_DIR,
    default_lexicon,
    load_lexicon,
    split_marker_template,
)
from greek_hyphen.lexicon.models import ExceptionRule, Lexicon

__all__ = [
    "DATA_DIR",
    "SCHEMA_DIR",
    "ExceptionRule",
    "Lexicon",
    "LexiconError",
    "default_lexicon",
    "load_lexicon",
    "split_marker_template",
]
