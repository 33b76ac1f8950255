"""Exception engine (rule mode): literal overrides for irregular words.

WHY: Adjacency rules cannot know that γιαγιά is two syllables, or that
-ιά after a consonant is usually one (synizesis). Those words need a
literal override, but only for the part of the word the rule is about;
prefixes and suffixes around it should still be segmented normally.

HOW: For a word, the first lexicon rule whose pattern matches the whole
word renders three spans from its template:
  left : text before the override, segmented again recursively
  core : the override itself, boundary markers replaced by the separator
  right: text after the override, segmented again recursively
Words matching no rule go to the plain syllabifier. Every result is
stored in the injected cache, including intermediate remainders.

RULES:
- First matching rule wins; rule order is the lexicon file order
- Remainders are re-tokenized from text, never sliced from old tokens
- Recursion deeper than the top-level word's character count, or than
  MAX_RULE_DEPTH for long words, falls back to plain mode and logs a warning
- Guard fallbacks are not cached
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from greek_hyphen.config import HyphenationOptions
from greek_hyphen.core.cache import HyphenationCache
from greek_hyphen.core.ir import SpeechSound, join_sounds
from greek_hyphen.core.plain import syllabify
from greek_hyphen.core.tokenizer import Tokenizer
from greek_hyphen.lexicon.models import Lexicon

logger = logging.getLogger(__name__)

# Each nesting level costs two Python frames; stay well under the
# interpreter's recursion limit.
MAX_RULE_DEPTH = 100


class RuleEngine:
    """Segments words through the lexicon's exception rules."""

    def __init__(
        self,
        lexicon: Lexicon,
        tokenizer: Optional[Tokenizer] = None,
        cache: Optional[HyphenationCache] = None,
    ) -> None:
        self.lexicon = lexicon
        self.tokenizer = tokenizer if tokenizer is not None else Tokenizer(lexicon)
        self.cache = cache

    def segment(self, sounds: Sequence[SpeechSound], options: HyphenationOptions) -> str:
        """Segment one word, applying exception rules where they match."""
        word = join_sounds(sounds)
        max_depth = min(len(word), MAX_RULE_DEPTH)
        return self._segment(sounds, word, options, depth=0, max_depth=max_depth)

    def _segment_text(
        self,
        text: str,
        options: HyphenationOptions,
        depth: int,
        max_depth: int,
    ) -> str:
        if not text:
            return ""
        sounds = self.tokenizer.tokenize(text, options.nasal_aspirate_fix)
        return self._segment(sounds, text, options, depth, max_depth)

    def _segment(
        self,
        sounds: Sequence[SpeechSound],
        word: str,
        options: HyphenationOptions,
        depth: int,
        max_depth: int,
    ) -> str:
        if self.cache is not None:
            cached = self.cache.get(word, options)
            if cached is not None:
                return cached

        if depth > max_depth:
            logger.warning(
                "Rule recursion deeper than %d for %r, using plain segmentation",
                max_depth, word,
            )
            return syllabify(sounds, self.lexicon, options)

        found = self.lexicon.match_rule(word)
        if found is None:
            result = syllabify(sounds, self.lexicon, options)
        else:
            rule, match = found
            logger.debug("Rule %d (%s) matched %r", rule.index, rule.pattern.pattern, word)
            left = match.expand(rule.left)
            core = match.expand(rule.core).replace(self.lexicon.boundary_marker, options.separator)
            right = match.expand(rule.right)
            result = (
                self._segment_text(left, options, depth + 1, max_depth)
                + core
                + self._segment_text(right, options, depth + 1, max_depth)
            )

        if self.cache is not None:
            result = self.cache.put(word, options, result)
        return result
