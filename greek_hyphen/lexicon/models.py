"""Compiled lexicon: sound grammar, onset whitelist, synizesis pairs, rules.

WHY: The segmentation engine needs four things from its linguistic data
and nothing else: a way to split text into classified speech sounds, a
test for "may this consonant pair start a syllable", a test for "are
these two vowels prone to synizesis", and the ordered exception rules.
Keeping them behind one object lets any data source stand in for the
packaged JSON files.

HOW: The loader builds a Lexicon from validated JSON documents. Onset
matchers depend on four per-call toggles, so one compiled matcher is
built per toggle combination and memoized on the instance (16 at most).

RULES:
- Lexicon data fields are never reassigned after construction
- The onset matcher memo is filled under a lock
- Onset tests look at the END of the concatenated pair, so a nasal+stop
  digraph contributes its stop (μπ + τ is judged as πτ)
- Exception rules are tried in declaration order; first full match wins
- Rule templates are stored already split into left / core / right
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Tuple

if TYPE_CHECKING:
    from greek_hyphen.config import HyphenationOptions


# Toggle keys in onsets.json, in the order of the option fields.
TOGGLE_KEYS: Tuple[str, ...] = ("dn", "kv", "pf", "fk")


@dataclass(frozen=True)
class ExceptionRule:
    """One exception rule: a full-match pattern and a three-part template.

    Attributes:
        index: Position in the rule file (0-based), used for logging.
        pattern: Compiled pattern, matched against the whole word.
        left: Template for the span left of the override. Re-segmented.
        core: Template for the literal override. Contains boundary markers.
        right: Template for the span right of the override. Re-segmented.
    """

    index: int
    pattern: re.Pattern
    left: str
    core: str
    right: str


@dataclass
class Lexicon:
    """Compiled linguistic data consumed by the tokenizer and syllabifiers.

    Attributes:
        sound_re: Alternation grammar with named groups vowel, consonant,
                  punctuation and other.
        nasal_stop_re: Pattern with two groups (nasal, stop) matched against
                       a consonant token preceding an aspirate marker.
        aspirate_markers: Lowercased token texts that act as aspirate markers.
        onsets: Legal onsets for a consonant pair, always enabled.
        onset_toggles: Extra onsets keyed by toggle name (dn, kv, pf, fk).
        synizesis_pairs: Lowercased vowel pairs prone to synizesis.
        rules: Ordered exception rules.
        boundary_marker: Marker used inside rule cores for a boundary.
    """

    sound_re: re.Pattern
    nasal_stop_re: re.Pattern
    aspirate_markers: frozenset
    onsets: Tuple[str, ...]
    onset_toggles: Dict[str, Tuple[str, ...]]
    synizesis_pairs: frozenset
    rules: Tuple[ExceptionRule, ...]
    boundary_marker: str = "-"
    _onset_matchers: Dict[Tuple[bool, ...], re.Pattern] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _onset_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def onset_matcher(
        self,
        combine_dn: bool,
        combine_kv: bool,
        combine_pf: bool,
        combine_fk: bool,
    ) -> re.Pattern:
        """Return the compiled onset whitelist for one toggle combination."""
        key = (combine_dn, combine_kv, combine_pf, combine_fk)
        with self._onset_lock:
            matcher = self._onset_matchers.get(key)
            if matcher is not None:
                return matcher
            onsets = list(self.onsets)
            for enabled, name in zip(key, TOGGLE_KEYS):
                if enabled:
                    onsets.extend(self.onset_toggles.get(name, ()))
            # Longest first so a three-letter onset is not shadowed.
            onsets.sort(key=len, reverse=True)
            if onsets:
                body = "|".join(re.escape(o) for o in onsets)
                matcher = re.compile(r"(?:{})\Z".format(body), re.IGNORECASE)
            else:
                matcher = re.compile(r"(?!)")
            self._onset_matchers[key] = matcher
        return matcher

    def is_legal_onset(self, pair: str, options: "HyphenationOptions") -> bool:
        """True if the concatenated consonant pair may start a syllable."""
        matcher = self.onset_matcher(
            options.combine_dn,
            options.combine_kv,
            options.combine_pf,
            options.combine_fk,
        )
        return matcher.search(pair) is not None

    def is_synizesis_prone(self, pair: str) -> bool:
        return pair.lower() in self.synizesis_pairs

    def is_aspirate_marker(self, text: str) -> bool:
        return text.lower() in self.aspirate_markers

    def match_rule(self, text: str) -> Optional[Tuple[ExceptionRule, re.Match]]:
        """Return the first rule that fully matches text, with its match."""
        for rule in self.rules:
            match = rule.pattern.fullmatch(text)
            if match is not None:
                return rule, match
        return None
