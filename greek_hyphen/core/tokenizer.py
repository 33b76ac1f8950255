"""Split text into classified, annotated speech sounds.

WHY: Greek and Greeklish spell single sounds with several letters (ου,
μπ, ντσ, th, ch). The syllabifiers must see those as one unit, and they
need each unit's class and right-hand context to place boundaries.

HOW: Three steps:
  1. classify: scan with the lexicon's alternation grammar; the named
     group that matched gives the SoundKind
  2. nasal/aspirate correction (optional): 'nt' + 'h' becomes 'n' + 'th'
  3. annotate: one right-to-left pass fills later_vowel_exists,
     next_is_vowel and consonant_run

RULES:
- The grammar is total: every character lands in some token
- Concatenated token texts equal the input
- The correction only fires when the aspirate is not the last token and
  the token after it is not punctuation
- Annotation happens after the correction, never before
"""

from __future__ import annotations

from typing import List, Tuple

from greek_hyphen.core.ir import SoundKind, SpeechSound
from greek_hyphen.lexicon.models import Lexicon

RawSound = Tuple[str, SoundKind]

_GROUP_KINDS = {
    "vowel": SoundKind.VOWEL,
    "consonant": SoundKind.CONSONANT,
    "punctuation": SoundKind.PUNCTUATION,
    "other": SoundKind.OTHER,
}


class Tokenizer:
    """Tokenizer bound to one compiled lexicon."""

    def __init__(self, lexicon: Lexicon) -> None:
        self.lexicon = lexicon

    def classify(self, text: str) -> List[RawSound]:
        """Split text into (substring, kind) pairs in reading order."""
        return [
            (m.group(), _GROUP_KINDS[m.lastgroup])
            for m in self.lexicon.sound_re.finditer(text)
        ]

    def fix_nasal_aspirate(self, raw: List[RawSound]) -> List[RawSound]:
        """Move the stop of a nasal+stop token onto a following aspirate.

        Greeklish writes θ as 'th', but the grammar reads 'anthos' as
        a-nt-h-o-s because 'nt' is a longer consonant unit. This rewrites
        the pair to a-n-th-o-s.

        Returns a new list; the input is not modified.
        """
        fixed = list(raw)
        last = len(fixed) - 1
        i = last - 1
        while i > 0:
            text, kind = fixed[i]
            if (
                kind is SoundKind.VOWEL
                and self.lexicon.is_aspirate_marker(text)
                and fixed[i + 1][1] is not SoundKind.PUNCTUATION
            ):
                m = self.lexicon.nasal_stop_re.fullmatch(fixed[i - 1][0])
                if m is not None:
                    fixed[i - 1] = (m.group(1), SoundKind.CONSONANT)
                    fixed[i] = (m.group(2) + text, SoundKind.CONSONANT)
                    i -= 1
            i -= 1
        return fixed

    def tokenize(self, text: str, nasal_aspirate_fix: bool = True) -> List[SpeechSound]:
        """Classify, optionally correct, and annotate text."""
        raw = self.classify(text)
        if nasal_aspirate_fix:
            raw = self.fix_nasal_aspirate(raw)
        return annotate(raw)


def annotate(raw: List[RawSound]) -> List[SpeechSound]:
    """Attach right-hand context to each classified sound.

    WHY: Every boundary decision depends on what comes after a token.

    HOW: Walk right to left carrying three facts about the suffix already
    seen: whether it holds a vowel before any punctuation, the kind of the
    token just to the right, and the length of the consonant run starting
    just to the right.

    RULES:
    - A vowel sets the later-vowel flag for everything to its left
    - Punctuation clears it
    - Any non-consonant ends the run
    """
    sounds: List[SpeechSound] = []
    later_vowel = False
    next_kind = None
    run = 0
    for text, kind in reversed(raw):
        sounds.append(SpeechSound(
            text=text,
            kind=kind,
            later_vowel_exists=later_vowel,
            next_is_vowel=next_kind is SoundKind.VOWEL,
            consonant_run=run,
        ))
        if kind is SoundKind.VOWEL:
            later_vowel = True
        elif kind is SoundKind.PUNCTUATION:
            later_vowel = False
        run = run + 1 if kind is SoundKind.CONSONANT else 0
        next_kind = kind
    sounds.reverse()
    return sounds
