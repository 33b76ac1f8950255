"""Intermediate representation for tokenized text.

WHY: Both syllabifiers decide boundaries from the same few facts about
each speech sound: what class it is, whether a vowel follows somewhere
later in the word, whether the very next sound is a vowel, and how long
the consonant run after it is. Computing those once and carrying them on
the token keeps the syllabifiers free of look-ahead loops.

HOW: Two types:
  SoundKind  : the four sound classes the grammar produces
  SpeechSound: one classified token with its derived context fields

RULES:
- Concatenating token texts reproduces the input exactly
- SpeechSound is frozen; a changed sequence means new tokens
- consonant_run counts the consecutive consonants AFTER the token
- later_vowel_exists does not cross punctuation
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence


class SoundKind(str, enum.Enum):
    """Classification of a token by the sound grammar."""

    VOWEL = "vowel"
    CONSONANT = "consonant"
    PUNCTUATION = "punctuation"
    OTHER = "other"


@dataclass(frozen=True)
class SpeechSound:
    """A classified speech sound with its right-hand context.

    RULES:
    - text: the matched substring (a digraph such as 'ου' or 'μπ' is one token)
    - kind: SoundKind of the match
    - later_vowel_exists: a vowel occurs after this token before any punctuation
    - next_is_vowel: the token immediately after this one is a vowel
    - consonant_run: number of consonant tokens immediately after this one
    """

    text: str
    kind: SoundKind
    later_vowel_exists: bool = False
    next_is_vowel: bool = False
    consonant_run: int = 0

    @property
    def is_vowel(self) -> bool:
        return self.kind is SoundKind.VOWEL

    @property
    def is_consonant(self) -> bool:
        return self.kind is SoundKind.CONSONANT

    @property
    def is_punctuation(self) -> bool:
        return self.kind is SoundKind.PUNCTUATION


def join_sounds(sounds: Sequence[SpeechSound]) -> str:
    """Concatenate token texts back into the original string."""
    return "".join(s.text for s in sounds)
