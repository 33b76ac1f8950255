"""Phonotactic syllabifier (plain mode) and consonant cluster splitter.

WHY: Most Greek words split by a few adjacency rules: a single consonant
between vowels starts the next syllable, a consonant cluster splits
before its longest legal word-initial pair, and two vowels in hiatus
split between them. No dictionary is needed for that.

HOW: syllabify() walks the annotated tokens left to right and makes one
decision per token from its annotations. When a vowel is followed by a
run of two or more consonants and another vowel comes later,
split_cluster() decides where the single boundary inside that run goes.

RULES:
- Sequences of one token, or fewer than min_length tokens, are returned
  unchanged
- A consonant run between vowels gets exactly one boundary
- A cluster splits before the first adjacent pair that is a legal onset,
  otherwise before its last consonant
- With quick_synizesis, synizesis-prone vowel pairs stay together
- Separators are only ever inserted; input text is never altered
"""

from __future__ import annotations

from typing import List, Sequence

from greek_hyphen.config import HyphenationOptions
from greek_hyphen.core.ir import SpeechSound, join_sounds
from greek_hyphen.lexicon.models import Lexicon


def split_cluster(
    run: Sequence[SpeechSound],
    lexicon: Lexicon,
    options: HyphenationOptions,
) -> str:
    """Insert one separator into a run of consonants.

    The first adjacent pair whose concatenation ends in a legal onset
    starts the next syllable; the rest of the run stays with it. With no
    legal pair the last consonant starts the syllable alone. For σ τ ρ
    the first pair στ is legal, so the run comes out as "-στρ".
    """
    head: List[str] = []
    for i in range(len(run) - 1):
        pair = run[i].text + run[i + 1].text
        if lexicon.is_legal_onset(pair, options):
            return "".join(head) + options.separator + join_sounds(run[i:])
        head.append(run[i].text)
    return "".join(head) + options.separator + run[-1].text


def syllabify(
    sounds: Sequence[SpeechSound],
    lexicon: Lexicon,
    options: HyphenationOptions,
) -> str:
    """Segment one word with the adjacency rules.

    Args:
        sounds: Annotated tokens of a single word.
        lexicon: Supplies the onset whitelist and synizesis pairs.
        options: Separator, min_length and the onset/synizesis switches.

    Returns:
        The word with separators inserted.
    """
    if len(sounds) <= 1 or len(sounds) < options.min_length:
        return join_sounds(sounds)

    sep = options.separator
    out: List[str] = []
    i = 0
    n = len(sounds)
    while i < n:
        s = sounds[i]
        if s.is_consonant and s.next_is_vowel:
            out.append(s.text)
        elif s.is_vowel and s.later_vowel_exists and s.consonant_run == 1:
            out.append(s.text + sep)
        elif s.is_vowel and s.consonant_run >= 1 and not s.later_vowel_exists:
            out.append(s.text)
        elif s.is_vowel and s.later_vowel_exists and s.consonant_run > 1:
            run = sounds[i + 1:i + 1 + s.consonant_run]
            out.append(s.text + split_cluster(run, lexicon, options))
            i += s.consonant_run
        elif s.is_vowel and s.next_is_vowel:
            pair = s.text + sounds[i + 1].text
            if options.quick_synizesis and lexicon.is_synizesis_prone(pair):
                out.append(s.text)
            else:
                out.append(s.text + sep)
        else:
            out.append(s.text)
        i += 1
    return "".join(out)
