"""Command-line interface for the Greek hyphenator.

WHY: Quick checks ("how does this word split?") and shell pipelines
(hyphenate a subtitle file line by line) should not need Python code.

HOW: argparse maps flags 1:1 onto HyphenationOptions fields. Flags left
unset fall back to the GREEK_HYPHEN_* environment defaults. The lexicon
is loaded and the options validated before anything is printed, so a
broken lexicon or a bad flag value produces no partial output.

RULES:
- Positional texts are hyphenated one per output line
- No texts, or a single '-', reads lines from stdin
- Results go to stdout; logs and errors go to stderr
- ValueError (including LexiconError) prints "Error: ..." and exits 1
- --verbose enables DEBUG logging, otherwise WARNING
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterator, List, Optional

from greek_hyphen import __version__
from greek_hyphen.config import CACHE_ENABLED, LEXICON_DIR, default_options
from greek_hyphen.core.cache import HyphenationCache
from greek_hyphen.lexicon import load_lexicon
from greek_hyphen.segmenter import Hyphenator

# Flags whose value is passed straight to default_options() when given.
_OPTION_FLAGS = (
    "separator",
    "min_length",
    "use_rules",
    "combine_dn",
    "combine_kv",
    "combine_pf",
    "combine_fk",
    "quick_synizesis",
    "nasal_aspirate_fix",
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without hyphenating anything.

    RULES:
    - Positional: texts (zero or more)
    - Option flags default to None so unset flags keep environment defaults
    - Boolean options accept --flag / --no-flag
    """
    parser = argparse.ArgumentParser(
        prog="greek-hyphen",
        description="Insert syllable separators into Greek and Greeklish text.",
    )

    parser.add_argument(
        "texts",
        nargs="*",
        help="Text to hyphenate. Omit, or pass '-', to read lines from stdin.",
    )

    parser.add_argument(
        "--separator",
        default=None,
        help="Separator inserted at syllable boundaries (default: soft hyphen).",
    )

    parser.add_argument(
        "--min-length",
        type=int,
        default=None,
        help="Leave words with fewer sound tokens than this untouched (default: 2).",
    )

    parser.add_argument(
        "--use-rules",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Apply the exception rules before the plain syllabifier.",
    )

    for pair, letters in (("dn", "δν"), ("kv", "κβ"), ("pf", "πφ"), ("fk", "φκ")):
        parser.add_argument(
            "--combine-{}".format(pair),
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Treat {} / {} as a legal syllable onset.".format(letters, pair),
        )

    parser.add_argument(
        "--quick-synizesis",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep synizesis-prone vowel pairs together in plain mode.",
    )

    parser.add_argument(
        "--nasal-aspirate-fix",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Read Greeklish 'nth' as n + th (default: on).",
    )

    parser.add_argument(
        "--cache",
        action=argparse.BooleanOptionalAction,
        default=CACHE_ENABLED,
        help="Memoize segmented words (default: %(default)s).",
    )

    parser.add_argument(
        "--lexicon",
        default=LEXICON_DIR,
        metavar="DIR",
        help="Directory with grammar/onsets/synizesis/rules JSON overrides.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug information to stderr.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def _iter_inputs(texts: List[str]) -> Iterator[str]:
    if not texts or texts == ["-"]:
        for line in sys.stdin:
            yield line.rstrip("\n")
    else:
        yield from texts


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    WHY: This is the function that __main__.py and the greek-hyphen
    console script call.

    HOW: Parses arguments, configures logging, loads the lexicon and
    options, then prints one hyphenated line per input.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    overrides = {
        name: getattr(args, name)
        for name in _OPTION_FLAGS
        if getattr(args, name) is not None
    }

    try:
        options = default_options(**overrides)
        lexicon = load_lexicon(args.lexicon)
    except ValueError as e:
        # Bad lexicon files or option values
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    cache = HyphenationCache() if args.cache else None
    hyphenator = Hyphenator(lexicon, cache)

    for text in _iter_inputs(args.texts):
        print(hyphenator.hyphenate(text, options))
