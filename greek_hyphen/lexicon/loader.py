"""Load, validate and compile the lexicon JSON resources.

WHY: The grammar, onset whitelist, synizesis list and exception rules are
data, not code. They ship as versioned JSON files next to this module and
can be overridden from a user directory. A malformed file must fail the
whole load before any text is segmented, never half-work.

HOW: Each of the four documents is read, validated with jsonschema
against its schema in schemas/, then compiled: grammar fragments into one
alternation regex with named groups, onsets into a tuple, synizesis pairs
into a set, rules into ExceptionRule objects with their templates split
into left / core / right.

RULES:
- Every failure (I/O, JSON syntax, schema, regex) raises LexiconError
- Fragments are compiled one by one first so the error names the fragment
- A fragment that can match the empty string is rejected
- Legacy marker templates ('left>core<right') are split at load time;
  missing or misordered markers degrade to empty spans, not errors
- A custom directory may override any subset of the four files
"""

from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema

from greek_hyphen.lexicon.errors import LexiconError
from greek_hyphen.lexicon.models import TOGGLE_KEYS, ExceptionRule, Lexicon

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = _PACKAGE_DIR / "data"
SCHEMA_DIR = _PACKAGE_DIR / "schemas"

LEXICON_FILES: Tuple[str, ...] = ("grammar", "onsets", "synizesis", "rules")

# Named groups of the sound grammar, in priority order.
SOUND_GROUPS: Tuple[str, ...] = ("vowel", "consonant", "punctuation")

LEFT_MARKER = ">"
RIGHT_MARKER = "<"

# \1 .. \99 and \g<name> / \g<1> references inside a rule template.
_GROUP_REF_RE = re.compile(r"\\(?:(\d{1,2})|g<(\w+)>)")


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise LexiconError(path.name, "cannot read file: {}".format(e.strerror or e))
    except json.JSONDecodeError as e:
        raise LexiconError(
            path.name, "invalid JSON: {}".format(e.msg), "line {}".format(e.lineno)
        )


def _load_schema(name: str) -> Dict[str, Any]:
    """Load a packaged schema from disk."""
    return _read_json(SCHEMA_DIR / "{}.schema.json".format(name))


_CACHED_SCHEMAS: Dict[str, Dict[str, Any]] = {}


def _get_schema(name: str) -> Dict[str, Any]:
    """Return a schema, cached at module level after first call to avoid repeated I/O."""
    if name not in _CACHED_SCHEMAS:
        _CACHED_SCHEMAS[name] = _load_schema(name)
    return _CACHED_SCHEMAS[name]


def _resolve_path(name: str, directory: Optional[Path]) -> Path:
    if directory is not None:
        candidate = directory / "{}.json".format(name)
        if candidate.is_file():
            logger.debug("Using lexicon override %s", candidate)
            return candidate
    return DATA_DIR / "{}.json".format(name)


def _load_document(name: str, directory: Optional[Path]) -> Tuple[Path, Dict[str, Any]]:
    """Read one lexicon document and validate it against its schema."""
    path = _resolve_path(name, directory)
    document = _read_json(path)
    try:
        jsonschema.validate(instance=document, schema=_get_schema(name))
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise LexiconError(path.name, e.message, location)
    return path, document


def _compile(source: str, location: str, pattern: str, flags: int = 0) -> re.Pattern:
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise LexiconError(source, "invalid regular expression {!r}: {}".format(pattern, e), location)


def compile_grammar(
    document: Dict[str, Any],
    source: str = "grammar.json",
) -> Tuple[re.Pattern, re.Pattern, frozenset]:
    """Compile the sound grammar document.

    Returns:
        (sound_re, nasal_stop_re, aspirate_markers)

    Raises:
        LexiconError: If a fragment is not a valid regex or matches "".
    """
    alternatives: List[str] = []
    for group in SOUND_GROUPS:
        key = group + "s" if group != "punctuation" else group
        fragments = document[key]
        for i, fragment in enumerate(fragments):
            location = "{}/{}".format(key, i)
            compiled = _compile(source, location, fragment, re.IGNORECASE)
            if compiled.fullmatch("") is not None:
                raise LexiconError(source, "fragment {!r} matches the empty string".format(fragment), location)
        body = "|".join("(?:{})".format(f) for f in fragments)
        alternatives.append("(?P<{}>{})".format(group, body))
    alternatives.append("(?P<other>.)")

    sound_re = _compile(source, "<grammar>", "|".join(alternatives), re.IGNORECASE | re.DOTALL)

    nasal_stop_re = _compile(source, "nasal_stop_merge", document["nasal_stop_merge"], re.IGNORECASE)
    if nasal_stop_re.groups < 2:
        raise LexiconError(source, "nasal_stop_merge needs two groups (nasal, stop)", "nasal_stop_merge")

    markers = frozenset(m.lower() for m in document["aspirate_markers"])
    return sound_re, nasal_stop_re, markers


def split_marker_template(template: str) -> Tuple[str, str, str]:
    """Split a legacy 'left>core<right' template into its three parts.

    The scan mirrors how such templates were always read: a '>' closes the
    left span and restarts the core, the first '<' ends the core and the
    rest is the right span. Missing markers leave the matching span empty,
    so "abc" splits to ("", "abc", "").
    """
    left = ""
    right = ""
    core: List[str] = []
    for i, char in enumerate(template):
        if char == LEFT_MARKER:
            left = template[:i]
            core = []
        elif char == RIGHT_MARKER:
            right = template[i + 1:]
            break
        else:
            core.append(char)
    return left, "".join(core), right


def _check_group_references(
    source: str,
    location: str,
    pattern: re.Pattern,
    template: str,
) -> None:
    """Reject templates that reference groups the pattern does not define."""
    for number, name in _GROUP_REF_RE.findall(template):
        ref = number or name
        if ref.isdigit():
            if int(ref) > pattern.groups:
                raise LexiconError(
                    source,
                    "template references group {} but the pattern has {}".format(ref, pattern.groups),
                    location,
                )
        elif ref not in pattern.groupindex:
            raise LexiconError(source, "template references unknown group {!r}".format(ref), location)


def compile_rules(
    document: Dict[str, Any],
    source: str = "rules.json",
) -> Tuple[ExceptionRule, ...]:
    """Compile exception rules in declaration order."""
    rules: List[ExceptionRule] = []
    for i, entry in enumerate(document["rules"]):
        location = "rules/{}".format(i)
        pattern = _compile(source, location + "/pattern", entry["pattern"], re.IGNORECASE)
        if "template" in entry:
            left, core, right = split_marker_template(entry["template"])
        else:
            left = entry.get("left", "")
            core = entry["core"]
            right = entry.get("right", "")
        for part in (left, core, right):
            _check_group_references(source, location, pattern, part)
        rules.append(ExceptionRule(index=i, pattern=pattern, left=left, core=core, right=right))
    return tuple(rules)


def load_lexicon(directory: Optional[Union[str, Path]] = None) -> Lexicon:
    """Load and compile the lexicon.

    WHY: Single entry point used by the Hyphenator and the CLI so every
    caller gets the same validation and the same fatal-on-error behaviour.

    HOW: Each document is taken from directory when it contains that file,
    otherwise from the packaged data/ directory.

    Args:
        directory: Optional directory with grammar.json, onsets.json,
                   synizesis.json and/or rules.json overrides.

    Returns:
        A compiled Lexicon.

    Raises:
        LexiconError: On any unreadable, invalid or uncompilable document.
    """
    base: Optional[Path] = None
    if directory is not None:
        base = Path(directory)
        if not base.is_dir():
            raise LexiconError(str(base), "lexicon directory does not exist")

    documents: Dict[str, Tuple[Path, Dict[str, Any]]] = {}
    for name in LEXICON_FILES:
        documents[name] = _load_document(name, base)

    grammar_path, grammar = documents["grammar"]
    sound_re, nasal_stop_re, markers = compile_grammar(grammar, grammar_path.name)

    _, onsets_doc = documents["onsets"]
    onsets = tuple(onsets_doc["onsets"])
    toggles = {key: tuple(onsets_doc["toggles"][key]) for key in TOGGLE_KEYS}

    _, synizesis_doc = documents["synizesis"]
    pairs = frozenset(p.lower() for p in synizesis_doc["pairs"])

    rules_path, rules_doc = documents["rules"]
    rules = compile_rules(rules_doc, rules_path.name)

    fragments = sum(len(grammar[key]) for key in ("vowels", "consonants", "punctuation"))
    logger.info(
        "Loaded lexicon: %d grammar fragments, %d onsets, %d synizesis pairs, %d exception rules",
        fragments, len(onsets), len(pairs), len(rules),
    )

    return Lexicon(
        sound_re=sound_re,
        nasal_stop_re=nasal_stop_re,
        aspirate_markers=markers,
        onsets=onsets,
        onset_toggles=toggles,
        synizesis_pairs=pairs,
        rules=rules,
        boundary_marker=rules_doc["boundary_marker"],
    )


_DEFAULT_LEXICON: Optional[Lexicon] = None
_DEFAULT_LOCK = threading.Lock()


def default_lexicon() -> Lexicon:
    """Return the packaged lexicon, loading it once on first use."""
    global _DEFAULT_LEXICON
    with _DEFAULT_LOCK:
        if _DEFAULT_LEXICON is None:
            _DEFAULT_LEXICON = load_lexicon()
        return _DEFAULT_LEXICON
