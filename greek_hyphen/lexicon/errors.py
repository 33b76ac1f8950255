"""Error type for lexicon loading failures.

WHY: A lexicon that cannot be parsed must stop the program before any
text is segmented. The CLI already reports ValueError subclasses with a
clean "Error: ..." line and exit code 1, so lexicon failures reuse that
path.

RULES:
- Raised only while loading or compiling lexicon resources
- The message names the offending file and, where known, the JSON path
"""

from __future__ import annotations


class LexiconError(ValueError):
    """A lexicon resource is unreadable, fails its schema, or has a bad regex."""

    def __init__(self, source: str, message: str, location: str = "") -> None:
        self.source = source
        self.location = location
        if location:
            text = "{} ({}): {}".format(source, location, message)
        else:
            text = "{}: {}".format(source, message)
        super().__init__(text)
