"""Parser for hyphenation dictionary sources.

The accepted source format is the TeX/libhyphen pattern format:

- Entries are whitespace separated, several per line are allowed.
- '%' starts a comment running to the end of the line.
- A TeX wrapper '\\patterns{ ... }' is stripped.
- The first line may name the character set of the file (e.g. 'UTF-8').
- 'LEFTHYPHENMIN n' and 'RIGHTHYPHENMIN n' set the minimum number of letters
  before the first and after the last break of a word. Leading numeric-only
  tokens set the same two values in that order.
- Compound-level directives are recognised and ignored.

Example:
    >>> trie = PatternDictionary.build("a1b .c1 c1k/k=k")
    >>> trie.score("cab").tolist()
    [0, 1, 1, 0]
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from hyphenfit.common import MalformedPattern
from hyphenfit.consts import (
    COMMENT_MARKER,
    DEFAULT_LEFT_MIN,
    DEFAULT_RIGHT_MIN,
    DIRECTIVE_LEFT_MIN,
    DIRECTIVE_RIGHT_MIN,
    IGNORED_DIRECTIVES,
    TEX_PATTERNS_CLOSE,
    TEX_PATTERNS_OPEN,
)
from hyphenfit.pattern import Pattern
from hyphenfit.trie import PatternTrie

logger = logging.getLogger(__name__)

# Charset names found in libhyphen dictionaries that Python does not know
_CHARSET_ALIASES = {
    "microsoft-cp1251": "cp1251",
}


def _is_number(token: str) -> bool:
    return bool(token) and all("0" <= char <= "9" for char in token)


@dataclass
class PatternDictionary:
    """Patterns and settings parsed from a dictionary source.

    Attributes:
        patterns: The parsed entries in source order.
        left_min: Minimum letters before the first break of a word.
        right_min: Minimum letters after the last break of a word.
        charset: Character set named on the first line, if any.
    """

    patterns: List[Pattern] = field(default_factory=list)
    left_min: int = DEFAULT_LEFT_MIN
    right_min: int = DEFAULT_RIGHT_MIN
    charset: Optional[str] = None

    def __len__(self) -> int:
        return len(self.patterns)

    @classmethod
    def build(cls, source: str) -> PatternTrie:
        """Parse a dictionary source and build its trie.

        Args:
            source: The dictionary text.

        Returns:
            The read-only PatternTrie.

        Raises:
            MalformedPattern: If any entry cannot be parsed; no trie is built.
        """
        return cls.parse(source).to_trie()

    def to_trie(self) -> PatternTrie:
        """Build the trie of the parsed patterns."""
        return PatternTrie.build(self.patterns, left_min=self.left_min, right_min=self.right_min)

    @staticmethod
    def detect_charset(line: str) -> Optional[str]:
        """Return the codec name if a line names a character set, else None.

        Only lines with a single token qualify. Patterns are lower case, so a
        lower case token only counts as a charset name when it contains '-'.
        """
        tokens = line.split()
        if len(tokens) != 1:
            return None
        name = tokens[0]
        if name.lower() in _CHARSET_ALIASES:
            name = _CHARSET_ALIASES[name.lower()]
        elif name == name.lower() and "-" not in name:
            return None
        try:
            return codecs.lookup(name).name
        except LookupError:
            return None

    @classmethod
    def parse(cls, source: str) -> PatternDictionary:
        """Parse a dictionary source.

        Args:
            source: The dictionary text.

        Returns:
            The parsed PatternDictionary.

        Raises:
            MalformedPattern: If an entry or directive cannot be parsed.
        """
        dictionary = cls()
        numbers_seen = 0
        entries_seen = False
        first_line = True

        for line_number, raw_line in enumerate(source.splitlines(), start=1):
            line = raw_line.split(COMMENT_MARKER, 1)[0].strip()
            if not line:
                continue

            if first_line:
                first_line = False
                charset = cls.detect_charset(line)
                if charset is not None:
                    dictionary.charset = charset
                    continue

            line = line.replace(TEX_PATTERNS_OPEN, " ").replace(TEX_PATTERNS_CLOSE, " ")
            tokens = line.split()
            if not tokens:
                continue

            if tokens[0] in (DIRECTIVE_LEFT_MIN, DIRECTIVE_RIGHT_MIN):
                value = cls._directive_value(tokens, line_number)
                if tokens[0] == DIRECTIVE_LEFT_MIN:
                    dictionary.left_min = value
                else:
                    dictionary.right_min = value
                continue
            if tokens[0] in IGNORED_DIRECTIVES:
                logger.debug("Ignoring directive '%s' on line %d", tokens[0], line_number)
                continue

            for token in tokens:
                if _is_number(token) and not entries_seen:
                    numbers_seen += 1
                    if numbers_seen == 1:
                        dictionary.left_min = int(token)
                    elif numbers_seen == 2:
                        dictionary.right_min = int(token)
                    else:
                        raise MalformedPattern("More than two leading numeric fields", line_number, token)
                    continue

                pattern = Pattern.from_string(token, line_number)
                cls._check_substitution(pattern, line_number)
                dictionary.patterns.append(pattern)
                entries_seen = True

        logger.debug(
            "Parsed %d patterns (charset=%s, left_min=%d, right_min=%d)",
            len(dictionary.patterns),
            dictionary.charset,
            dictionary.left_min,
            dictionary.right_min,
        )
        return dictionary

    @staticmethod
    def _directive_value(tokens: List[str], line_number: int) -> int:
        """Return the numeric argument of a LEFTHYPHENMIN/RIGHTHYPHENMIN line."""
        if len(tokens) != 2 or not _is_number(tokens[1]):
            raise MalformedPattern(f"Directive {tokens[0]} needs one numeric value", line_number, " ".join(tokens))
        return int(tokens[1])

    @staticmethod
    def _check_substitution(pattern: Pattern, line_number: int) -> None:
        """Log substitutions that need a closer look; their semantics stay as parsed."""
        substitution = pattern.substitution
        if substitution is None:
            return
        odd_gaps = pattern.odd_gaps(substitution.start, substitution.end)
        if len(odd_gaps) > 1:
            logger.warning(
                "Line %d: substitution of '%s' spans %d breaks (multi-substitution chain), review manually",
                line_number,
                pattern.letters,
                len(odd_gaps),
            )
        elif not odd_gaps:
            logger.debug("Line %d: substitution of '%s' spans no break and never applies", line_number, pattern.letters)
