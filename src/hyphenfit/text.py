"""Hyphenation and line fitting of arbitrary text.

This module provides the Hyphenator facade. It owns a read-only PatternTrie
and offers word hyphenation, hyphenation of running text and column fitting
on top of it. Input may be str or bytes; bytes input gives bytes output in
the same encoding, with all untouched text copied byte for byte.

Example:
    >>> hyphenator = Hyphenator.from_source("a1b .c1 c1k/k=k")
    >>> hyphenator.hyphenate_text("Zucker, cab!", "=")
    'Zuk=ker, c=a=b!'
    >>> hyphenator.break_at("Zucker bäcker", "-", 4)
    ('Zuk-', 'ker bäcker')
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from hyphenfit.common import HyphenationError, TextLike
from hyphenfit.consts import DEFAULT_ENCODING, DEFAULT_HYPHEN
from hyphenfit.dictionary_loader import DictionaryLoader
from hyphenfit.hyphenator import BreakPoint, WordHyphenator
from hyphenfit.line_breaker import LineBreak, LineBreaker
from hyphenfit.pattern_dictionary import PatternDictionary
from hyphenfit.text_support import CharClassifier, TextCursor
from hyphenfit.trie import PatternTrie

logger = logging.getLogger(__name__)

# Shared by for_language() so every language is parsed once per process
_DEFAULT_LOADER = DictionaryLoader()


class Hyphenator:
    """Hyphenation and line fitting with one language's dictionary.

    A Hyphenator holds no mutable state besides the shared read-only trie,
    so one instance can serve several threads.

    **Words:**
    - A word is a maximal run of alphabetic code points.
    - Digits, punctuation and whitespace are copied unchanged.
    - Case is ignored for matching and preserved in the output.

    **Construction:**
    - Hyphenator(trie): from a built PatternTrie
    - Hyphenator.from_source(text): from dictionary source text
    - Hyphenator.from_file(path): from a dictionary file
    - Hyphenator.for_language(tag): from a dictionary found by language tag
    """

    def __init__(
        self,
        trie: PatternTrie,
        classifier: Optional[CharClassifier] = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Initialize the hyphenator.

        Args:
            trie: The pattern trie of the language.
            classifier: Code point classifier (defaults to Unicode properties).
            encoding: Encoding of bytes input and output.
        """
        self._words = WordHyphenator(trie)
        self._classifier = classifier
        self._encoding = encoding
        self._line_breaker = LineBreaker(self._words, classifier=classifier, encoding=encoding)

    @classmethod
    def from_source(cls, source: str, **kwargs) -> Hyphenator:
        """Create a hyphenator from dictionary source text.

        Raises:
            MalformedPattern: If the source cannot be parsed.
        """
        return cls(PatternDictionary.build(source), **kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path], loader: Optional[DictionaryLoader] = None, **kwargs) -> Hyphenator:
        """Create a hyphenator from a dictionary file.

        Raises:
            FileNotFoundError: If the file does not exist.
            MalformedPattern: If the file cannot be decoded or parsed.
        """
        loader = loader if loader is not None else _DEFAULT_LOADER
        return cls(loader.load_file(path), **kwargs)

    @classmethod
    def for_language(cls, language: str, loader: Optional[DictionaryLoader] = None, **kwargs) -> Hyphenator:
        """Create a hyphenator for a language tag such as 'de-CH' or 'en_US'.

        Raises:
            UnsupportedLanguageError: If no dictionary is found for the language.
        """
        loader = loader if loader is not None else _DEFAULT_LOADER
        return cls(loader.load(language), **kwargs)

    @property
    def trie(self) -> PatternTrie:
        """The underlying pattern trie."""
        return self._words.trie

    def _cursor(self, text: TextLike) -> TextCursor:
        return TextCursor(text, self._encoding, self._classifier)

    def raw_break_points(self, word: TextLike) -> List[BreakPoint]:
        """Return the break points of a word, left to right.

        Raises:
            InvalidText: If the word cannot be decoded.
        """
        return self._words.points(self._cursor(word).chars)

    def hyphenate(self, word: TextLike, hyphen: str = DEFAULT_HYPHEN) -> TextLike:
        """Insert the hyphen at every break point of a single word.

        Args:
            word: The word, str or bytes.
            hyphen: The hyphen marker to insert.

        Returns:
            The hyphenated word, of the same type as the input.

        Raises:
            InvalidText: If the word cannot be decoded.
        """
        cursor = self._cursor(word)
        return cursor.encode(self._words.hyphenate(cursor.chars, hyphen))

    def hyphenate_text(self, text: TextLike, hyphen: str = DEFAULT_HYPHEN) -> TextLike:
        """Hyphenate every word of a text, copying everything else unchanged.

        Args:
            text: The text, str or bytes.
            hyphen: The hyphen marker to insert.

        Returns:
            The hyphenated text, of the same type as the input.

        Raises:
            InvalidText: If the text cannot be decoded.
        """
        cursor = self._cursor(text)
        pieces: List[TextLike] = []
        position = 0
        for start, end in cursor.words(0, len(cursor)):
            pieces.append(cursor.slice(position, start))
            pieces.append(cursor.encode(self._words.hyphenate(cursor.chars[start:end], hyphen)))
            position = end
        pieces.append(cursor.slice(position, len(cursor)))
        return cursor.slice(0, 0).join(pieces)  # type: ignore[arg-type]

    def fit_line(self, text: TextLike, hyphen: str, column_limit: int) -> LineBreak:
        """Break a text for a column; see LineBreaker.fit()."""
        return self._line_breaker.fit(text, hyphen, column_limit)

    def break_at(self, text: TextLike, hyphen: str, column_limit: int) -> Tuple[TextLike, TextLike]:
        """Split a text into a first line of at most column_limit code points and the rest.

        Args:
            text: The text, str or bytes.
            hyphen: Hyphen marker appended when a word is split.
            column_limit: Maximum number of code points of the first line.

        Returns:
            A tuple of (first line, remainder), of the same type as the input.
            If no break fits, the first line may be longer than column_limit.

        Raises:
            ValueError: If column_limit is negative.
            InvalidText: If the text cannot be decoded.
        """
        return self._line_breaker.break_at(text, hyphen, column_limit)

    def wrap(self, text: TextLike, width: int, hyphen: str = DEFAULT_HYPHEN) -> List[TextLike]:
        """Lay out a text as lines of at most width code points."""
        return self._line_breaker.wrap(text, hyphen, width)


###############################################################################
# Demo
###############################################################################


def sample_text() -> str:
    """Return a short English sample paragraph."""
    return (
        "Hyphenation patterns describe where a word may be broken at the end of a line. "
        "Every pattern carries small integer weights between its letters; "
        "odd weights allow a break and even weights forbid one. "
        "Typesetting systems have relied on this representation for decades, "
        "because a compact set of patterns reproduces the breaks of a large dictionary."
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Wrap a text to a column width and print the lines.

    Usage:
        python -m hyphenfit.text <dictionary or language> <width> [text file]
    """
    parser = argparse.ArgumentParser(description="Hyphenate and wrap text to a column width.")
    parser.add_argument("dictionary", help="dictionary file or language tag, e.g. en_US")
    parser.add_argument("width", type=int, help="column width in code points")
    parser.add_argument("text", nargs="?", help="UTF-8 text file; a sample paragraph if omitted")
    parser.add_argument("--hyphen", default=DEFAULT_HYPHEN, help="hyphen marker (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if Path(args.dictionary).is_file():
            hyphenator = Hyphenator.from_file(args.dictionary)
        else:
            hyphenator = Hyphenator.for_language(args.dictionary)
        text = Path(args.text).read_text(encoding="utf-8") if args.text else sample_text()
        lines = hyphenator.wrap(" ".join(text.split()), args.width, args.hyphen)
    except (HyphenationError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    for line in lines:
        print(line)
    print("-" * args.width)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
