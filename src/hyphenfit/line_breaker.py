"""Line fitting: choose where a line of text may be broken for a column width."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from hyphenfit.common import BreakKind, TextLike
from hyphenfit.consts import DEFAULT_ENCODING
from hyphenfit.hyphenator import BreakPoint, WordHyphenator
from hyphenfit.text_support import CharClassifier, TextCursor

logger = logging.getLogger(__name__)

###############################################################################
# LineBreak
###############################################################################


@dataclass(frozen=True)
class LineBreak:
    """Result of fitting text into a column.

    Attributes:
        first: The first line, without trailing whitespace; ends with the
            hyphen if a word was split.
        remainder: The rest of the text, without leading whitespace.
        kind: How the break was chosen.
    """

    first: TextLike
    remainder: TextLike
    kind: BreakKind

    @property
    def overflow(self) -> bool:
        """True if no break fits and the first line may exceed the column."""
        return self.kind.overflows

    def as_tuple(self) -> Tuple[TextLike, TextLike]:
        """Return (first, remainder)."""
        return self.first, self.remainder


###############################################################################
# LineBreaker
###############################################################################


class LineBreaker:
    """
    Finds the best legal break of a text at or before a column.

    The column limit counts code points: the first line may hold at most
    column_limit code points, so the code point at index column_limit is the
    first one that does not fit.

    Algorithm:
        1. Whole text fits:
            - Return it without trailing whitespace and an empty remainder.

        2. Whitespace at the limit:
            - If the code point at the limit is whitespace, break there. The
              first line loses its trailing whitespace, the remainder its
              leading whitespace. No hyphenation is needed.

        3. Backward word scan:
            - Find the block of non-whitespace code points around the limit.
            - Walk the words of the block that start before the limit, latest
              first, and compute their break points.
            - Take the latest break point with
              word_start + index + space_needed_pre_hyphen + len(hyphen) <= limit.
            - Without such a break, break at the whitespace run before the block.

        4. Overflow fallbacks (no whitespace before the block):
            - Take the earliest break point of the first word of the first
              block that has any, regardless of the column.
            - If no word of the block has break points, keep the whole block
              on the first line and break at the whitespace run after it.

    Results of steps 1-3 never exceed the column; step 4 is reported through
    LineBreak.overflow.
    """

    def __init__(
        self,
        hyphenator: WordHyphenator,
        classifier: Optional[CharClassifier] = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Initialize the line breaker.

        Args:
            hyphenator: Word hyphenator used for candidate words.
            classifier: Code point classifier (defaults to Unicode properties).
            encoding: Encoding of bytes input; results are bytes in the same encoding.
        """
        self._hyphenator = hyphenator
        self._classifier = classifier
        self._encoding = encoding

    def fit(self, text: TextLike, hyphen: str, column_limit: int) -> LineBreak:
        """
        Split text into a first line and a remainder.

        Args:
            text: The text to break, str or bytes.
            hyphen: Hyphen marker appended when a word is split.
            column_limit: Maximum number of code points of the first line.

        Returns:
            LineBreak with the two parts and the kind of break.

        Raises:
            ValueError: If column_limit is negative.
            InvalidText: If the text cannot be decoded.
        """
        if column_limit < 0:
            raise ValueError(f"column_limit must be non-negative, got {column_limit}")

        cursor = TextCursor(text, self._encoding, self._classifier)
        size = len(cursor)

        if size <= column_limit:
            return LineBreak(cursor.slice(0, self._trim_end(cursor, size)), cursor.slice(size, size), BreakKind.END_OF_TEXT)

        if cursor.is_space(column_limit):
            line_end = self._trim_end(cursor, column_limit)
            if line_end > 0:
                return self._whitespace_break(cursor, line_end, column_limit)
            return self._overflow_break(cursor, self._skip_space(cursor, column_limit), hyphen)

        block_start = column_limit
        while block_start > 0 and not cursor.is_space(block_start - 1):
            block_start -= 1

        for word_start, word_end in reversed(cursor.words(block_start, column_limit)):
            point = self._latest_fitting_point(cursor, word_start, word_end, hyphen, column_limit)
            if point is not None:
                return self._hyphen_break(cursor, word_start, point, hyphen, BreakKind.HYPHENATION)

        line_end = self._trim_end(cursor, block_start)
        if line_end > 0:
            return self._whitespace_break(cursor, line_end, block_start)
        return self._overflow_break(cursor, block_start, hyphen)

    def break_at(self, text: TextLike, hyphen: str, column_limit: int) -> Tuple[TextLike, TextLike]:
        """Return (first line, remainder); see fit()."""
        return self.fit(text, hyphen, column_limit).as_tuple()

    def wrap(self, text: TextLike, hyphen: str, width: int) -> List[TextLike]:
        """
        Lay out a text as lines of at most width code points.

        Lines produced by an overflow fallback may be longer than width.

        Args:
            text: The text to wrap.
            hyphen: Hyphen marker appended to split words.
            width: Column width in code points.

        Returns:
            The lines in order; empty for empty text.
        """
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")

        lines: List[TextLike] = []
        rest = text
        while rest:
            result = self.fit(rest, hyphen, width)
            if result.first or result.remainder:
                lines.append(result.first)
            if len(result.remainder) >= len(rest):
                logger.warning("Line break made no progress, keeping the rest as one line")
                lines.append(result.remainder)
                break
            rest = result.remainder
        return lines

    def _latest_fitting_point(
        self, cursor: TextCursor, word_start: int, word_end: int, hyphen: str, column_limit: int
    ) -> Optional[BreakPoint]:
        """Return the latest break point of a word that fits the column, or None."""
        best = None
        for point in self._hyphenator.points(cursor.chars[word_start:word_end]):
            if word_start + point.index + point.space_needed_pre_hyphen + len(hyphen) <= column_limit:
                best = point
        return best

    def _hyphen_break(
        self, cursor: TextCursor, word_start: int, point: BreakPoint, hyphen: str, kind: BreakKind
    ) -> LineBreak:
        first = cursor.slice(0, word_start + point.head_end) + cursor.encode(point.pre + hyphen)
        remainder = cursor.encode(point.post) + cursor.slice(word_start + point.tail_start, len(cursor))
        return LineBreak(first, remainder, kind)  # type: ignore[arg-type]

    def _whitespace_break(self, cursor: TextCursor, line_end: int, space_start: int) -> LineBreak:
        remainder_start = self._skip_space(cursor, space_start)
        return LineBreak(
            cursor.slice(0, line_end), cursor.slice(remainder_start, len(cursor)), BreakKind.WHITESPACE
        )

    def _overflow_break(self, cursor: TextCursor, block_start: int, hyphen: str) -> LineBreak:
        """Break inside or after the first block of the text, ignoring the column."""
        size = len(cursor)
        if block_start >= size:
            return LineBreak(cursor.slice(0, 0), cursor.slice(size, size), BreakKind.END_OF_TEXT)

        block_end = block_start
        while block_end < size and not cursor.is_space(block_end):
            block_end += 1

        for word_start, word_end in cursor.words(block_start, block_end):
            points = self._hyphenator.points(cursor.chars[word_start:word_end])
            if points:
                return self._hyphen_break(cursor, word_start, points[0], hyphen, BreakKind.OVERFLOW_HYPHENATION)

        logger.debug("No break point in the first block, keeping %d code points intact", block_end)
        return LineBreak(
            cursor.slice(0, block_end),
            cursor.slice(self._skip_space(cursor, block_end), size),
            BreakKind.OVERFLOW_BLOCK,
        )

    @staticmethod
    def _trim_end(cursor: TextCursor, end: int) -> int:
        """Move end backward over whitespace."""
        while end > 0 and cursor.is_space(end - 1):
            end -= 1
        return end

    @staticmethod
    def _skip_space(cursor: TextCursor, start: int) -> int:
        """Move start forward over whitespace."""
        while cursor.is_space(start):
            start += 1
        return start
