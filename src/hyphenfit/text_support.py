"""Supporting utilities for walking text code point by code point.

This module contains the code point classification protocol and the
TextCursor, which decodes str or bytes input into code points with
random access by index, so that line fitting can work in code point units
while still returning exact slices of the original input.
"""

from __future__ import annotations

import codecs
from typing import List, Optional, Protocol

from hyphenfit.common import InvalidText, TextLike
from hyphenfit.consts import DEFAULT_ENCODING

###############################################################################
# CharClassifier
###############################################################################


class CharClassifier(Protocol):
    """Protocol for code point classification.

    A classifier decides which code points form words and which separate
    lines. Everything that is neither alphabetic nor whitespace (digits,
    punctuation, symbols) is passed through unchanged by the hyphenator.
    """

    def is_alpha(self, char: str) -> bool:
        """Return True if the code point belongs to a word."""

    def is_space(self, char: str) -> bool:
        """Return True if the code point is whitespace a line may break at."""


class UnicodeCharClassifier:
    """Classifier based on the Unicode properties known to str."""

    def is_alpha(self, char: str) -> bool:
        """Return True for alphabetic code points (Unicode categories L*)."""
        return char.isalpha()

    def is_space(self, char: str) -> bool:
        """Return True for Unicode whitespace."""
        return char.isspace()


DEFAULT_CLASSIFIER: CharClassifier = UnicodeCharClassifier()


###############################################################################
# TextCursor
###############################################################################


class TextCursor:
    """Random access to the code points of str or bytes input.

    For bytes input the cursor decodes one code point at a time with an
    incremental decoder and remembers the byte offset where every code point
    starts, so slices taken by code point index are byte-exact slices of the
    original data. For str input code point indices and string indices coincide.

    Positions outside the text are neither alphabetic nor whitespace.

    Example:
        >>> cursor = TextCursor("Grüße".encode("utf-8"))
        >>> len(cursor)
        5
        >>> cursor.slice(2, 5)
        b'\\xc3\\xbc\\xc3\\x9fe'
    """

    def __init__(
        self,
        text: TextLike,
        encoding: str = DEFAULT_ENCODING,
        classifier: Optional[CharClassifier] = None,
    ) -> None:
        """Initialize the cursor.

        Args:
            text: The input text, str or bytes.
            encoding: Encoding of bytes input. Ignored for str input.
            classifier: Code point classifier. Defaults to UnicodeCharClassifier.

        Raises:
            InvalidText: If the text cannot be decoded or contains lone surrogates.
        """
        self._source = text
        self._encoding = encoding
        self._classifier = classifier if classifier is not None else DEFAULT_CLASSIFIER
        self._offsets: Optional[List[int]] = None

        if isinstance(text, bytes):
            self._chars, self._offsets = self._decode(text, encoding)
        elif isinstance(text, str):
            self._chars = text
        else:
            raise TypeError(f"Text must be str or bytes, got {type(text).__name__}")

        self._check_code_points(self._chars)

    @staticmethod
    def _decode(data: bytes, encoding: str) -> tuple[str, List[int]]:
        """Decode bytes code point by code point, recording start offsets.

        Args:
            data: The encoded input.
            encoding: Name of the codec.

        Returns:
            A tuple of (decoded text, byte offsets); offsets has one more entry
            than the text has code points, the last one being len(data).

        Raises:
            InvalidText: If the data is not validly encoded.
        """
        decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        chars: List[str] = []
        offsets: List[int] = [0]
        pos = 0
        try:
            for pos in range(len(data)):
                for char in decoder.decode(data[pos : pos + 1]):
                    chars.append(char)
                    offsets.append(pos + 1)
            for char in decoder.decode(b"", final=True):
                chars.append(char)
                offsets.append(len(data))
        except UnicodeDecodeError as e:
            raise InvalidText(f"Text is not valid {encoding}: {e.reason} at byte {pos}") from e
        offsets[-1] = len(data)
        return "".join(chars), offsets

    @staticmethod
    def _check_code_points(chars: str) -> None:
        """Reject lone surrogates, which have no classification."""
        try:
            chars.encode("utf-8", errors="strict")
        except UnicodeEncodeError as e:
            raise InvalidText(f"Text contains an unpaired surrogate at position {e.start}") from e

    def __len__(self) -> int:
        return len(self._chars)

    @property
    def chars(self) -> str:
        """The decoded text."""
        return self._chars

    @property
    def is_bytes(self) -> bool:
        """True if the cursor was built from bytes input."""
        return self._offsets is not None

    def char(self, index: int) -> str:
        """Return the code point at index, or an empty string outside the text."""
        if 0 <= index < len(self._chars):
            return self._chars[index]
        return ""

    def is_alpha(self, index: int) -> bool:
        """Return True if the code point at index is alphabetic."""
        char = self.char(index)
        return bool(char) and self._classifier.is_alpha(char)

    def is_space(self, index: int) -> bool:
        """Return True if the code point at index is whitespace."""
        char = self.char(index)
        return bool(char) and self._classifier.is_space(char)

    def slice(self, start: int, end: int) -> TextLike:
        """Return the original input between two code point indices.

        Args:
            start: First code point index (inclusive).
            end: Last code point index (exclusive).

        Returns:
            A str slice for str input, a byte-exact bytes slice for bytes input.
        """
        start = max(0, min(start, len(self._chars)))
        end = max(start, min(end, len(self._chars)))
        if self._offsets is None:
            return self._chars[start:end]
        assert isinstance(self._source, bytes)
        return self._source[self._offsets[start] : self._offsets[end]]

    def encode(self, text: str) -> TextLike:
        """Convert inserted text (hyphens, replacements) to the input's type.

        Raises:
            InvalidText: If the text cannot be encoded in the input's encoding.
        """
        if self._offsets is None:
            return text
        try:
            return text.encode(self._encoding)
        except UnicodeEncodeError as e:
            raise InvalidText(f"Cannot insert {text!r} into {self._encoding} text: {e.reason}") from e

    def word_end(self, index: int) -> int:
        """Return the index just past the alphabetic run starting at index."""
        end = index
        while self.is_alpha(end):
            end += 1
        return end

    def words(self, start: int, end: int) -> List[tuple[int, int]]:
        """Return (start, end) index pairs of the alphabetic runs in [start, end).

        A run that begins inside the range is reported in full, even when it
        extends past end.
        """
        runs: List[tuple[int, int]] = []
        index = start
        while index < end:
            if self.is_alpha(index):
                run_end = self.word_end(index)
                runs.append((index, run_end))
                index = run_end
            else:
                index += 1
        return runs
