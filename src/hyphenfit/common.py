"""Central module containing exceptions, enums and shared types for hyphenation and line fitting."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Union

###############################################################################
# Types
###############################################################################


TextLike = Union[str, bytes]  # Input text: str, or bytes in a known encoding


###############################################################################
# Exceptions
###############################################################################


class HyphenationError(Exception):
    """Base exception for hyphenation-related errors."""


class MalformedPattern(HyphenationError):
    """Raised when a hyphenation dictionary entry cannot be parsed.

    Attributes:
        line: 1-based line number of the offending entry, if known.
        token: The offending entry text, if known.
    """

    def __init__(self, message: str, line: Optional[int] = None, token: Optional[str] = None) -> None:
        self.line = line
        self.token = token
        location = ""
        if line is not None:
            location += f" (line {line}"
            location += f", entry '{token}')" if token is not None else ")"
        elif token is not None:
            location += f" (entry '{token}')"
        super().__init__(message + location)


class InvalidText(HyphenationError):
    """Raised when input text cannot be decoded into classifiable code points."""


class UnsupportedLanguageError(HyphenationError):
    """Raised when no hyphenation dictionary can be found for a language."""


###############################################################################
# Enums
###############################################################################


class BreakKind(Enum):
    """Enum to describe how a line break was chosen."""

    END_OF_TEXT = auto()  # whole text fits, nothing left over
    WHITESPACE = auto()  # break at a whitespace run
    HYPHENATION = auto()  # word-internal break that fits the column
    OVERFLOW_HYPHENATION = auto()  # earliest break of the first breakable word, exceeds the column
    OVERFLOW_BLOCK = auto()  # first block kept intact, exceeds the column

    @property
    def overflows(self) -> bool:
        """Return True if this kind of break may exceed the column limit."""
        return self in (BreakKind.OVERFLOW_HYPHENATION, BreakKind.OVERFLOW_BLOCK)
