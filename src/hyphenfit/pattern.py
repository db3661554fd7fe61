"""Hyphenation pattern entries.

A pattern is a short letter sequence annotated with one weight per gap,
e.g. 'a1b' (weight 1 between 'a' and 'b') or '.c1' (weight 1 after a
word-initial 'c'). Odd weights allow a break, even weights forbid it, and
the larger weight of overlapping matches wins.

An exception entry adds a substitution that changes the spelling around the
break: 'c1k/k=k' turns 'ck' into 'k-k', as in the old German 'Zucker' ->
'Zuk-ker'. The optional fields ',start,cut' select the replaced letters
(1-based start, count); by default all letters of the entry are replaced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from hyphenfit.common import MalformedPattern
from hyphenfit.consts import (
    BOUNDARY_MARKER,
    EXCEPTION_SEPARATOR,
    FIELD_SEPARATOR,
    REPLACEMENT_SEPARATOR,
)

def fold_char(char: str) -> str:
    """Lower-case one code point, keeping it when its lower case form is longer."""
    lower = char.lower()
    return lower if len(lower) == 1 else char


###############################################################################
# Substitution
###############################################################################


@dataclass(frozen=True)
class Substitution:
    """Non-literal replacement applied when a pattern's break is taken.

    Attributes:
        pre: Text emitted before the hyphen.
        post: Text emitted after the hyphen.
        start: 0-based index into the pattern letters of the first replaced letter.
        cut: Number of original letters replaced (consumed) by pre and post.
    """

    pre: str
    post: str
    start: int
    cut: int

    @property
    def end(self) -> int:
        """Index into the pattern letters just past the replaced letters."""
        return self.start + self.cut


###############################################################################
# Pattern
###############################################################################


@dataclass(frozen=True)
class Pattern:
    """A parsed dictionary entry.

    Attributes:
        letters: The letters to match, without boundary markers.
        weights: One weight per gap of the letters, len(letters) + 1 entries;
            weights[i] is the gap before letters[i], weights[-1] the gap after
            the last letter.
        anchored_start: Pattern only matches at the start of a word.
        anchored_end: Pattern only matches at the end of a word.
        substitution: Replacement applied at the pattern's break, if any.
    """

    letters: str
    weights: Tuple[int, ...]
    anchored_start: bool = False
    anchored_end: bool = False
    substitution: Optional[Substitution] = None

    @property
    def key(self) -> Tuple[Optional[str], ...]:
        """Trie path of the pattern; None stands for a word boundary."""
        head: Tuple[Optional[str], ...] = (None,) if self.anchored_start else ()
        tail: Tuple[Optional[str], ...] = (None,) if self.anchored_end else ()
        return head + tuple(self.letters) + tail

    @property
    def key_offset(self) -> int:
        """Position of the first letter within the key."""
        return 1 if self.anchored_start else 0

    def key_weights(self) -> Tuple[int, ...]:
        """Return the weights aligned with the key, boundary gaps included.

        The gaps outside of the boundary markers can never carry a weight.
        """
        head = (0,) if self.anchored_start else ()
        tail = (0,) if self.anchored_end else ()
        return head + self.weights + tail

    def odd_gaps(self, start: int = 0, end: Optional[int] = None) -> List[int]:
        """Return the gap indices in [start, end] whose weight is odd."""
        end = len(self.letters) if end is None else end
        return [gap for gap in range(start, end + 1) if self.weights[gap] % 2 == 1]

    @classmethod
    def from_string(cls, entry: str, line: Optional[int] = None) -> Pattern:
        """Parse a single dictionary entry.

        Args:
            entry: The entry text, e.g. 'a1b', '.c1', 'c1k/k=k,1,2'.
            line: Line number used in error messages.

        Returns:
            The parsed Pattern.

        Raises:
            MalformedPattern: If the entry cannot be parsed.
        """
        body, separator, replacement = entry.partition(EXCEPTION_SEPARATOR)
        letters, weights, anchored_start, anchored_end = cls._parse_body(body, entry, line)

        substitution = None
        if separator:
            substitution = cls._parse_substitution(replacement, len(letters), entry, line)

        return cls(
            letters=letters,
            weights=weights,
            anchored_start=anchored_start,
            anchored_end=anchored_end,
            substitution=substitution,
        )

    @staticmethod
    def _parse_body(body: str, entry: str, line: Optional[int]) -> Tuple[str, Tuple[int, ...], bool, bool]:
        """Split 'a1b2c' style text into letters and gap weights.

        Returns:
            A tuple of (letters, weights, anchored_start, anchored_end).
        """
        anchored_start = body.startswith(BOUNDARY_MARKER)
        anchored_end = len(body) > 1 and body.endswith(BOUNDARY_MARKER)
        if anchored_start:
            body = body[1:]
        if anchored_end:
            body = body[:-1]

        letters: List[str] = []
        weights: List[int] = [0]
        previous_digit = False
        for char in body:
            if "0" <= char <= "9":
                if previous_digit:
                    raise MalformedPattern("Adjacent digits; weights are single decimal digits", line, entry)
                weights[-1] = int(char)
                previous_digit = True
            elif char == BOUNDARY_MARKER:
                # also catches digits outside the markers, e.g. '1.ab'
                raise MalformedPattern("Boundary marker inside a pattern", line, entry)
            else:
                letters.append(fold_char(char))
                weights.append(0)
                previous_digit = False

        if not letters:
            raise MalformedPattern("Pattern has no letters", line, entry)
        return "".join(letters), tuple(weights), anchored_start, anchored_end

    @staticmethod
    def _parse_substitution(replacement: str, letter_count: int, entry: str, line: Optional[int]) -> Substitution:
        """Parse the 'pre=post[,start[,cut]]' part of an exception entry."""
        fields = replacement.split(FIELD_SEPARATOR)
        if len(fields) > 3:
            raise MalformedPattern("Too many fields in substitution", line, entry)

        halves = fields[0].split(REPLACEMENT_SEPARATOR)
        if len(halves) != 2:
            raise MalformedPattern(
                f"Substitution needs exactly one '{REPLACEMENT_SEPARATOR}' between its halves", line, entry
            )
        pre, post = halves

        try:
            numbers = [int(field) for field in fields[1:]]
        except ValueError as e:
            raise MalformedPattern("Substitution start and cut must be integers", line, entry) from e

        start = numbers[0] - 1 if numbers else 0
        cut = numbers[1] if len(numbers) > 1 else letter_count - start
        if start < 0 or cut < 1 or start + cut > letter_count:
            raise MalformedPattern(
                f"Substitution range start={start + 1}, cut={cut} does not fit {letter_count} letters", line, entry
            )
        return Substitution(pre=pre, post=post, start=start, cut=cut)
