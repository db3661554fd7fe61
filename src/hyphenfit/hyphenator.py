"""Break points of single words.

The WordHyphenator turns the weight array of a word into an ordered list of
BreakPoint objects. Ordinary break points just insert the hyphen. Break points
produced by an exception entry replace letters around the break, e.g. with
the entry 'c1k/k=k':

    >>> from hyphenfit.pattern_dictionary import PatternDictionary
    >>> hyphenator = WordHyphenator(PatternDictionary.build("c1k/k=k"))
    >>> hyphenator.hyphenate("Zucker", "-")
    'Zuk-ker'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from hyphenfit.text_support import TextCursor
from hyphenfit.trie import PatternTrie

logger = logging.getLogger(__name__)

###############################################################################
# BreakPoint
###############################################################################


@dataclass(frozen=True)
class BreakPoint:
    """A legal break inside a word.

    Attributes:
        index: Gap index; the break lies between word[index - 1] and word[index].
        pre: Replacement text emitted before the hyphen.
        post: Replacement text emitted after the hyphen.
        delete_before: Number of original letters before the gap replaced by pre.
        skip_after: Number of original letters after the gap replaced by post.
    """

    index: int
    pre: str = ""
    post: str = ""
    delete_before: int = 0
    skip_after: int = 0

    @property
    def is_substitution(self) -> bool:
        """True if the break changes the letters around the hyphen."""
        return bool(self.pre or self.post or self.delete_before or self.skip_after)

    @property
    def consumed(self) -> int:
        """Number of original letters replaced by the substitution."""
        return self.delete_before + self.skip_after

    @property
    def space_needed_pre_hyphen(self) -> int:
        """Code points the first line grows by in front of the hyphen, beyond the gap index.

        Zero for ordinary break points; may be negative when a substitution
        shortens the text before the break.
        """
        return len(self.pre) - self.delete_before

    @property
    def head_end(self) -> int:
        """Index in the word where the original text before the break ends."""
        return self.index - self.delete_before

    @property
    def tail_start(self) -> int:
        """Index in the word where the original text after the break resumes."""
        return self.index + self.skip_after

    def split(self, word: str, hyphen: str) -> Tuple[str, str]:
        """Split a word at this break point.

        Args:
            word: The word the break point was computed for.
            hyphen: The hyphen marker to append to the first part.

        Returns:
            A tuple of (text before and including the hyphen, text after).
        """
        return (
            word[: self.head_end] + self.pre + hyphen,
            self.post + word[self.tail_start :],
        )


###############################################################################
# WordHyphenator
###############################################################################


class WordHyphenator:
    """Compute break points of words with a read-only PatternTrie."""

    def __init__(self, trie: PatternTrie) -> None:
        """Initialize the hyphenator.

        Args:
            trie: The pattern trie of the language.
        """
        self._trie = trie

    @property
    def trie(self) -> PatternTrie:
        """The underlying pattern trie."""
        return self._trie

    def points(self, word: str) -> List[BreakPoint]:
        """Return the break points of a word, left to right.

        A gap is a break point if its weight is odd and it leaves at least
        left_min letters before and right_min letters after it. If the match
        that produced the gap's weight carries a BreakRule whose replaced
        letters surround the gap, the break point takes the substitution.

        Args:
            word: The word to hyphenate.

        Returns:
            The break points; empty if the word cannot be hyphenated.

        Raises:
            InvalidText: If the word contains unpaired surrogates.
        """
        TextCursor(word)  # validates the word
        match = self._trie.match(word)

        first = max(self._trie.left_min, 1)
        last = len(word) - max(self._trie.right_min, 1)
        points: List[BreakPoint] = []
        for index in range(first, last + 1):
            if match.weights[index] % 2 == 0:
                continue
            hit = match.hits[index]
            if hit is not None and hit.span_start <= index <= hit.span_start + hit.rule.cut:
                delete_before = index - hit.span_start
                points.append(
                    BreakPoint(
                        index=index,
                        pre=hit.rule.pre,
                        post=hit.rule.post,
                        delete_before=delete_before,
                        skip_after=hit.rule.cut - delete_before,
                    )
                )
            else:
                points.append(BreakPoint(index=index))
        return points

    def hyphenate(self, word: str, hyphen: str) -> str:
        """Insert the hyphen at every break point of a word.

        Substitutions are applied. A break point whose replaced letters
        overlap letters already consumed by an earlier substitution is skipped.

        Args:
            word: The word to hyphenate.
            hyphen: The hyphen marker to insert.

        Returns:
            The hyphenated word.

        Raises:
            InvalidText: If the word contains unpaired surrogates.
        """
        pieces: List[str] = []
        position = 0
        for point in self.points(word):
            if point.head_end < position:
                logger.debug("Skipping overlapping break at %d in '%s'", point.index, word)
                continue
            pieces.append(word[position : point.head_end])
            pieces.append(point.pre + hyphen + point.post)
            position = point.tail_start
        pieces.append(word[position:])
        return "".join(pieces)
