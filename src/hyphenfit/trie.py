"""Pattern trie for scoring the letter gaps of a word.

The trie stores every pattern of a dictionary as a path of letters from the
root; the word boundary is an edge of its own, so anchored patterns such as
'.c1' only match at the start or end of a word. A node that terminates a
pattern holds the pattern's weight vector and, for exception entries, the
BreakRule describing the substitution at the break.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from hyphenfit.consts import DEFAULT_LEFT_MIN, DEFAULT_RIGHT_MIN
from hyphenfit.pattern import Pattern, fold_char

logger = logging.getLogger(__name__)

WEIGHT_DTYPE = np.int8

###############################################################################
# BreakRule
###############################################################################


@dataclass(frozen=True)
class BreakRule:
    """Substitution attached to the trie node of an exception entry.

    Attributes:
        pre: Text emitted before the hyphen.
        post: Text emitted after the hyphen.
        span_offset: Position within the pattern key of the first replaced letter.
        cut: Number of original letters replaced.
    """

    pre: str
    post: str
    span_offset: int
    cut: int

    @classmethod
    def from_pattern(cls, pattern: Pattern) -> Optional[BreakRule]:
        """Create the rule of an exception entry, or None for plain patterns."""
        substitution = pattern.substitution
        if substitution is None:
            return None
        return cls(
            pre=substitution.pre,
            post=substitution.post,
            span_offset=pattern.key_offset + substitution.start,
            cut=substitution.cut,
        )


class RuleHit(NamedTuple):
    """A BreakRule matched inside a specific word.

    Attributes:
        rule: The matched rule.
        span_start: Index of the first replaced letter in the word.
    """

    rule: BreakRule
    span_start: int


class TrieMatch(NamedTuple):
    """Result of matching a word against the trie.

    Attributes:
        weights: One weight per gap of the word, len(word) + 1 entries.
        hits: Per gap, the rule of the match that produced the winning weight,
            or None if that match carries no rule.
    """

    weights: NDArray[np.int8]
    hits: List[Optional[RuleHit]]


###############################################################################
# PatternTrie
###############################################################################


class _TrieNode:
    """Single node in the trie; children are created lazily."""

    __slots__ = ("children", "weights", "rule")

    def __init__(self) -> None:
        self.children: Optional[Dict[Optional[str], _TrieNode]] = None
        self.weights: Optional[NDArray[np.int8]] = None
        self.rule: Optional[BreakRule] = None


class PatternTrie:
    """Trie of hyphenation patterns.

    The trie is built once by build() and only read afterwards, so a single
    instance can be shared between threads.

    Algorithm of match()/score():
        1. Case-fold the word and pad it with a boundary marker on both ends.
        2. For every start index of the padded word, walk the trie along the
           following letters. Every node visited corresponds to a pattern key
           that matches at the start index.
        3. Merge the weight vector of every visited node into the word's weight
           array at the start offset by elementwise maximum. Shorter patterns
           count even when a longer pattern also matches.
        4. Where a merge raises a gap's weight, remember the node's rule for
           that gap (None for plain patterns); ties keep the earlier match.

    Complexity is O(len(word)^2) in the worst case.

    Attributes:
        left_min: Minimum number of letters before the first break of a word.
        right_min: Minimum number of letters after the last break of a word.
    """

    def __init__(self, left_min: int = DEFAULT_LEFT_MIN, right_min: int = DEFAULT_RIGHT_MIN) -> None:
        """Create an empty trie; use build() to fill it."""
        self._root = _TrieNode()
        self._pattern_count = 0
        self._node_count = 1
        self.left_min = left_min
        self.right_min = right_min

    @classmethod
    def build(
        cls,
        patterns: Iterable[Pattern],
        left_min: int = DEFAULT_LEFT_MIN,
        right_min: int = DEFAULT_RIGHT_MIN,
    ) -> PatternTrie:
        """Build a trie from parsed patterns.

        Args:
            patterns: The patterns to insert, in dictionary order.
            left_min: Minimum letters before the first break.
            right_min: Minimum letters after the last break.

        Returns:
            The filled trie.
        """
        trie = cls(left_min=left_min, right_min=right_min)
        for pattern in patterns:
            trie._insert(pattern)
        logger.debug(
            "Built pattern trie: %d patterns, %d nodes, left_min=%d, right_min=%d",
            trie._pattern_count,
            trie._node_count,
            left_min,
            right_min,
        )
        return trie

    def _insert(self, pattern: Pattern) -> None:
        """Insert a pattern, merging with an existing one of the same key."""
        node = self._root
        for key in pattern.key:
            if node.children is None:
                node.children = {}
            child = node.children.get(key)
            if child is None:
                child = _TrieNode()
                node.children[key] = child
                self._node_count += 1
            node = child

        weights = np.array(pattern.key_weights(), dtype=WEIGHT_DTYPE)
        if node.weights is None:
            node.weights = weights
            self._pattern_count += 1
        else:
            node.weights = np.maximum(node.weights, weights)

        rule = BreakRule.from_pattern(pattern)
        if rule is not None:
            if node.rule is not None and node.rule != rule:
                logger.warning("Conflicting substitutions for pattern '%s', keeping the later one", pattern.letters)
            node.rule = rule

    def __len__(self) -> int:
        """Return the number of distinct pattern keys."""
        return self._pattern_count

    @property
    def node_count(self) -> int:
        """Number of nodes including the root."""
        return self._node_count

    @staticmethod
    def fold(word: str) -> List[str]:
        """Lower-case a word code point by code point.

        Code points whose lower case form is longer than one code point are
        kept as they are, so the folded word has the same length as the input.
        """
        return [fold_char(char) for char in word]

    def match(self, word: str) -> TrieMatch:
        """Match all patterns against a word.

        Args:
            word: The word to score.

        Returns:
            TrieMatch with the weight array and the winning rule per gap.
        """
        padded: List[Optional[str]] = [None, *self.fold(word), None]
        # padded gap p is word gap p - 1
        weights = np.zeros(len(padded) + 1, dtype=WEIGHT_DTYPE)
        hits: List[Optional[RuleHit]] = [None] * (len(padded) + 1)

        for start in range(len(padded)):
            self._merge_matches(padded, start, weights, hits)

        end = len(word) + 2
        return TrieMatch(weights[1:end].copy(), hits[1:end])

    def _merge_matches(
        self,
        padded: Sequence[Optional[str]],
        start: int,
        weights: NDArray[np.int8],
        hits: List[Optional[RuleHit]],
    ) -> None:
        """Merge every pattern matching at padded index start."""
        node = self._root
        for index in range(start, len(padded)):
            if node.children is None:
                return
            child = node.children.get(padded[index])
            if child is None:
                return
            node = child
            if node.weights is None:
                continue

            window = weights[start : start + len(node.weights)]
            gain = node.weights > window
            if not gain.any():
                continue
            np.maximum(window, node.weights, out=window)
            hit = RuleHit(node.rule, start - 1 + node.rule.span_offset) if node.rule is not None else None
            for offset in np.flatnonzero(gain):
                hits[start + int(offset)] = hit

    def score(self, word: str) -> NDArray[np.int8]:
        """Return the weight array of a word, one weight per gap.

        Args:
            word: The word to score.

        Returns:
            Array of len(word) + 1 weights; an odd weight allows a break.
        """
        return self.match(word).weights
