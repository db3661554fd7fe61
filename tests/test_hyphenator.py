"""Tests for break points and hyphenation of single words."""

import pytest

from hyphenfit.common import InvalidText
from hyphenfit.hyphenator import BreakPoint, WordHyphenator
from hyphenfit.pattern_dictionary import PatternDictionary

FIXTURE = "a1b .c1 c1k/k=k"


def hyphenator_for(source: str) -> WordHyphenator:
    """Create a WordHyphenator from dictionary source."""
    return WordHyphenator(PatternDictionary.build(source))


class TestBreakPoint:
    """Test the break point value type."""

    def test_ordinary(self):
        """Test an ordinary break point."""
        point = BreakPoint(2)
        assert not point.is_substitution
        assert point.consumed == 0
        assert point.space_needed_pre_hyphen == 0
        assert point.split("cabab", "-") == ("ca-", "bab")

    def test_substitution(self):
        """Test a break point that replaces letters."""
        point = BreakPoint(3, pre="k", post="k", delete_before=1, skip_after=1)
        assert point.is_substitution
        assert point.consumed == 2
        assert point.head_end == 2
        assert point.tail_start == 4
        assert point.space_needed_pre_hyphen == 0
        assert point.split("Zucker", "-") == ("Zuk-", "ker")

    def test_space_needed(self):
        """Test a substitution that lengthens the first part."""
        point = BreakPoint(3, pre="kk", post="k", delete_before=1, skip_after=1)
        assert point.space_needed_pre_hyphen == 1
        assert point.split("Zucker", "=") == ("Zukk=", "ker")


class TestWordHyphenatorPoints:
    """Test break point computation."""

    def test_fixture_points(self):
        """Test the hand-traced fixture."""
        hyphenator = hyphenator_for(FIXTURE)
        assert hyphenator.points("cab") == [BreakPoint(1), BreakPoint(2)]
        assert hyphenator.points("cabab") == [BreakPoint(1), BreakPoint(2), BreakPoint(4)]

    def test_substitution_point(self):
        """Test that a rule covering the gap gives a substitution."""
        hyphenator = hyphenator_for(FIXTURE)
        assert hyphenator.points("Zucker") == [BreakPoint(3, pre="k", post="k", delete_before=1, skip_after=1)]

    def test_rule_outside_gap(self):
        """Test that a rule whose span does not contain the gap gives an ordinary break."""
        hyphenator = hyphenator_for("a1bcd/x=y,3,2")
        assert hyphenator.points("abcd") == [BreakPoint(1)]
        assert hyphenator.hyphenate("abcd", "-") == "a-bcd"

    def test_minimums(self):
        """Test that left_min and right_min restrict the gaps."""
        hyphenator = hyphenator_for("LEFTHYPHENMIN 2\nRIGHTHYPHENMIN 2\n" + FIXTURE)
        assert hyphenator.points("cab") == []
        assert hyphenator.points("cabab") == [BreakPoint(2)]

    def test_no_break_at_word_ends(self):
        """Test that gaps 0 and len(word) are never break points."""
        hyphenator = hyphenator_for("1a1")
        assert hyphenator.points("a") == []
        assert hyphenator.points("aa") == [BreakPoint(1)]

    def test_no_candidates(self):
        """Test a word without matches."""
        hyphenator = hyphenator_for(FIXTURE)
        assert hyphenator.points("xyz") == []
        assert hyphenator.points("") == []

    def test_invalid_text(self):
        """Test that lone surrogates are rejected."""
        hyphenator = hyphenator_for(FIXTURE)
        with pytest.raises(InvalidText):
            hyphenator.points("a\ud800b")


class TestWordHyphenatorHyphenate:
    """Test rendering of hyphenated words."""

    def test_plain(self):
        """Test hyphen insertion."""
        hyphenator = hyphenator_for(FIXTURE)
        assert hyphenator.hyphenate("cab", "-") == "c-a-b"
        assert hyphenator.hyphenate("cabab", "\u00ad") == "c\u00ada\u00adba\u00adb"

    def test_case_preserved(self):
        """Test that the original case is kept."""
        assert hyphenator_for(FIXTURE).hyphenate("CaB", "-") == "C-a-B"

    def test_substitution(self):
        """Test the classic 'ck' -> 'k-k' exception."""
        hyphenator = hyphenator_for(FIXTURE)
        assert hyphenator.hyphenate("Zucker", "-") == "Zuk-ker"
        assert hyphenator.hyphenate("zuckerbäcker", "-") == "zuk-kerbäk-ker"

    def test_substitution_with_start_field(self):
        """Test an exception entry with explicit start and cut."""
        assert hyphenator_for("zuc1ker/k=k,3,2").hyphenate("Zucker", "-") == "Zuk-ker"

    def test_overlapping_break_skipped(self):
        """Test that a break inside letters consumed by a substitution is skipped."""
        hyphenator = hyphenator_for("a1bc/x=y,1,3 b1c")
        assert hyphenator.points("abcd") == [
            BreakPoint(1, pre="x", post="y", delete_before=1, skip_after=2),
            BreakPoint(2),
        ]
        assert hyphenator.hyphenate("abcd", "-") == "x-yd"

    @pytest.mark.parametrize("word", ["cab", "cabab", "abba", "cacao", "Babcab"])
    def test_round_trip_without_substitutions(self, word):
        """Test that removing the hyphens restores the word."""
        hyphenator = hyphenator_for("a1b .c1 1ca")
        assert hyphenator.hyphenate(word, "-").replace("-", "") == word

    def test_no_candidates(self):
        """Test that a word without breaks is returned unchanged."""
        assert hyphenator_for(FIXTURE).hyphenate("xyz", "-") == "xyz"
