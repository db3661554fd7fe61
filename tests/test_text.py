"""Test module for hyphenfit.text Hyphenator.

The tests are run using pytest.
"""

import pyphen
import pytest

from hyphenfit.common import BreakKind, InvalidText, UnsupportedLanguageError
from hyphenfit.dictionary_loader import DictionaryLoader, DictionarySettings
from hyphenfit.text import Hyphenator, main

FIXTURE = "a1b .c1 c1k/k=k"
PLAIN_FIXTURE = "a1b .c1"


class TestHyphenatorBasic:
    """Basic hyphenation tests with a hand-traced dictionary."""

    def test_hyphenate_word(self):
        """Test a single word."""
        hyphenator = Hyphenator.from_source(FIXTURE)
        assert hyphenator.hyphenate("cabab") == "c-a-ba-b"
        assert hyphenator.hyphenate("Zucker", "=") == "Zuk=ker"

    def test_hyphenate_bytes(self):
        """Test that bytes in give bytes out."""
        hyphenator = Hyphenator.from_source(FIXTURE)
        assert hyphenator.hyphenate("Bäcker".encode("utf-8")) == "Bäk-ker".encode("utf-8")

    def test_raw_break_points(self):
        """Test the break points of a word."""
        points = Hyphenator.from_source(FIXTURE).raw_break_points("Zucker")
        assert len(points) == 1
        assert points[0].index == 3
        assert points[0].is_substitution
        assert [point.index for point in Hyphenator.from_source(FIXTURE).raw_break_points(b"cab")] == [1, 2]

    def test_empty_string(self):
        """Test handling of empty string."""
        hyphenator = Hyphenator.from_source(FIXTURE)
        assert hyphenator.hyphenate_text("") == ""
        assert hyphenator.hyphenate_text(b"") == b""

    def test_preserves_capitalization(self):
        """Test that original capitalization is preserved."""
        assert Hyphenator.from_source(FIXTURE).hyphenate_text("CAB Cab") == "C-A-B C-a-b"

    def test_upper_case_dictionary(self):
        """Test that upper-case dictionary entries match words of any case."""
        hyphenator = Hyphenator.from_source("A1B")
        assert hyphenator.hyphenate("ab") == "a-b"
        assert hyphenator.hyphenate("AB") == "A-B"


class TestHyphenatorText:
    """Tests for hyphenation of running text."""

    def test_multiple_words(self):
        """Test that every word is hyphenated."""
        result = Hyphenator.from_source(FIXTURE).hyphenate_text("Zucker, cab!", "=")
        assert result == "Zuk=ker, c=a=b!"

    def test_punctuation_and_digits_preserved(self):
        """Test that non-alphabetic text is copied."""
        result = Hyphenator.from_source(FIXTURE).hyphenate_text("12cab3 (xyz)\n\tab.")
        assert result == "12c-a-b3 (xyz)\n\ta-b."

    def test_reversible_without_substitutions(self):
        """Test that removing the hyphens restores the text."""
        original = "cabab ab, cab\ncab\tabab 42!"
        encoded = Hyphenator.from_source(PLAIN_FIXTURE).hyphenate_text(original, "\u00ad")
        assert "\u00ad" in encoded
        assert encoded.replace("\u00ad", "") == original

    def test_bytes_copied_exactly(self):
        """Test that untouched bytes are copied byte for byte."""
        text = "ä cab €".encode("utf-8")
        assert Hyphenator.from_source(FIXTURE).hyphenate_text(text) == "ä c-a-b €".encode("utf-8")

    def test_other_encoding(self):
        """Test bytes in a configured encoding."""
        hyphenator = Hyphenator.from_source(FIXTURE, encoding="latin-1")
        assert hyphenator.hyphenate_text("Bäcker ab".encode("latin-1")) == "Bäk-ker a-b".encode("latin-1")

    def test_invalid_text(self):
        """Test that undecodable input is rejected."""
        with pytest.raises(InvalidText):
            Hyphenator.from_source(FIXTURE).hyphenate_text(b"cab \xff")


class TestHyphenatorLines:
    """Tests for line fitting through the facade."""

    def test_break_at(self):
        """Test the module example."""
        assert Hyphenator.from_source(FIXTURE).break_at("Zucker bäcker", "-", 4) == ("Zuk-", "ker bäcker")

    def test_fit_line(self):
        """Test the kind of a break."""
        result = Hyphenator.from_source(FIXTURE).fit_line("aa bb cc", "-", 2)
        assert result.kind == BreakKind.WHITESPACE
        assert result.as_tuple() == ("aa", "bb cc")

    def test_wrap(self):
        """Test paragraph layout."""
        hyphenator = Hyphenator.from_source(FIXTURE)
        lines = hyphenator.wrap("xx cabab yy Zucker", 6)
        assert lines == ["xx ca-", "bab yy", "Zucker"]
        assert all(len(line) <= 6 for line in lines)

    @pytest.mark.parametrize("width", [3, 5, 7, 9, 12, 20])
    def test_wrap_reconstruction(self, width):
        """Test that wrapped lines restore the text."""
        text = "cabab abab cab xx cabcab ab"
        lines = Hyphenator.from_source(PLAIN_FIXTURE).wrap(text, width, "-")
        joined = ""
        for line in lines:
            joined += line[:-1] if line.endswith("-") else line + " "
        assert joined.rstrip() == text


class TestHyphenatorConstruction:
    """Tests for the constructors."""

    def test_from_file(self, tmp_path):
        """Test loading a dictionary file."""
        path = tmp_path / "hyph_xx.dic"
        path.write_text("UTF-8\n" + FIXTURE + "\n", encoding="utf-8")
        hyphenator = Hyphenator.from_file(path, loader=DictionaryLoader())
        assert hyphenator.hyphenate("Zucker") == "Zuk-ker"
        assert len(hyphenator.trie) == 3

    def test_for_language(self, tmp_path):
        """Test loading by language tag."""
        (tmp_path / "hyph_xx.dic").write_text(FIXTURE, encoding="utf-8")
        loader = DictionaryLoader(DictionarySettings.with_paths(tmp_path, use_bundled=False))
        assert Hyphenator.for_language("xx-YY", loader=loader).hyphenate("cab") == "c-a-b"

    def test_unsupported_language(self, tmp_path):
        """Test that an unknown language raises."""
        loader = DictionaryLoader(DictionarySettings.with_paths(tmp_path, use_bundled=False))
        with pytest.raises(UnsupportedLanguageError):
            Hyphenator.for_language("xx", loader=loader)

    def test_bundled_language(self):
        """Test a dictionary bundled with pyphen."""
        if "en_US" not in pyphen.LANGUAGES:
            pytest.skip("pyphen has no en_US dictionary")
        hyphenator = Hyphenator.for_language("en_US")
        result = hyphenator.hyphenate("hyphenation")
        assert "-" in result
        assert result.replace("-", "") == "hyphenation"


class TestMain:
    """Tests for the command line demo."""

    def test_wrap_file(self, tmp_path, capsys):
        """Test wrapping a text file."""
        dictionary = tmp_path / "hyph_xx.dic"
        dictionary.write_text(FIXTURE, encoding="utf-8")
        text = tmp_path / "text.txt"
        text.write_text("xx cabab\nyy   Zucker", encoding="utf-8")
        assert main([str(dictionary), "6", str(text)]) == 0
        assert capsys.readouterr().out.splitlines() == ["xx ca-", "bab yy", "Zucker", "------"]

    def test_unknown_language(self):
        """Test the exit status for an unknown language."""
        assert main(["zz-nonexistent-language", "20"]) == 1
