"""Tests for grapheme-aware truncation."""

from autoreply.source import DM_MAX_GRAPHEMES, grapheme_length, truncate_graphemes

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"  # one cluster, five code points
FLAG = "\U0001F1FA\U0001F1E6"  # regional indicator pair
E_ACUTE = "e\u0301"  # combining accent


class TestGraphemeLength:
    """Tests for grapheme_length()."""

    def test_ascii(self):
        assert grapheme_length("hello") == 5

    def test_clusters_count_once(self):
        assert grapheme_length(FAMILY + FLAG + E_ACUTE) == 3


class TestTruncate:
    """Tests for truncate_graphemes()."""

    def test_short_text_unchanged(self):
        assert truncate_graphemes("hello", 10) == "hello"

    def test_exact_limit_unchanged(self):
        text = "x" * DM_MAX_GRAPHEMES
        assert truncate_graphemes(text) is text

    def test_1200_clusters_cut_to_1000(self):
        text = "".join(f"{i % 10}" for i in range(1200))
        result = truncate_graphemes(text)
        assert result == text[:1000]
        assert grapheme_length(result) == 1000

    def test_multi_codepoint_clusters_not_split(self):
        text = FAMILY * 1200
        result = truncate_graphemes(text)
        assert result == FAMILY * 1000
        assert len(result) == 5 * 1000

    def test_combining_marks_kept_with_base(self):
        text = E_ACUTE * 3
        assert truncate_graphemes(text, 2) == E_ACUTE * 2

    def test_zero_limit(self):
        assert truncate_graphemes("abc", 0) == ""
