"""Tests for the stopword and generic-term lexicon."""

from seo_keyword_engine.lexicon import (
    GENERIC_TERMS,
    STOPWORDS,
    is_generic,
    is_specific_term,
    is_stopword,
    is_weak_term,
)


class TestWordLists:
    """Test the static word lists."""

    def test_lists_are_lowercase(self):
        """Test that every entry is lower-cased for token comparison."""
        assert all(word == word.lower() for word in STOPWORDS)
        assert all(word == word.lower() for word in GENERIC_TERMS)

    def test_lists_are_immutable(self):
        """Test that the shared lists cannot be mutated."""
        assert isinstance(STOPWORDS, frozenset)
        assert isinstance(GENERIC_TERMS, frozenset)

    def test_functional_words_are_stopwords(self):
        """Test common functional words."""
        for word in ("the", "and", "for", "with", "your"):
            assert is_stopword(word)

    def test_marketing_words_are_generic(self):
        """Test vague marketing vocabulary."""
        for word in ("best", "guide", "ultimate", "solution", "tips"):
            assert is_generic(word)


class TestTermClassification:
    """Test weak and specific term checks."""

    def test_weak_terms(self):
        """Test that stopwords and generic terms are both weak."""
        assert is_weak_term("the")
        assert is_weak_term("guide")
        assert not is_weak_term("solar")

    def test_specific_terms(self):
        """Test content-bearing words."""
        assert is_specific_term("solar")
        assert is_specific_term("roof")

    def test_short_words_are_not_specific(self):
        """Test that words under four characters are not specific."""
        assert not is_specific_term("car")
        assert is_specific_term("car", min_length=3)

    def test_weak_words_are_not_specific(self):
        """Test that long weak words are not specific."""
        assert not is_specific_term("comprehensive")
        assert not is_specific_term("through")
