"""Tests for the similarity matcher."""

import pytest

from truthguard.domain.services.similarity_matcher import SimilarityMatcher, tokenize


def test_tokenize_normalizes_text():
    """Test lowercasing, punctuation stripping and short-token removal."""
    assert tokenize("Kenya's GDP grew by 15% last quarter") == {
        "kenyas", "gdp", "grew", "last", "quarter"
    }


def test_tokenize_empty_text():
    """Test that empty or missing text yields no tokens."""
    assert tokenize("") == set()
    assert tokenize(None) == set()


@pytest.mark.parametrize("text_a,text_b", [
    ("Kenya's GDP grew by 15% last quarter", "GDP grew last quarter in Kenya"),
    ("Free laptops for every student", "The government promised laptops"),
    ("", "Something entirely different"),
])
def test_similarity_is_symmetric(matcher, text_a, text_b):
    """Test that argument order does not change the score."""
    assert matcher.similarity(text_a, text_b) == matcher.similarity(text_b, text_a)


def test_similarity_of_identical_text_is_one(matcher):
    """Test that a non-empty text is fully similar to itself."""
    text = "The government has allocated 50 billion shillings for infrastructure"
    assert matcher.similarity(text, text) == 1.0


def test_similarity_uses_jaccard_over_token_sets(matcher):
    """Test the Jaccard score of partially overlapping texts."""
    # 4 shared tokens out of 6 distinct ones
    score = matcher.similarity(
        "Kenya's GDP grew by 15% last quarter",
        "GDP grew last quarter in Kenya",
    )
    assert score == pytest.approx(4 / 6)


def test_repeated_words_do_not_add_weight(matcher):
    """Test that texts are compared as sets, not bags."""
    assert matcher.similarity("vote vote vote fraud", "vote fraud") == 1.0


def test_punctuation_and_case_are_ignored(matcher):
    """Test that normalization makes formatting irrelevant."""
    assert matcher.similarity("Hello, WORLD!!", "hello world") == 1.0


def test_degenerate_texts_score_zero(matcher):
    """Test that texts without significant tokens never match."""
    assert matcher.similarity("", "") == 0.0
    assert matcher.similarity("a an of", "a an of") == 0.0
    assert not matcher.is_duplicate("it is", "it is")


def test_is_duplicate_uses_default_threshold(matcher):
    """Test duplicate classification against the default threshold."""
    assert matcher.threshold == 0.6
    assert matcher.is_duplicate(
        "Kenya's GDP grew by 15% last quarter",
        "GDP grew last quarter in Kenya",
    )


def test_is_duplicate_threshold_override(matcher):
    """Test that callers can vary strictness per call."""
    text_a = "Kenya's GDP grew by 15% last quarter"
    text_b = "GDP grew last quarter in Kenya"
    assert not matcher.is_duplicate(text_a, text_b, threshold=0.7)
    assert SimilarityMatcher(threshold=0.5).is_duplicate(text_a, text_b)


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_invalid_threshold_rejected(threshold):
    """Test that thresholds outside [0, 1] are refused."""
    with pytest.raises(ValueError):
        SimilarityMatcher(threshold=threshold)
