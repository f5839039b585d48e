"""Tests for the duplicate grouper."""

from truthguard.domain.services.similarity_matcher import SimilarityMatcher
from truthguard.domain.services.duplicate_grouper import DuplicateGrouper

# A~B and A~C score 4/6, but B~C only scores 3/7
SEED = "alpha bravo charlie delta echo"
NEAR_SEED_1 = "alpha bravo charlie delta xray"
NEAR_SEED_2 = "bravo charlie delta echo yankee"


def ids(groups):
    return [[claim.id for claim in group] for group in groups]


def test_find_similar_filters_in_order(grouper, make_claim):
    """Test that matching claims are returned in input order."""
    claims = [
        make_claim("Kenya's GDP grew by 15% last quarter", id="1"),
        make_claim("Free laptops for every student", id="2"),
        make_claim("GDP grew last quarter in Kenya", id="3"),
    ]

    similar = grouper.find_similar("Kenya's GDP grew 15% last quarter", claims)

    assert [c.id for c in similar] == ["1", "3"]


def test_find_similar_without_match_is_empty(grouper, make_claim):
    """Test that no match is an empty result, not an error."""
    claims = [make_claim("Free laptops for every student", id="1")]
    assert grouper.find_similar("Fuel prices dropped overnight", claims) == []
    assert grouper.find_similar("anything at all", []) == []


def test_find_similar_threshold_override(grouper, make_claim):
    """Test per-call strictness."""
    claims = [make_claim("GDP grew last quarter in Kenya", id="1")]
    text = "Kenya's GDP grew by 15% last quarter"

    assert len(grouper.find_similar(text, claims)) == 1
    assert grouper.find_similar(text, claims, threshold=0.9) == []


def test_group_by_similarity_compares_with_seed_only(grouper, make_claim):
    """Test that clusters are not transitively closed."""
    claims = [
        make_claim(SEED, id="a"),
        make_claim(NEAR_SEED_1, id="b"),
        make_claim(NEAR_SEED_2, id="c"),
    ]

    matcher = grouper.matcher
    assert not matcher.is_duplicate(NEAR_SEED_1, NEAR_SEED_2)
    assert ids(grouper.group_by_similarity(claims)) == [["a", "b", "c"]]


def test_group_by_similarity_depends_on_order(grouper, make_claim):
    """Test that a different input order yields different clusters."""
    claims = [
        make_claim(NEAR_SEED_1, id="b"),
        make_claim(NEAR_SEED_2, id="c"),
        make_claim(SEED, id="a"),
    ]

    assert ids(grouper.group_by_similarity(claims)) == [["b", "a"], ["c"]]


def test_group_by_similarity_partitions_input(grouper, make_claim):
    """Test that every claim lands in exactly one cluster."""
    contents = [
        "Kenya's GDP grew by 15% last quarter",
        "Free laptops for every student",
        "GDP grew last quarter in Kenya",
        "Government laptops free for students",
        "Fuel prices dropped overnight",
        "",
    ]
    claims = [make_claim(text, id=str(i)) for i, text in enumerate(contents)]

    groups = grouper.group_by_similarity(claims)
    flattened = [claim.id for group in groups for claim in group]

    assert all(groups)
    assert sorted(flattened) == sorted(c.id for c in claims)
    assert len(flattened) == len(set(flattened))


def test_group_by_similarity_threshold_override(make_claim):
    """Test that a stricter threshold splits clusters."""
    grouper = DuplicateGrouper(SimilarityMatcher())
    claims = [
        make_claim(SEED, id="a"),
        make_claim(NEAR_SEED_1, id="b"),
    ]

    assert ids(grouper.group_by_similarity(claims, threshold=0.9)) == [["a"], ["b"]]


def test_group_by_similarity_empty_input(grouper):
    """Test that no claims means no clusters."""
    assert grouper.group_by_similarity([]) == []
