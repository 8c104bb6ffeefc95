"""
Tests for breed_advisor/services/breed_ranking.py.

What we test
------------
rank_breeds():
  - Output is sorted by overall score, best first.
  - Never more than three entries, never more than the input.
  - Equal scores keep their input (catalog) order.
  - The limit can shrink the result but never grow it past three.
  - Empty input gives empty output.
  - Under the draught goal a strong, costly breed outranks a
    weak, easy-care one.
"""

from __future__ import annotations

import pytest

from breed_advisor.models.breed import Tier
from breed_advisor.models.breed_recommendation import BreedScores, FarmingGoal, ScoredBreed
from breed_advisor.services.breed_ranking import rank_breeds
from breed_advisor.services.breed_scoring import score_breed, score_breeds

_SCORES = BreedScores(
    milk_yield_score=5,
    strength_score=5,
    care_requirement_score=5,
    roi_score=5,
    climate_match_score=10,
)


@pytest.fixture
def scored_factory(make_breed):
    def _make(name: str, overall: float) -> ScoredBreed:
        return ScoredBreed(
            breed=make_breed(breed_name=name),
            overall_score=overall,
            scores=_SCORES,
            roi=100,
        )

    return _make


def test_sorted_descending(scored_factory):
    ranked = rank_breeds(
        [scored_factory("a", 4.0), scored_factory("b", 8.5), scored_factory("c", 6.1)]
    )
    assert [s.breed.breed_name for s in ranked] == ["b", "c", "a"]


def test_at_most_three(scored_factory):
    items = [scored_factory(str(i), float(i)) for i in range(6)]
    ranked = rank_breeds(items)
    assert len(ranked) == 3
    assert [s.overall_score for s in ranked] == [5.0, 4.0, 3.0]


def test_shorter_input_returned_whole(scored_factory):
    items = [scored_factory("a", 1.0), scored_factory("b", 2.0)]
    assert len(rank_breeds(items)) == 2


def test_ties_keep_input_order(scored_factory):
    items = [
        scored_factory("first", 7.0),
        scored_factory("low", 2.0),
        scored_factory("second", 7.0),
        scored_factory("third", 7.0),
        scored_factory("fourth", 7.0),
    ]
    ranked = rank_breeds(items)
    assert [s.breed.breed_name for s in ranked] == ["first", "second", "third"]


@pytest.mark.parametrize("limit,expected", [(0, 0), (1, 1), (2, 2), (3, 3), (10, 3)])
def test_limit_is_capped(scored_factory, limit, expected):
    items = [scored_factory(str(i), float(i)) for i in range(5)]
    assert len(rank_breeds(items, limit=limit)) == expected


def test_empty_input():
    assert rank_breeds([]) == []


def test_ranked_bundled_catalog_is_non_increasing(bundled_catalog):
    for goal in FarmingGoal:
        ranked = rank_breeds(score_breeds(bundled_catalog, goal))
        scores = [s.overall_score for s in ranked]
        assert scores == sorted(scores, reverse=True)
        assert len(ranked) <= 3


def test_draught_prefers_strength(make_breed):
    easy_care = make_breed(
        breed_name="Easy Care",
        milk_yield=3,
        strength=Tier.LOW,
        maintenance_cost=Tier.LOW,
        care_level=Tier.LOW,
    )
    strong = make_breed(
        breed_name="Strong",
        market_price=85000,
        milk_yield=12,
        strength=Tier.HIGH,
        maintenance_cost=Tier.HIGH,
        care_level=Tier.HIGH,
    )

    scored = score_breeds([easy_care, strong], FarmingGoal.DRAUGHT)
    ranked = rank_breeds(scored)

    assert [s.breed.breed_name for s in ranked] == ["Strong", "Easy Care"]
    assert score_breed(easy_care, FarmingGoal.DRAUGHT).scores.care_requirement_score > (
        score_breed(strong, FarmingGoal.DRAUGHT).scores.care_requirement_score
    )
    assert ranked[0].overall_score == 7.1
    assert ranked[1].overall_score == 3.9
