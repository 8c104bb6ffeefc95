"""
Breed scoring: turns one filtered BreedRecord into a ScoredBreed.

Sub-scores (each 0-10)
----------------------
milk_yield_score       normalize(milk_yield, 1, 15) * 10
strength_score         tier score of strength (High 10, Medium 5, Low 1)
care_requirement_score 10 - tier score of care_level
climate_match_score    10; climate is pass/fail and the filter already passed it
roi_score              normalize(monthly profit, -5000, 20000) * 10

Monthly profit assumes milk sells at 55 INR/litre over 30 days, minus a fixed
monthly upkeep per maintenance tier (Low 3000, Medium 5000, High 8000).

The overall score is the goal-weighted sum of the unrounded sub-scores,
clamped to [0, 10] and rounded to one decimal. The displayed ROI is the
annualised profit as a percentage of the purchase price.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List

from breed_advisor.models.breed import BreedRecord, Tier
from breed_advisor.models.breed_recommendation import (
    BreedScores,
    FarmingGoal,
    ScoredBreed,
)

MILK_PRICE_PER_LITRE = 55
DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12

MILK_YIELD_RANGE = (1.0, 15.0)
MONTHLY_PROFIT_RANGE = (-5000.0, 20000.0)

MONTHLY_MAINTENANCE_COST: Dict[Tier, float] = {
    Tier.LOW: 3000.0,
    Tier.MEDIUM: 5000.0,
    Tier.HIGH: 8000.0,
}

_TIER_SCORE: Dict[Tier, int] = {
    Tier.HIGH: 10,
    Tier.MEDIUM: 5,
}

CLIMATE_MATCH_SCORE = 10.0


@dataclass(frozen=True)
class ScoreWeights:
    milk: float
    roi: float
    care: float
    climate: float
    strength: float

    @property
    def total(self) -> float:
        return self.milk + self.roi + self.care + self.climate + self.strength


# The low-maintenance row sums to 0.9, so its overall score tops out at 9.0.
GOAL_WEIGHTS: Dict[FarmingGoal, ScoreWeights] = {
    FarmingGoal.MILK: ScoreWeights(milk=0.5, roi=0.3, care=0.1, climate=0.1, strength=0.0),
    FarmingGoal.DRAUGHT: ScoreWeights(milk=0.1, roi=0.2, care=0.2, climate=0.1, strength=0.4),
    FarmingGoal.DUAL_PURPOSE: ScoreWeights(milk=0.3, roi=0.3, care=0.1, climate=0.1, strength=0.2),
    FarmingGoal.LOW_MAINTENANCE: ScoreWeights(milk=0.1, roi=0.3, care=0.4, climate=0.1, strength=0.0),
}


def _check_goal_weights() -> None:
    missing = set(FarmingGoal) - set(GOAL_WEIGHTS)
    if missing:
        raise RuntimeError(
            "No score weights for goals: " + ", ".join(sorted(g.value for g in missing))
        )


_check_goal_weights()


def normalize(value: float, min_value: float, max_value: float) -> float:
    """Linear map of value into [0, 1], clamped. A degenerate range counts as fully satisfied."""
    if max_value == min_value:
        return 1.0
    return _clamp((value - min_value) / (max_value - min_value), 0.0, 1.0)


def tier_score(tier: Tier) -> int:
    return _TIER_SCORE.get(tier, 1)


def estimate_monthly_profit(breed: BreedRecord) -> float:
    monthly_income = breed.milk_yield * DAYS_PER_MONTH * MILK_PRICE_PER_LITRE
    monthly_cost = MONTHLY_MAINTENANCE_COST[breed.maintenance_cost]
    return monthly_income - monthly_cost


def estimate_roi(breed: BreedRecord) -> float:
    """Annual profit as a percentage of the purchase price; 0 for free animals."""
    if breed.market_price <= 0:
        return 0.0
    annual_profit = estimate_monthly_profit(breed) * MONTHS_PER_YEAR
    return annual_profit / breed.market_price * 100


def weights_for_goal(goal: FarmingGoal) -> ScoreWeights:
    return GOAL_WEIGHTS[FarmingGoal(goal)]


def score_breed(breed: BreedRecord, goal: FarmingGoal) -> ScoredBreed:
    weights = weights_for_goal(goal)

    milk_yield_score = normalize(breed.milk_yield, *MILK_YIELD_RANGE) * 10
    strength_score = float(tier_score(breed.strength))
    care_requirement_score = 10.0 - tier_score(breed.care_level)
    climate_match_score = CLIMATE_MATCH_SCORE
    roi_score = normalize(estimate_monthly_profit(breed), *MONTHLY_PROFIT_RANGE) * 10

    overall = (
        milk_yield_score * weights.milk
        + strength_score * weights.strength
        + care_requirement_score * weights.care
        + roi_score * weights.roi
        + climate_match_score * weights.climate
    )

    return ScoredBreed(
        breed=breed,
        overall_score=round_half_up(_clamp(overall, 0.0, 10.0), 1),
        scores=BreedScores(
            milk_yield_score=int(round_half_up(milk_yield_score)),
            strength_score=int(round_half_up(strength_score)),
            care_requirement_score=int(round_half_up(care_requirement_score)),
            roi_score=int(round_half_up(roi_score)),
            climate_match_score=int(round_half_up(climate_match_score)),
        ),
        roi=int(round_half_up(estimate_roi(breed))),
    )


def score_breeds(breeds: Iterable[BreedRecord], goal: FarmingGoal) -> List[ScoredBreed]:
    return [score_breed(breed, goal) for breed in breeds]


def round_half_up(value: float, ndigits: int = 0) -> float:
    # round() is banker's rounding; displayed scores round .5 upwards.
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
