from typing import Iterable, List

from breed_advisor.models.breed import BreedRecord, Tier
from breed_advisor.models.breed_recommendation import FarmerInput, FarmingGoal


def satisfies_constraints(breed: BreedRecord, farmer_input: FarmerInput) -> bool:
    if breed.market_price > farmer_input.budget:
        return False
    if farmer_input.regional_climate not in breed.climate_suitability:
        return False
    if farmer_input.goal == FarmingGoal.LOW_MAINTENANCE and (
        breed.maintenance_cost != Tier.LOW or breed.care_level != Tier.LOW
    ):
        return False
    return True


def filter_breeds(
    catalog: Iterable[BreedRecord], farmer_input: FarmerInput
) -> List[BreedRecord]:
    """Breeds that fit the budget, the climate and, for low-maintenance, the upkeep. Catalog order is kept."""
    return [breed for breed in catalog if satisfies_constraints(breed, farmer_input)]
