from fastapi import APIRouter, Depends

from breed_advisor.api.dependencies import get_breed_catalog, get_breed_narrator
from breed_advisor.core.security import verify_jwt
from breed_advisor.models.breed_recommendation import (
    BreedRecommendationResponse,
    FarmerInput,
)
from breed_advisor.services.breed_catalog import BreedCatalog
from breed_advisor.services.breed_narrative import BreedNarrator
from breed_advisor.services.breed_recommendation_service import recommend_breeds

router = APIRouter(
    prefix="/breed-recommendations",
    tags=["Breed Recommendation"],
)


@router.post(
    "",
    response_model=BreedRecommendationResponse,
    response_model_exclude_none=True,
)
async def create_breed_recommendation(
    farmer_input: FarmerInput,
    user_payload: dict = Depends(verify_jwt),
    catalog: BreedCatalog = Depends(get_breed_catalog),
    narrator: BreedNarrator = Depends(get_breed_narrator),
) -> BreedRecommendationResponse:
    """
    Recommends up to three breeds for the farmer's goal, budget and climate.

    An empty list means no breed fits the budget and climate. 503 means the
    description model is unavailable and the request can be retried.
    """
    return await recommend_breeds(
        farmer_input,
        catalog,
        narrator=narrator,
        user_id=user_payload.get("sub"),
    )
