from datetime import datetime
from enum import Enum
from typing import List
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .breed import BreedRecord, Tier

MAX_RECOMMENDED_BREEDS = 3


class FarmingGoal(str, Enum):
    MILK = "milk"
    DRAUGHT = "draught"
    DUAL_PURPOSE = "dual-purpose"
    LOW_MAINTENANCE = "low-maintenance"


class FarmerInput(BaseModel):
    """What the farmer told us. Immutable for the lifetime of a request."""

    model_config = ConfigDict(frozen=True)

    goal: FarmingGoal = Field(description="Primary reason for buying the animal")
    budget: float = Field(gt=0, description="Budget per animal in INR")
    land_size: float = Field(gt=0, description="Land available in acres")
    regional_climate: str = Field(
        min_length=1, description="Climate tag of the farmer's region"
    )
    language: str = Field(
        default="en", min_length=1, description="Language for the generated text"
    )


class BreedScores(BaseModel):
    """Per-criterion breakdown, each on a 0-10 integer scale."""

    model_config = ConfigDict(frozen=True)

    milk_yield_score: int = Field(ge=0, le=10)
    strength_score: int = Field(ge=0, le=10)
    care_requirement_score: int = Field(ge=0, le=10)
    roi_score: int = Field(ge=0, le=10)
    climate_match_score: int = Field(ge=0, le=10)


class ScoredBreed(BaseModel):
    model_config = ConfigDict(frozen=True)

    breed: BreedRecord
    overall_score: float = Field(ge=0, le=10)
    scores: BreedScores
    roi: int = Field(description="Annualised return on purchase price, percent")


class BreedNarrative(BaseModel):
    """Text the model writes for one breed. Anything numeric it adds is ignored."""

    model_config = ConfigDict(extra="ignore")

    breed_name: str = Field(
        min_length=1, description="Name of the breed in the requested language"
    )
    pros: str = Field(
        min_length=1, description="The key advantages of this breed for the farmer."
    )
    cons: str = Field(
        min_length=1,
        description="The key disadvantages or challenges of this breed for the farmer.",
    )


class BreedNarrativeResponse(BaseModel):
    recommended_breeds: List[BreedNarrative] = Field(
        description="One entry per input breed, in the same order as the input."
    )


class RecommendedBreed(BaseModel):
    breed_name: str = Field(description="The name of the recommended breed.")
    overall_score: float = Field(
        description="The overall suitability score for the farmer (out of 10)."
    )
    pros: str
    cons: str
    roi: int = Field(description="Estimated Return on Investment percentage.")
    care_level: Tier
    scores: BreedScores


class BreedRecommendationResponse(BaseModel):
    id: str = Field(
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    timestamp: datetime = Field(default_factory=datetime.now)
    goal: FarmingGoal
    language: str
    recommended_breeds: List[RecommendedBreed] = Field(
        default_factory=list, max_length=MAX_RECOMMENDED_BREEDS
    )
