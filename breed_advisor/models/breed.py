from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


class Tier(str, Enum):
    """Ordinal level for attributes without a natural numeric scale."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AnimalType(str, Enum):
    CATTLE = "Cattle"
    BUFFALO = "Buffalo"


KNOWN_CLIMATES = ("Hot and Dry", "Hot and Humid", "Moderate", "Cold")


class BreedRecord(BaseModel):
    """A single catalog entry. Loaded once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    breed_name: str = Field(min_length=1, description="Name of the breed")
    animal_type: AnimalType = Field(default=AnimalType.CATTLE)
    origin: Optional[str] = Field(
        default=None, description="Home tract of the breed, e.g. 'Gujarat'"
    )
    market_price: float = Field(ge=0, description="Typical price per animal in INR")
    milk_yield: float = Field(ge=0, description="Average milk yield in litres/day")
    strength: Tier = Field(description="Draught power")
    maintenance_cost: Tier = Field(description="Feed and upkeep cost level")
    care_level: Tier = Field(description="Management effort required")
    climate_suitability: FrozenSet[str] = Field(
        description="Climate tags the breed thrives in"
    )
