from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from breed_advisor.api.dependencies import get_breed_catalog
from breed_advisor.core.security import verify_jwt
from breed_advisor.models.breed import KNOWN_CLIMATES, AnimalType, BreedRecord
from breed_advisor.services.breed_catalog import BreedCatalog, climates_in_catalog

router = APIRouter(prefix="/breeds", tags=["Breeds"], dependencies=[Depends(verify_jwt)])


@router.get("", response_model=List[BreedRecord])
async def list_breeds(
    climate: Optional[str] = Query(
        None, description=f"Only breeds suited to this climate: {', '.join(KNOWN_CLIMATES)}"
    ),
    animal_type: Optional[AnimalType] = Query(None, description="Cattle or Buffalo"),
    catalog: BreedCatalog = Depends(get_breed_catalog),
):
    """
    Lists the breed catalog in catalog order.
    """
    return [
        breed
        for breed in catalog
        if (climate is None or climate in breed.climate_suitability)
        and (animal_type is None or breed.animal_type == animal_type)
    ]


@router.get("/climates", response_model=List[str])
async def list_climates(catalog: BreedCatalog = Depends(get_breed_catalog)):
    """
    Climate tags used by at least one breed.
    """
    return climates_in_catalog(catalog)


@router.get("/{breed_name}", response_model=BreedRecord)
async def get_breed(breed_name: str, catalog: BreedCatalog = Depends(get_breed_catalog)):
    """
    Looks up a single breed by name (case-insensitive).
    """
    for breed in catalog:
        if breed.breed_name.casefold() == breed_name.casefold():
            return breed
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Breed '{breed_name}' not found.",
    )
