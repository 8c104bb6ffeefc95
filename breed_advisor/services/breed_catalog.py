import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from breed_advisor.core.config import settings
from breed_advisor.models.breed import BreedRecord

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "breed_catalog.json"

BreedCatalog = Tuple[BreedRecord, ...]

_catalog_adapter = TypeAdapter(List[BreedRecord])


class BreedCatalogError(Exception):
    """The catalog file is missing or does not describe a valid set of breeds."""


def parse_breed_catalog(raw: object) -> BreedCatalog:
    try:
        records = _catalog_adapter.validate_python(raw)
    except ValidationError as exc:
        raise BreedCatalogError(f"Invalid breed catalog: {exc}") from exc

    seen: set[str] = set()
    for record in records:
        key = record.breed_name.casefold()
        if key in seen:
            raise BreedCatalogError(f"Duplicate breed in catalog: {record.breed_name}")
        seen.add(key)

    return tuple(records)


def load_breed_catalog(path: Optional[str | Path] = None) -> BreedCatalog:
    """
    Reads the breed catalog from disk.

    Falls back to BREED_CATALOG_PATH and then to the bundled data file.
    """
    catalog_path = Path(path or settings.BREED_CATALOG_PATH or DEFAULT_CATALOG_PATH)
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as exc:
        raise BreedCatalogError(f"Breed catalog not found at {catalog_path}") from exc
    except json.JSONDecodeError as exc:
        raise BreedCatalogError(f"Breed catalog at {catalog_path} is not valid JSON") from exc

    catalog = parse_breed_catalog(raw)
    logger.info("Loaded %d breeds from %s", len(catalog), catalog_path)
    return catalog


def climates_in_catalog(catalog: BreedCatalog) -> List[str]:
    climates = {climate for breed in catalog for climate in breed.climate_suitability}
    return sorted(climates)
