from fastapi import Request

from breed_advisor.services.breed_catalog import BreedCatalog
from breed_advisor.services.breed_narrative import BreedNarrator


def get_breed_catalog(request: Request) -> BreedCatalog:
    """The catalog loaded at startup. Shared by every request, never copied."""
    return request.app.state.breed_catalog


def get_breed_narrator(request: Request) -> BreedNarrator:
    return request.app.state.breed_narrator
