from typing import Iterable, List

from breed_advisor.models.breed_recommendation import MAX_RECOMMENDED_BREEDS, ScoredBreed


def rank_breeds(
    scored_breeds: Iterable[ScoredBreed], limit: int = MAX_RECOMMENDED_BREEDS
) -> List[ScoredBreed]:
    """
    Best overall score first, at most ``limit`` (capped at three) entries.

    sorted() is stable with reverse=True, so equal scores keep catalog order.
    """
    limit = max(0, min(limit, MAX_RECOMMENDED_BREEDS))
    ranked = sorted(scored_breeds, key=lambda item: item.overall_score, reverse=True)
    return ranked[:limit]
