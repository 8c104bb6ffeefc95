import logging
from typing import Optional, Sequence

from fastapi import HTTPException, status

from breed_advisor.models.ai_workflow import WorkflowType
from breed_advisor.models.breed import BreedRecord
from breed_advisor.models.breed_recommendation import (
    BreedRecommendationResponse,
    FarmerInput,
)
from breed_advisor.services.ai_workflow_runtime import StreamEmitter, WorkflowRuntime
from breed_advisor.services.breed_constraints import filter_breeds
from breed_advisor.services.breed_narrative import (
    BreedNarrator,
    NarrativeMalformedError,
    NarrativeUnavailableError,
    merge_narratives,
    request_breed_narratives,
)
from breed_advisor.services.breed_ranking import rank_breeds
from breed_advisor.services.breed_scoring import score_breeds

logger = logging.getLogger(__name__)


async def recommend_breeds(
    farmer_input: FarmerInput,
    catalog: Sequence[BreedRecord],
    *,
    narrator: Optional[BreedNarrator] = None,
    narrative_timeout: Optional[float] = None,
    user_id: Optional[str] = None,
    request_id: Optional[str] = None,
    stream_emitter: Optional[StreamEmitter] = None,
) -> BreedRecommendationResponse:
    workflow = WorkflowRuntime(
        action="breed_recommendation",
        workflow_type=WorkflowType.BREED_RECOMMENDATION,
        emitter=stream_emitter,
        user_id=user_id,
        request_id=request_id,
        metadata={"language": farmer_input.language, "goal": farmer_input.goal.value},
    )
    await workflow.start()

    try:
        await workflow.start_step("filter_breeds")
        candidates = filter_breeds(catalog, farmer_input)
        await workflow.complete_step(
            "filter_breeds", {"candidate_count": len(candidates)}
        )

        if not candidates:
            logger.info(
                "No breeds match goal=%s budget=%s climate=%s",
                farmer_input.goal.value,
                farmer_input.budget,
                farmer_input.regional_climate,
            )
            response = BreedRecommendationResponse(
                goal=farmer_input.goal, language=farmer_input.language
            )
            await workflow.emit_result(response.model_dump(mode="json", by_alias=True))
            await workflow.complete({"recommendation_id": response.id, "breed_count": 0})
            return response

        await workflow.start_step("score_breeds")
        ranked = rank_breeds(score_breeds(candidates, farmer_input.goal))
        await workflow.complete_step("score_breeds", {"ranked_count": len(ranked)})

        await workflow.start_step("generate_breed_narratives")
        try:
            narratives = await request_breed_narratives(
                ranked,
                farmer_input,
                narrator=narrator,
                timeout=narrative_timeout,
            )
        except NarrativeUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"{exc} Please try again later.",
            ) from exc
        except NarrativeMalformedError as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(exc),
            ) from exc

        response = BreedRecommendationResponse(
            goal=farmer_input.goal,
            language=farmer_input.language,
            recommended_breeds=merge_narratives(ranked, narratives),
        )
        await workflow.complete_step(
            "generate_breed_narratives",
            {"breed_count": len(response.recommended_breeds)},
        )

        logger.info(
            "Recommended %d breeds for goal=%s climate=%s",
            len(response.recommended_breeds),
            farmer_input.goal.value,
            farmer_input.regional_climate,
        )
        await workflow.emit_result(response.model_dump(mode="json", by_alias=True))
        await workflow.complete(
            {
                "recommendation_id": response.id,
                "breed_count": len(response.recommended_breeds),
            }
        )
        return response

    except HTTPException as exc:
        await workflow.fail(
            error_message=str(exc.detail),
            payload={"status_code": exc.status_code},
        )
        raise
    except Exception:
        logger.exception(
            "Unexpected breed recommendation failure for goal=%s climate=%s",
            farmer_input.goal.value,
            farmer_input.regional_climate,
        )
        await workflow.fail(
            error_message="Internal server error in breed recommendation"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error in breed recommendation",
        )
