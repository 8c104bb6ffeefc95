import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union

from langchain_core.exceptions import OutputParserException
from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from breed_advisor.core.config import settings
from breed_advisor.core.genai_client import get_chat_model
from breed_advisor.models.breed_recommendation import (
    BreedNarrative,
    BreedNarrativeResponse,
    FarmerInput,
    RecommendedBreed,
    ScoredBreed,
)
from breed_advisor.prompts.breed_recommendation_system_prompt import (
    BREED_RECOMMENDATION_SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)

NarrativeOutput = Union[BreedNarrativeResponse, dict, None]
BreedNarrator = Callable[[dict[str, Any]], Awaitable[NarrativeOutput]]


class NarrativeError(Exception):
    """The text-generation model could not describe the ranked breeds."""


class NarrativeUnavailableError(NarrativeError):
    """The model timed out, was unreachable or refused the call. Retrying later may help."""


class NarrativeMalformedError(NarrativeError):
    """The model answered, but without the fields or items we asked for."""


def _build_structured_chain(model, schema):
    prompt = ChatPromptTemplate.from_messages(
        [("system", "{system_prompt}"), ("human", "{input_json}")]
    )
    return prompt | model.with_structured_output(schema, method="json_schema")


async def generate_breed_narratives(input_data: dict[str, Any]) -> NarrativeOutput:
    """Default narrator backed by Gemini structured output."""
    chain = _build_structured_chain(
        model=get_chat_model(),
        schema=BreedNarrativeResponse,
    )
    return await chain.ainvoke(
        {
            "system_prompt": BREED_RECOMMENDATION_SYSTEM_PROMPT,
            "input_json": json.dumps(input_data),
        }
    )


def _breed_prompt_entry(scored: ScoredBreed) -> dict[str, Any]:
    breed = scored.breed
    return {
        **breed.model_dump(mode="json", exclude={"climate_suitability"}),
        "climate_suitability": sorted(breed.climate_suitability),
        "overall_score": scored.overall_score,
        "roi": scored.roi,
        "scores": scored.scores.model_dump(),
    }


def build_narrative_input(
    ranked: Sequence[ScoredBreed], farmer_input: FarmerInput
) -> dict[str, Any]:
    return {
        "goal": farmer_input.goal.value,
        "language": farmer_input.language,
        "land_size_acres": farmer_input.land_size,
        "breeds": [_breed_prompt_entry(scored) for scored in ranked],
    }


async def request_breed_narratives(
    ranked: Sequence[ScoredBreed],
    farmer_input: FarmerInput,
    *,
    narrator: Optional[BreedNarrator] = None,
    timeout: Optional[float] = None,
) -> List[BreedNarrative]:
    """
    Asks the narrator for pros, cons and a display name for each ranked breed.

    Raises NarrativeUnavailableError on timeouts and transport failures and
    NarrativeMalformedError when the answer is missing or has no usable items.
    """
    narrator = narrator or generate_breed_narratives
    timeout = settings.NARRATIVE_TIMEOUT_SECONDS if timeout is None else timeout
    input_data = build_narrative_input(ranked, farmer_input)

    try:
        output = await asyncio.wait_for(narrator(input_data), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning(
            "Breed narrative model timed out after %.1fs (goal=%s, breeds=%d)",
            timeout,
            farmer_input.goal.value,
            len(ranked),
        )
        raise NarrativeUnavailableError(
            "Breed descriptions took too long to generate."
        ) from exc
    except NarrativeError:
        raise
    except (OutputParserException, ValidationError) as exc:
        logger.exception("Breed narrative model returned unparseable output")
        raise NarrativeMalformedError(
            "AI returned breed descriptions in an unexpected format."
        ) from exc
    except Exception as exc:
        logger.exception("Breed narrative model invocation failed")
        raise NarrativeUnavailableError(
            "AI model could not generate breed descriptions."
        ) from exc

    if output is None:
        raise NarrativeMalformedError("AI returned no breed descriptions.")

    if not isinstance(output, BreedNarrativeResponse):
        try:
            output = BreedNarrativeResponse.model_validate(output)
        except ValidationError as exc:
            raise NarrativeMalformedError(
                "AI returned breed descriptions without required fields."
            ) from exc

    if ranked and not output.recommended_breeds:
        raise NarrativeMalformedError("AI did not describe any of the recommended breeds.")

    return list(output.recommended_breeds)


def merge_narratives(
    ranked: Sequence[ScoredBreed], narratives: Sequence[BreedNarrative]
) -> List[RecommendedBreed]:
    """
    Pairs narrative i with ranked breed i.

    Ranked breeds without a narrative are dropped, never padded. Numbers come
    from the local scores only.
    """
    if len(narratives) < len(ranked):
        logger.warning(
            "Breed narrative covered %d of %d ranked breeds; dropping the rest",
            len(narratives),
            len(ranked),
        )

    return [
        RecommendedBreed(
            breed_name=narrative.breed_name,
            pros=narrative.pros,
            cons=narrative.cons,
            overall_score=scored.overall_score,
            roi=scored.roi,
            care_level=scored.breed.care_level,
            scores=scored.scores,
        )
        for scored, narrative in zip(ranked, narratives)
    ]
