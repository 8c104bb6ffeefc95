import json
from uuid import uuid4

from fastapi import HTTPException, WebSocket, status
from pydantic import ValidationError

from breed_advisor.models.breed_recommendation import FarmerInput
from breed_advisor.services.breed_recommendation_service import recommend_breeds

from .manager import manager


def _build_stream_emitter(user_id: str):
    async def _emitter(payload: dict):
        await manager.send_to_user(user_id, json.dumps(payload, default=str))

    return _emitter


async def breed_recommendation_handler(
    websocket: WebSocket, user_id: str, language: str, data: dict
):
    try:
        raw_input = data.get("farmer_input", {}) if isinstance(data, dict) else None
        if not isinstance(raw_input, dict):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="farmer_input must be a JSON object",
            )
        try:
            farmer_input = FarmerInput(**{"language": language, **raw_input})
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=exc.errors(include_url=False, include_context=False),
            ) from exc

        await recommend_breeds(
            farmer_input,
            websocket.app.state.breed_catalog,
            narrator=websocket.app.state.breed_narrator,
            user_id=user_id,
            request_id=str(data.get("request_id") or uuid4().hex),
            stream_emitter=_build_stream_emitter(user_id),
        )
    except HTTPException as e:
        response = {
            "action": "breed_recommendation",
            "error": {"status_code": e.status_code, "message": e.detail},
        }
        await manager.send_to_user(user_id, json.dumps(response, default=str))


actions = {
    "breed_recommendation": breed_recommendation_handler,
}
