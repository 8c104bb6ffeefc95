import json
import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status

from breed_advisor.core.security import decode_access_token

from .actions import actions
from .manager import manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Bearer token in the Authorization header; messages are {"action", "data"} JSON."""
    token_header: str | None = websocket.headers.get("Authorization")
    if not token_header or not token_header.startswith("Bearer "):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        user_payload = decode_access_token(token_header.split(" ", 1)[1])
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id: str = user_payload["sub"]
    language: str = user_payload.get("language", "en")

    await manager.connect(websocket, user_id)
    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                message = json.loads(raw_data)
            except json.JSONDecodeError:
                await websocket.send_text("Invalid JSON")
                continue
            if not isinstance(message, dict):
                await websocket.send_text("Invalid JSON")
                continue

            action = message.get("action")
            data = message.get("data", {})
            if action in actions:
                await actions[action](websocket, user_id, language, data)
            else:
                await websocket.send_text(f"Unknown action: {action}")
    except WebSocketDisconnect:
        logger.debug("websocket closed for user %s", user_id)
    finally:
        manager.disconnect(websocket, user_id)
