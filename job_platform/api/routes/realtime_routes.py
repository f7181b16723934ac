"""
Real-time Channel

WS /ws - Employers register to receive newApplication events

Frames are JSON text: {"event": "<name>", "data": {...}}

    client -> server   register        {"employerId": "..."}
    server -> client   registered      {"employerId": "..."}
    server -> client   newApplication  {"jobId": "...", "candidate": {...}}
    server -> client   error           {"message": "..."}
"""

import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from job_platform.api.deps import get_connections, get_presence
from job_platform.core.logging import get_logger
from job_platform.services.notifications import ConnectionManager
from job_platform.services.presence import PresenceRegistry

router = APIRouter(tags=["Real-time"])
logger = get_logger(__name__)


def error_frame(message: str) -> dict:
    return {"event": "error", "data": {"message": message}}


@router.websocket("/ws")
async def notifications_channel(
    websocket: WebSocket,
    presence: PresenceRegistry = Depends(get_presence),
    connections: ConnectionManager = Depends(get_connections)
):
    channel_id = await connections.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            raw = message.get("text")
            if raw is None:
                await websocket.send_json(error_frame("Frames must be JSON text"))
                continue

            try:
                frame = json.loads(raw)
            except ValueError:
                await websocket.send_json(error_frame("Frames must be JSON"))
                continue

            if not isinstance(frame, dict):
                await websocket.send_json(error_frame("Frames must be JSON objects"))
                continue

            event = frame.get("event")
            if event == "register":
                data = frame.get("data")
                employer_id = data.get("employerId") if isinstance(data, dict) else None
                if not employer_id:
                    logger.warning("Received register event without employerId.")
                    await websocket.send_json(error_frame("employerId is required"))
                    continue
                presence.register(str(employer_id), channel_id)
                await websocket.send_json({"event": "registered", "data": {"employerId": str(employer_id)}})
            else:
                await websocket.send_json(error_frame(f"Unknown event: {event}"))
    except WebSocketDisconnect:
        pass
    finally:
        presence.unregister(channel_id)
        connections.disconnect(channel_id)
        logger.info("Channel %s closed", channel_id)
