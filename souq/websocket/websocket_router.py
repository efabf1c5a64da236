import logging
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from souq.model.sync_schema import SyncEvent
from souq.service.sync import sync_manager
from souq.websocket.websocket_manager import WebSocketManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ws", tags=["WebSocket"])
manager = WebSocketManager()
sync_manager.subscribe("*", manager.push)


@router.websocket("/sync")
async def websocket_sync(websocket: WebSocket, since: int = Query(0)):
    await manager.connect(websocket)
    try:
        # replay what the client missed while it was away
        for event in sync_manager.recent(since=since):
            await websocket.send_json(event.message())

        while True:
            data = await websocket.receive_text()
            try:
                event = SyncEvent.model_validate_json(data)
            except ValidationError as e:
                logger.warning("⚠️ Rejected sync message from client: %s", e.error_count())
                await websocket.send_json({"type": "ERROR", "detail": str(e)})
                continue
            sync_manager.dispatch(event)
    except WebSocketDisconnect:
        manager.disconnect(websocket)


@router.get("/events")
def list_sync_events(since: int = 0, channel: Optional[str] = None):
    return [event.message() for event in sync_manager.recent(since=since, channel=channel)]
