import asyncio
import logging
from typing import List, Optional

from fastapi import WebSocket

from souq.model.sync_schema import SyncEvent

logger = logging.getLogger(__name__)


class WebSocketManager:
    def __init__(self):
        self.active_connections: List[WebSocket] = []
        self.loop: Optional[asyncio.AbstractEventLoop] = None

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.loop = asyncio.get_running_loop()
        self.active_connections.append(websocket)
        logger.info("🔌 Sync client connected (%d active)", len(self.active_connections))

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.info("🔌 Sync client disconnected (%d active)", len(self.active_connections))

    async def broadcast(self, message: dict, exclude: Optional[WebSocket] = None):
        for connection in list(self.active_connections):
            if connection is exclude:
                continue
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning("⚠️ Dropping sync client after send failure: %s", e)
                self.disconnect(connection)

    def push(self, event: SyncEvent):
        """Sync listener. Publishers run in worker threads, so hop onto the socket loop."""
        if self.loop is None or self.loop.is_closed() or not self.active_connections:
            return
        message = event.message()
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self.loop:
            self.loop.create_task(self.broadcast(message))
        else:
            asyncio.run_coroutine_threadsafe(self.broadcast(message), self.loop)
