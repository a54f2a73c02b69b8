import asyncio
import json
from datetime import datetime
from typing import Any

from fastapi import WebSocket

from features.display.formatting import alert_notification
from features.events.event_bus import USAGE_ALERT
from features.usage.quota_alerts import UsageAlert
from util import log


class EventStream:
    """Forwards event bus messages to the websocket clients of the UI shell"""

    __connections: set[WebSocket]
    __lock: asyncio.Lock
    __loop: asyncio.AbstractEventLoop | None

    def __init__(self):
        self.__connections = set()
        self.__lock = asyncio.Lock()
        self.__loop = None

    @property
    def connection_count(self) -> int:
        return len(self.__connections)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self.__loop = loop

    async def connect(self, websocket: WebSocket) -> None:
        # broadcasts wait on the lock until the accepted socket is registered
        async with self.__lock:
            await websocket.accept()
            self.__connections.add(websocket)
        log.d(f"Event stream client connected, {self.connection_count} total")

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self.__lock:
            self.__connections.discard(websocket)
        log.d(f"Event stream client disconnected, {self.connection_count} total")

    async def broadcast(self, message: dict[str, Any]) -> None:
        data = json.dumps(message, default = str)
        disconnected = set()
        async with self.__lock:
            for websocket in self.__connections:
                try:
                    await websocket.send_text(data)
                except Exception as e:
                    log.d("Dropping event stream client", e)
                    disconnected.add(websocket)
            self.__connections -= disconnected

    def on_event(self, event_name: str, payload: dict[str, Any]) -> None:
        """Event bus listener; runs on the publishing thread and hands off to the server loop"""
        if self.__loop is None or self.__loop.is_closed():
            return
        message = to_message(event_name, payload)
        asyncio.run_coroutine_threadsafe(self.broadcast(message), self.__loop)


def to_message(event_name: str, payload: dict[str, Any]) -> dict[str, Any]:
    message: dict[str, Any] = {
        "event": event_name,
        "payload": payload,
        "sent_at": datetime.now().isoformat(),
    }
    if event_name == USAGE_ALERT:
        title, body = alert_notification(UsageAlert.model_validate(payload))
        message["notification"] = {"title": title, "body": body}
    return message
