"""In-process change notifications.

Mutating endpoints publish an event after the write succeeds. Listeners
subscribe per channel ("stores", "products", ...) or to "*" for everything;
the WebSocket manager is one such listener and fans events out to clients
so they can re-fetch.
"""

import itertools
import logging
import threading
import time
from collections import defaultdict, deque
from typing import Callable, Dict, List, Optional

from souq.core.config import settings
from souq.model.sync_schema import EVENT_CHANNELS, SyncEvent

logger = logging.getLogger(__name__)

Listener = Callable[[SyncEvent], None]


class SyncManager:
    def __init__(self, history_size: int = 100):
        self._lock = threading.Lock()
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._history = deque(maxlen=history_size)
        self._seq = itertools.count(1)

    def subscribe(self, channel: str, listener: Listener) -> None:
        with self._lock:
            self._listeners[channel].append(listener)

    def unsubscribe(self, channel: str, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners.get(channel, []):
                self._listeners[channel].remove(listener)

    def publish(self, event_type: str, **payload) -> SyncEvent:
        event = SyncEvent(
            type=event_type,
            channel=EVENT_CHANNELS[event_type],
            payload=payload,
        )
        return self.dispatch(event)

    def dispatch(self, event: SyncEvent) -> SyncEvent:
        with self._lock:
            event.seq = next(self._seq)
            event.timestamp = int(time.time() * 1000)
            event.channel = EVENT_CHANNELS[event.type]
            self._history.append(event)
            listeners = [*self._listeners.get(event.channel, []), *self._listeners.get("*", [])]

        logger.info("📣 %s (%s)", event.type, event.channel)
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.warning("⚠️ Sync listener failed for %s: %s", event.type, e)
        return event

    def recent(self, since: int = 0, channel: Optional[str] = None) -> List[SyncEvent]:
        with self._lock:
            events = list(self._history)
        return [e for e in events if e.seq > since and (channel is None or e.channel == channel)]


sync_manager = SyncManager(settings.SYNC_HISTORY_SIZE)


def wait_for_store_data(
    fetch_stores: Callable[[], list],
    requested: Optional[str],
    timeout: float = 5.0,
    interval: float = 0.5,
    manager: SyncManager = sync_manager,
) -> list:
    """Poll until a store matches `requested` by subdomain or id (any store when nothing was requested).

    A "stores" event wakes the poll early.
    """
    changed = threading.Event()

    def on_store_event(event: SyncEvent):
        changed.set()

    manager.subscribe("stores", on_store_event)
    deadline = time.monotonic() + timeout
    stores = []
    try:
        while True:
            stores = fetch_stores()
            if stores and (not requested or any(requested in (s.subdomain, s.id) for s in stores)):
                logger.info("✅ Store data available after waiting (%d stores)", len(stores))
                return stores

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.info("⏳ Gave up waiting for store data for %s", requested)
                return stores
            changed.wait(min(interval, remaining))
            changed.clear()
    finally:
        manager.unsubscribe("stores", on_store_event)
