import threading
from typing import Any, Callable

from util import log

USAGE_ALERT = "usage-alert"
DATA_UPDATED = "data-updated"
REFRESH_REQUESTED = "refresh-requested"

Listener = Callable[[str, dict[str, Any]], None]


class EventBus:
    """One-way broadcast to the UI shell; publishers never wait for or hear back from listeners"""

    __listeners: list[Listener]
    __lock: threading.Lock

    def __init__(self):
        self.__listeners = []
        self.__lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self.__lock:
            self.__listeners.append(listener)

        def unsubscribe():
            with self.__lock:
                if listener in self.__listeners:
                    self.__listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        with self.__lock:
            return len(self.__listeners)

    def publish(self, event_name: str, payload: dict[str, Any] | None = None) -> None:
        with self.__lock:
            listeners = list(self.__listeners)
        payload = payload or {}
        log.t(f"Publishing '{event_name}' to {len(listeners)} listener(s)")
        for listener in listeners:
            try:
                listener(event_name, payload)
            except Exception as e:
                log.w(f"Listener failed on '{event_name}'", e)
