import threading

from features.events.event_bus import REFRESH_REQUESTED, EventBus
from features.state.app_state import AppState
from features.usage.model.usage_data import AllUsageData
from features.usage.usage_aggregator import UsageAggregator
from util import log
from util.errors import ServiceError

STOP_TIMEOUT_S = 5


class PollScheduler:
    """
    Background timer that polls the usage API every `refresh_interval_minutes`.

    The interval is re-read from the app state before every wait, so saving a new config
    and calling `reschedule()` is enough to apply it. Manual refreshes are not coordinated
    with scheduled ones; whichever poll finishes last owns the snapshot.
    """

    __aggregator: UsageAggregator
    __state: AppState
    __event_bus: EventBus
    __wake: threading.Event
    __stopped: threading.Event
    __refresh_lock: threading.Lock
    __refresh_pending: bool
    __thread: threading.Thread | None

    def __init__(self, aggregator: UsageAggregator, state: AppState, event_bus: EventBus):
        self.__aggregator = aggregator
        self.__state = state
        self.__event_bus = event_bus
        self.__wake = threading.Event()
        self.__stopped = threading.Event()
        self.__refresh_lock = threading.Lock()
        self.__refresh_pending = False
        self.__thread = None

    @property
    def is_running(self) -> bool:
        return self.__thread is not None and self.__thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            log.d("Poll scheduler already running")
            return
        self.__stopped.clear()
        self.__wake.clear()
        self.__thread = threading.Thread(target = self.__run, name = "usage-poller", daemon = True)
        self.__thread.start()
        log.i("Poll scheduler started")

    def stop(self) -> None:
        self.__stopped.set()
        self.__wake.set()
        if self.__thread is not None:
            self.__thread.join(timeout = STOP_TIMEOUT_S)
            self.__thread = None
        log.i("Poll scheduler stopped")

    def refresh_now(self) -> None:
        self.__event_bus.publish(REFRESH_REQUESTED)
        with self.__refresh_lock:
            self.__refresh_pending = True
        self.__wake.set()

    def reschedule(self) -> None:
        self.__wake.set()

    def poll_once(self) -> AllUsageData | None:
        try:
            return self.__aggregator.fetch_all()
        except ServiceError as e:
            log.w("Scheduled poll failed, keeping the previous snapshot", e)
        except Exception as e:
            log.e("Scheduled poll crashed, keeping the previous snapshot", e)
        return None

    def __take_refresh_request(self) -> bool:
        with self.__refresh_lock:
            pending = self.__refresh_pending
            self.__refresh_pending = False
        return pending

    def __run(self) -> None:
        poll_due = True
        while not self.__stopped.is_set():
            if poll_due:
                self.poll_once()
            interval_s = self.__state.get_config().refresh_interval_minutes * 60
            woken = self.__wake.wait(timeout = interval_s)
            self.__wake.clear()
            if self.__stopped.is_set():
                break
            # a wake-up without a refresh request only re-reads the interval
            poll_due = self.__take_refresh_request() if woken else True
