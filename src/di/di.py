from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from api.event_stream import EventStream
    from api.usage_controller import UsageController
    from features.events.event_bus import EventBus
    from features.settings.config_store import ConfigStore
    from features.state.app_state import AppState
    from features.usage.poll_scheduler import PollScheduler
    from features.usage.usage_aggregator import UsageAggregator


class DI:
    """Process-root container; everything it hands out lives as long as the process does"""

    # State
    _config_store: "ConfigStore | None"
    _app_state: "AppState | None"
    _event_bus: "EventBus | None"
    # Features
    _usage_aggregator: "UsageAggregator | None"
    _poll_scheduler: "PollScheduler | None"
    # Controllers
    _usage_controller: "UsageController | None"
    _event_stream: "EventStream | None"

    def __init__(
        self,
        config_store: "ConfigStore | None" = None,
        app_state: "AppState | None" = None,
        event_bus: "EventBus | None" = None,
    ):
        # State
        self._config_store = config_store
        self._app_state = app_state
        self._event_bus = event_bus
        # Features
        self._usage_aggregator = None
        self._poll_scheduler = None
        # Controllers
        self._usage_controller = None
        self._event_stream = None

    # === State ===

    @property
    def config_store(self) -> "ConfigStore":
        if self._config_store is None:
            from features.settings.config_store import ConfigStore
            self._config_store = ConfigStore()
        return self._config_store

    @property
    def app_state(self) -> "AppState":
        if self._app_state is None:
            from features.state.app_state import AppState
            self._app_state = AppState(self.config_store.load_or_default())
        return self._app_state

    @property
    def event_bus(self) -> "EventBus":
        if self._event_bus is None:
            from features.events.event_bus import EventBus
            self._event_bus = EventBus()
        return self._event_bus

    # === Features ===

    @property
    def usage_aggregator(self) -> "UsageAggregator":
        if self._usage_aggregator is None:
            from features.usage.usage_aggregator import UsageAggregator
            self._usage_aggregator = UsageAggregator(self.app_state, self.event_bus)
        return self._usage_aggregator

    @property
    def poll_scheduler(self) -> "PollScheduler":
        if self._poll_scheduler is None:
            from features.usage.poll_scheduler import PollScheduler
            self._poll_scheduler = PollScheduler(self.usage_aggregator, self.app_state, self.event_bus)
        return self._poll_scheduler

    # === Controllers ===

    @property
    def usage_controller(self) -> "UsageController":
        if self._usage_controller is None:
            from api.usage_controller import UsageController
            self._usage_controller = UsageController(self)
        return self._usage_controller

    @property
    def event_stream(self) -> "EventStream":
        if self._event_stream is None:
            from api.event_stream import EventStream
            self._event_stream = EventStream()
        return self._event_stream
