import threading
import unittest
from unittest.mock import MagicMock

from features.events.event_bus import REFRESH_REQUESTED, EventBus
from features.settings.monitor_config import MonitorConfig
from features.state.app_state import AppState
from features.usage.poll_scheduler import PollScheduler
from util.errors import HttpStatusError

WAIT_S = 5


class PollSchedulerTest(unittest.TestCase):
    state: AppState
    event_bus: EventBus
    events: list[str]
    aggregator: MagicMock
    polled: threading.Semaphore
    scheduler: PollScheduler

    def setUp(self):
        # a long interval keeps the timer out of the way, so only the first poll and refreshes fire
        self.state = AppState(MonitorConfig(auth_token = "t", refresh_interval_minutes = 60))
        self.event_bus = EventBus()
        self.events = []
        self.event_bus.subscribe(lambda name, payload: self.events.append(name))
        self.polled = threading.Semaphore(0)
        self.aggregator = MagicMock()
        self.aggregator.fetch_all.side_effect = self.__record_poll
        self.scheduler = PollScheduler(self.aggregator, self.state, self.event_bus)

    def tearDown(self):
        self.scheduler.stop()

    def __record_poll(self):
        self.polled.release()
        return "snapshot"

    def test_poll_once_returns_the_snapshot(self):
        self.assertEqual(self.scheduler.poll_once(), "snapshot")

    def test_poll_once_swallows_service_errors(self):
        self.aggregator.fetch_all.side_effect = HttpStatusError(503, "unavailable")

        self.assertIsNone(self.scheduler.poll_once())

    def test_poll_once_swallows_unexpected_errors(self):
        self.aggregator.fetch_all.side_effect = RuntimeError("boom")

        self.assertIsNone(self.scheduler.poll_once())

    def test_start_polls_immediately(self):
        self.scheduler.start()

        self.assertTrue(self.polled.acquire(timeout = WAIT_S))
        self.assertTrue(self.scheduler.is_running)

    def test_start_twice_keeps_one_thread(self):
        self.scheduler.start()
        self.scheduler.start()

        self.assertTrue(self.polled.acquire(timeout = WAIT_S))
        self.assertFalse(self.polled.acquire(timeout = 0.3))
        self.assertEqual(self.aggregator.fetch_all.call_count, 1)

    def test_refresh_now_polls_again_and_announces_it(self):
        self.scheduler.start()
        self.assertTrue(self.polled.acquire(timeout = WAIT_S))

        self.scheduler.refresh_now()

        self.assertTrue(self.polled.acquire(timeout = WAIT_S))
        self.assertEqual(self.events, [REFRESH_REQUESTED])

    def test_reschedule_does_not_poll(self):
        self.scheduler.start()
        self.assertTrue(self.polled.acquire(timeout = WAIT_S))

        self.scheduler.reschedule()

        self.assertFalse(self.polled.acquire(timeout = 0.3))
        self.assertEqual(self.aggregator.fetch_all.call_count, 1)

    def test_keeps_polling_after_a_failure(self):
        calls = {"count": 0}

        def failing_then_ok():
            calls["count"] += 1
            self.polled.release()
            if calls["count"] == 1:
                raise HttpStatusError(500, "oops")
            return "snapshot"

        self.aggregator.fetch_all.side_effect = failing_then_ok
        self.scheduler.start()
        self.assertTrue(self.polled.acquire(timeout = WAIT_S))

        self.scheduler.refresh_now()

        self.assertTrue(self.polled.acquire(timeout = WAIT_S))
        self.assertTrue(self.scheduler.is_running)

    def test_stop_ends_the_thread(self):
        self.scheduler.start()
        self.assertTrue(self.polled.acquire(timeout = WAIT_S))

        self.scheduler.stop()

        self.assertFalse(self.scheduler.is_running)

    def test_refresh_now_without_a_running_thread_only_announces(self):
        self.scheduler.refresh_now()

        self.assertEqual(self.events, [REFRESH_REQUESTED])
        self.aggregator.fetch_all.assert_not_called()
