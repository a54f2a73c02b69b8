import unittest

from features.settings.monitor_config import MonitorConfig
from features.state.app_state import AppState
from features.usage.model.usage_data import AllUsageData, ModelUsageItem


class AppStateTest(unittest.TestCase):

    def test_defaults(self):
        state = AppState()

        self.assertEqual(state.get_config(), MonitorConfig())
        self.assertIsNone(state.get_last_usage_data())

    def test_get_config_returns_a_detached_copy(self):
        state = AppState(MonitorConfig(auth_token = "first"))

        copy = state.get_config()
        copy.auth_token = "changed"

        self.assertEqual(state.get_config().auth_token, "first")

    def test_set_config_is_not_affected_by_later_edits(self):
        state = AppState()
        monitor_config = MonitorConfig(auth_token = "new", refresh_interval_minutes = 15)

        state.set_config(monitor_config)
        monitor_config.auth_token = "edited"

        self.assertEqual(state.get_config().auth_token, "new")
        self.assertEqual(state.get_config().refresh_interval_minutes, 15)

    def test_last_usage_data_last_write_wins(self):
        state = AppState()
        older = AllUsageData(model_usage = [], tool_usage = [], quota_limits = [], timestamp = 100)
        newer = AllUsageData(
            model_usage = [ModelUsageItem(model = "All Models", token_count = 1, request_count = 1)],
            tool_usage = [],
            quota_limits = [],
            timestamp = 200,
        )

        state.set_last_usage_data(older)
        state.set_last_usage_data(newer)

        self.assertEqual(state.get_last_usage_data(), newer)
        self.assertEqual(state.get_last_usage_data().timestamp, 200)
