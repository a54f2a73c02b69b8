import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pydantic import SecretStr

from api.usage_controller import UsageController
from di.di import DI
from features.events.event_bus import EventBus
from features.settings.monitor_config import MonitorConfig
from features.state.app_state import AppState
from features.tray.tray_menu import build_tray_menu
from features.usage.model.usage_data import AllUsageData
from main import create_app
from util.error_codes import INVALID_REFRESH_INTERVAL, NO_USAGE_DATA, USAGE_API_BAD_STATUS
from util.errors import HttpStatusError, NotFoundError, ValidationError


class MainTest(unittest.TestCase):

    di: DI
    mock_usage_controller: UsageController
    client: TestClient

    def setUp(self):
        self.di = DI(app_state = AppState(MonitorConfig()), event_bus = EventBus())
        self.mock_usage_controller = MagicMock(spec = UsageController)
        self.di._usage_controller = self.mock_usage_controller
        self.client = TestClient(create_app(self.di, start_polling = False))

    def test_health(self):
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_get_usage(self):
        self.mock_usage_controller.get_usage_data.return_value = AllUsageData(
            model_usage = [],
            tool_usage = [],
            quota_limits = [],
            timestamp = 1710513000,
        )

        response = self.client.get("/usage")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["timestamp"], 1710513000)

    def test_get_usage_failure_carries_reason(self):
        error = HttpStatusError(401, "token expired")
        self.mock_usage_controller.get_usage_data.side_effect = error

        response = self.client.get("/usage")

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"]["reason"], str(error))
        self.assertIn(f"E{USAGE_API_BAD_STATUS}", response.json()["detail"]["reason"])
        self.assertIn("HTTP 401: token expired", response.json()["detail"]["reason"])

    def test_latest_usage_not_found(self):
        self.mock_usage_controller.get_latest_usage_data.side_effect = NotFoundError("No usage data fetched yet", NO_USAGE_DATA)

        response = self.client.get("/usage/latest")

        self.assertEqual(response.status_code, 404)

    def test_refresh(self):
        response = self.client.post("/usage/refresh")

        self.assertEqual(response.status_code, 200)
        self.mock_usage_controller.refresh_now.assert_called_once()

    def test_get_config(self):
        self.mock_usage_controller.get_config.return_value = MonitorConfig(auth_token = "abc")

        response = self.client.get("/config")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["auth_token"], "abc")

    def test_put_config(self):
        body = {"auth_token": " abc \n", "base_url": "https://api.z.ai/api/anthropic", "refresh_interval_minutes": 3}

        response = self.client.put("/config", json = body)

        self.assertEqual(response.status_code, 200)
        payload = self.mock_usage_controller.save_config.call_args.args[0]
        self.assertEqual(payload.auth_token, "abc")
        self.assertEqual(payload.refresh_interval_minutes, 3)

    def test_put_config_invalid_interval(self):
        self.mock_usage_controller.save_config.side_effect = ValidationError("too short", INVALID_REFRESH_INTERVAL)
        body = {"auth_token": "abc", "base_url": "https://api.z.ai/api/anthropic", "refresh_interval_minutes": 0}

        response = self.client.put("/config", json = body)

        self.assertEqual(response.status_code, 422)

    def test_tray(self):
        self.mock_usage_controller.get_tray_display.return_value = None
        self.mock_usage_controller.get_tray_menu.return_value = build_tray_menu(None)

        response = self.client.get("/tray")

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["display"])
        self.assertEqual(response.json()["menu"][-1]["label"], "Quit")

    @patch("api.auth.config")
    def test_api_key_enforced_when_configured(self, mock_config: MagicMock):
        mock_config.api_key = SecretStr("VALI-DKEY")

        rejected = self.client.get("/config")
        self.mock_usage_controller.get_config.return_value = MonitorConfig()
        accepted = self.client.get("/config", headers = {"X-API-Key": "VALI-DKEY"})

        self.assertEqual(rejected.status_code, 403)
        self.assertEqual(accepted.status_code, 200)

    def test_events_websocket(self):
        with TestClient(create_app(self.di, start_polling = False)) as client:
            with client.websocket_connect("/events") as websocket:
                self.di.event_bus.publish("data-updated", {"timestamp": 1})
                message = websocket.receive_json()

        self.assertEqual(message["event"], "data-updated")
        self.assertEqual(message["payload"], {"timestamp": 1})
