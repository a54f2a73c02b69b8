from datetime import datetime

from api.mapper.usage_summary_mapper import domain_to_api
from api.model.monitor_config_payload import MonitorConfigPayload
from api.model.usage_summary_response import UsageSummaryResponse
from di.di import DI
from features.settings.monitor_config import MonitorConfig
from features.tray.tray_menu import TrayMenuItem, build_tray_menu
from features.tray.tray_sync import TrayDisplay, sync_tray
from features.usage.model.usage_data import AllUsageData
from util import log
from util.error_codes import INVALID_REFRESH_INTERVAL, NO_USAGE_DATA
from util.errors import NotFoundError, ValidationError
from util.functions import mask_secret


class UsageController:

    __di: DI

    def __init__(self, di: DI):
        self.__di = di

    def get_usage_data(self) -> AllUsageData:
        log.d("Fetching fresh usage data")
        return self.__di.usage_aggregator.fetch_all()

    def get_latest_usage_data(self) -> AllUsageData:
        usage_data = self.__di.app_state.get_last_usage_data()
        if usage_data is None:
            raise NotFoundError("No usage data fetched yet", NO_USAGE_DATA)
        return usage_data

    def get_usage_summary(self, now: datetime | None = None) -> UsageSummaryResponse:
        return domain_to_api(self.get_latest_usage_data(), now)

    def refresh_now(self) -> None:
        log.d("Manual refresh requested")
        self.__di.poll_scheduler.refresh_now()

    def get_config(self) -> MonitorConfig:
        return self.__di.app_state.get_config()

    def save_config(self, payload: MonitorConfigPayload) -> MonitorConfig:
        if payload.refresh_interval_minutes < 1:
            raise ValidationError(
                f"Refresh interval must be at least 1 minute, got {payload.refresh_interval_minutes}",
                INVALID_REFRESH_INTERVAL,
            )
        log.d(
            "Saving monitor config",
            f"Token: {mask_secret(payload.auth_token)}",
            f"Base URL: {payload.base_url}",
            f"Interval: {payload.refresh_interval_minutes}m",
        )
        monitor_config = MonitorConfig(
            auth_token = payload.auth_token,
            base_url = payload.base_url,
            refresh_interval_minutes = payload.refresh_interval_minutes,
        )
        self.__di.config_store.save(monitor_config)  # persisted first, memory only follows a successful write
        self.__di.app_state.set_config(monitor_config)
        self.__di.poll_scheduler.reschedule()
        return monitor_config

    def test_connection(self, payload: MonitorConfigPayload) -> AllUsageData:
        self.save_config(payload)
        return self.get_usage_data()

    def get_tray_display(self, now: datetime | None = None) -> TrayDisplay | None:
        return sync_tray(self.__di.app_state.get_last_usage_data(), now)

    def get_tray_menu(self) -> list[TrayMenuItem]:
        return build_tray_menu(self.get_tray_display())
