from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Callable

from features.events.event_bus import DATA_UPDATED, USAGE_ALERT, EventBus
from features.state.app_state import AppState
from features.tray.tray_sync import sync_tray
from features.usage.endpoint_resolver import resolve_domain
from features.usage.model.usage_data import AllUsageData
from features.usage.quota_alerts import UsageAlert, evaluate_alerts
from features.usage.time_window import compute_time_window
from features.usage.usage_fetcher import UsageFetcher
from util import log
from util.config import config
from util.error_codes import USAGE_FETCH_FAILED
from util.errors import InternalError, ServiceError

FetcherFactory = Callable[[str, str], UsageFetcher]
Clock = Callable[[], datetime]


class UsageAggregator:
    """
    Runs one poll: fans the three usage calls out to a worker pool and merges them into a snapshot.

    A poll either produces a complete snapshot or fails with the first error seen. Siblings that are
    still running when a call fails are allowed to finish, and their results are thrown away.
    """

    __state: AppState
    __event_bus: EventBus
    __fetcher_factory: FetcherFactory
    __clock: Clock
    __executor: ThreadPoolExecutor

    def __init__(
        self,
        state: AppState,
        event_bus: EventBus,
        fetcher_factory: FetcherFactory = UsageFetcher,
        clock: Clock = datetime.now,
        max_workers: int | None = None,
    ):
        self.__state = state
        self.__event_bus = event_bus
        self.__fetcher_factory = fetcher_factory
        self.__clock = clock
        self.__executor = ThreadPoolExecutor(
            max_workers = max_workers or config.max_fetch_workers,
            thread_name_prefix = "usage-fetch",
        )

    def fetch_all(self) -> AllUsageData:
        monitor_config = self.__state.get_config()
        domain = resolve_domain(monitor_config.base_url)  # fails before any call goes out
        window = compute_time_window(self.__clock())
        fetcher = self.__fetcher_factory(domain, monitor_config.auth_token)
        log.d(f"Polling usage from '{domain}' for {window.start} - {window.end}")

        model_usage_future = self.__executor.submit(fetcher.fetch_model_usage, window)
        tool_usage_future = self.__executor.submit(fetcher.fetch_tool_usage, window)
        quota_limits_future = self.__executor.submit(fetcher.fetch_quota_limits)
        futures: list[Future] = [model_usage_future, tool_usage_future, quota_limits_future]
        done, _ = wait(futures, return_when = FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                raise self.__as_service_error(future.exception())

        model_usage = model_usage_future.result()
        usage_data = AllUsageData(
            model_usage = model_usage.items,
            model_usage_timeseries = model_usage.timeseries,
            tool_usage = tool_usage_future.result(),
            quota_limits = quota_limits_future.result(),
            timestamp = int(self.__clock().timestamp()),
        )
        self.__state.set_last_usage_data(usage_data)
        log.i(f"Usage snapshot updated at {usage_data.timestamp}")

        for alert in evaluate_alerts(usage_data.quota_limits):
            self.__emit_alert(alert)
        tray_display = sync_tray(usage_data, self.__clock())
        self.__event_bus.publish(
            DATA_UPDATED,
            {
                "timestamp": usage_data.timestamp,
                "tray": tray_display.model_dump() if tray_display else None,
            },
        )
        return usage_data

    def close(self) -> None:
        self.__executor.shutdown(wait = False)

    def __emit_alert(self, alert: UsageAlert) -> None:
        log.w(f"Usage {alert.severity.value}: {alert.type_label} at {alert.percentage:.1f}%")
        self.__event_bus.publish(USAGE_ALERT, alert.model_dump(mode = "json", by_alias = True))

    @staticmethod
    def __as_service_error(error: BaseException) -> ServiceError:
        if isinstance(error, ServiceError):
            return error
        wrapped = InternalError(f"Failed to fetch data: {error}", USAGE_FETCH_FAILED)
        wrapped.__cause__ = error
        return wrapped
