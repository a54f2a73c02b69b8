import threading

from features.settings.monitor_config import MonitorConfig
from features.usage.model.usage_data import AllUsageData


class AppState:
    """
    Process-wide state owned by the application root.

    Locks are only held to copy a value out or to swap a new one in,
    so readers always get a detached copy and never a live reference.
    """

    __config: MonitorConfig
    __config_lock: threading.Lock
    __last_usage_data: AllUsageData | None
    __usage_data_lock: threading.Lock

    def __init__(self, monitor_config: MonitorConfig | None = None):
        self.__config = monitor_config or MonitorConfig()
        self.__config_lock = threading.Lock()
        self.__last_usage_data = None
        self.__usage_data_lock = threading.Lock()

    def get_config(self) -> MonitorConfig:
        with self.__config_lock:
            return self.__config.model_copy(deep = True)

    def set_config(self, monitor_config: MonitorConfig) -> None:
        replacement = monitor_config.model_copy(deep = True)
        with self.__config_lock:
            self.__config = replacement

    def get_last_usage_data(self) -> AllUsageData | None:
        with self.__usage_data_lock:
            snapshot = self.__last_usage_data
        return snapshot.model_copy(deep = True) if snapshot else None

    def set_last_usage_data(self, usage_data: AllUsageData) -> None:
        # last write wins, older snapshots are simply dropped
        with self.__usage_data_lock:
            self.__last_usage_data = usage_data
