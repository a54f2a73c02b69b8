import os
import sys
from pathlib import Path
from typing import Callable

from pydantic import SecretStr

from util.singleton import Singleton

APP_DIR_NAME = "zai-usage-monitor"


def default_config_dir() -> Path:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA", "").strip()
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
    return Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"


class Config(metaclass = Singleton):

    log_level: str
    web_timeout_s: int
    max_fetch_workers: int
    config_dir: str
    api_host: str
    api_port: int
    default_base_url: str
    default_refresh_interval_minutes: int
    version: str

    api_key: SecretStr

    def all_secrets(self) -> list[SecretStr]:
        return [
            self.api_key,
        ]

    def __init__(
        self,
        def_log_level: str = "INFO",
        def_web_timeout_s: int = 10,
        def_max_fetch_workers: int = 3,
        def_api_host: str = "127.0.0.1",
        def_api_port: int = 8765,
        def_default_base_url: str = "https://api.z.ai/api/anthropic",
        def_default_refresh_interval_minutes: int = 5,
        def_version: str = "dev",

        def_api_key: SecretStr = SecretStr(""),
    ):
        # @formatter:off
        self.log_level = self.__env("LOG_LEVEL", lambda: def_log_level).lower()
        self.web_timeout_s = int(self.__env("WEB_TIMEOUT_S", lambda: str(def_web_timeout_s)))
        self.max_fetch_workers = int(self.__env("MAX_FETCH_WORKERS", lambda: str(def_max_fetch_workers)))
        self.config_dir = self.__env("CONFIG_DIR", lambda: str(default_config_dir() / APP_DIR_NAME))
        self.api_host = self.__env("API_HOST", lambda: def_api_host)
        self.api_port = int(self.__env("API_PORT", lambda: str(def_api_port)))
        self.default_base_url = self.__env("DEFAULT_BASE_URL", lambda: def_default_base_url)
        self.default_refresh_interval_minutes = int(self.__env("DEFAULT_REFRESH_INTERVAL_MINUTES", lambda: str(def_default_refresh_interval_minutes)))
        self.version = self.__env("VERSION", lambda: def_version)

        self.api_key = self.__senv("API_KEY", lambda: def_api_key)
        # @formatter:on

    @staticmethod
    def __env(name: str, default: Callable[[], str]) -> str:
        env_value = os.environ.get(name, "").strip()
        return env_value if env_value else default()

    @staticmethod
    def __senv(name: str, default: Callable[[], SecretStr]) -> SecretStr:
        env_value = os.environ.get(name, "").strip()
        return SecretStr(env_value) if env_value else default()


config = Config()
