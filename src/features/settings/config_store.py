from pathlib import Path

from pydantic import ValidationError as PayloadValidationError

from features.settings.monitor_config import MonitorConfig
from util import log
from util.config import config
from util.error_codes import (
    CONFIG_DIR_CREATE_FAILED,
    CONFIG_PARSE_FAILED,
    CONFIG_READ_FAILED,
    CONFIG_SERIALIZE_FAILED,
    CONFIG_WRITE_FAILED,
)
from util.errors import ConfigurationError

CONFIG_FILE_NAME = "config.json"


class ConfigStore:

    __path: Path

    def __init__(self, config_dir: str | Path | None = None):
        self.__path = Path(config_dir or config.config_dir) / CONFIG_FILE_NAME

    @property
    def path(self) -> Path:
        return self.__path

    def load(self) -> MonitorConfig:
        if not self.__path.exists():
            log.d(f"No config at '{self.__path}', using defaults")
            return MonitorConfig()
        try:
            contents = self.__path.read_text(encoding = "utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read config: {e}", CONFIG_READ_FAILED) from e
        try:
            return MonitorConfig.model_validate_json(contents)
        except PayloadValidationError as e:
            raise ConfigurationError(f"Failed to parse config: {e}", CONFIG_PARSE_FAILED) from e

    def load_or_default(self) -> MonitorConfig:
        try:
            return self.load()
        except ConfigurationError as e:
            log.w("Falling back to the default config", e)
            return MonitorConfig()

    def save(self, monitor_config: MonitorConfig) -> None:
        try:
            self.__path.parent.mkdir(parents = True, exist_ok = True)
        except OSError as e:
            raise ConfigurationError(f"Failed to create config directory: {e}", CONFIG_DIR_CREATE_FAILED) from e
        try:
            contents = monitor_config.model_dump_json(indent = 2)
        except ValueError as e:
            raise ConfigurationError(f"Failed to serialize config: {e}", CONFIG_SERIALIZE_FAILED) from e
        try:
            self.__path.write_text(contents, encoding = "utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to write config: {e}", CONFIG_WRITE_FAILED) from e
        log.i(f"Config saved to '{self.__path}'")
