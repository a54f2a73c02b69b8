from pydantic import BaseModel, Field

from util.config import config


class MonitorConfig(BaseModel):
    auth_token: str = ""
    base_url: str = Field(default_factory = lambda: config.default_base_url)
    refresh_interval_minutes: int = Field(default_factory = lambda: config.default_refresh_interval_minutes, ge = 1)
