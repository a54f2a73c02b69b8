from typing import Any

from pydantic import BaseModel, field_validator


class MonitorConfigPayload(BaseModel):
    auth_token: str
    base_url: str
    refresh_interval_minutes: int

    # noinspection PyNestedDecorators
    @field_validator("auth_token", "base_url", mode = "before")
    @classmethod
    def trim_strings(cls, v: Any) -> Any:
        """Trim whitespace from string values, the settings form tends to keep pasted newlines"""
        if isinstance(v, str):
            return v.strip()
        return v
