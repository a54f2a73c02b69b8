from pydantic import BaseModel

from features.tray.tray_sync import TrayDisplay
from features.tray.tray_menu import TrayMenuItem


class QuotaLimitSummary(BaseModel):
    label: str
    percentage: float
    level: str
    reset_time: str | None = None


class ModelUsageSummary(BaseModel):
    model: str
    tokens: str
    requests: int


class ToolUsageSummary(BaseModel):
    tool_name: str
    usage_count: int


class UsageSummaryResponse(BaseModel):
    last_updated: str
    quota_limits: list[QuotaLimitSummary]
    model_usage: list[ModelUsageSummary]
    tool_usage: list[ToolUsageSummary]
    tray: TrayDisplay | None = None
    tray_menu: list[TrayMenuItem]
