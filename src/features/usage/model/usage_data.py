from pydantic import BaseModel, ConfigDict, Field

from features.usage.model.quota_limit_response import QuotaLimit


class ModelUsageItem(BaseModel):
    model: str
    token_count: int
    request_count: int


class ModelUsageTimeSeries(BaseModel):
    model_config = ConfigDict(populate_by_name = True, protected_namespaces = ())

    x_time: list[str]
    model_call_count: list[int | None] = Field(alias = "modelCallCount")
    tokens_usage: list[int | None] = Field(alias = "tokensUsage")


class ModelUsageResult(BaseModel):
    items: list[ModelUsageItem]
    timeseries: ModelUsageTimeSeries | None = None


class ToolUsageItem(BaseModel):
    tool_name: str
    usage_count: int


class AllUsageData(BaseModel):
    """One merged poll result; replaced as a whole, never edited"""
    model_config = ConfigDict(frozen = True, protected_namespaces = ())

    model_usage: list[ModelUsageItem]
    model_usage_timeseries: ModelUsageTimeSeries | None = None
    tool_usage: list[ToolUsageItem]
    quota_limits: list[QuotaLimit]
    timestamp: int  # epoch seconds
