from pydantic import BaseModel, ConfigDict, Field


class ModelTotalUsage(BaseModel):
    model_config = ConfigDict(populate_by_name = True, protected_namespaces = ())

    total_model_call_count: int = Field(alias = "totalModelCallCount")
    total_tokens_usage: int = Field(alias = "totalTokensUsage")


class ModelUsageData(BaseModel):
    """Hourly buckets of the query window; a null count means no data for that bucket"""
    model_config = ConfigDict(populate_by_name = True, protected_namespaces = ())

    x_time: list[str]
    model_call_count: list[int | None] = Field(alias = "modelCallCount")
    tokens_usage: list[int | None] = Field(alias = "tokensUsage")
    total_usage: ModelTotalUsage = Field(alias = "totalUsage")


class ModelUsageResponse(BaseModel):
    code: int
    msg: str | None = None
    data: ModelUsageData
    success: bool
