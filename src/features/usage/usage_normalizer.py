from features.usage.model.model_usage_response import ModelUsageData
from features.usage.model.quota_limit_response import QuotaLimit
from features.usage.model.tool_usage_response import ToolUsageData
from features.usage.model.usage_data import ModelUsageItem, ModelUsageResult, ModelUsageTimeSeries, ToolUsageItem

ALL_MODELS_LABEL = "All Models"
TOKEN_LIMIT_LABEL = "Token usage(5 Hour)"
MCP_LIMIT_LABEL = "MCP usage(1 Month)"

QUOTA_TYPE_LABELS: dict[str, str] = {
    "TOKENS_LIMIT": TOKEN_LIMIT_LABEL,
    "TIME_LIMIT": MCP_LIMIT_LABEL,
}


def normalize_model_usage(data: ModelUsageData) -> ModelUsageResult:
    # the API only reports totals, so everything collapses into a single item
    # until it starts exposing per-model breakdowns
    items = [
        ModelUsageItem(
            model = ALL_MODELS_LABEL,
            token_count = data.total_usage.total_tokens_usage,
            request_count = data.total_usage.total_model_call_count,
        ),
    ]
    timeseries = ModelUsageTimeSeries(
        x_time = list(data.x_time),
        model_call_count = list(data.model_call_count),
        tokens_usage = list(data.tokens_usage),
    )
    return ModelUsageResult(items = items, timeseries = timeseries)


def normalize_tool_usage(data: ToolUsageData) -> list[ToolUsageItem]:
    return [
        ToolUsageItem(tool_name = detail.model_name, usage_count = detail.total_usage_count)
        for detail in data.total_usage.tool_details
    ]


def relabel_quota_type(type_code: str) -> str:
    return QUOTA_TYPE_LABELS.get(type_code, type_code)


def normalize_quota_limits(limits: list[QuotaLimit]) -> list[QuotaLimit]:
    return [
        limit.model_copy(update = {"type_label": relabel_quota_type(limit.type_label)})
        for limit in limits
    ]
