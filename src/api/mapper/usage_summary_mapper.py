from datetime import datetime

from api.model.usage_summary_response import (
    ModelUsageSummary,
    QuotaLimitSummary,
    ToolUsageSummary,
    UsageSummaryResponse,
)
from features.display.formatting import format_compact_number, format_last_updated, format_reset_time, usage_level
from features.tray.tray_menu import build_tray_menu
from features.tray.tray_sync import sync_tray
from features.usage.model.usage_data import AllUsageData


def domain_to_api(usage_data: AllUsageData, now: datetime | None = None) -> UsageSummaryResponse:
    now = now or datetime.now()
    tray = sync_tray(usage_data, now)
    return UsageSummaryResponse(
        last_updated = format_last_updated(usage_data.timestamp, now),
        quota_limits = [
            QuotaLimitSummary(
                label = limit.type_label,
                percentage = limit.percentage,
                level = usage_level(limit.percentage).value,
                reset_time = format_reset_time(limit.next_reset_time, now),
            )
            for limit in usage_data.quota_limits
        ],
        model_usage = [
            ModelUsageSummary(
                model = item.model,
                tokens = format_compact_number(item.token_count),
                requests = item.request_count,
            )
            for item in sorted(usage_data.model_usage, key = lambda it: it.token_count, reverse = True)
        ],
        tool_usage = [
            ToolUsageSummary(tool_name = item.tool_name, usage_count = item.usage_count)
            for item in usage_data.tool_usage
        ],
        tray = tray,
        tray_menu = build_tray_menu(tray),
    )
