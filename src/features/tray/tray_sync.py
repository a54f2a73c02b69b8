from datetime import datetime

from pydantic import BaseModel

from features.usage.model.quota_limit_response import QuotaLimit
from features.usage.model.usage_data import AllUsageData
from util.functions import first_matching

TOKEN_LIMIT_MARKER = "Token"
MCP_LIMIT_MARKER = "MCP"


class TrayDisplay(BaseModel):
    title: str
    tooltip: str
    menu_label: str


def _rounded(percentage: float) -> int:
    # halves round up, 0.5 shows as 1
    return int(percentage + 0.5)


def percentage_of(limits: list[QuotaLimit], marker: str) -> float:
    limit = first_matching(limits, lambda it: marker in it.type_label)
    return limit.percentage if limit else 0.0


def sync_tray(usage_data: AllUsageData | None, synced_at: datetime | None = None) -> TrayDisplay | None:
    """
    Projects a usage snapshot onto the strings shown by the tray icon and its menu.

    Parameters:
    usage_data (AllUsageData | None): The latest snapshot, or None before the first successful poll.
    synced_at (datetime | None): When the sync happens; the tooltip shows this time, not the snapshot's.

    Returns:
    TrayDisplay | None: The display strings, or None when there is nothing to render yet.
    """
    if usage_data is None:
        return None
    synced_at = synced_at or datetime.now()
    token_pct = percentage_of(usage_data.quota_limits, TOKEN_LIMIT_MARKER)
    mcp_pct = percentage_of(usage_data.quota_limits, MCP_LIMIT_MARKER)
    menu_label = f"Tokens: {token_pct:.1f}% | MCP: {mcp_pct:.1f}%"
    return TrayDisplay(
        title = f"T:{_rounded(token_pct)}% M:{_rounded(mcp_pct)}%",
        tooltip = f"{menu_label}\nUpdated: {synced_at.strftime('%H:%M')}",
        menu_label = menu_label,
    )
