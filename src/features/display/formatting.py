from datetime import datetime
from enum import Enum

from features.usage.quota_alerts import CRITICAL_THRESHOLD_PERCENT, WARNING_THRESHOLD_PERCENT, AlertSeverity, UsageAlert

ELEVATED_THRESHOLD_PERCENT = 50.0


class UsageLevel(str, Enum):
    normal = "normal"
    elevated = "elevated"
    warning = "warning"
    critical = "critical"


def usage_level(percentage: float) -> UsageLevel:
    if percentage >= CRITICAL_THRESHOLD_PERCENT:
        return UsageLevel.critical
    if percentage >= WARNING_THRESHOLD_PERCENT:
        return UsageLevel.warning
    if percentage >= ELEVATED_THRESHOLD_PERCENT:
        return UsageLevel.elevated
    return UsageLevel.normal


def format_compact_number(value: int) -> str:
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def format_last_updated(timestamp: int, now: datetime | None = None) -> str:
    if not timestamp:
        return "Never"
    now = now or datetime.now()
    seconds = max(0, int(now.timestamp()) - timestamp)
    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    return f"{minutes // 60}h ago"


def format_reset_time(reset_time_ms: int | None, now: datetime | None = None) -> str | None:
    if not reset_time_ms:
        return None
    now = now or datetime.now()
    reset_at = datetime.fromtimestamp(reset_time_ms / 1000)
    clock = reset_at.strftime("%H:%M")
    if reset_at.date() == now.date():
        return f"today at {clock}"
    return f"{reset_at.strftime('%b')} {reset_at.day}, {clock}"


def alert_notification(alert: UsageAlert) -> tuple[str, str]:
    """Returns the (title, body) pair of the desktop notification for an alert"""
    if alert.severity == AlertSeverity.critical:
        title = "🚨 Critical Usage Alert"
    else:
        title = "⚠️ Usage Warning"
    return title, f"{alert.type_label}: {alert.percentage:.1f}% used"
