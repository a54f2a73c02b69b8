from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from features.usage.model.quota_limit_response import QuotaLimit

CRITICAL_THRESHOLD_PERCENT = 90.0
WARNING_THRESHOLD_PERCENT = 70.0


class AlertSeverity(str, Enum):
    warning = "warning"
    critical = "critical"


class UsageAlert(BaseModel):
    model_config = ConfigDict(populate_by_name = True, frozen = True)

    type_label: str = Field(alias = "type")
    percentage: float
    severity: AlertSeverity


def severity_of(percentage: float) -> AlertSeverity | None:
    if percentage >= CRITICAL_THRESHOLD_PERCENT:
        return AlertSeverity.critical
    if percentage >= WARNING_THRESHOLD_PERCENT:
        return AlertSeverity.warning
    return None


def evaluate_alerts(limits: list[QuotaLimit]) -> list[UsageAlert]:
    # no de-duplication: every poll above a threshold alerts again
    alerts: list[UsageAlert] = []
    for limit in limits:
        severity = severity_of(limit.percentage)
        if severity is None:
            continue
        alerts.append(UsageAlert(type_label = limit.type_label, percentage = limit.percentage, severity = severity))
    return alerts
