from dataclasses import dataclass
from datetime import datetime, timedelta

WIRE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen = True)
class TimeWindow:
    start: str
    end: str

    def as_query_params(self) -> dict[str, str]:
        return {"startTime": self.start, "endTime": self.end}


def compute_time_window(now: datetime | None = None) -> TimeWindow:
    # yesterday at HH:00:00 until today at HH:59:59, so repeated polls land on hour boundaries
    now = now or datetime.now()
    start = (now - timedelta(days = 1)).replace(minute = 0, second = 0, microsecond = 0)
    end = now.replace(minute = 59, second = 59, microsecond = 0)
    return TimeWindow(
        start = start.strftime(WIRE_DATETIME_FORMAT),
        end = end.strftime(WIRE_DATETIME_FORMAT),
    )
