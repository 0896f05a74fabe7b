from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List

from uplift.services.severity import Severity

HISTORY_DAYS = 10


@dataclass
class HistoryDay:
    date: date
    label: str
    is_today: bool
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "label": self.label,
            "is_today": self.is_today,
            "severity": self.severity.value,
        }


def build_history_days(
    severities: Dict[date, Severity], today: date, days: int = HISTORY_DAYS
) -> List[HistoryDay]:
    """Consecutive days ending today, oldest first, each with its severity."""
    history = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        is_today = offset == 0
        history.append(
            HistoryDay(
                date=day,
                label="Today" if is_today else day.strftime("%a"),
                is_today=is_today,
                severity=severities.get(day, Severity.none),
            )
        )
    return history


def format_relative_days(base_date: date, created: date) -> str:
    """How long after the day itself an entry was written."""
    diff = max(0, (created - base_date).days)
    if diff == 0:
        return "Same day"
    if diff == 1:
        return "1 day later"
    return f"{diff} days later"
