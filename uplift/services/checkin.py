"""
Check-in Service

Morning and nightly check-in submission, and the read-through used when a
day is selected in the history strip.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from uplift.config import to_local
from uplift.models import MorningCheckin
from uplift.services.history import format_relative_days
from uplift.services.reconciliation import ReconciliationPolicy, upsert_nightly_checkin
from uplift.services.severity import get_severity_for_date
from uplift.services.summary_client import NightlySummaryGenerator
from uplift.store import JournalStore

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 5


def _validate_rating(label: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be a whole number")
    if not RATING_MIN <= value <= RATING_MAX:
        raise ValueError(f"{label} must be between {RATING_MIN} and {RATING_MAX}")
    return value


def save_morning_checkin(
    store: JournalStore, sleep_quality: int, energy_level: int, today: date
) -> MorningCheckin:
    """Morning check-ins are only recorded for today."""
    return store.save_morning_checkin(
        today,
        sleep_quality=_validate_rating("Sleep quality", sleep_quality),
        energy_level=_validate_rating("Energy level", energy_level),
    )


def submit_nightly_checkin(
    store: JournalStore,
    generator: NightlySummaryGenerator,
    checkin_date: date,
    user_text: str,
    today: date,
    policy: ReconciliationPolicy = ReconciliationPolicy.merge,
) -> Dict[str, Any]:
    """
    Summarize a nightly narration and reconcile it into the journal.

    Nothing is written unless the summary was generated and parsed.
    The raw text is appended to the check-in log after the upsert.
    """
    text = (user_text or "").strip()
    if not text:
        raise ValueError("Check-in text is required.")
    if checkin_date > today:
        raise ValueError("Nightly check-ins cannot be saved for a future date.")

    summary = generator.generate(checkin_date, text)

    checkin = upsert_nightly_checkin(
        store,
        checkin_date,
        is_backdated=checkin_date != today,
        summary=summary,
        policy=policy,
    )
    entry = store.save_checkin_entry(checkin_date, text, summary)

    return {
        "checkin": checkin,
        "entry": entry,
        "summary": summary,
        "severity": get_severity_for_date(store, checkin_date),
    }


def get_day_detail(store: JournalStore, selected_date: date) -> Dict[str, Optional[Any]]:
    """Everything recorded for one day."""
    entries = store.get_checkin_entries(selected_date)
    for entry in entries:
        entry.relative_label = format_relative_days(
            selected_date, to_local(entry.created_at).date()
        )

    return {
        "date": selected_date,
        "morning": store.get_morning_checkin(selected_date),
        "nightly": store.get_nightly_checkin(selected_date),
        "activities": store.get_activities_by_date(selected_date),
        "entries": entries,
        "severity": get_severity_for_date(store, selected_date),
    }
