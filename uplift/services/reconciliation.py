"""
Nightly Reconciliation Service

Writes a day's parsed summary into the store:
- The nightly check-in is upserted by date; its id survives updates.
- Warning flags are always replaced in full.
- Activities are replaced in full (REPLACE) or merged by name (MERGE).
  MERGE never removes an activity that a later summary leaves out.

The steps are separate store calls, not one transaction. A failure part
way through leaves the day partially written until the next submission
for that date reconciles it again.
"""

import enum
import json
import logging
from datetime import date
from typing import Any, Dict

from uplift.exceptions import ReconciliationError
from uplift.models import NightlyCheckin
from uplift.schemas.summary import NightlySummary
from uplift.store import JournalStore

logger = logging.getLogger(__name__)


class ReconciliationPolicy(str, enum.Enum):
    replace = "replace"
    merge = "merge"


def nightly_fields(summary: NightlySummary, raw_summary: Any) -> Dict[str, Any]:
    """Scalar projection of a summary plus the serialized original."""
    return {
        "crash_occurred": summary.crash.occurred,
        "crash_severity": summary.crash.severity,
        "crash_description": summary.crash.description,
        "energy_assessment": summary.energy_balance.assessment,
        "energy_current_state": summary.energy_balance.current_state,
        "energy_recovery_needed": summary.energy_balance.recovery_needed,
        "supportive_message": summary.supportive_message,
        "summary_json": json.dumps(raw_summary if raw_summary is not None else {}),
    }


def upsert_nightly_checkin(
    store: JournalStore,
    checkin_date: date,
    is_backdated: bool,
    summary: Dict[str, Any],
    policy: ReconciliationPolicy = ReconciliationPolicy.merge,
) -> NightlyCheckin:
    """
    Upsert the nightly check-in for a date and reconcile its children.

    Args:
        store: Initialized journal store
        checkin_date: Day the summary describes
        is_backdated: True when saved for a day other than today
        summary: Parsed summary exactly as returned by the service
        policy: How existing activities are treated

    Returns:
        The stored NightlyCheckin

    Raises:
        ReconciliationError: the check-in could not be found after writing it
    """
    policy = ReconciliationPolicy(policy)
    parsed = NightlySummary.from_raw(summary)

    existing = store.get_nightly_checkin(checkin_date)
    fields = nightly_fields(parsed, summary)

    if existing:
        store.update_nightly_checkin(existing.id, is_backdated=bool(is_backdated), **fields)
    else:
        store.insert_nightly_checkin(checkin_date, is_backdated=bool(is_backdated), **fields)

    # Re-read rather than trusting the write to report the id
    checkin_id = store.get_nightly_checkin_id(checkin_date)
    if checkin_id is None:
        raise ReconciliationError(
            f"Unable to load nightly check-in for {checkin_date.isoformat()} after save."
        )

    if existing:
        store.delete_warning_flags(checkin_id)
        if policy == ReconciliationPolicy.replace:
            store.delete_activities(checkin_id)

    inserted = updated = 0
    for activity in parsed.activities:
        activity_fields = {
            "effort_json": json.dumps(activity.effort_payload()),
            "duration_minutes": activity.duration_minutes,
            "difficulty_noted": activity.difficulty_noted,
            "notes": activity.notes,
        }
        if policy == ReconciliationPolicy.merge:
            match = store.get_activity_by_name(checkin_id, activity.name)
            if match:
                store.update_activity(match.id, **activity_fields)
                updated += 1
                continue
        store.insert_activity(checkin_id, name=activity.name, **activity_fields)
        inserted += 1

    for flag in parsed.warning_flags:
        store.insert_warning_flag(
            checkin_id,
            type=flag.type,
            severity=flag.severity,
            description=flag.description,
            related_activities=json.dumps(flag.related_activities),
        )

    logger.info(
        f"Nightly check-in {checkin_date.isoformat()} saved ({policy.value}): "
        f"{inserted} activities added, {updated} updated, "
        f"{len(parsed.warning_flags)} warning flags"
    )
    return store.get_nightly_checkin(checkin_date)
