"""
Severity Classifier

Rules (SIGNAL_RICH, in priority order):
1. Crash whose severity mentions a heavy keyword => red
2. Energy assessment significant_deficit, or any high warning flag => red
3. Any other crash => yellow
4. Any medium warning flag => yellow
5. Otherwise => green

Rules (EFFORT_ONLY), used when a record carries no energy assessment and
no warning flags:
1. Crash => red
2. Any red effort => red
3. Any yellow effort, or effort data that cannot be parsed => yellow
4. Otherwise => green

A date without a nightly check-in is "none".
"""

import enum
import json
import logging
from datetime import date
from typing import Dict, Iterable, Optional

from uplift.models import NightlyCheckin
from uplift.store import JournalStore

logger = logging.getLogger(__name__)


HEAVY_CRASH_KEYWORDS = ("severe", "heavy", "significant", "major", "extreme", "high")


class Severity(str, enum.Enum):
    green = "green"
    yellow = "yellow"
    red = "red"
    none = "none"


class ClassifierStrategy(str, enum.Enum):
    signal_rich = "signal_rich"
    effort_only = "effort_only"


def is_heavy_crash(crash_occurred: bool, crash_severity: Optional[str]) -> bool:
    if not crash_occurred or not isinstance(crash_severity, str):
        return False
    severity = crash_severity.lower()
    return any(keyword in severity for keyword in HEAVY_CRASH_KEYWORDS)


def classify_signal_rich(
    crash_occurred: bool,
    crash_severity: Optional[str],
    energy_assessment: Optional[str],
    flag_severities: Iterable[str],
) -> Severity:
    flag_severities = set(flag_severities)
    assessment = energy_assessment.lower() if isinstance(energy_assessment, str) else ""

    if is_heavy_crash(crash_occurred, crash_severity):
        return Severity.red
    if assessment == "significant_deficit" or "high" in flag_severities:
        return Severity.red
    if crash_occurred:
        return Severity.yellow
    if "medium" in flag_severities:
        return Severity.yellow
    return Severity.green


def classify_effort_only(crash_occurred: bool, effort_payloads: Iterable[str]) -> Severity:
    """Classify from the crash flag and the raw effort_json of each activity."""
    if crash_occurred:
        return Severity.red

    has_yellow = False
    for effort_json in effort_payloads:
        try:
            effort = json.loads(effort_json or "[]")
        except (TypeError, ValueError):
            has_yellow = True
            continue
        if not isinstance(effort, list):
            has_yellow = True
            continue
        colors = {entry.get("color") for entry in effort if isinstance(entry, dict)}
        if "red" in colors:
            return Severity.red
        if "yellow" in colors:
            has_yellow = True

    return Severity.yellow if has_yellow else Severity.green


def select_strategy(checkin: NightlyCheckin, flag_count: int) -> ClassifierStrategy:
    """SIGNAL_RICH whenever the record carries the signals it needs."""
    if checkin.energy_assessment or flag_count:
        return ClassifierStrategy.signal_rich
    return ClassifierStrategy.effort_only


def classify_checkin(store: JournalStore, checkin: Optional[NightlyCheckin]) -> Severity:
    if checkin is None:
        return Severity.none

    flags = store.list_warning_flags(checkin.id)
    strategy = select_strategy(checkin, len(flags))

    if strategy == ClassifierStrategy.signal_rich:
        return classify_signal_rich(
            crash_occurred=bool(checkin.crash_occurred),
            crash_severity=checkin.crash_severity,
            energy_assessment=checkin.energy_assessment,
            flag_severities=[flag.severity for flag in flags],
        )

    activities = store.list_activities(checkin.id)
    return classify_effort_only(
        crash_occurred=bool(checkin.crash_occurred),
        effort_payloads=[activity.effort_json for activity in activities],
    )


def get_nightly_severities(store: JournalStore) -> Dict[date, Severity]:
    """Severity for every date that has a nightly check-in."""
    severities = {}
    for checkin in store.list_nightly_checkins():
        severities[checkin.date] = classify_checkin(store, checkin)
    return severities


def get_severity_for_date(store: JournalStore, checkin_date: date) -> Severity:
    return classify_checkin(store, store.get_nightly_checkin(checkin_date))
