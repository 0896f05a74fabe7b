from uplift.models.morning_checkin import MorningCheckin
from uplift.models.nightly_checkin import NightlyCheckin
from uplift.models.activity import Activity
from uplift.models.warning_flag import WarningFlag
from uplift.models.checkin_entry import CheckinEntry

__all__ = [
    "MorningCheckin",
    "NightlyCheckin",
    "Activity",
    "WarningFlag",
    "CheckinEntry",
]
