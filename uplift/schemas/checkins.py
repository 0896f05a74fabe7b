import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from uplift.services.reconciliation import ReconciliationPolicy


class MorningCheckinCreate(BaseModel):
    sleep_quality: int = Field(..., ge=1, le=5)
    energy_level: int = Field(..., ge=1, le=5)


class NightlyCheckinCreate(BaseModel):
    date: Optional[datetime.date] = None  # defaults to today
    text: str = Field(..., min_length=1)
    policy: ReconciliationPolicy = ReconciliationPolicy.merge


class MorningCheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime.date
    sleep_quality: int
    energy_level: int


class NightlyCheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime.date
    is_backdated: bool
    crash_occurred: bool
    crash_severity: Optional[str] = None
    crash_description: Optional[str] = None
    energy_assessment: Optional[str] = None
    energy_current_state: Optional[str] = None
    energy_recovery_needed: bool
    supportive_message: Optional[str] = None


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    effort_json: str
    primary_effort_category: Optional[str] = None
    duration_minutes: Optional[int] = None
    difficulty_noted: bool
    notes: Optional[str] = None


class CheckinEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_text: str
    created_at: datetime.datetime
    relative_label: Optional[str] = None


class DayDetailOut(BaseModel):
    date: datetime.date
    severity: str
    morning: Optional[MorningCheckinOut] = None
    nightly: Optional[NightlyCheckinOut] = None
    activities: List[ActivityOut] = []
    entries: List[CheckinEntryOut] = []
