"""
Nightly summary boundary types.

The summary service returns loosely-shaped JSON. Every field may be missing,
null, or of the wrong type, so defaults are applied here, once, when the raw
payload becomes a NightlySummary:

- crash / energy_balance: empty block (occurred/recovery_needed False, text None)
- activities / warning_flags: empty list when absent or not a list
- activity name: "Activity"
- warning flag type: "cumulative_load", severity: "low"
- activity duration: None unless it is a number of minutes between 0 and 31 days
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_DURATION_MINUTES = 24 * 60 * 31


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _dict_or_empty(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _list_of_dicts(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class EffortEntry(BaseModel):
    category: Optional[str] = None  # physical, cognitive, social, sensory, emotional
    color: Optional[str] = None  # green, yellow, red

    @field_validator("category", "color", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return _optional_text(value)


class ActivitySummary(BaseModel):
    name: str = "Activity"
    effort: List[EffortEntry] = Field(default_factory=list)
    duration_minutes: Optional[int] = None
    difficulty_noted: bool = False
    notes: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, value):
        if value is None:
            return "Activity"
        return _optional_text(value)

    @field_validator("effort", mode="before")
    @classmethod
    def coerce_effort(cls, value):
        return _list_of_dicts(value)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def coerce_minutes(cls, value):
        if value is None or isinstance(value, bool):
            return None
        try:
            minutes = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None
        if not 0 <= minutes <= MAX_DURATION_MINUTES:
            return None
        return minutes

    @field_validator("difficulty_noted", mode="before")
    @classmethod
    def coerce_flag(cls, value):
        return bool(value)

    @field_validator("notes", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return _optional_text(value)

    def effort_payload(self) -> list:
        """Effort as the ordered list of {category, color} dicts that gets stored."""
        return [entry.model_dump() for entry in self.effort]


class CrashSummary(BaseModel):
    occurred: bool = False
    severity: Optional[str] = None
    description: Optional[str] = None

    @field_validator("occurred", mode="before")
    @classmethod
    def coerce_flag(cls, value):
        return bool(value)

    @field_validator("severity", "description", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return _optional_text(value)


class WarningFlagSummary(BaseModel):
    type: str = "cumulative_load"
    severity: str = "low"  # high, medium, low
    description: Optional[str] = None
    related_activities: List[str] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, value):
        return "cumulative_load" if value is None else _optional_text(value)

    @field_validator("severity", mode="before")
    @classmethod
    def default_severity(cls, value):
        return "low" if value is None else _optional_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return _optional_text(value)

    @field_validator("related_activities", mode="before")
    @classmethod
    def coerce_names(cls, value):
        if not isinstance(value, list):
            return []
        return [str(name) for name in value if name is not None]


class EnergyBalance(BaseModel):
    # surplus, balanced, slight_deficit, moderate_deficit, significant_deficit
    assessment: Optional[str] = None
    current_state: Optional[str] = None
    recovery_needed: bool = False

    @field_validator("assessment", "current_state", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return _optional_text(value)

    @field_validator("recovery_needed", mode="before")
    @classmethod
    def coerce_flag(cls, value):
        return bool(value)


class NightlySummary(BaseModel):
    date: Optional[str] = None
    activities: List[ActivitySummary] = Field(default_factory=list)
    crash: CrashSummary = Field(default_factory=CrashSummary)
    warning_flags: List[WarningFlagSummary] = Field(default_factory=list)
    energy_balance: EnergyBalance = Field(default_factory=EnergyBalance)
    supportive_message: Optional[str] = None

    @field_validator("date", "supportive_message", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return _optional_text(value)

    @field_validator("activities", "warning_flags", mode="before")
    @classmethod
    def coerce_items(cls, value):
        return _list_of_dicts(value)

    @field_validator("crash", "energy_balance", mode="before")
    @classmethod
    def coerce_block(cls, value):
        return _dict_or_empty(value)

    @classmethod
    def from_raw(cls, raw: Any) -> "NightlySummary":
        """Normalize a parsed service payload, applying every default."""
        return cls.model_validate(_dict_or_empty(raw))
