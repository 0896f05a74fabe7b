"""
Nightly Check-in Model

One row per date. The scalar columns are a queryable projection of
summary_json, which holds the service's summary exactly as parsed.
"""

import json
from uplift.config import utc_now
import sqlalchemy as sa
from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from uplift.database import Base


class NightlyCheckin(Base):
    __tablename__ = "nightly_checkins"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    is_backdated = Column(Boolean, nullable=False, server_default=sa.text("false"), default=False)

    crash_occurred = Column(Boolean, nullable=False, server_default=sa.text("false"), default=False)
    crash_severity = Column(String(100), nullable=True)  # free text: severe, mild, ...
    crash_description = Column(Text, nullable=True)

    # surplus, balanced, slight_deficit, moderate_deficit, significant_deficit
    energy_assessment = Column(String(50), nullable=True)
    energy_current_state = Column(Text, nullable=True)
    energy_recovery_needed = Column(
        Boolean, nullable=False, server_default=sa.text("false"), default=False
    )

    supportive_message = Column(Text, nullable=True)
    summary_json = Column(Text, nullable=True)
    # Rewritten on every save
    created_at = Column(DateTime, nullable=False, default=utc_now)

    activities = relationship(
        "Activity",
        back_populates="checkin",
        order_by="Activity.id",
        passive_deletes=True,
    )
    warning_flags = relationship(
        "WarningFlag",
        back_populates="checkin",
        order_by="WarningFlag.id",
        passive_deletes=True,
    )

    ENERGY_ASSESSMENTS = [
        ("surplus", "Surplus"),
        ("balanced", "Balanced"),
        ("slight_deficit", "Slight deficit"),
        ("moderate_deficit", "Moderate deficit"),
        ("significant_deficit", "Significant deficit"),
    ]

    @property
    def summary(self):
        """The stored summary, deserialized."""
        if not self.summary_json:
            return {}
        return json.loads(self.summary_json)

    @property
    def energy_assessment_display(self):
        for code, name in self.ENERGY_ASSESSMENTS:
            if code == self.energy_assessment:
                return name
        return self.energy_assessment

    def __repr__(self):
        return f"<NightlyCheckin {self.date}>"
