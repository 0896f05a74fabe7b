import json
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from uplift.database import Base


class WarningFlag(Base):
    __tablename__ = "warning_flags"

    id = Column(Integer, primary_key=True)
    checkin_id = Column(
        Integer,
        ForeignKey("nightly_checkins.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # pushed_through, delayed_onset, cumulative_load, ignored_signals, rushed, ...
    type = Column(String(100), nullable=False)
    severity = Column(String(20), nullable=False)  # high, medium, low
    description = Column(Text, nullable=True)
    # Activity names, informational only
    related_activities = Column(Text, nullable=True)

    checkin = relationship("NightlyCheckin", back_populates="warning_flags")

    @property
    def related_activity_names(self):
        if not self.related_activities:
            return []
        return json.loads(self.related_activities)

    def __repr__(self):
        return f"<WarningFlag {self.type} ({self.severity})>"
