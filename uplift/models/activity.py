import json
from sqlalchemy import Boolean, Column, Integer, String, Text, ForeignKey
import sqlalchemy as sa
from sqlalchemy.orm import relationship
from uplift.database import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True)
    checkin_id = Column(
        Integer,
        ForeignKey("nightly_checkins.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Secondary key within a check-in when merging
    name = Column(String(255), nullable=False)
    effort_json = Column(Text, nullable=False, default="[]")
    duration_minutes = Column(Integer, nullable=True)
    difficulty_noted = Column(Boolean, nullable=False, server_default=sa.text("false"), default=False)
    notes = Column(Text, nullable=True)

    checkin = relationship("NightlyCheckin", back_populates="activities")

    CATEGORY_ICONS = {
        "physical": "🏃",
        "cognitive": "🧠",
        "social": "👥",
        "sensory": "👁️",
        "emotional": "❤️",
    }

    @property
    def effort(self):
        """Effort entries as a list of {category, color} dicts.

        Raises ValueError when the stored effort is not valid JSON.
        """
        return json.loads(self.effort_json or "[]")

    @property
    def primary_effort_category(self):
        """Category of the first effort entry that names one."""
        try:
            effort = self.effort
        except ValueError:
            return None
        if not isinstance(effort, list):
            return None
        for entry in effort:
            if isinstance(entry, dict) and entry.get("category"):
                return entry["category"]
        return None

    @property
    def icon(self):
        return self.CATEGORY_ICONS.get(self.primary_effort_category, "📅")

    def __repr__(self):
        return f"<Activity {self.name}>"
