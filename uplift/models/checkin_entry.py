"""
Check-in Entry Model

Append-only log of the raw text a user submitted for a date, with the
summary the service derived from it. Never updated or deleted.
"""

import json
from uplift.config import utc_now
from sqlalchemy import Column, Date, DateTime, Integer, Text
from uplift.database import Base


class CheckinEntry(Base):
    __tablename__ = "checkin_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    user_text = Column(Text, nullable=False)
    summary_json = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    @property
    def summary(self):
        return json.loads(self.summary_json)

    def __repr__(self):
        return f"<CheckinEntry {self.date} #{self.id}>"
