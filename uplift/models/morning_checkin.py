from uplift.config import utc_now
from sqlalchemy import Column, Date, DateTime, Integer
from uplift.database import Base


class MorningCheckin(Base):
    __tablename__ = "morning_checkins"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    sleep_quality = Column(Integer, nullable=False)  # 1-5
    energy_level = Column(Integer, nullable=False)  # 1-5
    created_at = Column(DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f"<MorningCheckin {self.date}: sleep={self.sleep_quality} energy={self.energy_level}>"
