"""
Journal Store

Durable keyed storage for check-ins and their child records. Every public
method runs in its own session and commits before returning, so each call
is individually durable; callers get no wider transaction than that.
"""

import json
import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from uplift.config import utc_now
from uplift.database import Base, SessionLocal
from uplift.models import (
    Activity,
    CheckinEntry,
    MorningCheckin,
    NightlyCheckin,
    WarningFlag,
)

logger = logging.getLogger(__name__)


class JournalStore:
    """Owns the session factory and table lifecycle for the journal."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory
        self._initialized = False

    def init(self):
        """Create tables. Safe to call more than once."""
        if self._initialized:
            return
        bind = self.session_factory.kw["bind"]
        Base.metadata.create_all(bind=bind)
        self._initialized = True
        logger.info("Journal store initialized")

    @property
    def initialized(self) -> bool:
        return self._initialized

    @contextmanager
    def session(self) -> Iterator[Session]:
        if not self._initialized:
            raise RuntimeError("JournalStore.init() must be called before use")
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ------------------------------------------------------------
    # Morning check-ins
    # ------------------------------------------------------------

    def save_morning_checkin(
        self, checkin_date: date, sleep_quality: int, energy_level: int
    ) -> MorningCheckin:
        """Create or wholesale-replace the morning check-in for a date."""
        with self.session() as db:
            checkin = (
                db.query(MorningCheckin)
                .filter(MorningCheckin.date == checkin_date)
                .first()
            )
            if checkin is None:
                checkin = MorningCheckin(date=checkin_date)
                db.add(checkin)
            checkin.sleep_quality = sleep_quality
            checkin.energy_level = energy_level
            checkin.created_at = utc_now()
            db.flush()
            return checkin

    def get_morning_checkin(self, checkin_date: date) -> Optional[MorningCheckin]:
        with self.session() as db:
            return (
                db.query(MorningCheckin)
                .filter(MorningCheckin.date == checkin_date)
                .first()
            )

    # ------------------------------------------------------------
    # Nightly check-ins
    # ------------------------------------------------------------

    def get_nightly_checkin(self, checkin_date: date) -> Optional[NightlyCheckin]:
        with self.session() as db:
            return (
                db.query(NightlyCheckin)
                .filter(NightlyCheckin.date == checkin_date)
                .first()
            )

    def get_nightly_checkin_id(self, checkin_date: date) -> Optional[int]:
        with self.session() as db:
            row = (
                db.query(NightlyCheckin.id)
                .filter(NightlyCheckin.date == checkin_date)
                .first()
            )
            return row.id if row else None

    def insert_nightly_checkin(self, checkin_date: date, **fields: Any) -> None:
        with self.session() as db:
            db.add(NightlyCheckin(date=checkin_date, created_at=utc_now(), **fields))

    def update_nightly_checkin(self, checkin_id: int, **fields: Any) -> None:
        with self.session() as db:
            checkin = db.get(NightlyCheckin, checkin_id)
            if checkin is None:
                return
            for key, value in fields.items():
                setattr(checkin, key, value)
            checkin.created_at = utc_now()

    def list_nightly_checkins(self) -> List[NightlyCheckin]:
        """All nightly check-ins, newest date first."""
        with self.session() as db:
            return db.query(NightlyCheckin).order_by(NightlyCheckin.date.desc()).all()

    # ------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------

    def get_activity_by_name(self, checkin_id: int, name: str) -> Optional[Activity]:
        with self.session() as db:
            return (
                db.query(Activity)
                .filter(Activity.checkin_id == checkin_id, Activity.name == name)
                .order_by(Activity.id)
                .first()
            )

    def insert_activity(self, checkin_id: int, **fields: Any) -> None:
        with self.session() as db:
            db.add(Activity(checkin_id=checkin_id, **fields))

    def update_activity(self, activity_id: int, **fields: Any) -> None:
        with self.session() as db:
            activity = db.get(Activity, activity_id)
            if activity is None:
                return
            for key, value in fields.items():
                setattr(activity, key, value)

    def delete_activities(self, checkin_id: int) -> int:
        with self.session() as db:
            return (
                db.query(Activity)
                .filter(Activity.checkin_id == checkin_id)
                .delete(synchronize_session=False)
            )

    def list_activities(self, checkin_id: int) -> List[Activity]:
        """Activities for a check-in in insertion order."""
        with self.session() as db:
            return (
                db.query(Activity)
                .filter(Activity.checkin_id == checkin_id)
                .order_by(Activity.id)
                .all()
            )

    def get_activities_by_date(self, checkin_date: date) -> List[Activity]:
        with self.session() as db:
            return (
                db.query(Activity)
                .join(NightlyCheckin, Activity.checkin_id == NightlyCheckin.id)
                .filter(NightlyCheckin.date == checkin_date)
                .order_by(Activity.id)
                .all()
            )

    # ------------------------------------------------------------
    # Warning flags
    # ------------------------------------------------------------

    def insert_warning_flag(self, checkin_id: int, **fields: Any) -> None:
        with self.session() as db:
            db.add(WarningFlag(checkin_id=checkin_id, **fields))

    def delete_warning_flags(self, checkin_id: int) -> int:
        with self.session() as db:
            return (
                db.query(WarningFlag)
                .filter(WarningFlag.checkin_id == checkin_id)
                .delete(synchronize_session=False)
            )

    def list_warning_flags(self, checkin_id: int) -> List[WarningFlag]:
        with self.session() as db:
            return (
                db.query(WarningFlag)
                .filter(WarningFlag.checkin_id == checkin_id)
                .order_by(WarningFlag.id)
                .all()
            )

    # ------------------------------------------------------------
    # Check-in log
    # ------------------------------------------------------------

    def save_checkin_entry(
        self, checkin_date: date, user_text: str, summary: Optional[Dict[str, Any]]
    ) -> CheckinEntry:
        with self.session() as db:
            entry = CheckinEntry(
                date=checkin_date,
                user_text=user_text,
                summary_json=json.dumps(summary or {}),
                created_at=utc_now(),
            )
            db.add(entry)
            db.flush()
            return entry

    def get_checkin_entries(self, checkin_date: date) -> List[CheckinEntry]:
        """Log entries for a date, newest first."""
        with self.session() as db:
            return (
                db.query(CheckinEntry)
                .filter(CheckinEntry.date == checkin_date)
                .order_by(CheckinEntry.created_at.desc(), CheckinEntry.id.desc())
                .all()
            )
