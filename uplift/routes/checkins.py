import logging
from fastapi import APIRouter, Depends

from uplift.config import local_today
from uplift.schemas.checkins import (
    MorningCheckinCreate,
    MorningCheckinOut,
    NightlyCheckinCreate,
    NightlyCheckinOut,
)
from uplift.services.checkin import save_morning_checkin, submit_nightly_checkin
from uplift.services.summary_client import NightlySummaryGenerator
from uplift.store import JournalStore
from uplift.routes.deps import get_store, get_summary_generator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkins", tags=["checkins"])


@router.post("/morning", response_model=MorningCheckinOut)
def create_morning_checkin(
    payload: MorningCheckinCreate,
    store: JournalStore = Depends(get_store),
):
    """Save (or replace) today's morning check-in."""
    return save_morning_checkin(
        store,
        sleep_quality=payload.sleep_quality,
        energy_level=payload.energy_level,
        today=local_today(),
    )


@router.post("/nightly")
def create_nightly_checkin(
    payload: NightlyCheckinCreate,
    store: JournalStore = Depends(get_store),
    generator: NightlySummaryGenerator = Depends(get_summary_generator),
):
    """Summarize the narration and reconcile it into the day's record."""
    today = local_today()
    checkin_date = payload.date or today

    result = submit_nightly_checkin(
        store,
        generator,
        checkin_date=checkin_date,
        user_text=payload.text,
        today=today,
        policy=payload.policy,
    )
    logger.info(f"Nightly check-in saved for {checkin_date.isoformat()}")

    return {
        "status": "saved",
        "checkin": NightlyCheckinOut.model_validate(result["checkin"]).model_dump(mode="json"),
        "severity": result["severity"].value,
        "supportive_message": result["checkin"].supportive_message,
    }
