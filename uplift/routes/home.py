"""
Home Route

Ten-day history strip plus the detail panel for the selected day.
"""

from datetime import date, datetime
from fastapi import APIRouter, Request, Depends, Query
from fastapi.responses import HTMLResponse

from uplift.config import local_today, summary_service_configured, templates
from uplift.schemas.checkins import DayDetailOut
from uplift.services.checkin import get_day_detail
from uplift.services.history import build_history_days
from uplift.services.severity import get_nightly_severities
from uplift.store import JournalStore
from uplift.routes.deps import get_store

router = APIRouter(tags=["home"])


def _day_detail_out(detail: dict) -> DayDetailOut:
    return DayDetailOut.model_validate(
        {**detail, "severity": detail["severity"].value},
        from_attributes=True,
    )


@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    store: JournalStore = Depends(get_store),
    date: str = Query(None, description="Date in YYYY-MM-DD format"),
):
    """Home page — history strip and the selected day (defaults to today)."""
    today = local_today()

    if date:
        try:
            selected_date = datetime.strptime(date, "%Y-%m-%d").date()
        except ValueError:
            selected_date = today
    else:
        selected_date = today

    history = build_history_days(get_nightly_severities(store), today)
    detail = get_day_detail(store, selected_date)
    selected_day = next((day for day in history if day.date == selected_date), None)

    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "history": history,
            "detail": detail,
            "selected_date": selected_date,
            "selected_label": selected_day.label if selected_day else selected_date.isoformat(),
            "is_backdated_view": selected_date != today,
            "summary_enabled": summary_service_configured(),
        },
    )


@router.get("/api/history")
def history_json(store: JournalStore = Depends(get_store)):
    today = local_today()
    history = build_history_days(get_nightly_severities(store), today)
    return [day.to_dict() for day in history]


@router.get("/api/days/{day}", response_model=DayDetailOut)
def day_detail_json(day: date, store: JournalStore = Depends(get_store)):
    return _day_detail_out(get_day_detail(store, day))
