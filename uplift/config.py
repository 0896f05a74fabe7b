"""Environment configuration, timezone helpers and the shared Jinja2 templates."""
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from fastapi.templating import Jinja2Templates

load_dotenv()

# App timezone setting - defaults to Central Time. Decides what "today" is.
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Chicago")

DEFAULT_SUMMARY_MODEL = "claude-3-7-sonnet-20250219"

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def get_api_key() -> Optional[str]:
    """Credential for the summarization service, or None when unset."""
    return os.getenv("ANTHROPIC_API_KEY") or None


def get_summary_model() -> str:
    return os.getenv("SUMMARY_MODEL") or DEFAULT_SUMMARY_MODEL


def summary_service_configured() -> bool:
    """Nightly submission is disabled (with a standing warning) without a key."""
    return get_api_key() is not None


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_app_tz() -> ZoneInfo:
    """Get the application timezone."""
    return ZoneInfo(APP_TIMEZONE)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_today() -> date:
    """Today's date in the app timezone."""
    return datetime.now(get_app_tz()).date()


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the app's local timezone for display.

    Naive datetimes are assumed to be UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(get_app_tz())


def localtime(dt: datetime, fmt: str = None) -> str:
    """Jinja filter to convert UTC datetime to local time string.

    Usage in templates:
        {{ entry.created_at | localtime }}
        {{ entry.created_at | localtime('%H:%M') }}
    """
    if dt is None:
        return ""

    local_dt = to_local(dt)

    if fmt:
        return local_dt.strftime(fmt)

    # Default format: "2:30 PM"
    return local_dt.strftime("%I:%M %p").lstrip("0")


def create_templates() -> Jinja2Templates:
    """Create a Jinja2Templates instance with custom filters."""
    templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

    templates.env.filters["localtime"] = localtime

    return templates


# Singleton template instance - import this in route files
templates = create_templates()
