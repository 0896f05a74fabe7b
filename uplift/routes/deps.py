from fastapi import Request

from uplift.services.summary_client import NightlySummaryGenerator
from uplift.store import JournalStore


def get_store(request: Request) -> JournalStore:
    """The store owned by the application, initialized at startup."""
    return request.app.state.store


def get_summary_generator() -> NightlySummaryGenerator:
    """Raises ConfigurationError when no API key is configured."""
    return NightlySummaryGenerator()
