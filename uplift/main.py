import logging
from fastapi import FastAPI
from dotenv import load_dotenv

load_dotenv()

from uplift.config import get_log_level, summary_service_configured
from uplift.database import DATABASE_URL
from uplift.exceptions import register_exception_handlers
from uplift.routes import home_router, checkins_router
from uplift.store import JournalStore

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(store: JournalStore = None) -> FastAPI:
    """Build the application around a store it owns."""
    app = FastAPI(
        title="Uplift",
        description="Energy journal for chronic fatigue",
        version="1.0.0",
    )
    app.state.store = store or JournalStore()

    app.include_router(home_router)
    app.include_router(checkins_router)
    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        """Initialize the store. If initialization fails the app stops with a
        clear error message.
        """
        try:
            app.state.store.init()
        except Exception as e:
            raise RuntimeError(
                f"Database initialization failed for DATABASE_URL={DATABASE_URL}: {e}"
            ) from e

        if not summary_service_configured():
            logger.warning("ANTHROPIC_API_KEY not set; nightly check-ins are disabled")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("uplift.main:app", host="0.0.0.0", port=8000, reload=True)
