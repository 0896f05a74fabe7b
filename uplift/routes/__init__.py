from uplift.routes.home import router as home_router
from uplift.routes.checkins import router as checkins_router

__all__ = [
    'home_router',
    'checkins_router',
]
