from tabsession.web.routers.sessions import router as sessions_router
from tabsession.web.routers.user import router as user_router

__all__ = [
    "sessions_router",
    "user_router",
]
