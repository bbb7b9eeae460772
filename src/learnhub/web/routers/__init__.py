from learnhub.web.routers.auth import router as auth_router
from learnhub.web.routers.courses import router as courses_router
from learnhub.web.routers.profile import router as profile_router
from learnhub.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "courses_router",
    "profile_router",
    "users_router",
]
