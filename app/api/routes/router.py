from fastapi import APIRouter

from app.api.routes.auth import router as auth_router
from app.api.routes.goals import router as goals_router
from app.api.routes.insights import router as insights_router
from app.api.routes.metrics import router as metrics_router
from app.api.routes.profile import router as profile_router
from app.api.routes.reports import router as reports_router
from app.api.routes.wearables import router as wearables_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(metrics_router)
api_router.include_router(profile_router)
api_router.include_router(goals_router)
api_router.include_router(insights_router)
api_router.include_router(wearables_router)
api_router.include_router(reports_router)
