"""
API dependencies: Firebase auth verification and service wiring.
"""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth

from app.services.goal_service import GoalService
from app.services.health_service import HealthService
from app.services.storage import StorageBackend, get_storage

# 🔐 FastAPI security scheme (this fixes Swagger + header binding)
security = HTTPBearer(auto_error=True)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    """
    Verify Firebase ID token from Authorization header.

    Expects:
        Authorization: Bearer <id_token>
    """
    try:
        id_token = credentials.credentials
        decoded = auth.verify_id_token(id_token)
        return decoded
    except Exception as exc:
        raise HTTPException(
            status_code=401,
            detail="Invalid ID token",
        ) from exc


def get_user_id(user=Depends(get_current_user)) -> str:
    return user["uid"]


def get_health_service(storage: StorageBackend = Depends(get_storage)) -> HealthService:
    return HealthService(storage)


def get_goal_service(storage: StorageBackend = Depends(get_storage)) -> GoalService:
    return GoalService(storage)
