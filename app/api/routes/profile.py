from fastapi import APIRouter, Body, Depends

from app.api.deps import get_user_id
from app.core.exceptions import NotFoundError
from app.models.profile import UserProfile
from app.services.storage import StorageBackend, get_storage

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/", response_model=UserProfile, response_model_exclude_none=True)
def get_profile(uid: str = Depends(get_user_id), storage: StorageBackend = Depends(get_storage)):
    profile = storage.get_profile(uid)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


@router.put("/", response_model=UserProfile, response_model_exclude_none=True)
def save_profile(
    payload: UserProfile = Body(...),
    uid: str = Depends(get_user_id),
    storage: StorageBackend = Depends(get_storage),
):
    """Merge-write: fields missing from the payload keep their stored value."""
    storage.save_profile(uid, payload)
    return storage.get_profile(uid) or payload
