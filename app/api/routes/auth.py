"""Authentication-related routes.

The frontend signs users in with the external identity provider; the
backend verifies Firebase ID tokens and can mint Firebase custom tokens
for an already verified user.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from firebase_admin import auth

from app.api.deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me")
async def get_me(user=Depends(get_current_user)):
    return {"uid": user.get("uid"), "email": user.get("email")}


@router.post("/firebase-token")
def create_firebase_token(user=Depends(get_current_user)):
    try:
        token = auth.create_custom_token(user["uid"])
    except Exception as exc:
        logger.error("Error creating Firebase token: %s", exc)
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    if isinstance(token, bytes):
        token = token.decode("utf-8")
    return {"token": token}
