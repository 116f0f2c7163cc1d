"""
Firebase admin initialization and helpers.

The frontend authenticates users with Firebase Authentication and passes
Firebase ID tokens to the backend. The backend verifies those tokens with
the Firebase Admin SDK and stores each user's metrics, profile and goals
in Firestore under ``users/{uid}``.
"""

import logging
import os

import firebase_admin
from firebase_admin import credentials, firestore

from app.core.config import settings

logger = logging.getLogger(__name__)

# Global references to avoid re-initialization
_firebase_app = None
db = None


def init_firebase():
    """
    Initialize Firebase Admin SDK if not already initialized.

    The credentials path comes from the FIREBASE_CREDENTIALS setting
    (env var or .env), defaulting to app/core/firebase_key.json.
    """

    global _firebase_app, db

    # Prevent re-initialization (important for Uvicorn reload)
    if firebase_admin._apps:
        db = firestore.client()
        return

    cred_path = settings.FIREBASE_CREDENTIALS

    if not os.path.exists(cred_path):
        raise RuntimeError(
            f"Firebase credentials not found at: {cred_path}\n"
            "Set FIREBASE_CREDENTIALS env var or place firebase_key.json correctly."
        )

    cred = credentials.Certificate(cred_path)
    _firebase_app = firebase_admin.initialize_app(cred)

    db = firestore.client()

    logger.info("Firebase Admin initialized successfully.")


def get_db():
    """Return the Firestore client, initializing Firebase on first use."""
    if db is None:
        init_firebase()
    return db
