from fastapi import FastAPI

from app.api.routes.router import api_router
from app.core.exceptions import register_exception_handlers
from app.core.firebase import init_firebase
from app.services.logger import setup_logging

setup_logging()

app = FastAPI(title="HealthTrackr Backend")


@app.on_event("startup")
def startup():
    """Initialize Firebase Admin (reads credentials path from settings)."""
    init_firebase()


@app.get("/")
async def root():
    return {"message": "HealthTrackr Backend is running"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


register_exception_handlers(app)

# Include API routers
app.include_router(api_router)
