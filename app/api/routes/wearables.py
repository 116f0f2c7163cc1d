"""Sandboxed wearable connections.

Providers return canned seven-day payloads; nothing here talks to a real
device or vendor API.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.api.deps import get_user_id
from app.models.schemas import ImportResult
from app.services import wearables
from app.services.storage import StorageBackend, get_storage

router = APIRouter(prefix="/wearables", tags=["wearables"])


@router.get("/{provider}")
async def fetch_provider(provider: str, uid: str = Depends(get_user_id)):
    metrics = await wearables.fetch_provider(provider)
    return {
        "provider": provider,
        "label": wearables.WEARABLE_PROVIDER_LABELS[provider],
        "summary": wearables.summarize_wearable_data(metrics).model_dump(by_alias=True),
        "items": [m.model_dump(by_alias=True, exclude_none=True, mode="json") for m in metrics],
    }


@router.get("/{provider}/csv", response_class=PlainTextResponse)
async def export_provider_csv(provider: str, uid: str = Depends(get_user_id)):
    metrics = await wearables.fetch_provider(provider)
    return PlainTextResponse(
        wearables.wearable_metrics_to_csv(metrics),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{provider}-sample.csv"'},
    )


@router.post("/{provider}/import", response_model=ImportResult)
async def import_provider(
    provider: str,
    uid: str = Depends(get_user_id),
    storage: StorageBackend = Depends(get_storage),
):
    imported = await wearables.import_wearable_data(storage, uid, provider)
    return ImportResult(provider=provider, imported_count=imported)
