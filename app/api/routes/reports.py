from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_current_user
from app.models.schemas import ReportRequest
from app.services.report_mailer import send_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/send")
def send_weekly_report(payload: ReportRequest = Body(...), user=Depends(get_current_user)):
    if not payload.to:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Recipient email is required."},
        )

    send_report(payload)
    return {"success": True}
