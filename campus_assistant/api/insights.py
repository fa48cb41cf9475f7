from fastapi import APIRouter, Depends, Query

from campus_assistant.api.dependencies import get_services, require_admin
from campus_assistant.extensions import Services
from campus_assistant.schemas import (
    SentimentRequest,
    SentimentResponse,
    TamperCheckRequest,
    TamperCheckResponse,
)
from campus_assistant.utils.logging_utils import log_audit

router = APIRouter()


@router.post("/sentiment", response_model=SentimentResponse)
async def analyze_sentiment(request: SentimentRequest, services: Services = Depends(get_services)):
    result = services.classifier.analyze(request.text)
    return SentimentResponse(text=request.text, label=result.label, score=result.score)


@router.post("/tamper/check", response_model=TamperCheckResponse)
async def check_tampering(request: TamperCheckRequest, services: Services = Depends(get_services)):
    report = services.detector.inspect(request.data_type, request.payload)
    if report.tampered:
        log_audit("tamper_check", "client", f"type={request.data_type} reason={report.reason}")
    return TamperCheckResponse(data_type=request.data_type, **report.to_dict())


@router.get("/insights")
async def get_insights(
    window: str = Query("day", pattern="^(day|week|month)$"),
    services: Services = Depends(get_services),
):
    return services.query_log.stats(window)


@router.delete("/insights")
async def clear_insights(
    admin: dict = Depends(require_admin),
    services: Services = Depends(get_services),
):
    cleared = len(services.query_log)
    services.query_log.clear()
    log_audit("query_log_cleared", str(admin.get("sub") or "admin"), f"{cleared} entries")
    return {"success": True, "cleared": cleared}
