from fastapi import APIRouter, Depends, HTTPException, status

from campus_assistant.api.dependencies import get_services, get_user_key
from campus_assistant.extensions import Services
from campus_assistant.schemas import AwardRequest

router = APIRouter()


@router.get("/progress")
async def get_progress(
    user_key: str = Depends(get_user_key),
    services: Services = Depends(get_services),
):
    state = await services.tracker_for(user_key).load()
    return state.to_dict()


@router.post("/award")
async def award_points(
    request: AwardRequest,
    user_key: str = Depends(get_user_key),
    services: Services = Depends(get_services),
):
    try:
        state = await services.tracker_for(user_key).award(request.points)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return state.to_dict()
