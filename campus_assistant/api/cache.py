from fastapi import APIRouter, Depends, HTTPException, status

from campus_assistant.api.dependencies import get_services
from campus_assistant.extensions import Services
from campus_assistant.schemas import CacheCategory, ConnectivityEvent

router = APIRouter()


@router.get("/connectivity")
async def get_connectivity(services: Services = Depends(get_services)):
    return services.cache.status().to_dict()


@router.post("/connectivity")
async def report_connectivity(event: ConnectivityEvent, services: Services = Depends(get_services)):
    synced = await services.report_connectivity(event.online)
    response = services.cache.status().to_dict()
    response["synced"] = synced
    return response


@router.post("/sync")
async def sync_now(services: Services = Depends(get_services)):
    success = await services.cache.sync_now()
    response = services.cache.status().to_dict()
    response["success"] = success
    if not success:
        response["error"] = services.cache.last_error or ("offline" if not services.cache.is_online else None)
    return response


@router.get("/cache/{category}")
async def get_cached(category: CacheCategory, services: Services = Depends(get_services)):
    entry = await services.cache.get_cached(category)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No cached data for '{category}' yet",
        )
    return entry.to_dict()
