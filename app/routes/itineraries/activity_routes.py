from fastapi import APIRouter, Depends, status
from app.schemas.itineraries.activity import ActivityCreate, ActivityListResponse, CreateActivityResponse
from app.core.validation import validator
from app.dependencies.store import get_store
from app.services.itineraries.activity_service import ActivityService

router = APIRouter(prefix="/trips", tags=["Activities"])

async def get_activity_service(store=Depends(get_store)) -> ActivityService:
    return ActivityService(store, validator)

@router.get("/{trip_id}/activities", response_model=ActivityListResponse)
async def get_trip_activities_route(
    trip_id: str,
    activity_service: ActivityService = Depends(get_activity_service)
):
    return await activity_service.get_trip_activities(trip_id)

@router.post("/{trip_id}/activities", response_model=CreateActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity_route(
    trip_id: str,
    activity_data: ActivityCreate,
    activity_service: ActivityService = Depends(get_activity_service)
):
    activity_id = await activity_service.create_activity(trip_id, activity_data)
    return CreateActivityResponse(activity_id=activity_id)
