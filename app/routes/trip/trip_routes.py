from fastapi import APIRouter, Depends, Response, status
from app.schemas.trip.trip_schema import TripCreate, TripUpdate, TripDetailsResponse, CreateTripResponse
from app.core.redis_lifecyle import get_cache
from app.core.validation import validator
from app.dependencies.store import get_store
from app.services.notifications.dispatcher import get_dispatcher
from app.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=['Trips'])

async def get_trip_service(
    store=Depends(get_store),
    cache=Depends(get_cache),
    dispatcher=Depends(get_dispatcher)
) -> TripService:
    return TripService(store, validator, dispatcher, cache)

@router.post("", response_model=CreateTripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    trip_service: TripService = Depends(get_trip_service)
):
    trip_id = await trip_service.create_trip(trip)
    return CreateTripResponse(trip_id=trip_id)

@router.get("/{trip_id}", response_model=TripDetailsResponse)
async def get_trip(
    trip_id: str,
    trip_service: TripService = Depends(get_trip_service)
):
    return TripDetailsResponse(trip=await trip_service.get_trip(trip_id))

@router.put("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_trip_route(
    trip_id: str,
    trip_update: TripUpdate,
    trip_service: TripService = Depends(get_trip_service)
):
    await trip_service.update_trip(trip_id, trip_update)

@router.get("/{trip_id}/confirm", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def confirm_trip_route(
    trip_id: str,
    trip_service: TripService = Depends(get_trip_service)
):
    await trip_service.confirm_trip(trip_id)
