from fastapi import APIRouter, Depends, status
from app.schemas.trip.link import LinkCreate, LinkListResponse, CreateLinkResponse
from app.core.validation import validator
from app.dependencies.store import get_store
from app.services.trips.link_service import LinkService

router = APIRouter(prefix="/trips", tags=["Links"])

async def get_link_service(store=Depends(get_store)) -> LinkService:
    return LinkService(store, validator)

@router.get("/{trip_id}/links", response_model=LinkListResponse)
async def list_links_route(
    trip_id: str,
    link_service: LinkService = Depends(get_link_service)
):
    return await link_service.list_links(trip_id)

@router.post("/{trip_id}/links", response_model=CreateLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link_route(
    trip_id: str,
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    link_id = await link_service.create_link(trip_id, link_data)
    return CreateLinkResponse(link_id=link_id)
