# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.trip import trip_routes, participant_routes, link_routes
from app.routes.itineraries import activity_routes


api_router = APIRouter()

# Trip routes
api_router.include_router(trip_routes.router)
api_router.include_router(participant_routes.router)
api_router.include_router(link_routes.router)

# Activity routes
api_router.include_router(activity_routes.router)
