from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.database import engine
from app.core.errors import InvalidInputError, PlannerError
from app.core.init_db import init_db
from app.core.logger import logger
from app.core.redis_lifecyle import init_redis_client, close_redis
from app.core.validation import format_validation_errors
from app.routes import api_router
from app.services.notifications.dispatcher import shutdown_dispatcher

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url=f"/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^http:\/\/(localhost|127\.0\.0\.1)(:\d{1,5})?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = InvalidInputError(f"Invalid input field: {format_validation_errors(exc.errors())}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": "Welcome to Planner API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup_event():
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_db()
    await init_redis_client()
    logger.info(f"{settings.PROJECT_NAME} {settings.PROJECT_VERSION} started")

@app.on_event("shutdown")
async def shutdown_event():
    await shutdown_dispatcher()
    await close_redis()
    await engine.dispose()
