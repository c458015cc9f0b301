from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Optional

load_dotenv()  # pick up a local .env before the settings object is built

class Settings(BaseSettings):
    DATABASE_URL: str

    # Redis is optional, trip snapshots are cached only when it is set
    REDIS_URL: Optional[str] = None
    TRIP_CACHE_TTL_SECONDS: int = 1800

    # SMTP defaults target a local mailpit instance
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 1025
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_SSL: bool = False
    MAIL_FROM: str = "mailpit@planner.com"

    FRONTEND_BASE_URL: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"
    CREATE_TABLES_ON_STARTUP: bool = True

    PROJECT_NAME: str = "Planner API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Collaborative trip planning API"
    APP_NAME: str = "Planner"


    class Config:
        env_file = ".env"



settings = Settings()
