from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.repositories.planner_store import PlannerStore


async def get_store(db: AsyncSession = Depends(get_db)) -> PlannerStore:
    return PlannerStore(db)
