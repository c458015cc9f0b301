from pydantic import Field, HttpUrl
from typing import List
from uuid import UUID
from app.schemas.base import CamelModel

class LinkCreate(CamelModel):
    title: str = Field(min_length=1)
    url: HttpUrl

class LinkResponse(CamelModel):
    id: UUID
    title: str
    url: str

class LinkListResponse(CamelModel):
    links: List[LinkResponse]

class CreateLinkResponse(CamelModel):
    link_id: UUID
