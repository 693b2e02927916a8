from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TicketCreate(BaseModel):
    subject: str = Field(min_length=1)
    group_id: Optional[UUID] = None


class TicketRead(BaseModel):
    id: UUID
    subject: str
    group_id: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True
