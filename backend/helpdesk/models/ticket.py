import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid

from helpdesk.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Uuid(), primary_key=True, default=uuid.uuid4)
    subject = Column(String, nullable=False)
    # Group has no relationship back to tickets so the ORM never nulls this out on delete.
    group_id = Column(Uuid(), ForeignKey("groups.id", ondelete="RESTRICT"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
