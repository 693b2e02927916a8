from typing import List, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.models import Ticket
from helpdesk.schemas.ticket import TicketCreate


async def get_tickets(db: AsyncSession, group_ids: Sequence[UUID]) -> List[Ticket]:
    """Return the tickets assigned to any of ``group_ids``, newest first."""

    if not group_ids:
        return []
    stmt = select(Ticket).where(Ticket.group_id.in_(list(group_ids))).order_by(Ticket.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_ticket(db: AsyncSession, data: TicketCreate) -> Ticket:
    ticket = Ticket(subject=data.subject, group_id=data.group_id)
    db.add(ticket)
    await db.commit()
    await db.refresh(ticket)
    return ticket
