from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.dependencies import get_current_user, get_db
from helpdesk.models import Group, Ticket
from helpdesk.schemas.ticket import TicketCreate, TicketRead
from helpdesk.services.tickets import create_ticket, get_tickets

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("", response_model=List[TicketRead])
async def list_tickets(
    group_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
    _: object = Depends(get_current_user),
):
    if group_id is not None:
        return await get_tickets(db, [group_id])
    result = await db.execute(select(Ticket).order_by(Ticket.created_at.desc()))
    return result.scalars().all()


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
async def open_ticket(payload: TicketCreate, db: AsyncSession = Depends(get_db), _: object = Depends(get_current_user)):
    if payload.group_id is not None and await db.get(Group, payload.group_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return await create_ticket(db, payload)
