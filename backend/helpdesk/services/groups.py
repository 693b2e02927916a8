"""Group persistence and the group deletion workflow.

Deletion runs three steps in order and stops at the first failure:

1. look up tickets assigned to the group; any ticket blocks the deletion,
2. load the group,
3. remove it and write an audit entry to the log.

Each failure is raised as a :class:`GroupDeletionError` subclass whose message
is safe to hand back to API clients.
"""

import logging
from typing import Iterable, List, Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.models import Group, User
from helpdesk.schemas.group import GroupBase
from helpdesk.services.tickets import get_tickets

logger = logging.getLogger(__name__)

GroupId = Union[UUID, str, None]

INVALID_GROUP_ID_MESSAGE = "Invalid Group Id."
GROUP_NOT_FOUND_MESSAGE = "Group not found."
TICKET_LOOKUP_FAILED_MESSAGE = "Could not look up the tickets of this group."
REMOVAL_FAILED_MESSAGE = "Group could not be removed."
SAVE_FAILED_MESSAGE = "Group could not be saved."
TICKETS_EXIST_MESSAGE = "Cannot delete a group with tickets."


class GroupError(Exception):
    """Base class for failures while creating or updating a group."""


class UnknownUsers(GroupError):
    def __init__(self, user_ids: Iterable[UUID]):
        self.user_ids = sorted(str(user_id) for user_id in user_ids)
        super().__init__("Unknown user id(s): " + ", ".join(self.user_ids))


class DuplicateGroupName(GroupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A group named '{name}' already exists.")


class GroupDeletionError(Exception):
    """Base class for every way the deletion workflow can stop."""


class PreconditionFailed(GroupDeletionError):
    pass


class LookupFailed(GroupDeletionError):
    pass


class ReferentialIntegrityViolation(GroupDeletionError):
    pass


class GroupNotFound(GroupDeletionError):
    pass


class RemovalFailed(GroupDeletionError):
    pass


def _coerce_id(group_id: GroupId) -> Optional[UUID]:
    if isinstance(group_id, UUID):
        return group_id
    try:
        return UUID(str(group_id).strip())
    except ValueError:
        return None


async def get_group_by_id(db: AsyncSession, group_id: GroupId) -> Optional[Group]:
    key = _coerce_id(group_id)
    if key is None:
        return None
    stmt = select(Group).where(Group.id == key).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_all_groups_of_user(db: AsyncSession, user_id: UUID) -> List[Group]:
    stmt = select(Group).where(Group.members.any(User.id == user_id)).order_by(Group.name)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _resolve_users(db: AsyncSession, user_ids: Iterable[UUID]) -> List[User]:
    wanted = list(dict.fromkeys(user_ids))
    if not wanted:
        return []
    result = await db.execute(select(User).where(User.id.in_(wanted)))
    users = list(result.scalars().all())
    missing = set(wanted) - {user.id for user in users}
    if missing:
        raise UnknownUsers(missing)
    return users


async def _commit(db: AsyncSession, name: str, group_id: Optional[UUID] = None) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        clash = select(Group.id).where(Group.name == name)
        if group_id is not None:
            clash = clash.where(Group.id != group_id)
        if (await db.execute(clash)).first() is not None:
            raise DuplicateGroupName(name) from exc
        logger.exception("Saving group %r failed", name)
        raise GroupError(SAVE_FAILED_MESSAGE) from exc


async def create_group(db: AsyncSession, data: GroupBase) -> Group:
    members = await _resolve_users(db, data.members)
    send_mail_to = await _resolve_users(db, data.send_mail_to)
    group = Group(name=data.name, members=members, send_mail_to=send_mail_to)
    db.add(group)
    await _commit(db, data.name)
    return await get_group_by_id(db, group.id)


async def update_group(db: AsyncSession, group: Group, data: GroupBase) -> Group:
    """Replace name, members and mail recipients of ``group``."""

    group_id = group.id
    # Resolve before touching the group so autoflush cannot write a half-updated row.
    members = await _resolve_users(db, data.members)
    send_mail_to = await _resolve_users(db, data.send_mail_to)
    group.name = data.name
    group.members = members
    group.send_mail_to = send_mail_to
    await _commit(db, data.name, group_id)
    return await get_group_by_id(db, group_id)


async def remove_group(db: AsyncSession, group: Group) -> None:
    await db.delete(group)
    await db.commit()


async def delete_group(db: AsyncSession, group_id: GroupId) -> Group:
    """Delete a group that no ticket refers to.

    Returns the removed group. Raises :class:`PreconditionFailed` for a blank
    id without touching the database, otherwise one of
    :class:`LookupFailed`, :class:`ReferentialIntegrityViolation`,
    :class:`GroupNotFound` or :class:`RemovalFailed`.
    """

    if group_id is None or not str(group_id).strip():
        raise PreconditionFailed(INVALID_GROUP_ID_MESSAGE)

    key = _coerce_id(group_id)
    if key is None:
        # Not a UUID, so neither a ticket nor a group can refer to it.
        raise GroupNotFound(GROUP_NOT_FOUND_MESSAGE)

    try:
        tickets = await get_tickets(db, [key])
    except SQLAlchemyError as exc:
        logger.exception("Ticket lookup for group %s failed", key)
        raise LookupFailed(TICKET_LOOKUP_FAILED_MESSAGE) from exc
    if tickets:
        raise ReferentialIntegrityViolation(TICKETS_EXIST_MESSAGE)

    try:
        group = await get_group_by_id(db, key)
    except SQLAlchemyError as exc:
        logger.exception("Loading group %s failed", key)
        raise GroupNotFound(GROUP_NOT_FOUND_MESSAGE) from exc
    if group is None:
        raise GroupNotFound(GROUP_NOT_FOUND_MESSAGE)

    deleted_id = group.id
    try:
        await remove_group(db, group)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Removing group %s failed", deleted_id)
        raise RemovalFailed(REMOVAL_FAILED_MESSAGE) from exc

    logger.warning("Group Deleted: %s", deleted_id)
    return group
