import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.dependencies import get_current_user, get_db
from helpdesk.models import User
from helpdesk.schemas.group import (
    GroupCreate,
    GroupCreateResponse,
    GroupDeleteResponse,
    GroupListResponse,
    GroupRead,
    GroupUpdate,
)
from helpdesk.services import groups as group_service

router = APIRouter(prefix="/groups", tags=["groups"])
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": f"Error: {message}"})


@router.get("", response_model=GroupListResponse)
async def list_groups(db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    try:
        groups = await group_service.get_all_groups_of_user(db, current_user.id)
    except SQLAlchemyError:
        logger.exception("Listing groups for user %s failed", current_user.id)
        return error_response(status.HTTP_400_BAD_REQUEST, "Groups could not be loaded.")
    return GroupListResponse(groups=[GroupRead.model_validate(group) for group in groups])


@router.post("/create", response_model=GroupCreateResponse)
async def create_group(payload: GroupCreate, db: AsyncSession = Depends(get_db), _: User = Depends(get_current_user)):
    try:
        group = await group_service.create_group(db, payload)
    except group_service.GroupError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))
    return GroupCreateResponse(group=GroupRead.model_validate(group))


@router.put("/{group_id}", response_model=GroupRead)
async def update_group(
    group_id: str,
    payload: GroupUpdate,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
):
    group = await group_service.get_group_by_id(db, group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    try:
        group = await group_service.update_group(db, group, payload)
    except group_service.GroupError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))
    return group


@router.delete("/", response_model=GroupDeleteResponse, include_in_schema=False)
async def delete_group_without_id(_: User = Depends(get_current_user)):
    return error_response(status.HTTP_400_BAD_REQUEST, group_service.INVALID_GROUP_ID_MESSAGE)


@router.delete("/{group_id}", response_model=GroupDeleteResponse, response_model_exclude_none=True)
async def delete_group(group_id: str, db: AsyncSession = Depends(get_db), _: User = Depends(get_current_user)):
    try:
        await group_service.delete_group(db, group_id)
    except group_service.PreconditionFailed as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))
    except group_service.GroupDeletionError as exc:
        logger.info("Group %s was not deleted: %s", group_id, exc)
        return GroupDeleteResponse(success=False, error=f"Error: {exc}")
    return GroupDeleteResponse(success=True)
