from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .user import UserSummary


class GroupBase(BaseModel):
    """Group payload as posted by clients.

    ``members`` and ``sendMailTo`` accept a list of user ids, a single id, or
    null; they always come out as lists.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    members: List[UUID] = Field(default_factory=list)
    send_mail_to: List[UUID] = Field(default_factory=list, alias="sendMailTo")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Group name is required")
        return value

    @field_validator("members", "send_mail_to", mode="before")
    @classmethod
    def coerce_to_list(cls, value: Any) -> List[Any]:
        if value is None:
            return []
        if isinstance(value, (list, tuple, set)):
            return list(value)
        return [value]


class GroupCreate(GroupBase):
    pass


class GroupUpdate(GroupBase):
    pass


class GroupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    name: str
    members: List[UserSummary] = Field(default_factory=list)
    send_mail_to: List[UserSummary] = Field(default_factory=list, alias="sendMailTo")


class GroupListResponse(BaseModel):
    success: bool = True
    groups: List[GroupRead] = Field(default_factory=list)


class GroupCreateResponse(BaseModel):
    success: bool = True
    error: Optional[str] = None
    group: Optional[GroupRead] = None


class GroupDeleteResponse(BaseModel):
    success: bool
    error: Optional[str] = None
