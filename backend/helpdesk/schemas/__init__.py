from .auth import TokenPair
from .group import (
    GroupCreate,
    GroupCreateResponse,
    GroupDeleteResponse,
    GroupListResponse,
    GroupRead,
    GroupUpdate,
)
from .ticket import TicketCreate, TicketRead
from .user import UserCreate, UserRead, UserRole, UserSummary

__all__ = [
    "TokenPair",
    "GroupCreate",
    "GroupCreateResponse",
    "GroupDeleteResponse",
    "GroupListResponse",
    "GroupRead",
    "GroupUpdate",
    "TicketCreate",
    "TicketRead",
    "UserCreate",
    "UserRead",
    "UserRole",
    "UserSummary",
]
