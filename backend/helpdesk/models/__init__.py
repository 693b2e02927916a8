from .user import User, UserRoleEnum
from .group import Group, group_members, group_send_mail_to
from .ticket import Ticket

__all__ = [
    "User",
    "UserRoleEnum",
    "Group",
    "group_members",
    "group_send_mail_to",
    "Ticket",
]
