import uuid

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import relationship

from helpdesk.core.database import Base

group_members = Table(
    "group_members",
    Base.metadata,
    Column("group_id", Uuid(), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid(), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

group_send_mail_to = Table(
    "group_send_mail_to",
    Base.metadata,
    Column("group_id", Uuid(), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid(), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Group(Base):
    __tablename__ = "groups"

    id = Column(Uuid(), primary_key=True, default=uuid.uuid4)
    name = Column(String, unique=True, nullable=False)

    members = relationship("User", secondary=group_members, lazy="selectin", order_by="User.email")
    send_mail_to = relationship("User", secondary=group_send_mail_to, lazy="selectin", order_by="User.email")
