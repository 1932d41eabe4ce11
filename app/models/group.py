"""ORM models for groups and the user/group membership table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import relationship

from app.models.base import Base

# One row per membership: both User.groups and Group.users read from it, so
# adding or removing a row updates the two sides in a single statement.
user_groups = Table(
    "user_groups",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "group_id",
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)


class Group(Base):
    """Named set of users. Name is unique."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    users = relationship(
        "User",
        secondary=user_groups,
        back_populates="groups",
        order_by="User.id",
    )

    @property
    def user_ids(self) -> list[int]:
        return [u.id for u in self.users]

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name})>"
