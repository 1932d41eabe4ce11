"""ORM model for application users (auth, RBAC and group membership)."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'
    password: bcrypt hash, never the plain text
    deleted_at: soft-delete marker; kept on the table, not used by any route
    """

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('admin', 'user')", name="role_allowed"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    groups = relationship(
        "Group",
        secondary="user_groups",
        back_populates="users",
        order_by="Group.id",
    )

    @property
    def group_ids(self) -> list[int]:
        return [g.id for g in self.groups]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
