"""Persistence operations for groups and memberships."""

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Group, User, user_groups


class GroupRepository:
    """
    Reads and writes Group rows and the user_groups association.

    Membership changes are single INSERT/DELETE statements on user_groups,
    so the user side and the group side can never disagree and concurrent
    requests cannot lose each other's updates.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, group: Group) -> Group:
        self._db.add(group)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(group)
        return group

    def save(self, group: Group) -> Group:
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(group)
        return group

    def delete(self, group: Group) -> None:
        _ = group.users
        self._db.delete(group)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    def list_all(self) -> list[Group]:
        return self._db.query(Group).order_by(Group.id).all()

    def get(self, group_id: int) -> Group | None:
        return self._db.get(Group, group_id)

    def get_by_name(self, name: str) -> Group | None:
        return self._db.query(Group).filter(Group.name == name).first()

    def list_by_user_id(self, user_id: int) -> list[Group]:
        return (
            self._db.query(Group)
            .join(Group.users)
            .filter(User.id == user_id)
            .order_by(Group.id)
            .all()
        )

    def is_member(self, group_id: int, user_id: int) -> bool:
        stmt = select(user_groups.c.user_id).where(
            user_groups.c.group_id == group_id,
            user_groups.c.user_id == user_id,
        )
        return self._db.execute(stmt).first() is not None

    def add_member(self, group: Group, user: User) -> bool:
        """Insert the membership row. Returns False if it already existed."""
        stmt = insert(user_groups).values(group_id=group.id, user_id=user.id)
        try:
            self._db.execute(stmt)
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            if self.is_member(group.id, user.id):
                return False
            raise
        self._refresh_membership(group, user)
        return True

    def remove_member(self, group: Group, user: User) -> bool:
        """Delete the membership row. Returns False if there was none."""
        stmt = delete(user_groups).where(
            user_groups.c.group_id == group.id,
            user_groups.c.user_id == user.id,
        )
        try:
            removed = self._db.execute(stmt).rowcount
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        if removed == 0:
            return False
        self._refresh_membership(group, user)
        return True

    def _refresh_membership(self, group: Group, user: User) -> None:
        # Core statements bypass the ORM collections; reload them on next access.
        self._db.expire(group, ["users"])
        self._db.expire(user, ["groups"])
