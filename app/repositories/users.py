"""Persistence operations for users."""

from sqlalchemy.orm import Session

from app.models import Group, User


class UserRepository:
    """Reads and writes User rows. Every write commits its own transaction."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, user: User) -> User:
        self._db.add(user)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(user)
        return user

    def save(self, user: User) -> User:
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        # Load memberships first so the returned record still lists them.
        _ = user.groups
        self._db.delete(user)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    def list_all(self) -> list[User]:
        return self._db.query(User).order_by(User.id).all()

    def get(self, user_id: int) -> User | None:
        return self._db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self._db.query(User).filter(User.email == email).first()

    def list_by_group_id(self, group_id: int) -> list[User]:
        return (
            self._db.query(User)
            .join(User.groups)
            .filter(Group.id == group_id)
            .order_by(User.id)
            .all()
        )

    def list_by_group_name(self, name: str) -> list[User]:
        return (
            self._db.query(User)
            .join(User.groups)
            .filter(Group.name == name)
            .order_by(User.id)
            .all()
        )
