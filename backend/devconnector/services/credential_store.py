from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from devconnector.core.errors import Conflict
from devconnector.models.user import User
from devconnector.services.persistence import persistence_errors


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """Persistence for user records: lookup by email or id, and creation"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        with persistence_errors(self.db, "look up user by email"):
            return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        with persistence_errors(self.db, "look up user by id"):
            return self.db.get(User, user_id)

    def create(self, name: str, email: str, hashed_password: str, avatar: Optional[str] = None) -> User:
        """Persist a new user; raises Conflict if the email is already registered"""
        if self.find_by_email(email) is not None:
            raise Conflict()

        user = User(
            name=name.strip(),
            email=normalize_email(email),
            hashed_password=hashed_password,
            avatar=avatar,
        )
        with persistence_errors(self.db, "create user"):
            try:
                self.db.add(user)
                self.db.commit()
            except IntegrityError:
                # Two registrations for the same email raced past the lookup above;
                # the unique index rejects the second one
                self.db.rollback()
                raise Conflict()
            self.db.refresh(user)
        return user
