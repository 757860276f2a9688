from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from devconnector.core.database import Base


class User(Base):
    """
    User model representing registered members.

    Passwords are stored as bcrypt hashes (never plaintext).
    Records are created at registration and not modified afterwards.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Email is unique and indexed for fast lookups during login
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    # Gravatar URL derived from the email at registration
    avatar = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
