import logging
from typing import Any, Dict
from sqlalchemy.orm import Session
from devconnector.core.errors import InvalidCredentials, NotFound
from devconnector.core.security import TokenService, get_password_hash, verify_password
from devconnector.models.user import User
from devconnector.services.avatar import gravatar_url
from devconnector.services.credential_store import CredentialStore
from devconnector.services.validation import LOGIN_RULES, REGISTER_RULES, validate

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and profile lookup"""

    @staticmethod
    def register(db: Session, data: Dict[str, Any], tokens: TokenService) -> str:
        """Create a user and return a token for it"""
        validate(data, REGISTER_RULES)

        # Raises Conflict when the email is already registered
        user = CredentialStore(db).create(
            name=data["name"],
            email=data["email"],
            hashed_password=get_password_hash(data["password"]),
            avatar=gravatar_url(data["email"]),
        )
        logger.info("Registered user %s", user.id)
        return tokens.issue(user.id)

    @staticmethod
    def login(db: Session, data: Dict[str, Any], tokens: TokenService) -> str:
        """Check credentials and return a token.

        Unknown email and wrong password raise the same InvalidCredentials so
        the response does not reveal which emails are registered.
        """
        validate(data, LOGIN_RULES)

        user = CredentialStore(db).find_by_email(data["email"])
        if user is None or not verify_password(data["password"], user.hashed_password):
            logger.info("Rejected login attempt")
            raise InvalidCredentials()

        return tokens.issue(user.id)

    @staticmethod
    def get_profile(db: Session, user_id: int) -> User:
        user = CredentialStore(db).find_by_id(user_id)
        if user is None:
            # Token outlived the account it was issued for
            raise NotFound("User not found")
        return user


auth_service = AuthService()
