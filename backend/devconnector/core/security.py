from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from devconnector.core.config import Settings, settings
from devconnector.core.errors import ExpiredToken, InvalidToken

# CryptContext handles password hashing using bcrypt
# bcrypt generates a random salt per hash and stores it inside the hash string
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


class TokenService:
    """
    Issues and verifies signed, time-limited identity tokens.

    Tokens are stateless: verification checks signature and expiry only,
    there is no revocation list. A short TTL bounds the exposure of a
    leaked token.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 10):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenService":
        return cls(
            secret_key=config.JWT_SECRET,
            algorithm=config.ALGORITHM,
            expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def __repr__(self) -> str:
        # Never expose the signing key
        return f"TokenService(algorithm={self._algorithm!r}, expire_minutes={self.expire_minutes})"

    def issue(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """Create a token for ``user_id`` that expires after the configured TTL"""
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        payload = {
            # JWT standard 'sub' claim must be a string
            "sub": str(user_id),
            "user": {"id": str(user_id)},
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """Return the user id carried by ``token``.

        Raises ExpiredToken once the expiry has passed and InvalidToken for
        a bad signature or a malformed payload.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise ExpiredToken()
        except JWTError:
            raise InvalidToken()

        user_id_str = payload.get("sub")
        if user_id_str is None:
            raise InvalidToken()
        try:
            return int(user_id_str)
        except (ValueError, TypeError):
            raise InvalidToken()


token_service = TokenService.from_settings(settings)
