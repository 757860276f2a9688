from typing import Optional
from fastapi import Depends
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from devconnector.core.config import settings
from devconnector.core.errors import Unauthenticated
from devconnector.core.security import TokenService, token_service

# Both schemes are optional on their own; the gate decides what is missing
# "Authorization: Bearer <token>"
bearer_scheme = HTTPBearer(auto_error=False)
# Raw token in a custom header, e.g. "x-auth-token: <token>"
token_header_scheme = APIKeyHeader(name=settings.TOKEN_HEADER, auto_error=False)


def get_token_service() -> TokenService:
    """Process-wide token service, overridable in tests"""
    return token_service


def extract_token(
    bearer: Optional[HTTPAuthorizationCredentials],
    raw_token: Optional[str],
) -> Optional[str]:
    if bearer is not None and bearer.credentials:
        return bearer.credentials
    if raw_token and raw_token.strip():
        return raw_token.strip()
    return None


def authenticate(token: Optional[str], tokens: TokenService) -> int:
    """
    Resolve the user id carried by a request token.

    No token at all is Unauthenticated; a token that fails verification
    raises InvalidToken or ExpiredToken. No database access happens here.
    """
    if not token:
        raise Unauthenticated()
    return tokens.verify(token)


async def get_current_user_id(
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    raw_token: Optional[str] = Depends(token_header_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """Dependency guarding protected routes"""
    return authenticate(extract_token(bearer, raw_token), tokens)
