"""
JWT token handling for the authentication service.

This module provides functionality for:
- Issuing signed tokens carrying a user id and role id
- Validating tokens issued by this service
- Resolving the bearer token of a request
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from jwt.exceptions import PyJWTError
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from docservices.errors import UnauthorizedError

# JWT Configuration
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production-jwt-signing-key")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# Authentication scheme
bearer_scheme = HTTPBearer(auto_error=False)


class TokenClaims(BaseModel):
    """Token payload model."""
    user_id: int
    role_id: Optional[int] = None
    iat: int
    exp: int


class TokenIssuer:
    """
    Builds and checks signed tokens.

    The key, algorithm and lifetime are fixed when the issuer is created;
    rotation and revocation are not handled here.
    """
    def __init__(
        self,
        secret_key: str = SECRET_KEY,
        algorithm: str = ALGORITHM,
        expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue_token(self, user_id: int, role_id: Optional[int]) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: User's ID
            role_id: User's role ID, may be None

        Returns:
            Encoded JWT token string
        """
        issued_at = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "role_id": role_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[TokenClaims]:
        """
        Verify a JWT token and return its claims.

        Returns:
            TokenClaims if valid, None otherwise
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return TokenClaims(
                user_id=int(payload["sub"]),
                role_id=payload.get("role_id"),
                iat=payload["iat"],
                exp=payload["exp"]
            )
        except PyJWTError:
            return None
        except (KeyError, ValueError, TypeError):
            # Signed by us but missing or malformed claims
            return None


token_issuer = TokenIssuer()


def get_token_issuer() -> TokenIssuer:
    return token_issuer


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer)
) -> TokenClaims:
    """
    FastAPI dependency resolving the claims of the request's bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise UnauthorizedError("Missing bearer token.")
    claims = issuer.verify_token(credentials.credentials)
    if claims is None:
        raise UnauthorizedError("Invalid or expired token.")
    return claims
