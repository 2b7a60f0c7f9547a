"""
Authentication router.

This module provides the FastAPI router for authentication endpoints:
- Login against the user-directory service
- Introspection of the caller's own token
"""
from fastapi import APIRouter, Depends

from docservices.auth.directory_client import UserDirectoryClient, get_directory_client
from docservices.auth.jwt import TokenClaims, TokenIssuer, get_current_claims, get_token_issuer
from docservices.auth.schemas import LoginRequest, LoginResponse, TokenInfo
from docservices.auth.service import AuthService
from docservices.base_microservice import BaseMicroservice
from docservices.passwords import PasswordHasher

# Create router
router = APIRouter(prefix="/api/auth", tags=["auth"])

# Create service instance
base_service = BaseMicroservice("auth")
password_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_auth_service(
    directory: UserDirectoryClient = Depends(get_directory_client),
    issuer: TokenIssuer = Depends(get_token_issuer),
    hasher: PasswordHasher = Depends(get_password_hasher)
) -> AuthService:
    return AuthService(directory, issuer, hasher, base_service)


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate a user and return a token.

    401 for any credential problem (same message every time), 500 when the
    user directory cannot be used.
    """
    return await service.login(credentials)


@router.get("/me", response_model=TokenInfo)
async def me(claims: TokenClaims = Depends(get_current_claims)):
    """Return the claims carried by the caller's bearer token."""
    return TokenInfo(
        user_id=claims.user_id,
        role_id=claims.role_id,
        issued_at=claims.iat,
        expires_at=claims.exp
    )
