"""
Request and response models for the authentication API.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Model for user login. Never persisted."""
    email: str
    password: str


class DirectoryUser(BaseModel):
    """User record as returned by the user-directory email lookup."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    names: Optional[str] = None
    surname: Optional[str] = None
    email: str
    role_id: Optional[int] = Field(None, alias="roleId")
    password_hash: Optional[str] = Field(None, alias="passwordHash")


class LoginResponse(BaseModel):
    """Successful login payload."""
    model_config = ConfigDict(populate_by_name=True)

    token: str
    user_id: int = Field(..., alias="userID")
    names: Optional[str] = None
    surname: Optional[str] = None
    email: str
    role_id: Optional[int] = Field(None, alias="roleId")
    # Placeholder; there is no permission model yet
    permissions: List[str] = []


class TokenInfo(BaseModel):
    """Claims of the caller's token as returned by /me."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userID")
    role_id: Optional[int] = Field(None, alias="roleId")
    issued_at: int = Field(..., alias="issuedAt")
    expires_at: int = Field(..., alias="expiresAt")
