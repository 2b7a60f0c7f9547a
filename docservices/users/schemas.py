"""
Request and response models for the user-directory API.

Field names on the wire are camelCase (`roleId`, `passwordHash`); the
snake_case attribute names are accepted on input as well.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Model for user creation. email and password are checked by the service."""
    model_config = ConfigDict(populate_by_name=True)

    # Stored exactly as given; lookups by email compare the raw string
    email: Optional[str] = None
    password: Optional[str] = None
    names: Optional[str] = None
    surname: Optional[str] = None
    role_id: Optional[int] = Field(None, alias="roleId")


class UserUpdate(BaseModel):
    """Model for partial updates. Omitted or null fields are left untouched."""
    model_config = ConfigDict(populate_by_name=True)

    names: Optional[str] = None
    surname: Optional[str] = None
    role_id: Optional[int] = Field(None, alias="roleId")
    password: Optional[str] = None


class UserOut(BaseModel):
    """Model for user information returned to clients. Never carries the hash."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    names: Optional[str] = None
    surname: Optional[str] = None
    email: str
    role_id: Optional[int] = Field(None, alias="roleId")


class UserWithHash(UserOut):
    """Internal lookup model used by the authentication service."""
    password_hash: Optional[str] = Field(None, alias="passwordHash")
