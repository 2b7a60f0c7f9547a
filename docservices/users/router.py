"""
User directory router.

This module provides the FastAPI router for user record endpoints:
- Create, read, list, update and delete
- Internal email lookup used by the authentication service
"""
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from docservices.base_microservice import BaseMicroservice, get_db_session
from docservices.passwords import PasswordHasher
from docservices.users.repository import UserRepository
from docservices.users.schemas import UserCreate, UserOut, UserUpdate, UserWithHash
from docservices.users.service import UserService

# Create router
router = APIRouter(prefix="/api/usuarios", tags=["users"])

# Create service instance
base_service = BaseMicroservice("users")
password_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_user_service(
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher)
) -> UserService:
    """Dependency building a UserService bound to the request's session."""
    return UserService(UserRepository(db), hasher, base_service)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
):
    """
    Create a user record.

    Returns 400 when email or password is missing and 409 when the email
    is already registered.
    """
    return await service.create_user(user_data)


@router.get("", response_model=List[UserOut])
async def list_users(service: UserService = Depends(get_user_service)):
    """List every user record, without hashes."""
    return await service.list_users()


# Declared before /{user_id} so "by-email" is not parsed as an id.
# The email travels as a query parameter so characters like "@" or "+" need no path escaping.
@router.get("/by-email", response_model=UserWithHash)
async def get_user_by_email(
    email: str = Query(...),
    service: UserService = Depends(get_user_service)
):
    """Internal lookup for the authentication service. Includes the password hash."""
    return await service.get_user_by_email(email)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_user_by_id(user_id)


@router.put("/{user_id}", response_model=UserOut)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    service: UserService = Depends(get_user_service)
):
    """Partially update a user. Null fields and an empty password are ignored."""
    return await service.update_user(user_id, user_data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
