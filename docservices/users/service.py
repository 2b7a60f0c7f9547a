"""
User management service.

This module provides the user record lifecycle:
- Creation with a hashed password and email uniqueness check
- Lookup by id, by email (internal, hash included) and listing
- Partial updates
- Deletion
"""
from typing import List
from sqlalchemy.exc import IntegrityError

from docservices.base_microservice import BaseMicroservice
from docservices.errors import ConflictError, NotFoundError, ValidationError
from docservices.passwords import MAX_PASSWORD_BYTES, PasswordHasher, password_too_long
from docservices.users.models import User
from docservices.users.repository import UserRepository
from docservices.users.schemas import UserCreate, UserOut, UserUpdate, UserWithHash

MISSING_FIELDS_MESSAGE = "Missing required fields (email, password)."
EMAIL_TAKEN_MESSAGE = "Email is already registered."
USER_NOT_FOUND_MESSAGE = "User not found."
PASSWORD_TOO_LONG_MESSAGE = f"Password must be at most {MAX_PASSWORD_BYTES} bytes."


class UserService:
    """
    Service for user record operations.

    Every public result goes through UserOut, which has no hash field, except
    get_user_by_email, which the authentication service needs for verification.
    """
    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        base_service: BaseMicroservice = None
    ):
        self.repository = repository
        self.hasher = hasher
        self.base_service = base_service or BaseMicroservice("users")

    async def create_user(self, user_data: UserCreate) -> UserOut:
        """
        Create a new user.

        Args:
            user_data: Creation payload with the plaintext password

        Returns:
            The stored user without its hash

        Raises:
            ValidationError: If email or password is missing, or the password
                is longer than bcrypt accepts
            ConflictError: If the email is already registered
        """
        if not user_data.email or user_data.password is None:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if password_too_long(user_data.password):
            raise ValidationError(PASSWORD_TOO_LONG_MESSAGE)

        # Lookup-before-insert is not atomic. Two concurrent creates with the
        # same email can both pass it; the unique constraint on users.email
        # rejects the second insert and it is reported the same way.
        if await self.repository.find_by_email(user_data.email) is not None:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        new_user = User(
            names=user_data.names,
            surname=user_data.surname,
            email=user_data.email,
            password_hash=self.hasher.hash(user_data.password),
            role_id=user_data.role_id
        )
        try:
            saved = await self.repository.save(new_user)
        except IntegrityError:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        self.base_service.log_event("user.created", {"id": saved.id})
        return UserOut.model_validate(saved)

    async def get_user_by_id(self, user_id: int) -> UserOut:
        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return UserOut.model_validate(user)

    async def get_user_by_email(self, email: str) -> UserWithHash:
        """Internal lookup; the hash is included on purpose."""
        user = await self.repository.find_by_email(email)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return UserWithHash.model_validate(user)

    async def list_users(self) -> List[UserOut]:
        users = await self.repository.find_all()
        return [UserOut.model_validate(user) for user in users]

    async def update_user(self, user_id: int, user_data: UserUpdate) -> UserOut:
        """
        Apply a partial update.

        names, surname and role_id are replaced only when given (not None).
        The password is re-hashed only when given and non-empty.
        """
        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        if user_data.password and password_too_long(user_data.password):
            raise ValidationError(PASSWORD_TOO_LONG_MESSAGE)

        if user_data.names is not None:
            user.names = user_data.names
        if user_data.surname is not None:
            user.surname = user_data.surname
        if user_data.role_id is not None:
            user.role_id = user_data.role_id
        if user_data.password:
            user.password_hash = self.hasher.hash(user_data.password)

        saved = await self.repository.save(user)
        self.base_service.log_event("user.updated", {
            "id": saved.id,
            "fields": sorted(user_data.model_dump(exclude_none=True).keys())
        })
        return UserOut.model_validate(saved)

    async def delete_user(self, user_id: int):
        if not await self.repository.exists_by_id(user_id):
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        await self.repository.delete_by_id(user_id)
        self.base_service.log_event("user.deleted", {"id": user_id})
