"""
Record store for user records.

Thin async repository over a SQLAlchemy session. Each method commits its own
work, so every write is atomic for a single record. Nothing here spans
several statements in one transaction; see UserService.create_user for the
consequence on email uniqueness.
"""
from typing import List, Optional
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from docservices.users.models import User


class UserRepository:
    """Repository for User rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_all(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def exists_by_id(self, user_id: int) -> bool:
        result = await self.db.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    async def save(self, user: User) -> User:
        """Insert or update a user and return it with its assigned id."""
        self.db.add(user)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        return user

    async def delete_by_id(self, user_id: int):
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
