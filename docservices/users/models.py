"""
User directory models.

This module defines the SQLAlchemy model for user records.
"""
from sqlalchemy import Column, Integer, String
from docservices.base_microservice import Base


class User(Base):
    """Canonical user record owned by the user-directory service."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    names = Column(String, nullable=True)
    surname = Column(String, nullable=True)
    # unique=True backs up the lookup-before-insert check in UserService.create_user
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role_id = Column(Integer, nullable=True)

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r} role_id={self.role_id}>"
