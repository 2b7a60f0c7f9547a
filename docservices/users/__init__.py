"""
User-directory microservice.

This module owns the canonical user record store:
- User creation with hashed passwords
- Lookup by id and by email (internal, hash included)
- Partial updates and deletion
"""
