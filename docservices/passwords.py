"""
Password hashing used by both services.

The user-directory service hashes on create/update, the authentication
service verifies on login. Both go through the same bcrypt wrapper so the
digest format stays consistent.
"""
import bcrypt

# bcrypt only reads the first 72 bytes; current releases refuse anything longer
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way salted password hashing backed by bcrypt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Generate password hash using bcrypt."""
        return bcrypt.hashpw(
            password.encode('utf-8'),
            bcrypt.gensalt(rounds=self.rounds)
        ).decode('utf-8')

    def verify(self, password: str, password_hash: str) -> bool:
        """Check if provided password matches the stored hash."""
        try:
            return bcrypt.checkpw(
                password.encode('utf-8'),
                password_hash.encode('utf-8')
            )
        except ValueError:
            # Malformed or foreign digest
            return False


def password_too_long(password: str) -> bool:
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES
