"""
Login workflow.

Checks credentials against the user-directory service and issues a token.
Every reason a login can be refused (unknown email, record without hash,
wrong password) produces the same UnauthorizedError message so callers
cannot tell which emails are registered.
"""
from docservices.auth.directory_client import UserDirectoryClient
from docservices.auth.jwt import TokenIssuer
from docservices.auth.schemas import LoginRequest, LoginResponse
from docservices.base_microservice import BaseMicroservice
from docservices.errors import (
    DirectoryUnavailableError, InternalError, NotFoundError, ServiceError, UnauthorizedError
)
from docservices.passwords import PasswordHasher

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
INTERNAL_ERROR_MESSAGE = "Internal error in auth-service."


class AuthService:
    """Stateless credential verification and token issuance."""

    def __init__(
        self,
        directory: UserDirectoryClient,
        issuer: TokenIssuer,
        hasher: PasswordHasher,
        base_service: BaseMicroservice = None
    ):
        self.directory = directory
        self.issuer = issuer
        self.hasher = hasher
        self.base_service = base_service or BaseMicroservice("auth")

    def _reject(self, credentials: LoginRequest, reason: str):
        self.base_service.log_event("user.login.failed", {
            "email": credentials.email,
            "reason": reason
        })
        return UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    async def login(self, credentials: LoginRequest) -> LoginResponse:
        """
        Authenticate a user and return a token.

        Raises:
            UnauthorizedError: Unknown email, incomplete record or wrong password
            InternalError: Directory unreachable or any unexpected failure
        """
        try:
            try:
                user = await self.directory.lookup_by_email(credentials.email)
            except NotFoundError:
                raise self._reject(credentials, "user not found")

            if not user.password_hash:
                raise self._reject(credentials, "incomplete user record")

            if not self.hasher.verify(credentials.password, user.password_hash):
                raise self._reject(credentials, "wrong password")

            token = self.issuer.issue_token(user.id, user.role_id)
        except ServiceError:
            raise
        except DirectoryUnavailableError as e:
            self.base_service.log_error(e, context="User directory lookup")
            raise InternalError(INTERNAL_ERROR_MESSAGE)
        except Exception as e:
            self.base_service.log_error(e, context="User login")
            raise InternalError(INTERNAL_ERROR_MESSAGE)

        self.base_service.log_event("user.login", {"id": user.id, "role_id": user.role_id})
        return LoginResponse(
            token=token,
            user_id=user.id,
            names=user.names,
            surname=user.surname,
            email=user.email,
            role_id=user.role_id,
            permissions=[]
        )
