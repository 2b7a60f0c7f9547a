"""
HTTP client for the user-directory service.

The authentication service only needs one call: look a user up by email,
hash included. The call is a single attempt with a timeout; nothing is
retried.
"""
import os
from typing import Optional
import httpx

from docservices.auth.schemas import DirectoryUser
from docservices.base_microservice import logger
from docservices.errors import DirectoryUnavailableError, NotFoundError

USER_SERVICE_URL = os.getenv("USER_SERVICE_URL", "http://localhost:8001")
USER_SERVICE_TIMEOUT = float(os.getenv("USER_SERVICE_TIMEOUT", "5.0"))
BY_EMAIL_PATH = "/api/usuarios/by-email"


class UserDirectoryClient:
    """Looks up user records in the user-directory service."""

    def __init__(
        self,
        base_url: str = USER_SERVICE_URL,
        timeout: float = USER_SERVICE_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def lookup_by_email(self, email: str) -> DirectoryUser:
        """
        Fetch the user record for an email.

        Raises:
            NotFoundError: The directory has no user with this email
            DirectoryUnavailableError: Transport failure, unexpected status
                or an unreadable body
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport
            ) as client:
                response = await client.get(BY_EMAIL_PATH, params={"email": email})
        except httpx.HTTPError as exc:
            logger.warning(f"User directory unreachable at {self.base_url}: {exc}")
            raise DirectoryUnavailableError(str(exc)) from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError("User not found.")
        if response.status_code != httpx.codes.OK:
            raise DirectoryUnavailableError(
                f"User directory answered {response.status_code} for email lookup"
            )

        try:
            return DirectoryUser.model_validate(response.json())
        except ValueError as exc:
            # Covers both JSON decoding and pydantic validation failures
            raise DirectoryUnavailableError(f"Unreadable user directory response: {exc}") from exc


directory_client = UserDirectoryClient()


def get_directory_client() -> UserDirectoryClient:
    return directory_client
