"""
Test cases for the authentication microservice.
"""
import pytest
from httpx import ASGITransport

from docservices.auth.directory_client import UserDirectoryClient
from docservices.auth.schemas import DirectoryUser
from docservices.auth.service import INTERNAL_ERROR_MESSAGE, INVALID_CREDENTIALS_MESSAGE
from docservices.errors import DirectoryUnavailableError

UNAUTHORIZED = {"error": INVALID_CREDENTIALS_MESSAGE}


@pytest.fixture
def ana(hasher):
    return DirectoryUser(
        id=1,
        names="Ana",
        surname="Lee",
        email="a@x.com",
        role_id=2,
        password_hash=hasher.hash("secret")
    )


@pytest.mark.asyncio
async def test_login_success(auth_client, fake_directory, ana, issuer):
    fake_directory.users[ana.email] = ana

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret"})

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["userID"] == 1
    assert body["names"] == "Ana"
    assert body["surname"] == "Lee"
    assert body["email"] == "a@x.com"
    assert body["roleId"] == 2
    assert body["permissions"] == []
    assert "passwordHash" not in body

    claims = issuer.verify_token(body["token"])
    assert claims is not None
    assert claims.user_id == 1
    assert claims.role_id == 2
    assert fake_directory.lookups == ["a@x.com"]


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_identical(auth_client, fake_directory, ana):
    fake_directory.users[ana.email] = ana

    wrong_password = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = await auth_client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "secret"})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_record_without_hash_is_unauthorized(auth_client, fake_directory, ana):
    fake_directory.users[ana.email] = ana.model_copy(update={"password_hash": None})

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret"})

    assert response.status_code == 401
    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_directory_outage_is_internal_error(auth_client, fake_directory):
    fake_directory.error = DirectoryUnavailableError("connection refused")

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret"})

    assert response.status_code == 500
    assert response.json() == {"error": INTERNAL_ERROR_MESSAGE}


@pytest.mark.asyncio
async def test_unexpected_failure_does_not_leak_detail(auth_client, fake_directory):
    fake_directory.error = RuntimeError("db password is hunter2")

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret"})

    assert response.status_code == 500
    assert "hunter2" not in response.text
    assert response.json() == {"error": INTERNAL_ERROR_MESSAGE}


@pytest.mark.asyncio
async def test_login_logs_failure_without_password(auth_client, fake_directory, caplog):
    with caplog.at_level("INFO"):
        await auth_client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "s3cr3t-value"})

    assert "user.login.failed" in caplog.text
    assert "s3cr3t-value" not in caplog.text


@pytest.mark.asyncio
async def test_login_requires_body_fields(auth_client):
    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_me_returns_token_claims(auth_client, issuer):
    token = issuer.issue_token(7, 3)

    response = await auth_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    body = response.json()
    assert body["userID"] == 7
    assert body["roleId"] == 3
    assert body["expiresAt"] > body["issuedAt"]


@pytest.mark.asyncio
async def test_me_rejects_missing_or_invalid_token(auth_client):
    response = await auth_client.get("/api/auth/me")
    assert response.status_code == 401

    response = await auth_client.get("/api/auth/me", headers={"Authorization": "Bearer invalid.token.here"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token."}


@pytest.mark.asyncio
async def test_login_end_to_end_through_user_directory(users_client, auth_client, issuer):
    """Create a user in the directory app, then log in through the auth app calling it over HTTP."""
    from docservices.auth.directory_client import get_directory_client
    from docservices.auth.main import app as auth_app
    from docservices.users.main import app as users_app

    created = await users_client.post("/api/usuarios", json={
        "email": "a@x.com",
        "password": "secret",
        "names": "Ana",
        "surname": "Lee",
        "roleId": 2
    })
    assert created.status_code == 201
    assert created.json()["id"] == 1

    directory = UserDirectoryClient(base_url="http://users", transport=ASGITransport(app=users_app))
    auth_app.dependency_overrides[get_directory_client] = lambda: directory

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret"})

    assert response.status_code == 200
    body = response.json()
    assert body["userID"] == 1
    assert body["roleId"] == 2
    assert body["permissions"] == []
    claims = issuer.verify_token(body["token"])
    assert (claims.user_id, claims.role_id) == (1, 2)

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert response.status_code == 401
    response = await auth_client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret"})
    assert response.status_code == 401
    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["Ana@X.COM", "dev@docs.local"])
async def test_login_end_to_end_with_email_as_registered(users_client, auth_client, email):
    """Whatever string the user registered with is the string that logs in."""
    from docservices.auth.directory_client import get_directory_client
    from docservices.auth.main import app as auth_app
    from docservices.users.main import app as users_app

    created = await users_client.post("/api/usuarios", json={"email": email, "password": "secret", "roleId": 4})
    assert created.status_code == 201
    assert created.json()["email"] == email

    directory = UserDirectoryClient(base_url="http://users", transport=ASGITransport(app=users_app))
    auth_app.dependency_overrides[get_directory_client] = lambda: directory

    response = await auth_client.post("/api/auth/login", json={"email": email, "password": "secret"})

    assert response.status_code == 200
    assert response.json()["email"] == email
    assert response.json()["roleId"] == 4


@pytest.mark.asyncio
async def test_login_with_overlong_password_is_unauthorized(auth_client, fake_directory, ana):
    fake_directory.users[ana.email] = ana

    response = await auth_client.post("/api/auth/login", json={"email": "a@x.com", "password": "p" * 100})

    assert response.status_code == 401
    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_auth_health(auth_client):
    response = await auth_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "auth"}
