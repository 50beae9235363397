"""Tests for the auth API (/api/auth/*) against in-memory stores."""

from urllib.parse import parse_qs, urlparse

from httpx import AsyncClient

from app.core.config import get_settings
from tests.fakes import PlainHasher

SIGNUP_BODY = {
    "email": "Ana@Example.org",
    "password": "longenough",
    "firstName": "Ana",
    "lastName": "Lopez",
    "phone": "8015551234",
    "zipCode": "84601",
    "fieldOfInterest": "Both",
}


def _token_from(body: str) -> str:
    link = next(line for line in body.splitlines() if "?token=" in line)
    return parse_qs(urlparse(link.strip()).query)["token"][0]


async def test_signup_returns_201_sets_cookie_and_signs_in(client: AsyncClient) -> None:
    """POST /api/auth/signup creates the account, sets the session cookie and /me works."""
    response = await client.post("/api/auth/signup", json=SIGNUP_BODY)

    assert response.status_code == 201
    data = response.json()
    assert data["token"] == "session-based"
    assert data["account"]["email"] == "ana@example.org"
    assert data["account"]["phone"] == "801-555-1234"
    assert data["account"]["role"] == "participant"
    assert "hashedPassword" not in data["account"]
    cookie = response.headers["set-cookie"]
    assert get_settings().session_cookie_name in cookie
    assert "httponly" in cookie.lower()
    assert "samesite=lax" in cookie.lower()

    me = await client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["firstName"] == "Ana"


async def test_signup_missing_fields_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/auth/signup", json={"email": "a@example.org"})
    assert response.status_code == 400
    assert response.json() == {
        "error": "VALIDATION_ERROR",
        "message": "Email, password, first name, and last name are required",
    }


async def test_signup_bad_zip_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/auth/signup", json={**SIGNUP_BODY, "zipCode": "123"})
    assert response.status_code == 400
    assert response.json()["message"] == "Zip code must be exactly 5 digits"


async def test_signup_overlong_last_name_returns_400(client: AsyncClient, accounts) -> None:
    response = await client.post("/api/auth/signup", json={**SIGNUP_BODY, "lastName": "L" * 101})
    assert response.status_code == 400
    assert response.json() == {
        "error": "VALIDATION_ERROR",
        "message": "Last name must be at most 100 characters",
        "details": {"field": "last_name"},
    }
    assert accounts.accounts == {}


async def test_signup_existing_email_returns_conflict_reason(client: AsyncClient, accounts) -> None:
    accounts.add("ana@example.org")
    response = await client.post("/api/auth/signup", json=SIGNUP_BODY)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "CONFLICT"
    assert data["details"] == {"reason": "EMAIL_EXISTS_NO_PASSWORD"}


async def test_signup_invalid_date_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/auth/signup", json={**SIGNUP_BODY, "dateOfBirth": "not-a-date"})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_login_success(client: AsyncClient, accounts) -> None:
    accounts.add("ana@example.org", first_name="Ana", hashed_password=PlainHasher().hash("longenough"))
    response = await client.post(
        "/api/auth/login", json={"email": "ana@example.org", "password": "longenough"}
    )
    assert response.status_code == 200
    assert response.json()["account"]["firstName"] == "Ana"
    assert get_settings().session_cookie_name in response.cookies


async def test_login_invalid_credentials_returns_401(client: AsyncClient) -> None:
    """Unknown email gets the same generic message as a wrong password."""
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@example.org", "password": "longenough"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


async def test_login_missing_fields_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/auth/login", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


async def test_login_without_password_emails_creation_link(
    client: AsyncClient, accounts, notifier, tokens
) -> None:
    accounts.add("ana@example.org")
    response = await client.post(
        "/api/auth/login", json={"email": "ana@example.org", "password": "whatever1"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "PASSWORD_NOT_SET"
    assert notifier.calls == 1
    assert len(tokens.tokens) == 1
    assert "set-cookie" not in response.headers


async def test_admin_login_rejects_participant(client: AsyncClient, accounts) -> None:
    accounts.add("ana@example.org", hashed_password=PlainHasher().hash("longenough"))
    response = await client.post(
        "/api/auth/admin/login", json={"email": "ana@example.org", "password": "longenough"}
    )
    assert response.status_code == 401


async def test_admin_login_success(client: AsyncClient, accounts) -> None:
    accounts.add("boss@example.org", role="admin", hashed_password=PlainHasher().hash("longenough"))
    response = await client.post(
        "/api/auth/admin/login", json={"email": "boss@example.org", "password": "longenough"}
    )
    assert response.status_code == 200
    assert response.json()["account"]["role"] == "admin"


async def test_logout_clears_session(client: AsyncClient) -> None:
    await client.post("/api/auth/signup", json=SIGNUP_BODY)

    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    assert (await client.get("/api/auth/me")).status_code == 401


async def test_logout_without_session_is_ok(client: AsyncClient) -> None:
    response = await client.post("/api/auth/logout")
    assert response.status_code == 200


async def test_me_without_session_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "AUTHENTICATION_ERROR", "message": "Not authenticated"}


async def test_forgot_password_identical_responses(client: AsyncClient, accounts, notifier) -> None:
    """Known and unknown emails get byte-identical bodies."""
    accounts.add("ana@example.org", hashed_password="x")
    known = await client.post("/api/auth/forgot-password", json={"email": "ana@example.org"})
    unknown = await client.post("/api/auth/forgot-password", json={"email": "nobody@example.org"})
    assert known.status_code == unknown.status_code == 200
    assert known.content == unknown.content
    assert notifier.calls == 1


async def test_reset_password_flow(client: AsyncClient, accounts, notifier) -> None:
    accounts.add("ana@example.org", hashed_password=PlainHasher().hash("oldpassword"))
    await client.post("/api/auth/forgot-password", json={"email": "ana@example.org"})
    token = _token_from(notifier.sent[-1].body)

    response = await client.post(
        "/api/auth/reset-password", json={"token": token, "password": "brandnewpw"}
    )
    assert response.status_code == 200
    assert "set-cookie" not in response.headers

    reused = await client.post(
        "/api/auth/reset-password", json={"token": token, "password": "anotherpw1"}
    )
    assert reused.status_code == 400
    assert reused.json()["error"] == "INVALID_TOKEN"

    login = await client.post(
        "/api/auth/login", json={"email": "ana@example.org", "password": "brandnewpw"}
    )
    assert login.status_code == 200


async def test_account_status_needs_password_then_create_password(
    client: AsyncClient, accounts, notifier
) -> None:
    accounts.add("ana@example.org", first_name="Ana")

    status = await client.post("/api/auth/account-status", json={"email": "ana@example.org"})
    assert status.status_code == 200
    assert status.json()["status"] == "needs_password"

    token = _token_from(notifier.sent[-1].body)
    created = await client.post(
        "/api/auth/create-password",
        json={"token": token, "password": "newpassword", "confirmPassword": "newpassword"},
    )
    assert created.status_code == 200
    assert created.json()["account"]["email"] == "ana@example.org"
    assert (await client.get("/api/auth/me")).status_code == 200


async def test_account_status_other_outcomes(client: AsyncClient, accounts) -> None:
    accounts.add("ana@example.org", hashed_password="x")
    has_password = await client.post("/api/auth/account-status", json={"email": "ana@example.org"})
    not_found = await client.post("/api/auth/account-status", json={"email": "x@example.org"})
    assert has_password.json()["status"] == "has_password"
    assert not_found.json()["status"] == "not_found"


async def test_account_status_requires_email(client: AsyncClient) -> None:
    response = await client.post("/api/auth/account-status", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Email is required"


async def test_create_password_mismatch_returns_400(client: AsyncClient, accounts, notifier) -> None:
    accounts.add("ana@example.org")
    await client.post("/api/auth/account-status", json={"email": "ana@example.org"})
    token = _token_from(notifier.sent[-1].body)

    response = await client.post(
        "/api/auth/create-password",
        json={"token": token, "password": "newpassword", "confirmPassword": "different1"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Passwords do not match"


async def test_create_password_lost_race_returns_400(client: AsyncClient, accounts, notifier, tokens) -> None:
    accounts.add("ana@example.org")
    await client.post("/api/auth/account-status", json={"email": "ana@example.org"})
    token = _token_from(notifier.sent[-1].body)
    tokens.lose_next_race = True

    response = await client.post(
        "/api/auth/create-password",
        json={"token": token, "password": "newpassword", "confirmPassword": "newpassword"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "TOKEN_ALREADY_USED"
