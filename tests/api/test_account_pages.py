"""Tests for the server-rendered account pages (/account/*)."""

from urllib.parse import parse_qs, urlparse

from httpx import AsyncClient

from app.core.config import get_settings
from app.pages import GENERIC_EXISTING_MESSAGE
from tests.fakes import PlainHasher

START_FORM = {
    "email": "ana@example.org",
    "password": "longenough",
    "first_name": "Ana",
    "last_name": "Lopez",
    "zip_code": "84601",
}


def _token_from(body: str) -> str:
    link = next(line for line in body.splitlines() if "?token=" in line)
    return parse_qs(urlparse(link.strip()).query)["token"][0]


async def test_get_pages_render_forms(client: AsyncClient) -> None:
    for path in ("/account/start", "/account/existing", "/account/forgot-password"):
        response = await client.get(path)
        assert response.status_code == 200, path
        assert "text/html" in response.headers["content-type"]
        assert '<form method="post"' in response.text


async def test_start_signs_in_and_redirects(client: AsyncClient, accounts, fake_db) -> None:
    response = await client.post("/account/start", data=START_FORM)

    assert response.status_code == 303
    assert response.headers["location"] == get_settings().portal_home_path
    assert get_settings().session_cookie_name in response.cookies
    assert len(accounts.accounts) == 1
    assert fake_db.transactions == 1


async def test_start_validation_error_refills_form(client: AsyncClient, accounts) -> None:
    response = await client.post("/account/start", data={**START_FORM, "zip_code": "123"})
    assert response.status_code == 400
    assert "Zip code must be exactly 5 digits" in response.text
    assert 'value="Ana"' in response.text
    assert "longenough" not in response.text
    assert accounts.accounts == {}


async def test_start_bad_date(client: AsyncClient) -> None:
    response = await client.post("/account/start", data={**START_FORM, "date_of_birth": "31/12/2000"})
    assert response.status_code == 400
    assert "Date of birth must be a valid date" in response.text


async def test_start_existing_without_password_offers_recovery(client: AsyncClient, accounts) -> None:
    accounts.add("ana@example.org")
    response = await client.post("/account/start", data=START_FORM)
    assert response.status_code == 400
    assert 'action="/account/existing"' in response.text


async def test_start_escapes_user_input(client: AsyncClient) -> None:
    response = await client.post(
        "/account/start", data={**START_FORM, "first_name": "<script>x</script>", "zip_code": "1"}
    )
    assert "<script>x</script>" not in response.text
    assert "&lt;script&gt;" in response.text


async def test_existing_same_page_for_every_outcome(client: AsyncClient, accounts, notifier) -> None:
    """The page never reveals whether the email is registered."""
    accounts.add("needs@example.org")
    accounts.add("has@example.org", hashed_password="x")

    bodies = []
    for email in ("needs@example.org", "has@example.org", "nobody@example.org"):
        response = await client.post("/account/existing", data={"email": email})
        assert response.status_code == 200
        assert GENERIC_EXISTING_MESSAGE in response.text
        bodies.append(response.text)

    assert bodies[0] == bodies[1] == bodies[2]
    assert notifier.calls == 1
    assert notifier.sent[0].to == ["needs@example.org"]


async def test_existing_requires_email(client: AsyncClient) -> None:
    response = await client.post("/account/existing", data={"email": " "})
    assert response.status_code == 400
    assert "Email is required" in response.text


async def test_create_password_page_needs_token(client: AsyncClient) -> None:
    response = await client.get("/account/create-password")
    assert response.status_code == 400
    assert "invalid or has expired" in response.text


async def test_create_password_page_carries_token(client: AsyncClient) -> None:
    response = await client.get("/account/create-password", params={"token": "abc_123"})
    assert response.status_code == 200
    assert 'name="token" value="abc_123"' in response.text


async def test_create_password_submit(client: AsyncClient, accounts, notifier) -> None:
    ana = accounts.add("ana@example.org")
    await client.post("/account/existing", data={"email": "ana@example.org"})
    token = _token_from(notifier.sent[-1].body)

    response = await client.post(
        "/account/create-password",
        data={"token": token, "password": "newpassword", "confirm_password": "newpassword"},
    )

    assert response.status_code == 303
    assert response.headers["location"] == get_settings().portal_home_path
    assert ana.hashed_password == PlainHasher().hash("newpassword")


async def test_create_password_mismatch_rerenders_form(client: AsyncClient, accounts, notifier) -> None:
    accounts.add("ana@example.org")
    await client.post("/account/existing", data={"email": "ana@example.org"})
    token = _token_from(notifier.sent[-1].body)

    response = await client.post(
        "/account/create-password",
        data={"token": token, "password": "newpassword", "confirm_password": "other-password"},
    )
    assert response.status_code == 400
    assert "Passwords do not match" in response.text
    assert f'value="{token}"' in response.text


async def test_create_password_bad_token(client: AsyncClient) -> None:
    response = await client.post(
        "/account/create-password",
        data={"token": "nope", "password": "newpassword", "confirm_password": "newpassword"},
    )
    assert response.status_code == 400
    assert "Request a new link" in response.text


async def test_forgot_and_reset_password_pages(client: AsyncClient, accounts, notifier) -> None:
    ana = accounts.add("ana@example.org", hashed_password="x")

    forgot = await client.post("/account/forgot-password", data={"email": "ana@example.org"})
    assert forgot.status_code == 200
    assert "If an account exists for that email" in forgot.text

    token = _token_from(notifier.sent[-1].body)
    page = await client.get("/account/reset-password", params={"token": token})
    assert page.status_code == 200

    reset = await client.post("/account/reset-password", data={"token": token, "password": "brandnewpw"})
    assert reset.status_code == 200
    assert "Password updated" in reset.text
    assert ana.hashed_password == PlainHasher().hash("brandnewpw")
    assert "set-cookie" not in reset.headers

    again = await client.post("/account/reset-password", data={"token": token, "password": "brandnewpw"})
    assert again.status_code == 400


async def test_reset_password_short_password(client: AsyncClient, accounts, notifier) -> None:
    accounts.add("ana@example.org", hashed_password="x")
    await client.post("/account/forgot-password", data={"email": "ana@example.org"})
    token = _token_from(notifier.sent[-1].body)

    response = await client.post("/account/reset-password", data={"token": token, "password": "short"})
    assert response.status_code == 400
    assert "at least 8 characters" in response.text


async def test_reset_password_dead_link_wins_over_short_password(client: AsyncClient) -> None:
    response = await client.post("/account/reset-password", data={"token": "tok", "password": "short"})
    assert response.status_code == 400
    assert "Request a new link" in response.text


async def test_start_rejects_overlong_last_name(client: AsyncClient, accounts) -> None:
    response = await client.post("/account/start", data={**START_FORM, "last_name": "L" * 101})
    assert response.status_code == 400
    assert "Last name must be at most 100 characters" in response.text
    assert accounts.accounts == {}
