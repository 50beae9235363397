"""Tests for the development identity provider."""

import pytest

from app.infrastructure.services.identity_provider import (
    DevIdentityProvider,
    DevIdentityProviderDisabledError,
)


def test_refuses_production() -> None:
    with pytest.raises(DevIdentityProviderDisabledError):
        DevIdentityProvider("production")


@pytest.mark.parametrize("environment", ["development", "test"])
def test_allowed_outside_production(environment: str) -> None:
    DevIdentityProvider(environment)


def test_participant_credentials_on_participant_path_only() -> None:
    provider = DevIdentityProvider("development")
    identity = provider.authenticate("participant@test.com", "Test1234!", admin=False)
    assert identity is not None and identity.role == "participant"
    assert provider.authenticate("participant@test.com", "Test1234!", admin=True) is None


def test_admin_credentials_on_admin_path_only() -> None:
    provider = DevIdentityProvider("development")
    assert provider.authenticate("admin@test.com", "Admin1234!", admin=True).id == "dev-admin"
    assert provider.authenticate("admin@test.com", "Admin1234!", admin=False) is None


def test_wrong_password() -> None:
    assert DevIdentityProvider("test").authenticate("admin@test.com", "nope", admin=True) is None


def test_resolve() -> None:
    provider = DevIdentityProvider("test")
    assert provider.resolve("dev-participant").email == "participant@test.com"
    assert provider.resolve("acct-1") is None
