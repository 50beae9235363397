"""Account workflow: signup, login, logout, the password-link flows and profile edits.

Orchestrates the credential store, token store, notifier and session store.
All collaborators are injected, so the workflow itself holds no state beyond
a lazily computed dummy hash.

Password links are single-use, purpose-scoped and expire one hour after
issuance. Redemption writes the new hash first and then marks the token used
with a conditional update; callers run redemption inside one transaction so a
lost race rolls the hash write back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any
from urllib.parse import quote

from app.application.dtos.account import (
    AccountResult,
    AuthResult,
    ParticipantProfile,
    SignupData,
    account_to_result,
)
from app.application.dtos.session import SessionData
from app.application.interfaces.repositories import (
    AccountRecord,
    IAccountRepository,
    ITokenStore,
)
from app.application.interfaces.services import (
    IIdentityProvider,
    INotificationService,
    IPasswordHasher,
    ISessionStore,
)
from app.domain.enums import AccountRole, AccountStatus, TokenPurpose
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InvalidTokenException,
    PasswordNotSetException,
    ResourceNotFoundException,
    TokenAlreadyUsedException,
    ValidationException,
)
from app.domain.value_objects import NewPassword, PhoneNumber, ZipCode
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 24 * 3600

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
FORGOT_PASSWORD_MESSAGE = (
    "If an account exists for that email, we sent a link to reset your password."
)

# Page each token purpose links to; the token travels as ?token=<value>.
_LINK_PATHS = {
    TokenPurpose.CREATE_PASSWORD: "/account/create-password",
    TokenPurpose.RESET_PASSWORD: "/account/reset-password",
}
_SUBJECTS = {
    TokenPurpose.CREATE_PASSWORD: "Create your portal password",
    TokenPurpose.RESET_PASSWORD: "Reset your portal password",
}

# Widths of the account text columns.
PROFILE_MAX_LENGTHS = {
    "email": 255,
    "first_name": 100,
    "last_name": 100,
    "city": 100,
    "state": 50,
    "school_or_employer": 200,
    "field_of_interest": 50,
}
DEFAULT_FIELD_OF_INTEREST = "Both"

# Roles an admin may give an account; donor records only come from intake.
_ASSIGNABLE_ROLES = (AccountRole.PARTICIPANT.value, AccountRole.ADMIN.value)

# Profile columns the edit path may write (role is handled separately).
EDITABLE_PROFILE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "date_of_birth",
        "phone",
        "city",
        "state",
        "zip_code",
        "school_or_employer",
        "field_of_interest",
    }
)


def normalize_email(raw: str | None) -> str:
    """Trim and lowercase an email address; None becomes ''."""
    return (raw or "").strip().lower()


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _check_new_password(password: str) -> None:
    try:
        NewPassword(password)
    except ValueError as e:
        raise ValidationException(str(e), field="password") from None


def _parse_phone(raw: str | None) -> str | None:
    phone = _strip_or_none(raw)
    if phone is None:
        return None
    try:
        return PhoneNumber.parse(phone).value
    except ValueError as e:
        raise ValidationException(str(e), field="phone") from None


def _parse_zip_code(raw: str | None) -> str | None:
    zip_code = _strip_or_none(raw)
    if zip_code is None:
        return None
    try:
        return ZipCode(zip_code).value
    except ValueError as e:
        raise ValidationException(str(e), field="zip_code") from None


def _check_lengths(values: Mapping[str, Any]) -> None:
    """Reject text longer than its account column."""
    for name, limit in PROFILE_MAX_LENGTHS.items():
        value = values.get(name)
        if isinstance(value, str) and len(value) > limit:
            label = name.replace("_", " ").capitalize()
            raise ValidationException(
                f"{label} must be at most {limit} characters", field=name
            )


class AccountWorkflow:
    """Account use cases over injected stores.

    The optional identity_provider is consulted before the credential store on
    both login paths and when resolving the current account. Only the
    development entry point supplies one.
    """

    def __init__(
        self,
        accounts: IAccountRepository,
        tokens: ITokenStore,
        notifier: INotificationService,
        sessions: ISessionStore,
        hasher: IPasswordHasher,
        base_url: str,
        identity_provider: IIdentityProvider | None = None,
        session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._accounts = accounts
        self._tokens = tokens
        self._notifier = notifier
        self._sessions = sessions
        self._hasher = hasher
        self._base_url = base_url.rstrip("/")
        self._identity_provider = identity_provider
        self._session_ttl = timedelta(seconds=session_ttl_seconds)
        self._clock = clock
        self._dummy_hash: str | None = None

    # ---- helpers ---------------------------------------------------------

    async def _hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hasher.hash, password)

    async def _verify(self, password: str, hashed_password: str | None) -> bool:
        """Check password; runs a dummy comparison when there is no hash so timing does not leak."""
        if hashed_password is None:
            if self._dummy_hash is None:
                self._dummy_hash = await self._hash("not-a-real-password")
            await asyncio.to_thread(self._hasher.verify, password, self._dummy_hash)
            return False
        return await asyncio.to_thread(self._hasher.verify, password, hashed_password)

    async def _start_session(self, account: AccountResult) -> str:
        now = self._clock()
        data = SessionData.for_account(account, created_at=now, expires_at=now + self._session_ttl)
        return await self._sessions.create(data)

    def build_link(self, purpose: TokenPurpose, token: str) -> str:
        """Absolute link to the page that redeems token."""
        return f"{self._base_url}{_LINK_PATHS[purpose]}?token={quote(token, safe='')}"

    async def _issue_and_send(self, account: AccountRecord, purpose: TokenPurpose) -> None:
        """Issue a purpose token for account and email its link (exactly one notifier call)."""
        issued = await self._tokens.issue(account.id, purpose)
        logger.info(
            "Issued %s token for account %s (expires %s)",
            purpose.value,
            account.id,
            issued.expires_at.isoformat(),
        )
        link = self.build_link(purpose, issued.value)
        greeting = f"Hi {account.first_name}," if account.first_name else "Hello,"
        if purpose is TokenPurpose.CREATE_PASSWORD:
            action = "To finish setting up your account, create your password here:"
        else:
            action = "We received a request to reset your password. Choose a new one here:"
        body = (
            f"{greeting}\n\n{action}\n\n{link}\n\n"
            f"This link can be used once and expires at "
            f"{issued.expires_at:%Y-%m-%d %H:%M} UTC.\n\n"
            "If you did not request this, you can ignore this email.\n"
        )
        await self._notifier.send([account.email], _SUBJECTS[purpose], body)

    def _normalize_signup(self, data: SignupData) -> SignupData:
        email = normalize_email(data.email)
        first_name = (data.first_name or "").strip()
        last_name = (data.last_name or "").strip()
        if not email or not data.password or not first_name or not last_name:
            raise ValidationException(
                "Email, password, first name, and last name are required"
            )
        data = replace(
            data,
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=_parse_phone(data.phone),
            zip_code=_parse_zip_code(data.zip_code),
            city=_strip_or_none(data.city),
            state=_strip_or_none(data.state),
            school_or_employer=_strip_or_none(data.school_or_employer),
            field_of_interest=_strip_or_none(data.field_of_interest),
        )
        _check_lengths(data.profile_fields())
        _check_new_password(data.password)
        return data

    # ---- signup / login / logout ------------------------------------------

    async def signup(self, data: SignupData) -> AuthResult:
        """Create a participant account and sign it in.

        A donor intake record with the same email is promoted in place.
        Raises:
            ValidationException: missing required field, bad phone/zip, text longer than
                its column, short password.
            ConflictException: a non-donor account already uses the email.
        """
        data = self._normalize_signup(data)
        existing = await self._accounts.get_active_by_email(data.email)
        if existing is not None and existing.role != AccountRole.DONOR.value:
            raise ConflictException(
                ConflictException.EMAIL_EXISTS_WITH_PASSWORD
                if existing.hashed_password
                else ConflictException.EMAIL_EXISTS_NO_PASSWORD
            )
        hashed = await self._hash(data.password)
        if existing is not None:
            account = await self._accounts.promote_donor(existing.id, data, hashed)
            logger.info("Donor record %s promoted to participant at signup", account.id)
        else:
            account = await self._accounts.create_account(
                data, hashed, AccountRole.PARTICIPANT.value
            )
            logger.info("Participant account %s created", account.id)
        result = account_to_result(account)
        return AuthResult(account=result, session_id=await self._start_session(result))

    async def login(self, email: str, password: str) -> AuthResult:
        """Participant login path (admins may use it too; donors may not)."""
        return await self._authenticate(email, password, admin=False)

    async def admin_login(self, email: str, password: str) -> AuthResult:
        """Admin login path: only accounts whose stored role is admin."""
        return await self._authenticate(email, password, admin=True)

    async def _authenticate(self, email: str, password: str, *, admin: bool) -> AuthResult:
        email = normalize_email(email)
        if not email or not password:
            raise ValidationException("Email and password are required")

        if self._identity_provider is not None:
            identity = self._identity_provider.authenticate(email, password, admin=admin)
            if identity is not None:
                logger.warning("Development identity %s signed in", identity.id)
                return AuthResult(account=identity, session_id=await self._start_session(identity))

        account = await self._accounts.get_active_by_email(email)
        if (
            account is None
            or account.role == AccountRole.DONOR.value
            or (admin and account.role != AccountRole.ADMIN.value)
        ):
            await self._verify(password, None)
            logger.info("Failed %s login: no eligible account", "admin" if admin else "participant")
            raise AuthenticationException(INVALID_CREDENTIALS_MESSAGE)

        if not account.hashed_password:
            await self._issue_and_send(account, TokenPurpose.CREATE_PASSWORD)
            raise PasswordNotSetException()

        if not await self._verify(password, account.hashed_password):
            logger.info("Failed login for account %s: password mismatch", account.id)
            raise AuthenticationException(INVALID_CREDENTIALS_MESSAGE)

        result = account_to_result(account)
        return AuthResult(account=result, session_id=await self._start_session(result))

    async def logout(self, session_id: str | None) -> None:
        """Destroy the session; a missing or unknown id is not an error."""
        if session_id:
            await self._sessions.destroy(session_id)

    async def get_current_account(self, session_id: str | None) -> AccountResult:
        """Account behind the session, re-read from the store.

        When the account has been deleted since login, the session is destroyed.
        """
        session = await self._sessions.get(session_id) if session_id else None
        if session is None:
            raise AuthenticationException("Not authenticated")
        if self._identity_provider is not None:
            identity = self._identity_provider.resolve(session.account_id)
            if identity is not None:
                return identity
        account = await self._accounts.get_active_by_id(session.account_id)
        if account is None:
            await self._sessions.destroy(session_id)
            logger.info("Session for missing account %s destroyed", session.account_id)
            raise AuthenticationException("Not authenticated")
        return account_to_result(account)

    # ---- password links ---------------------------------------------------

    async def forgot_password(self, email: str) -> str:
        """Email a reset link when the account exists; always returns the same message."""
        email = normalize_email(email)
        if not email:
            return FORGOT_PASSWORD_MESSAGE
        account = await self._accounts.get_active_by_email(email)
        if account is None or account.role == AccountRole.DONOR.value:
            logger.info("Password reset requested for unknown email")
            return FORGOT_PASSWORD_MESSAGE
        try:
            await self._issue_and_send(account, TokenPurpose.RESET_PASSWORD)
        except Exception:
            # Response must not reveal that the account exists.
            logger.exception("Failed to send password reset email for account %s", account.id)
        return FORGOT_PASSWORD_MESSAGE

    async def reset_password(self, token: str, new_password: str) -> None:
        """Set a new password from a reset link. Does not sign in.

        The link is checked before the password, so a dead link is reported
        as such whatever was typed.
        """
        record = await self._tokens.find_valid(token, TokenPurpose.RESET_PASSWORD)
        if record is None:
            raise InvalidTokenException()
        _check_new_password(new_password or "")
        if await self._accounts.set_password_hash(record.account_id, await self._hash(new_password)) is None:
            raise InvalidTokenException()
        if not await self._tokens.mark_used(record.id):
            raise TokenAlreadyUsedException()
        logger.info("Password reset for account %s", record.account_id)

    async def request_account_status(self, email: str) -> AccountStatus:
        """Where an existing participant stands; NEEDS_PASSWORD also emails a creation link."""
        email = normalize_email(email)
        if not email:
            raise ValidationException("Email is required", field="email")
        account = await self._accounts.get_active_by_email(email)
        if account is None or account.role == AccountRole.DONOR.value:
            return AccountStatus.NOT_FOUND
        if account.hashed_password:
            return AccountStatus.HAS_PASSWORD
        await self._issue_and_send(account, TokenPurpose.CREATE_PASSWORD)
        return AccountStatus.NEEDS_PASSWORD

    async def create_password(
        self, token: str, password: str, confirm_password: str
    ) -> AuthResult:
        """Set the first password from a creation link and sign the account in.

        As with reset, the link is checked before the typed passwords.
        """
        record = await self._tokens.find_valid(token, TokenPurpose.CREATE_PASSWORD)
        if record is None:
            raise InvalidTokenException()
        if password != confirm_password:
            raise ValidationException("Passwords do not match", field="confirm_password")
        _check_new_password(password or "")
        account = await self._accounts.set_password_hash(record.account_id, await self._hash(password))
        if account is None:
            raise InvalidTokenException()
        if not await self._tokens.mark_used(record.id):
            raise TokenAlreadyUsedException()
        logger.info("Password created for account %s", account.id)
        result = account_to_result(account)
        return AuthResult(account=result, session_id=await self._start_session(result))

    # ---- participant administration ---------------------------------------

    async def create_participant(self, data: ParticipantProfile) -> AccountResult:
        """Admin adds an account with no password.

        The person later gets a creation link from the existing-participant
        page or a login attempt. Field of interest defaults to "Both".
        Raises:
            ValidationException: missing name or email, bad phone/zip/role, text too long.
            ConflictException: an active account already uses the email.
        """
        email = normalize_email(data.email)
        first_name = (data.first_name or "").strip()
        last_name = (data.last_name or "").strip()
        if not email or not first_name or not last_name:
            raise ValidationException("First name, last name, and email are required")
        role = _strip_or_none(data.role) or AccountRole.PARTICIPANT.value
        if role not in _ASSIGNABLE_ROLES:
            raise ValidationException("Role must be participant or admin", field="role")
        data = replace(
            data,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            phone=_parse_phone(data.phone),
            zip_code=_parse_zip_code(data.zip_code),
            city=_strip_or_none(data.city),
            state=_strip_or_none(data.state),
            school_or_employer=_strip_or_none(data.school_or_employer),
            field_of_interest=_strip_or_none(data.field_of_interest)
            or DEFAULT_FIELD_OF_INTEREST,
        )
        _check_lengths(data.profile_fields())

        existing = await self._accounts.get_active_by_email(email)
        if existing is not None:
            raise ConflictException(
                ConflictException.EMAIL_EXISTS_WITH_PASSWORD
                if existing.hashed_password
                else ConflictException.EMAIL_EXISTS_NO_PASSWORD
            )
        account = await self._accounts.create_account(data, None, role)
        logger.info("Account %s created by an admin with role %s", account.id, role)
        return account_to_result(account)

    async def update_participant(
        self, account_id: str, changes: Mapping[str, Any], actor: SessionData
    ) -> AccountResult:
        """Write the profile fields present in changes. Only admins may set the role.

        Email and password are not editable here. The caller has already
        checked that actor owns the account or is an admin.
        Raises:
            AuthorizationException: a non-admin tried to set the role.
            ValidationException: blank name, bad phone/zip/role, text too long.
            ResourceNotFoundException: no active participant or admin with that id.
        """
        values = {k: v for k, v in changes.items() if k in EDITABLE_PROFILE_FIELDS}
        role = _strip_or_none(changes.get("role"))
        if role is not None:
            if not actor.is_admin:
                raise AuthorizationException("Only admins can change a role")
            if role not in _ASSIGNABLE_ROLES:
                raise ValidationException("Role must be participant or admin", field="role")
            values["role"] = role
        for name in ("first_name", "last_name"):
            if name in values:
                values[name] = (values[name] or "").strip()
                if not values[name]:
                    raise ValidationException(
                        "First name and last name cannot be empty", field=name
                    )
        if "phone" in values:
            values["phone"] = _parse_phone(values["phone"])
        if "zip_code" in values:
            values["zip_code"] = _parse_zip_code(values["zip_code"])
        for name in ("city", "state", "school_or_employer", "field_of_interest"):
            if name in values:
                values[name] = _strip_or_none(values[name])
        _check_lengths(values)

        account = await self._accounts.update_profile(account_id, values)
        if account is None:
            raise ResourceNotFoundException("Participant", account_id)
        logger.info(
            "Profile of account %s updated by %s (%s)",
            account_id,
            actor.account_id,
            ", ".join(sorted(values)) or "no changes",
        )
        return account_to_result(account)
