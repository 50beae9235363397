"""Participant administration API.

Admins list, create, promote/demote and soft-delete participants; a
participant may read and edit their own record. Donor intake records never
appear here.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import (
    get_account_repo,
    get_account_repo_for_write,
    get_account_workflow_for_write,
    require_admin,
    require_ownership_or_admin,
)
from app.application.dtos.account import account_to_result
from app.application.dtos.session import SessionData
from app.application.services.account_workflow import AccountWorkflow
from app.core.limiter import limit_writes
from app.domain.enums import AccountRole
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import AccountRepository
from app.schemas.auth import AccountResponse, MessageResponse
from app.schemas.participant import (
    ParticipantCreateRequest,
    ParticipantListResponse,
    ParticipantUpdateRequest,
)

router = APIRouter()

WriteWorkflow = Annotated[AccountWorkflow, Depends(get_account_workflow_for_write)]


async def participant_owner_id(request: Request) -> str | None:
    """A participant record is owned by the account it describes."""
    return request.path_params.get("participant_id")


def _response(account) -> AccountResponse:
    return AccountResponse.from_result(account_to_result(account))


@router.get("", response_model=ParticipantListResponse)
async def list_participants(
    _: Annotated[SessionData, Depends(require_admin)],
    repo: Annotated[AccountRepository, Depends(get_account_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """Active participants and admins ordered by last name (admin only)."""
    accounts = await repo.list_participants(skip=skip, limit=limit)
    return ParticipantListResponse(
        items=[_response(a) for a in accounts],
        total=await repo.count_participants(),
    )


@router.post("", response_model=AccountResponse, status_code=201)
@limit_writes
async def create_participant(
    request: Request,
    body: ParticipantCreateRequest,
    _: Annotated[SessionData, Depends(require_admin)],
    workflow: WriteWorkflow,
):
    """Add an account without a password (admin only).

    The person creates a password from the link sent by the existing-participant
    page or by their first login attempt.
    """
    account = await workflow.create_participant(body.to_profile())
    return AccountResponse.from_result(account)


@router.get("/{participant_id}", response_model=AccountResponse)
async def get_participant(
    participant_id: str,
    _: Annotated[SessionData, Depends(require_ownership_or_admin(participant_owner_id))],
    repo: Annotated[AccountRepository, Depends(get_account_repo)],
):
    """One participant (owner or admin)."""
    account = await repo.get_active_by_id(participant_id)
    if account is None or account.role == AccountRole.DONOR.value:
        raise ResourceNotFoundException("Participant", participant_id)
    return _response(account)


@router.put("/{participant_id}", response_model=AccountResponse)
@limit_writes
async def update_participant(
    request: Request,
    participant_id: str,
    body: ParticipantUpdateRequest,
    session: Annotated[SessionData, Depends(require_ownership_or_admin(participant_owner_id))],
    workflow: WriteWorkflow,
):
    """Edit profile fields (owner or admin). Only admins may change the role."""
    account = await workflow.update_participant(participant_id, body.changes(), session)
    return AccountResponse.from_result(account)


@router.put("/{participant_id}/toggle-admin", response_model=AccountResponse)
@limit_writes
async def toggle_admin(
    request: Request,
    participant_id: str,
    _: Annotated[SessionData, Depends(require_admin)],
    repo: Annotated[AccountRepository, Depends(get_account_repo_for_write)],
):
    """Flip between participant and admin (admin only).

    Sessions already open for that account keep their old role until the
    account signs in again.
    """
    account = await repo.toggle_admin(participant_id)
    if account is None:
        raise ResourceNotFoundException("Participant", participant_id)
    return _response(account)


@router.delete("/{participant_id}", response_model=MessageResponse)
@limit_writes
async def delete_participant(
    request: Request,
    participant_id: str,
    _: Annotated[SessionData, Depends(require_admin)],
    repo: Annotated[AccountRepository, Depends(get_account_repo_for_write)],
):
    """Soft-delete and anonymize (admin only). The account's sessions fail on next use."""
    if await repo.soft_delete(participant_id) is None:
        raise ResourceNotFoundException("Participant", participant_id)
    return MessageResponse(message="Participant deleted successfully")
