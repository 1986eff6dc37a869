"""Invite routes.

Token routes (lookup, accept, decline) are public: the token in the link is
the credential. Owner routes take an ``Authorization: Bearer`` access token.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from anemi.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    DeclineInviteRequest,
    DeclineInviteResponse,
    DeclineInviteUseCase,
    DeleteInviteRequest,
    DeleteInviteResponse,
    DeleteInviteUseCase,
    GetInviteRequest,
    GetInviteUseCase,
    InviteItem,
    ListCreatedInvitesUseCase,
    ListInvitesRequest,
    ListInvitesResponse,
    ListReceivedInvitesUseCase,
    OwnedInviteItem,
    RestoreInviteRequest,
    RestoreInviteUseCase,
    SendInviteLinkRequest,
    SendInviteLinkResponse,
    SendInviteLinkUseCase,
    UpdateInviteRequest,
    UpdateInviteResponse,
    UpdateInviteUseCase,
)
from anemi.config import Settings
from anemi.domain.error import DomainError
from anemi.domain.service import JWTService
from anemi.interface.api.client_address import client_address
from anemi.interface.error import to_http_exception
from anemi.util.jwt import JWTError

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class CreateInviteAPIRequest(BaseModel):
    """API request for creating an invite."""

    organizer_name: str = ""
    organizer_email: str = ""
    cafe_id: str = ""
    dates: list[str] = Field(default_factory=list)
    times: list[str] = Field(default_factory=list)


class AcceptInviteAPIRequest(BaseModel):
    """API request for accepting an invite."""

    invitee_name: str = ""
    invitee_email: str = ""
    chosen_date: str = ""
    chosen_time: str = ""


class DeclineInviteAPIRequest(BaseModel):
    """API request for declining an invite."""

    invitee_name: str = ""
    invitee_email: str = ""
    reason: str | None = None


class SendInviteLinkAPIRequest(BaseModel):
    """API request for emailing an invite link."""

    email: str = ""


class UpdateInviteAPIRequest(BaseModel):
    """API request for editing an invite. Omitted fields stay unchanged."""

    organizer_name: str | None = None
    available_dates: list[str] | None = None
    available_times: list[str] | None = None


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _authenticate(jwt_service: JWTService, authorization: str | None) -> str:
    """Return the caller identity or raise 401."""
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt_service.verify_token(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload.email.strip().lower()


@router.post("", response_model=CreateInviteResponse)
async def create_invite(
    body: CreateInviteAPIRequest,
    request: Request,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    authorization: str | None = Header(default=None),
) -> CreateInviteResponse:
    """Create a meetup invite.

    Signed-in organizers own the invite under their account email; anonymous
    organizers own it under the organizer email they entered.

    Raises:
        HTTPException: 400 on invalid input, 429 when rate limited
    """
    try:
        use_case_request = CreateInviteRequest(
            organizer_name=body.organizer_name,
            organizer_email=body.organizer_email,
            cafe_id=body.cafe_id,
            dates=body.dates,
            times=body.times,
            client_key=client_address(request, settings.trusted_proxies),
            created_by=jwt_service.get_caller_identity(_bearer_token(authorization)),
        )
        return await create_invite_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("", response_model=ListInvitesResponse)
async def list_my_invites(
    list_created_invites_use_case: FromDishka[ListCreatedInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListInvitesResponse:
    """List invites created by the current user."""
    caller = _authenticate(jwt_service, authorization)
    return await list_created_invites_use_case.execute(
        ListInvitesRequest(caller=caller, limit=limit, offset=offset)
    )


@router.get("/received", response_model=ListInvitesResponse)
async def list_received_invites(
    list_received_invites_use_case: FromDishka[ListReceivedInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListInvitesResponse:
    """List invites the current user accepted or declined."""
    caller = _authenticate(jwt_service, authorization)
    try:
        return await list_received_invites_use_case.execute(
            ListInvitesRequest(caller=caller, limit=limit, offset=offset)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{token}", response_model=InviteItem)
async def get_invite(
    token: str,
    get_invite_use_case: FromDishka[GetInviteUseCase],
) -> InviteItem:
    """Look up an invite by its shareable token.

    Raises:
        HTTPException: 404 if unknown or deleted, 410 if expired
    """
    try:
        return await get_invite_use_case.execute(GetInviteRequest(token=token))
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{token}/accept", response_model=AcceptInviteResponse)
async def accept_invite(
    token: str,
    body: AcceptInviteAPIRequest,
    accept_invite_use_case: FromDishka[AcceptInviteUseCase],
) -> AcceptInviteResponse:
    """Accept an invite with a chosen date and time.

    Raises:
        HTTPException: 400, 404, 409 if already answered, 410 if expired
    """
    try:
        return await accept_invite_use_case.execute(
            AcceptInviteRequest(
                token=token,
                invitee_name=body.invitee_name,
                invitee_email=body.invitee_email,
                chosen_date=body.chosen_date,
                chosen_time=body.chosen_time,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{token}/decline", response_model=DeclineInviteResponse)
async def decline_invite(
    token: str,
    body: DeclineInviteAPIRequest,
    decline_invite_use_case: FromDishka[DeclineInviteUseCase],
) -> DeclineInviteResponse:
    """Decline an invite, optionally with a reason.

    Raises:
        HTTPException: 400, 404, 409 if already answered, 410 if expired
    """
    try:
        return await decline_invite_use_case.execute(
            DeclineInviteRequest(
                token=token,
                invitee_name=body.invitee_name,
                invitee_email=body.invitee_email,
                reason=body.reason,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{token}/send", response_model=SendInviteLinkResponse)
async def send_invite_link(
    token: str,
    body: SendInviteLinkAPIRequest,
    request: Request,
    send_invite_link_use_case: FromDishka[SendInviteLinkUseCase],
    settings: FromDishka[Settings],
) -> SendInviteLinkResponse:
    """Email the invite link straight to the person being invited.

    Raises:
        HTTPException: 400, 404, 409 if already answered, 410 if expired,
            429 when rate limited
    """
    try:
        return await send_invite_link_use_case.execute(
            SendInviteLinkRequest(
                token=token,
                recipient_email=body.email,
                client_key=client_address(request, settings.trusted_proxies),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

@router.put("/{invite_id}", response_model=UpdateInviteResponse)
async def update_invite(
    invite_id: UUID,
    body: UpdateInviteAPIRequest,
    update_invite_use_case: FromDishka[UpdateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> UpdateInviteResponse:
    """Edit an invite you created.

    Raises:
        HTTPException: 400, 401, 403 if not the owner, 404
    """
    caller = _authenticate(jwt_service, authorization)
    try:
        return await update_invite_use_case.execute(
            UpdateInviteRequest(
                invite_id=invite_id,
                caller=caller,
                organizer_name=body.organizer_name,
                available_dates=body.available_dates,
                available_times=body.available_times,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{invite_id}", response_model=DeleteInviteResponse)
async def delete_invite(
    invite_id: UUID,
    delete_invite_use_case: FromDishka[DeleteInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> DeleteInviteResponse:
    """Cancel (soft-delete) an invite you created.

    Raises:
        HTTPException: 401, 403 if not the owner, 404
    """
    caller = _authenticate(jwt_service, authorization)
    try:
        return await delete_invite_use_case.execute(
            DeleteInviteRequest(invite_id=invite_id, caller=caller)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{invite_id}/restore", response_model=OwnedInviteItem)
async def restore_invite(
    invite_id: UUID,
    restore_invite_use_case: FromDishka[RestoreInviteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> OwnedInviteItem:
    """Undo the deletion of an invite you created.

    Raises:
        HTTPException: 401, 403 if not the owner, 404 if not deleted
    """
    caller = _authenticate(jwt_service, authorization)
    try:
        return await restore_invite_use_case.execute(
            RestoreInviteRequest(invite_id=invite_id, caller=caller)
        )
    except DomainError as e:
        raise to_http_exception(e)
