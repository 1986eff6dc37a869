"""List invites use cases."""

import logfire
from pydantic import BaseModel, Field

from anemi.application.usecase.base import BaseUseCase
from anemi.application.usecase.invite.views import OwnedInviteItem, owned_invite_item
from anemi.config import Settings
from anemi.domain.model.invite import utc_now
from anemi.domain.service import InviteService


class ListInvitesRequest(BaseModel):
    """List invites request."""

    caller: str  # Caller identity (email) from auth
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListInvitesResponse(BaseModel):
    """List invites response."""

    invites: list[OwnedInviteItem]
    total: int


class ListCreatedInvitesUseCase(BaseUseCase):
    """Use case for listing invites the caller created."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        """Initialize list created invites use case.

        Args:
            invite_service: Invite domain service
            settings: Application settings
        """
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        with logfire.span("list_created_invites.execute", caller=request.caller):
            invites = await self.invite_service.list_created_invites(
                request.caller, request.limit, request.offset
            )
            now = utc_now()
            items = [
                owned_invite_item(
                    invite,
                    self.settings.invite_url(invite.token.root),
                    now,
                    await self.invite_service.get_cafe(invite.cafe_id),
                )
                for invite in invites
            ]
            return ListInvitesResponse(invites=items, total=len(items))


class ListReceivedInvitesUseCase(BaseUseCase):
    """Use case for listing invites the caller accepted or declined.

    Invites are matched on the invitee email the caller entered when
    answering, so this also surfaces meetups answered before signing up.
    """

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        with logfire.span("list_received_invites.execute", caller=request.caller):
            invites = await self.invite_service.list_received_invites(
                request.caller, request.limit, request.offset
            )
            now = utc_now()
            items = [
                owned_invite_item(
                    invite,
                    self.settings.invite_url(invite.token.root),
                    now,
                    await self.invite_service.get_cafe(invite.cafe_id),
                )
                for invite in invites
            ]
            return ListInvitesResponse(invites=items, total=len(items))
