"""Get invite use case."""

import logfire
from pydantic import BaseModel

from anemi.application.usecase.base import BaseUseCase
from anemi.application.usecase.invite.views import InviteItem, invite_item
from anemi.domain.service import InviteService


class GetInviteRequest(BaseModel):
    """Get invite request."""

    token: str


class GetInviteUseCase(BaseUseCase):
    """Use case for looking up an invite by its shareable token."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize get invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: GetInviteRequest) -> InviteItem:
        """Look up an invite.

        Raises:
            NotFoundError: If the token is unknown or the invite was deleted
            InviteExpiredError: If the invite has expired
        """
        with logfire.span("get_invite.execute", token=request.token[:8] + "..."):
            invite = await self.invite_service.get_invite_by_token(request.token)
            cafe = await self.invite_service.get_cafe(invite.cafe_id)
            return invite_item(invite, cafe)
