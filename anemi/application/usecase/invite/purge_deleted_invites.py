"""Purge deleted invites use case."""

import logfire
from pydantic import BaseModel, Field

from anemi.application.usecase.base import BaseUseCase
from anemi.domain.service import InviteService


class PurgeDeletedInvitesRequest(BaseModel):
    """Purge request."""

    older_than_days: int = Field(default=365, ge=1)


class PurgeDeletedInvitesResponse(BaseModel):
    """Purge response."""

    purged: int


class PurgeDeletedInvitesUseCase(BaseUseCase):
    """Housekeeping: permanently remove long-deleted invites."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: PurgeDeletedInvitesRequest
    ) -> PurgeDeletedInvitesResponse:
        with logfire.span(
            "purge_deleted_invites.execute", older_than_days=request.older_than_days
        ):
            purged = await self.invite_service.purge_deleted_invites(
                request.older_than_days
            )
            return PurgeDeletedInvitesResponse(purged=purged)
