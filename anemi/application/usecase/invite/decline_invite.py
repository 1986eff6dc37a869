"""Decline invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from anemi.application.usecase.base import BaseUseCase
from anemi.domain.service import InviteService, NotificationService
from anemi.domain.value import InviteStatus


class DeclineInviteRequest(BaseModel):
    """Decline invite request."""

    token: str
    invitee_name: str = ""
    invitee_email: str = ""
    reason: str | None = None


class DeclineInviteResponse(BaseModel):
    """Decline invite response."""

    status: InviteStatus
    declined_at: datetime
    notification_sent: bool


class DeclineInviteUseCase(BaseUseCase):
    """Use case for declining an invite."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> None:
        self.invite_service = invite_service
        self.notification_service = notification_service

    async def execute(self, request: DeclineInviteRequest) -> DeclineInviteResponse:
        with logfire.span("decline_invite.execute", token=request.token[:8] + "..."):
            invite = await self.invite_service.decline_invite(
                token=request.token,
                invitee_name=request.invitee_name,
                invitee_email=request.invitee_email,
                reason=request.reason,
            )

            notification_sent = await self.notification_service.invite_declined(invite)

            return DeclineInviteResponse(
                status=invite.status,
                declined_at=invite.declined_at,
                notification_sent=notification_sent,
            )
