"""Accept invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from anemi.application.usecase.base import BaseUseCase
from anemi.domain.service import InviteService, NotificationService
from anemi.domain.value import InviteStatus


class AcceptInviteRequest(BaseModel):
    """Accept invite request."""

    token: str
    invitee_name: str = ""
    invitee_email: str = ""
    chosen_date: str = ""
    chosen_time: str = ""


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    status: InviteStatus
    confirmed_at: datetime
    chosen_date: str
    chosen_time: str
    notification_sent: bool


class AcceptInviteUseCase(BaseUseCase):
    """Use case for accepting an invite and fixing the meetup slot."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize accept invite use case.

        Args:
            invite_service: Invite domain service
            notification_service: Notification domain service
        """
        self.invite_service = invite_service
        self.notification_service = notification_service

    async def execute(self, request: AcceptInviteRequest) -> AcceptInviteResponse:
        """Accept an invite.

        The confirmation is committed before the emails go out, so a failed
        email never loses the confirmation.

        Raises:
            ValidationError: If input is missing or malformed
            NotFoundError: If no such invite
            InviteExpiredError: If the invite has expired
            InviteConflictError: If the invite was already answered
        """
        with logfire.span("accept_invite.execute", token=request.token[:8] + "..."):
            invite = await self.invite_service.accept_invite(
                token=request.token,
                invitee_name=request.invitee_name,
                invitee_email=request.invitee_email,
                chosen_date=request.chosen_date,
                chosen_time=request.chosen_time,
            )

            cafe = await self.invite_service.get_cafe(invite.cafe_id)
            notification_sent = await self.notification_service.invite_confirmed(
                invite, cafe
            )

            return AcceptInviteResponse(
                status=invite.status,
                confirmed_at=invite.confirmed_at,
                chosen_date=invite.chosen_date,
                chosen_time=invite.chosen_time,
                notification_sent=notification_sent,
            )
