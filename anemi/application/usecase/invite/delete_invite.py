"""Delete and restore invite use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from anemi.application.usecase.base import BaseUseCase
from anemi.application.usecase.invite.views import OwnedInviteItem, owned_invite_item
from anemi.config import Settings
from anemi.domain.model.invite import utc_now
from anemi.domain.service import InviteService, NotificationService
from anemi.domain.value import InviteId


class DeleteInviteRequest(BaseModel):
    """Delete invite request."""

    invite_id: UUID
    caller: str


class DeleteInviteResponse(BaseModel):
    """Delete invite response."""

    invite_id: str
    cancellation_sent: bool


class DeleteInviteUseCase(BaseUseCase):
    """Use case for soft-deleting (cancelling) an invite."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize delete invite use case.

        Args:
            invite_service: Invite domain service
            notification_service: Notification domain service
        """
        self.invite_service = invite_service
        self.notification_service = notification_service

    async def execute(self, request: DeleteInviteRequest) -> DeleteInviteResponse:
        """Soft-delete an invite and notify an attached invitee.

        Raises:
            NotFoundError: If the invite does not exist or was already deleted
            NotAuthorizedError: If the caller does not own the invite
        """
        with logfire.span(
            "delete_invite.execute",
            invite_id=str(request.invite_id),
            caller=request.caller,
        ):
            invite = await self.invite_service.delete_invite(
                InviteId(request.invite_id), request.caller
            )

            cancellation_sent = False
            if invite.has_invitee:
                cafe = await self.invite_service.get_cafe(invite.cafe_id)
                cancellation_sent = await self.notification_service.invite_cancelled(
                    invite, cafe
                )

            return DeleteInviteResponse(
                invite_id=str(invite.id), cancellation_sent=cancellation_sent
            )


class RestoreInviteRequest(BaseModel):
    """Restore invite request."""

    invite_id: UUID
    caller: str


class RestoreInviteUseCase(BaseUseCase):
    """Use case for undoing a soft delete."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: RestoreInviteRequest) -> OwnedInviteItem:
        with logfire.span(
            "restore_invite.execute",
            invite_id=str(request.invite_id),
            caller=request.caller,
        ):
            invite = await self.invite_service.restore_invite(
                InviteId(request.invite_id), request.caller
            )
            cafe = await self.invite_service.get_cafe(invite.cafe_id)
            return owned_invite_item(
                invite, self.settings.invite_url(invite.token.root), utc_now(), cafe
            )
