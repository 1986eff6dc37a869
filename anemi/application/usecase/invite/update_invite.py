"""Update invite use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from anemi.application.usecase.base import BaseUseCase
from anemi.application.usecase.invite.views import OwnedInviteItem, owned_invite_item
from anemi.config import Settings
from anemi.domain.model.invite import utc_now
from anemi.domain.service import InviteService, NotificationService
from anemi.domain.value import InviteId


class UpdateInviteRequest(BaseModel):
    """Update invite request. Omitted fields are left unchanged."""

    invite_id: UUID
    caller: str
    organizer_name: str | None = None
    available_dates: list[str] | None = None
    available_times: list[str] | None = None


class UpdateInviteResponse(BaseModel):
    """Update invite response."""

    invite: OwnedInviteItem
    changed_fields: list[str]
    changes_notified: bool


class UpdateInviteUseCase(BaseUseCase):
    """Use case for editing an invite's details."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        settings: Settings,
    ) -> None:
        """Initialize update invite use case.

        Args:
            invite_service: Invite domain service
            notification_service: Notification domain service
            settings: Application settings
        """
        self.invite_service = invite_service
        self.notification_service = notification_service
        self.settings = settings

    async def execute(self, request: UpdateInviteRequest) -> UpdateInviteResponse:
        """Apply an edit and tell an attached invitee what changed.

        Raises:
            NotFoundError: If the invite does not exist or was deleted
            NotAuthorizedError: If the caller does not own the invite
            ValidationError: If a provided field is malformed
        """
        with logfire.span(
            "update_invite.execute",
            invite_id=str(request.invite_id),
            caller=request.caller,
        ):
            invite, changes = await self.invite_service.update_invite(
                invite_id=InviteId(request.invite_id),
                caller=request.caller,
                organizer_name=request.organizer_name,
                available_dates=request.available_dates,
                available_times=request.available_times,
            )

            cafe = await self.invite_service.get_cafe(invite.cafe_id)
            changes_notified = False
            if changes and invite.has_invitee:
                changes_notified = await self.notification_service.invite_updated(
                    invite, changes, cafe
                )

            return UpdateInviteResponse(
                invite=owned_invite_item(
                    invite,
                    self.settings.invite_url(invite.token.root),
                    utc_now(),
                    cafe,
                ),
                changed_fields=[change.field for change in changes],
                changes_notified=changes_notified,
            )
