"""Send invite link use case."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from anemi.application.usecase.base import BaseUseCase
from anemi.config import Settings
from anemi.domain.error import RateLimitExceededError, ValidationError
from anemi.domain.service import InviteService, NotificationService, RateLimiter
from anemi.domain.value import EmailAddress


class SendInviteLinkRequest(BaseModel):
    """Request to email an invite link to the invitee."""

    token: str
    recipient_email: str
    client_key: str  # Rate limit key (client address)


class SendInviteLinkResponse(BaseModel):
    """Response after emailing an invite link."""

    recipient_email: str
    notification_sent: bool


class SendInviteLinkUseCase(BaseUseCase):
    """Use case for emailing a pending invite straight to the invitee."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            notification_service: Notification domain service
            rate_limiter: Rate limiter shared with invite creation limits
            settings: Application settings
        """
        self.invite_service = invite_service
        self.notification_service = notification_service
        self.rate_limiter = rate_limiter
        self.settings = settings

    async def execute(self, request: SendInviteLinkRequest) -> SendInviteLinkResponse:
        """Email the invite link, cafe and proposed slots to the recipient.

        Delivery is best-effort: a failed send is reported in the response
        rather than raised.

        Raises:
            RateLimitExceededError: If the client sent too many links
            ValidationError: If the recipient address is missing or malformed
            NotFoundError: If the token is unknown or the invite was deleted
            InviteExpiredError: If the invite has expired
            InviteConflictError: If the invite was already answered
        """
        with logfire.span(
            "send_invite_link.execute",
            token=request.token[:8] + "...",
            client_key=request.client_key,
        ):
            limits = self.settings.invitations
            decision = self.rate_limiter.check(
                f"send_invite_link:{request.client_key}",
                limits.create_limit,
                limits.create_window_seconds,
            )
            if not decision.allowed:
                raise RateLimitExceededError(decision.retry_after)

            if not request.recipient_email.strip():
                raise ValidationError("Recipient email is required")
            try:
                recipient = EmailAddress(request.recipient_email)
            except PydanticValidationError:
                raise ValidationError("Recipient email is not a valid email address")

            invite = await self.invite_service.get_pending_invite(request.token)
            cafe = await self.invite_service.get_cafe(invite.cafe_id)
            sent = await self.notification_service.invite_link(
                invite, recipient.root, cafe
            )

            return SendInviteLinkResponse(
                recipient_email=recipient.root, notification_sent=sent
            )
