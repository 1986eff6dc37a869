"""Create invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from anemi.application.usecase.base import BaseUseCase
from anemi.config import Settings
from anemi.domain.error import RateLimitExceededError
from anemi.domain.service import InviteService, NotificationService, RateLimiter
from anemi.domain.value import InviteStatus


class CreateInviteRequest(BaseModel):
    """Request to create an invite."""

    organizer_name: str
    organizer_email: str
    cafe_id: str = ""
    dates: list[str] = Field(default_factory=list)
    times: list[str] = Field(default_factory=list)
    client_key: str  # Rate limit key (client address)
    created_by: str | None = None  # Authenticated caller, if any


class CreateInviteResponse(BaseModel):
    """Response after creating an invite."""

    invite_id: str
    token: str
    invite_url: str
    status: InviteStatus
    expires_at: datetime
    notification_sent: bool


class CreateInviteUseCase(BaseUseCase):
    """Use case for creating a meetup invite."""

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
            rate_limiter: Creation rate limiter
            settings: Application settings
        """
        self.invite_service = invite_service
        self.notification_service = notification_service
        self.rate_limiter = rate_limiter
        self.settings = settings

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Create an invite and send the organizer the shareable link.

        The rate limit is checked before anything is validated or stored.

        Args:
            request: Create invite request

        Returns:
            Created invite summary

        Raises:
            RateLimitExceededError: If the client created too many invites
            ValidationError: If the request is invalid
        """
        with logfire.span("create_invite.execute", client_key=request.client_key):
            limits = self.settings.invitations
            decision = self.rate_limiter.check(
                f"create_invite:{request.client_key}",
                limits.create_limit,
                limits.create_window_seconds,
            )
            if not decision.allowed:
                raise RateLimitExceededError(decision.retry_after)

            invite = await self.invite_service.create_invite(
                organizer_name=request.organizer_name,
                organizer_email=request.organizer_email,
                cafe_id=request.cafe_id,
                dates=request.dates,
                times=request.times,
                created_by=request.created_by,
            )

            notification_sent = await self.notification_service.invite_created(invite)

            return CreateInviteResponse(
                invite_id=str(invite.id),
                token=invite.token.root,
                invite_url=self.settings.invite_url(invite.token.root),
                status=invite.status,
                expires_at=invite.expires_at,
                notification_sent=notification_sent,
            )
