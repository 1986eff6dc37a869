"""Domain layer DI providers."""

from dishka import Scope, provide

from anemi.config import AuthSettings, Settings
from anemi.domain.repository import CafeRepository, InviteRepository
from anemi.domain.service import (
    EmailSender,
    InviteService,
    JWTService,
    NotificationService,
)
from anemi.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        cafe_repository: CafeRepository,
        settings: Settings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            cafe_repository=cafe_repository,
            expiry_days=settings.invitations.expiry_days,
        )

    @provide
    def get_notification_service(
        self, email_sender: EmailSender, settings: Settings
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            email_sender=email_sender, frontend_url=settings.api.frontend_url
        )
