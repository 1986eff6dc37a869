"""Application layer DI providers."""

from dishka import Scope, provide

from anemi.application.usecase.invite import (
    AcceptInviteUseCase,
    CreateInviteUseCase,
    DeclineInviteUseCase,
    DeleteInviteUseCase,
    GetInviteUseCase,
    ListCreatedInvitesUseCase,
    ListReceivedInvitesUseCase,
    PurgeDeletedInvitesUseCase,
    RestoreInviteUseCase,
    SendInviteLinkUseCase,
    UpdateInviteUseCase,
)
from anemi.application.usecase.stats import GetMeetupStatsUseCase
from anemi.config import Settings
from anemi.domain.repository import InviteRepository
from anemi.domain.service import InviteService, NotificationService, RateLimiter
from anemi.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invite lifecycle use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        settings: Settings,
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(
            invite_service=invite_service,
            notification_service=notification_service,
            rate_limiter=rate_limiter,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_send_invite_link_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        settings: Settings,
    ) -> SendInviteLinkUseCase:
        """Provide send invite link use case."""
        return SendInviteLinkUseCase(
            invite_service=invite_service,
            notification_service=notification_service,
            rate_limiter=rate_limiter,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_invite_use_case(self, invite_service: InviteService) -> GetInviteUseCase:
        """Provide get invite use case."""
        return GetInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(
            invite_service=invite_service, notification_service=notification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_decline_invite_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> DeclineInviteUseCase:
        """Provide decline invite use case."""
        return DeclineInviteUseCase(
            invite_service=invite_service, notification_service=notification_service
        )

    # Organizer use cases
    @provide(scope=Scope.REQUEST)
    def get_update_invite_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        settings: Settings,
    ) -> UpdateInviteUseCase:
        """Provide update invite use case."""
        return UpdateInviteUseCase(
            invite_service=invite_service,
            notification_service=notification_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_invite_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
    ) -> DeleteInviteUseCase:
        """Provide delete invite use case."""
        return DeleteInviteUseCase(
            invite_service=invite_service, notification_service=notification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_restore_invite_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> RestoreInviteUseCase:
        """Provide restore invite use case."""
        return RestoreInviteUseCase(invite_service=invite_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_list_created_invites_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> ListCreatedInvitesUseCase:
        """Provide list created invites use case."""
        return ListCreatedInvitesUseCase(
            invite_service=invite_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_list_received_invites_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> ListReceivedInvitesUseCase:
        """Provide list received invites use case."""
        return ListReceivedInvitesUseCase(
            invite_service=invite_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_purge_deleted_invites_use_case(
        self, invite_service: InviteService
    ) -> PurgeDeletedInvitesUseCase:
        """Provide purge deleted invites use case."""
        return PurgeDeletedInvitesUseCase(invite_service=invite_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_meetup_stats_use_case(
        self, invite_repository: InviteRepository
    ) -> GetMeetupStatsUseCase:
        """Provide meetup stats use case."""
        return GetMeetupStatsUseCase(invite_repository=invite_repository)
