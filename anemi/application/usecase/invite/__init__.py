"""Invite use cases."""

from anemi.application.usecase.invite.accept_invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
)
from anemi.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from anemi.application.usecase.invite.decline_invite import (
    DeclineInviteRequest,
    DeclineInviteResponse,
    DeclineInviteUseCase,
)
from anemi.application.usecase.invite.delete_invite import (
    DeleteInviteRequest,
    DeleteInviteResponse,
    DeleteInviteUseCase,
    RestoreInviteRequest,
    RestoreInviteUseCase,
)
from anemi.application.usecase.invite.get_invite import (
    GetInviteRequest,
    GetInviteUseCase,
)
from anemi.application.usecase.invite.list_invites import (
    ListCreatedInvitesUseCase,
    ListInvitesRequest,
    ListInvitesResponse,
    ListReceivedInvitesUseCase,
)
from anemi.application.usecase.invite.purge_deleted_invites import (
    PurgeDeletedInvitesRequest,
    PurgeDeletedInvitesResponse,
    PurgeDeletedInvitesUseCase,
)
from anemi.application.usecase.invite.send_invite_link import (
    SendInviteLinkRequest,
    SendInviteLinkResponse,
    SendInviteLinkUseCase,
)
from anemi.application.usecase.invite.update_invite import (
    UpdateInviteRequest,
    UpdateInviteResponse,
    UpdateInviteUseCase,
)
from anemi.application.usecase.invite.views import InviteItem, OwnedInviteItem

__all__ = [
    "AcceptInviteRequest",
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "DeclineInviteRequest",
    "DeclineInviteResponse",
    "DeclineInviteUseCase",
    "DeleteInviteRequest",
    "DeleteInviteResponse",
    "DeleteInviteUseCase",
    "GetInviteRequest",
    "GetInviteUseCase",
    "InviteItem",
    "ListCreatedInvitesUseCase",
    "ListInvitesRequest",
    "ListInvitesResponse",
    "ListReceivedInvitesUseCase",
    "OwnedInviteItem",
    "PurgeDeletedInvitesRequest",
    "PurgeDeletedInvitesResponse",
    "PurgeDeletedInvitesUseCase",
    "RestoreInviteRequest",
    "RestoreInviteUseCase",
    "SendInviteLinkRequest",
    "SendInviteLinkResponse",
    "SendInviteLinkUseCase",
    "UpdateInviteRequest",
    "UpdateInviteResponse",
    "UpdateInviteUseCase",
]
