"""Notification domain service.

Lifecycle emails are best-effort: a failed send is logged and reported as
``False`` but never raised, so a committed state transition is never undone
by an email outage.
"""

from enum import Enum
from typing import Any

import logfire

from anemi.domain.model import Cafe, MeetupInvite

from .base import Service
from .invite_service import InviteChange


class EmailTemplate(str, Enum):
    """Lifecycle email kinds."""

    INVITE_CREATED = "invite_created"
    INVITE_LINK = "invite_link"
    INVITE_CONFIRMED = "invite_confirmed"
    INVITE_DECLINED = "invite_declined"
    INVITE_UPDATED = "invite_updated"
    INVITE_CANCELLED = "invite_cancelled"


class EmailSender:
    """Email delivery interface."""

    async def send(self, to: str, template: EmailTemplate, data: dict[str, Any]) -> None:
        """Render and deliver one email.

        Args:
            to: Recipient address
            template: Which lifecycle email to send
            data: Template variables

        Raises:
            AdapterError: If delivery fails
        """
        raise NotImplementedError


class NotificationService(Service):
    """Sends lifecycle emails for meetup invites."""

    def __init__(self, email_sender: EmailSender, frontend_url: str) -> None:
        """Initialize notification service.

        Args:
            email_sender: Email delivery implementation
            frontend_url: Base URL of the web app, used for invite links
        """
        self.email_sender = email_sender
        self.frontend_url = frontend_url.rstrip("/")

    def invite_url(self, invite: MeetupInvite) -> str:
        return f"{self.frontend_url}/invite/{invite.token.root}"

    async def invite_created(self, invite: MeetupInvite) -> bool:
        """Send the organizer their shareable invite link."""
        return await self._send(
            invite,
            invite.organizer_email.root,
            EmailTemplate.INVITE_CREATED,
            {
                "organizer_name": invite.organizer_name,
                "invite_url": self.invite_url(invite),
                "available_dates": invite.available_dates,
                "available_times": invite.available_times,
                "expires_at": invite.expires_at.isoformat(),
            },
        )

    async def invite_link(
        self, invite: MeetupInvite, to: str, cafe: Cafe | None = None
    ) -> bool:
        """Email the invite link and proposed slots straight to an invitee."""
        return await self._send(
            invite,
            to,
            EmailTemplate.INVITE_LINK,
            {
                "organizer_name": invite.organizer_name,
                "invite_url": self.invite_url(invite),
                "available_dates": invite.available_dates,
                "available_times": invite.available_times,
                "expires_at": invite.expires_at.isoformat(),
                **_cafe_data(cafe),
            },
        )

    async def invite_confirmed(
        self, invite: MeetupInvite, cafe: Cafe | None = None
    ) -> bool:
        """Send the confirmed meetup details to both organizer and invitee.

        Returns:
            True only if both emails were sent
        """
        data = {
            "organizer_name": invite.organizer_name,
            "invitee_name": invite.invitee_name,
            "chosen_date": invite.chosen_date,
            "chosen_time": invite.chosen_time,
            **_cafe_data(cafe),
        }
        recipients = [invite.organizer_email.root]
        if invite.invitee_email:
            recipients.append(invite.invitee_email.root)

        results = [
            await self._send(invite, to, EmailTemplate.INVITE_CONFIRMED, data)
            for to in recipients
        ]
        return all(results)

    async def invite_declined(self, invite: MeetupInvite) -> bool:
        """Tell the organizer the invite was declined."""
        return await self._send(
            invite,
            invite.organizer_email.root,
            EmailTemplate.INVITE_DECLINED,
            {
                "organizer_name": invite.organizer_name,
                "invitee_name": invite.invitee_name,
                "invitee_email": invite.invitee_email.root
                if invite.invitee_email
                else None,
                "reason": invite.decline_reason,
            },
        )

    async def invite_updated(
        self,
        invite: MeetupInvite,
        changes: list[InviteChange],
        cafe: Cafe | None = None,
    ) -> bool:
        """Send the invitee a summary of edited details.

        Skipped (returns False) when nothing changed or no invitee is attached.
        """
        if not changes or not invite.invitee_email:
            return False
        return await self._send(
            invite,
            invite.invitee_email.root,
            EmailTemplate.INVITE_UPDATED,
            {
                "organizer_name": invite.organizer_name,
                "invitee_name": invite.invitee_name,
                "invite_url": self.invite_url(invite),
                "changes": [change.model_dump() for change in changes],
                **_cafe_data(cafe),
            },
        )

    async def invite_cancelled(
        self, invite: MeetupInvite, cafe: Cafe | None = None
    ) -> bool:
        """Tell an attached invitee that the organizer cancelled."""
        if not invite.invitee_email:
            return False
        return await self._send(
            invite,
            invite.invitee_email.root,
            EmailTemplate.INVITE_CANCELLED,
            {
                "organizer_name": invite.organizer_name,
                "invitee_name": invite.invitee_name,
                "chosen_date": invite.chosen_date,
                "chosen_time": invite.chosen_time,
                **_cafe_data(cafe),
            },
        )

    async def _send(
        self,
        invite: MeetupInvite,
        to: str,
        template: EmailTemplate,
        data: dict[str, Any],
    ) -> bool:
        with logfire.span(
            "notification_service.send",
            invite_id=str(invite.id),
            template=template.value,
        ):
            try:
                await self.email_sender.send(to, template, data)
            except Exception as e:
                logfire.error(
                    "Notification failed",
                    invite_id=str(invite.id),
                    template=template.value,
                    error=str(e),
                )
                return False

            logfire.info(
                "Notification sent", invite_id=str(invite.id), template=template.value
            )
            return True


def _cafe_data(cafe: Cafe | None) -> dict[str, Any]:
    if cafe is None:
        return {"cafe_name": None, "cafe_address": None, "cafe_city": None}
    return {
        "cafe_name": cafe.name,
        "cafe_address": cafe.address,
        "cafe_city": cafe.city,
    }
