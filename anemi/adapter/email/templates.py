"""Lifecycle email templates.

Each template renders to a ``(subject, html)`` pair. Values coming from
users are HTML-escaped.
"""

from html import escape
from typing import Any

from anemi.domain.service.notification_service import EmailTemplate

_FIELD_LABELS = {
    "organizer_name": "Organizer",
    "available_dates": "Proposed dates",
    "available_times": "Proposed times",
}


def render(template: EmailTemplate, data: dict[str, Any]) -> tuple[str, str]:
    """Render an email.

    Args:
        template: Which lifecycle email
        data: Template variables

    Returns:
        Tuple of (subject, html body)
    """
    renderer = _RENDERERS[template]
    subject, body = renderer(data)
    return subject, _layout(body)


def _layout(body: str) -> str:
    return (
        '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;">'
        f"{body}"
        '<p style="color: #666; font-size: 0.875rem;">Anemi Meets</p>'
        "</div>"
    )


def _e(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return escape(", ".join(str(v) for v in value))
    return escape(str(value))


def _venue(data: dict[str, Any]) -> str:
    if not data.get("cafe_name"):
        return ""
    return (
        f"<p>Where: <strong>{_e(data['cafe_name'])}</strong>, "
        f"{_e(data.get('cafe_address'))} {_e(data.get('cafe_city'))}</p>"
    )


def _invite_created(data: dict[str, Any]) -> tuple[str, str]:
    url = _e(data["invite_url"])
    body = (
        "<h2>Your meetup invite is ready</h2>"
        f"<p>Hi {_e(data['organizer_name'])}, share this link with the person "
        "you'd like to meet:</p>"
        f'<p><a href="{url}">{url}</a></p>'
        f"<p>Proposed dates: {_e(data.get('available_dates'))}</p>"
        f"<p>Proposed times: {_e(data.get('available_times'))}</p>"
        f"<p>The invite expires on {_e(data.get('expires_at'))}.</p>"
    )
    return "Your meetup invite is ready to share", body


def _invite_link(data: dict[str, Any]) -> tuple[str, str]:
    url = _e(data["invite_url"])
    body = (
        f"<h2>{_e(data['organizer_name'])} invited you for coffee</h2>"
        f"{_venue(data)}"
        f"<p>Proposed dates: {_e(data.get('available_dates'))}</p>"
        f"<p>Proposed times: {_e(data.get('available_times'))}</p>"
        "<p>Pick the moment that suits you, or let them know you can't make it:</p>"
        f'<p><a href="{url}">{url}</a></p>'
        f"<p>The invite expires on {_e(data.get('expires_at'))}.</p>"
    )
    where = f" at {data['cafe_name']}" if data.get("cafe_name") else ""
    return f"You're invited: coffee meetup{where}", body


def _invite_confirmed(data: dict[str, Any]) -> tuple[str, str]:
    body = (
        "<h2>Your meetup is confirmed</h2>"
        f"<p>{_e(data['organizer_name'])} and {_e(data.get('invitee_name'))} "
        "are meeting for coffee.</p>"
        f"<p>When: <strong>{_e(data.get('chosen_date'))} "
        f"at {_e(data.get('chosen_time'))}</strong></p>"
        f"{_venue(data)}"
    )
    return f"Meetup confirmed for {data.get('chosen_date')}", body


def _invite_declined(data: dict[str, Any]) -> tuple[str, str]:
    reason = data.get("reason")
    body = (
        "<h2>Your invite was declined</h2>"
        f"<p>Hi {_e(data['organizer_name'])}, {_e(data.get('invitee_name'))} "
        "can't make it this time.</p>"
    )
    if reason:
        body += f"<p>Their note: <em>{_e(reason)}</em></p>"
    return "Your meetup invite was declined", body


def _invite_updated(data: dict[str, Any]) -> tuple[str, str]:
    rows = "".join(
        f"<li>{_e(_FIELD_LABELS.get(c['field'], c['field']))}: "
        f"{_e(c['old'])} &rarr; <strong>{_e(c['new'])}</strong></li>"
        for c in data.get("changes", [])
    )
    url = _e(data.get("invite_url"))
    body = (
        "<h2>Meetup details changed</h2>"
        f"<p>{_e(data['organizer_name'])} updated your meetup:</p>"
        f"<ul>{rows}</ul>"
        f"{_venue(data)}"
        f'<p><a href="{url}">View the invite</a></p>'
    )
    return "Your meetup details have changed", body


def _invite_cancelled(data: dict[str, Any]) -> tuple[str, str]:
    when = ""
    if data.get("chosen_date"):
        when = f" on {_e(data['chosen_date'])} at {_e(data.get('chosen_time'))}"
    body = (
        "<h2>Meetup cancelled</h2>"
        f"<p>{_e(data['organizer_name'])} cancelled your meetup{when}.</p>"
        f"{_venue(data)}"
    )
    return "Your meetup was cancelled", body


_RENDERERS = {
    EmailTemplate.INVITE_CREATED: _invite_created,
    EmailTemplate.INVITE_LINK: _invite_link,
    EmailTemplate.INVITE_CONFIRMED: _invite_confirmed,
    EmailTemplate.INVITE_DECLINED: _invite_declined,
    EmailTemplate.INVITE_UPDATED: _invite_updated,
    EmailTemplate.INVITE_CANCELLED: _invite_cancelled,
}
