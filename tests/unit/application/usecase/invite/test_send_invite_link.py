"""Unit tests for SendInviteLinkUseCase."""

import pytest

from anemi.adapter.email import MockEmailSender
from anemi.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteUseCase,
    CreateInviteRequest,
    CreateInviteUseCase,
    SendInviteLinkRequest,
    SendInviteLinkUseCase,
)
from anemi.domain.error import (
    AlreadyConfirmedError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from anemi.domain.repository import CafeRepository
from anemi.domain.service import EmailTemplate
from tests.factories import make_cafe
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def create_invite(unit_env, cafe_id: str = "") -> str:
    use_case = await unit_env.get(CreateInviteUseCase)
    created = await use_case.execute(
        CreateInviteRequest(
            organizer_name="Ada Lovelace",
            organizer_email="ada@example.com",
            cafe_id=cafe_id,
            dates=["2026-11-02", "2026-11-03"],
            times=["09:00"],
            client_key="203.0.113.7",
        )
    )
    return created.token


def send_request(token: str, **overrides) -> SendInviteLinkRequest:
    fields = {
        "token": token,
        "recipient_email": "Bob@Example.com",
        "client_key": "203.0.113.7",
    }
    fields.update(overrides)
    return SendInviteLinkRequest(**fields)


class TestSendInviteLinkUseCase:
    """Tests for SendInviteLinkUseCase."""

    @pytest.mark.asyncio
    async def test_sends_link_with_cafe_to_invitee(self, unit_env):
        # Arrange
        cafe_repo = await unit_env.get(CafeRepository)
        cafe = await cafe_repo.save(make_cafe())
        token = await create_invite(unit_env, cafe_id=cafe.id)
        use_case = await unit_env.get(SendInviteLinkUseCase)
        email_sender = await unit_env.get(MockEmailSender)

        # Act
        response = await use_case.execute(send_request(token))

        # Assert
        assert response.recipient_email == "bob@example.com"
        assert response.notification_sent is True
        sent = email_sender.sent_to("bob@example.com")
        assert len(sent) == 1
        assert sent[0].template == EmailTemplate.INVITE_LINK
        assert sent[0].data["invite_url"].endswith(f"/invite/{token}")
        assert sent[0].data["cafe_name"] == "Koffiebar Anemi"
        assert sent[0].data["available_dates"] == ["2026-11-02", "2026-11-03"]
        assert sent[0].subject == "You're invited: coffee meetup at Koffiebar Anemi"

    @pytest.mark.asyncio
    async def test_email_failure_is_reported(self, unit_env):
        token = await create_invite(unit_env)
        use_case = await unit_env.get(SendInviteLinkUseCase)
        email_sender = await unit_env.get(MockEmailSender)
        email_sender.fail = True

        response = await use_case.execute(send_request(token))

        assert response.notification_sent is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "recipient, message",
        [
            ("", "Recipient email is required"),
            ("not-an-email", "not a valid email address"),
        ],
    )
    async def test_invalid_recipient(self, unit_env, recipient, message):
        token = await create_invite(unit_env)
        use_case = await unit_env.get(SendInviteLinkUseCase)

        with pytest.raises(ValidationError, match=message):
            await use_case.execute(send_request(token, recipient_email=recipient))

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(SendInviteLinkUseCase)
        email_sender = await unit_env.get(MockEmailSender)

        with pytest.raises(NotFoundError):
            await use_case.execute(send_request("does-not-exist"))

        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_answered_invite_is_not_resent(self, unit_env):
        # Arrange
        token = await create_invite(unit_env)
        accept = await unit_env.get(AcceptInviteUseCase)
        await accept.execute(
            AcceptInviteRequest(
                token=token,
                invitee_name="Bob",
                invitee_email="bob@example.com",
                chosen_date="2026-11-02",
                chosen_time="09:00",
            )
        )
        use_case = await unit_env.get(SendInviteLinkUseCase)

        # Act / Assert
        with pytest.raises(AlreadyConfirmedError):
            await use_case.execute(send_request(token, recipient_email="eve@example.com"))

    @pytest.mark.asyncio
    async def test_rate_limited_after_five_sends(self, unit_env):
        token = await create_invite(unit_env)
        use_case = await unit_env.get(SendInviteLinkUseCase)
        for _ in range(5):
            await use_case.execute(send_request(token))

        with pytest.raises(RateLimitExceededError):
            await use_case.execute(send_request(token))

        # Invite creation keeps its own budget
        assert await create_invite(unit_env)
