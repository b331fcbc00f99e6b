"""Testes do cadastro de usuários e canais Discord."""

from __future__ import annotations

import pytest

from app.domain.calendar_event import CalendarListEntry
from app.infra.stores import MemoryAccountStore
from app.use_cases.subscriptions import (
    CreateDiscordChannelUseCase,
    ListCalendarsUseCase,
    ListDiscordChannelsUseCase,
    RegisterUserUseCase,
    SignInTokens,
)
from tests.fakes.fake_calendar_provider import FakeCalendarProvider
from tests.fakes.sync_harness import WEBHOOK_URL
from utils.errors import InvalidRequestError, UserNotFoundError


def _tokens(**overrides: object) -> SignInTokens:
    fields: dict[str, object] = {
        "user_id": "user-1",
        "email": "owner@example.com",
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "expires_at": 1_800_000_000,
        **overrides,
    }
    return SignInTokens(**fields)


@pytest.mark.asyncio
async def test_first_sign_in_creates_user() -> None:
    store = MemoryAccountStore()

    user = await RegisterUserUseCase(store).execute(_tokens())

    assert user.refresh_token == "refresh-1"
    assert user.access_token_expires_at == 1_800_000_000_000
    assert await store.get_user("user-1") == user


@pytest.mark.asyncio
async def test_first_sign_in_without_refresh_token_is_rejected() -> None:
    with pytest.raises(InvalidRequestError):
        await RegisterUserUseCase(MemoryAccountStore()).execute(_tokens(refresh_token=None))


@pytest.mark.asyncio
async def test_later_sign_in_keeps_stored_refresh_token() -> None:
    store = MemoryAccountStore()
    use_case = RegisterUserUseCase(store)
    await use_case.execute(_tokens())

    user = await use_case.execute(
        _tokens(access_token="access-2", refresh_token=None, email="new@example.com")
    )

    assert user.access_token == "access-2"
    assert user.refresh_token == "refresh-1"
    assert user.email == "new@example.com"


def test_missing_expiry_defaults_to_one_hour() -> None:
    tokens = _tokens(expires_at=None)

    assert tokens.expires_at_ms() > 1_700_000_000_000


@pytest.mark.asyncio
async def test_create_channel_validates_webhook_url() -> None:
    store = MemoryAccountStore()
    await RegisterUserUseCase(store).execute(_tokens())
    use_case = CreateDiscordChannelUseCase(store, store)

    with pytest.raises(InvalidRequestError):
        await use_case.execute("user-1", webhook_url="https://example.com/hook")
    with pytest.raises(UserNotFoundError):
        await use_case.execute("nobody", webhook_url=WEBHOOK_URL)

    channel = await use_case.execute("user-1", webhook_url=WEBHOOK_URL, name="alerts")

    assert channel.name == "alerts"
    listed = await ListDiscordChannelsUseCase(store, store).execute("user-1")
    assert [item.id for item in listed] == [channel.id]


@pytest.mark.asyncio
async def test_list_calendars_requires_known_user() -> None:
    store = MemoryAccountStore()
    provider = FakeCalendarProvider(
        calendars=[CalendarListEntry(id="primary", summary="Me", primary=True, access_role="owner")]
    )
    use_case = ListCalendarsUseCase(store, provider)

    with pytest.raises(UserNotFoundError):
        await use_case.execute("user-1")

    await RegisterUserUseCase(store).execute(_tokens())
    calendars = await use_case.execute("user-1")

    assert [entry.id for entry in calendars] == ["primary"]
