"""API de gerenciamento chamada pelo painel/provedor de identidade.

Todas as rotas exigem `Authorization: Bearer $ADMIN_API_SECRET`; o
`user_id` no path é o Google user id já autenticado por quem chama.

Mapeamento de erros:
- NotFoundError -> 404
- SubscriptionForbiddenError -> 403
- ReauthenticationRequiredError -> 401
- InvalidRequestError -> 400
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.admin.schemas import (
    CalendarResponse,
    CreateDiscordChannelRequest,
    DiscordChannelResponse,
    RegisterUserRequest,
    SubscribeRequest,
    SubscriptionResponse,
    UpdateSubscriptionRequest,
    UserResponse,
)
from api.routes.bearer import require_admin_secret
from app.bootstrap.dependencies import (
    get_account_store,
    get_calendar_provider,
    get_subscription_manager,
)
from app.use_cases.subscriptions import (
    CreateDiscordChannelUseCase,
    ListCalendarsUseCase,
    ListDiscordChannelsUseCase,
    RegisterUserUseCase,
    SignInTokens,
)
from utils.errors import (
    CalendarApiError,
    InvalidRequestError,
    NotFoundError,
    ReauthenticationRequiredError,
    SubscriptionForbiddenError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin_secret)])

T = TypeVar("T")


async def _translate(awaitable: Awaitable[T]) -> T:
    """Traduz exceções de domínio para HTTPException."""
    try:
        return await awaitable
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SubscriptionForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden") from exc
    except ReauthenticationRequiredError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Reauthentication required"
        ) from exc
    except InvalidRequestError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CalendarApiError as exc:
        logger.warning(
            "admin_calendar_api_failed",
            extra={
                "component": "admin_api",
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
            },
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Calendar API unavailable"
        ) from exc


@router.post("/users")
async def register_user(body: RegisterUserRequest) -> dict[str, Any]:
    """Upsert do usuário a partir do callback de sign-in."""
    user = await _translate(
        RegisterUserUseCase(get_account_store()).execute(
            SignInTokens(
                user_id=body.user_id,
                email=body.email,
                access_token=body.access_token,
                refresh_token=body.refresh_token,
                expires_at=body.expires_at,
            )
        )
    )
    return {"user": UserResponse.from_user(user).model_dump(mode="json")}


@router.get("/users/{user_id}/calendars")
async def list_calendars(user_id: str) -> dict[str, Any]:
    use_case = ListCalendarsUseCase(get_account_store(), get_calendar_provider())
    calendars = await _translate(use_case.execute(user_id))
    return {
        "calendars": [CalendarResponse.from_entry(entry).model_dump() for entry in calendars]
    }


@router.get("/users/{user_id}/discord-channels")
async def list_discord_channels(user_id: str) -> dict[str, Any]:
    accounts = get_account_store()
    channels = await _translate(ListDiscordChannelsUseCase(accounts, accounts).execute(user_id))
    return {
        "channels": [
            DiscordChannelResponse.from_channel(channel).model_dump(mode="json")
            for channel in channels
        ]
    }


@router.post("/users/{user_id}/discord-channels")
async def create_discord_channel(
    user_id: str, body: CreateDiscordChannelRequest
) -> dict[str, Any]:
    accounts = get_account_store()
    channel = await _translate(
        CreateDiscordChannelUseCase(accounts, accounts).execute(
            user_id,
            webhook_url=body.webhook_url,
            name=body.name,
            is_default=body.is_default,
        )
    )
    return {"channel": DiscordChannelResponse.from_channel(channel).model_dump(mode="json")}


@router.get("/users/{user_id}/subscriptions")
async def list_subscriptions(user_id: str) -> dict[str, Any]:
    subscriptions = await _translate(get_subscription_manager().list_subscriptions(user_id))
    return {
        "subscriptions": [
            SubscriptionResponse.from_subscription(item).model_dump(mode="json")
            for item in subscriptions
        ]
    }


@router.post("/users/{user_id}/subscriptions")
async def subscribe(user_id: str, body: SubscribeRequest) -> dict[str, Any]:
    """Cria assinatura; sync inicial e watch são best-effort."""
    subscription = await _translate(
        get_subscription_manager().subscribe(user_id, **body.model_dump())
    )
    return {
        "subscription": SubscriptionResponse.from_subscription(subscription).model_dump(
            mode="json"
        )
    }


@router.patch("/users/{user_id}/subscriptions/{subscription_id}")
async def update_subscription(
    user_id: str,
    subscription_id: str,
    body: UpdateSubscriptionRequest,
) -> dict[str, Any]:
    subscription = await _translate(
        get_subscription_manager().update_subscription(
            user_id, subscription_id, body.model_dump(exclude_none=True)
        )
    )
    return {
        "subscription": SubscriptionResponse.from_subscription(subscription).model_dump(
            mode="json"
        )
    }


@router.delete("/users/{user_id}/subscriptions/{subscription_id}")
async def unsubscribe(user_id: str, subscription_id: str) -> dict[str, Any]:
    await _translate(get_subscription_manager().unsubscribe(user_id, subscription_id))
    return {"success": True}


@router.post("/users/{user_id}/subscriptions/{subscription_id}/sync")
async def trigger_sync(user_id: str, subscription_id: str) -> dict[str, Any]:
    """Sync manual (debug)."""
    outcome = await _translate(get_subscription_manager().trigger_sync(user_id, subscription_id))
    return outcome.to_dict()


@router.post("/users/{user_id}/subscriptions/{subscription_id}/watch")
async def trigger_watch(user_id: str, subscription_id: str) -> dict[str, Any]:
    """Recria o push channel (debug)."""
    watch = await _translate(get_subscription_manager().trigger_watch(user_id, subscription_id))
    return {
        "success": True,
        "channel_id": watch.channel_id,
        "expiration": watch.expiration,
    }
