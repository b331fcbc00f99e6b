"""Agregador de settings do calendar relay.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    StoreBackend,
    StoreSettings,
    get_base_settings,
    get_store_settings,
)

# Channel-specific settings
from config.settings.discord import DiscordSettings, get_discord_settings
from config.settings.google_calendar import (
    GOOGLE_CALENDAR_SCOPE,
    GOOGLE_TOKEN_URI,
    GoogleCalendarSettings,
    get_google_calendar_settings,
)

# Security settings
from config.settings.security import SecuritySettings, get_security_settings

# Sync and status board settings
from config.settings.status_board import StatusBoardSettings, get_status_board_settings
from config.settings.sync import SyncSettings, get_sync_settings

__all__ = [
    # Constants
    "GOOGLE_CALENDAR_SCOPE",
    "GOOGLE_TOKEN_URI",
    # Base
    "BaseSettings",
    # Channels
    "DiscordSettings",
    "Environment",
    "GoogleCalendarSettings",
    "SecuritySettings",
    "StatusBoardSettings",
    "StoreBackend",
    "StoreSettings",
    "SyncSettings",
    "get_base_settings",
    "get_discord_settings",
    "get_google_calendar_settings",
    "get_security_settings",
    "get_status_board_settings",
    "get_store_settings",
    "get_sync_settings",
]
