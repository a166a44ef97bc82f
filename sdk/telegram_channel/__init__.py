"""
telegram-channel: a thin client for sending notifications through the Telegram Bot API.

Usage:
    from telegram_channel import Telegram

    telegram = Telegram("123456:ABC-DEF")
    response = telegram.send_message({"chat_id": 42, "text": "Hello!"})
"""

from .client import AsyncTelegram, Telegram, build_url, encode_body, file_endpoint
from .config import DEFAULT_API_URL, Settings, get_settings
from .exceptions import ApiError, CouldNotSendNotification, MissingToken, TransportError
from .models import FileParams, LocationParams, MessageParams
from .responses import describe_error, unwrap_result

__all__ = [
    "Telegram",
    "AsyncTelegram",
    "build_url",
    "encode_body",
    "file_endpoint",
    "DEFAULT_API_URL",
    "Settings",
    "get_settings",
    "CouldNotSendNotification",
    "MissingToken",
    "ApiError",
    "TransportError",
    "MessageParams",
    "FileParams",
    "LocationParams",
    "describe_error",
    "unwrap_result",
]
