#!/usr/bin/env python3
"""
Smoke script: sends a text message, a photo by URL and a location with a real bot token.

Usage:
    python scripts/send_smoke.py --chat-id -100123456789
    python scripts/send_smoke.py --chat-id -100123456789 --photo-url https://example.com/cat.jpg
    python scripts/send_smoke.py --chat-id -100123456789 --api-url http://localhost:8081/bot

Environment:
    TELEGRAM_BOT_TOKEN - bot token (or --token)
    TELEGRAM_API_URL   - base URL, token is appended to it
    TEST_CHAT_ID       - chat_id (instead of --chat-id)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

# The SDK may be installed with pip or live next to this script
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "sdk"))

from telegram_channel import CouldNotSendNotification, Settings, Telegram, describe_error  # noqa: E402


def main(telegram: Telegram, chat_id: str, photo_url: str | None = None) -> int:
    # 1. Text message
    print(f"1. sendMessage to {chat_id} ...")
    try:
        resp = telegram.send_message(
            {
                "chat_id": chat_id,
                "text": "<b>telegram-channel</b>\n\nSmoke test message.",
                "parse_mode": "HTML",
                "reply_markup": {"inline_keyboard": [[{"text": "Link", "url": "https://example.com"}]]},
            }
        )
        print(f"   HTTP {resp.status_code}: {resp.json().get('ok')}")
    except CouldNotSendNotification as e:
        print(f"   Error: {e}")
        return 1

    # 2. Photo by URL (form fields, no upload)
    if photo_url:
        print("\n2. sendPhoto by URL ...")
        try:
            resp = telegram.send_file({"chat_id": chat_id, "photo": photo_url, "caption": "smoke"}, "photo")
            if not resp.json().get("ok"):
                print(f"   Telegram: {describe_error(resp)}")
            else:
                print(f"   HTTP {resp.status_code}")
        except CouldNotSendNotification as e:
            print(f"   Error: {e}")

    # 3. Location
    print("\n3. sendLocation ...")
    try:
        resp = telegram.send_location({"chat_id": chat_id, "latitude": 55.7558, "longitude": 37.6173})
        print(f"   HTTP {resp.status_code}")
    except CouldNotSendNotification as e:
        print(f"   Error: {e}")
        return 1

    print("\nDone.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Send smoke-test notifications through the Bot API")
    parser.add_argument(
        "--chat-id",
        default=os.environ.get("TEST_CHAT_ID"),
        help="Telegram chat_id (or TEST_CHAT_ID from the environment)",
    )
    parser.add_argument("--token", default=None, help="Bot token (defaults to TELEGRAM_BOT_TOKEN)")
    parser.add_argument("--api-url", default=None, help="Base API URL (defaults to TELEGRAM_API_URL)")
    parser.add_argument("--photo-url", default=None, help="Also send this photo by URL")
    args = parser.parse_args()

    if not args.chat_id:
        parser.error("Pass --chat-id or set TEST_CHAT_ID")

    overrides = {}
    if args.token:
        overrides["telegram_bot_token"] = args.token
    if args.api_url:
        overrides["telegram_api_url"] = args.api_url
    settings = Settings(**overrides)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with Telegram.from_settings(settings) as client:
        sys.exit(main(client, args.chat_id, args.photo_url))
