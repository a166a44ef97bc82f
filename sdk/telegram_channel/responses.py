"""Helpers for reading the Bot API JSON envelope from a raw response.

The client returns responses untouched; a 200 can still carry
``{"ok": false, ...}``. Callers that want a strict result use ``unwrap_result``.
"""

from __future__ import annotations

from typing import Any

import httpx

from .exceptions import ApiError, TransportError


def read_envelope(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except Exception as exc:
        raise TransportError(f"invalid Telegram JSON response: {exc}", cause=exc) from exc
    if not isinstance(data, dict):
        raise TransportError(f"unexpected Telegram response: {data!r}")
    return data


def describe_error(response: httpx.Response) -> str:
    try:
        data = response.json()
    except Exception:
        return response.text or f"telegram api error ({response.status_code})"
    if isinstance(data, dict) and data.get("description"):
        return str(data["description"])
    return f"telegram api error ({response.status_code})"


def unwrap_result(response: httpx.Response) -> Any:
    """Return ``result`` from a successful envelope, raise ApiError when ``ok`` is false."""
    data = read_envelope(response)
    if not data.get("ok"):
        error_code = data.get("error_code")
        description = data.get("description") or f"telegram api error ({response.status_code})"
        raise ApiError(
            f"Telegram responded with an error `{error_code or response.status_code} - {description}`",
            response=response,
            description=description,
            error_code=error_code if isinstance(error_code, int) else None,
        )
    return data.get("result")
