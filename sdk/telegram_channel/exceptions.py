"""Errors raised when a notification cannot be delivered to Telegram."""

from __future__ import annotations

from typing import Any

import httpx


class CouldNotSendNotification(Exception):
    """Base error for every failed Bot API call."""

    @classmethod
    def telegram_bot_token_not_provided(cls, message: str) -> MissingToken:
        return MissingToken(message)

    @classmethod
    def telegram_responded_with_an_error(cls, exc: httpx.HTTPStatusError) -> ApiError:
        return ApiError.from_status_error(exc)

    @classmethod
    def could_not_communicate_with_telegram(cls, exc: BaseException) -> TransportError:
        return TransportError(f"The communication with Telegram failed. Reason: {exc}", cause=exc)


class MissingToken(CouldNotSendNotification):
    """No bot token was configured when the request was about to be sent."""


class ApiError(CouldNotSendNotification):
    """Telegram answered with an error (HTTP 4xx/5xx or ``ok: false``)."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        status_code: int | None = None,
        description: str | None = None,
        error_code: int | None = None,
    ):
        super().__init__(message)
        self.response = response
        self.status_code = status_code if status_code is not None else (
            response.status_code if response is not None else None
        )
        self.description = description
        self.error_code = error_code

    @classmethod
    def from_status_error(cls, exc: httpx.HTTPStatusError) -> ApiError:
        response = exc.response
        description, error_code = _read_error_body(response)
        message = f"Telegram responded with an error `{response.status_code} - {description}`"
        err = cls(
            message,
            response=response,
            description=description,
            error_code=error_code,
        )
        err.__cause__ = exc
        return err


class TransportError(CouldNotSendNotification):
    """The request never produced a usable response (network, TLS, encoding...)."""

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


def _read_error_body(response: httpx.Response) -> tuple[str, int | None]:
    try:
        data: Any = response.json()
    except Exception:
        return response.text or response.reason_phrase, None
    if not isinstance(data, dict):
        return str(data), None
    description = data.get("description") or response.reason_phrase
    error_code = data.get("error_code")
    return str(description), error_code if isinstance(error_code, int) else None
