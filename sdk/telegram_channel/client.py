"""
HTTP client for Telegram Bot API notifications.

Features:
- One POST per call, no retries
- Form-encoded or multipart bodies
- Lazily built, reused httpx transport (or an injected one)
- Failures normalized into MissingToken / ApiError / TransportError
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Mapping
from typing import Any, Union

import httpx
from pydantic import BaseModel

from .config import DEFAULT_API_URL, Settings, get_settings
from .exceptions import CouldNotSendNotification
from .models import dump_params, is_upload

logger = logging.getLogger(__name__)

Params = Union[Mapping[str, Any], BaseModel, None]

_MISSING_TOKEN_MESSAGE = "You must provide your telegram bot token to make any API requests."


def file_endpoint(file_type: str) -> str:
    """``photo`` -> ``sendPhoto``: first character uppercased, the rest unchanged."""
    return "send" + file_type[:1].upper() + file_type[1:]


def build_url(api_url: str, token: str, endpoint: str) -> str:
    return f"{api_url}{token}/{endpoint}"


def _token_hint(token: str | None) -> str:
    if not token:
        return "unknown"
    suffix = token[-6:] if len(token) >= 6 else token
    return f"*{suffix}"


def _as_mapping(params: Params) -> dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        return dump_params(params)
    return dict(params)


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        # reply_markup and friends are JSON-serialized objects in form bodies.
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def encode_body(params: Params, multipart: bool = False) -> dict[str, Any]:
    """
    Keyword arguments for ``httpx`` ``post()``.

    Form mode returns ``{"data": ...}``. Multipart mode returns ``{"files": ...}``
    where uploads (bytes, binary file objects, ``(filename, content[, type])``
    tuples) are file parts and every other field is a plain form-data part,
    so the body stays multipart even without an attachment.
    None values are dropped. Uploads in form mode raise TypeError.
    """
    fields = {key: value for key, value in _as_mapping(params).items() if value is not None}
    if not multipart:
        uploads = sorted(key for key, value in fields.items() if is_upload(value))
        if uploads:
            raise TypeError(f"file uploads {uploads} require a multipart request")
        return {"data": {key: _form_value(value) for key, value in fields.items()}}

    files: dict[str, Any] = {}
    for key, value in fields.items():
        if is_upload(value):
            files[key] = value
        else:
            files[key] = (None, _form_value(value))
    return {"files": files}


class _BaseTelegram:
    """Token, URL and error handling shared by the blocking and async clients."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
    ):
        self._token = token
        self.api_url = api_url if api_url is not None else DEFAULT_API_URL
        self._timeout = timeout
        self._owns_http = False

    def get_token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        self._token = token

    def _endpoint_url(self, endpoint: str) -> str:
        if not self._token:
            logger.warning("telegram.call method=%s rejected: no bot token", endpoint)
            raise CouldNotSendNotification.telegram_bot_token_not_provided(_MISSING_TOKEN_MESSAGE)
        return build_url(self.api_url, self._token, endpoint)

    def _log_call(self, endpoint: str, fields: Mapping[str, Any], multipart: bool) -> None:
        chat_id = fields.get("chat_id")
        logger.info(
            "telegram.call method=%s chat_id=%s bot=%s multipart=%s",
            endpoint,
            chat_id,
            _token_hint(self._token),
            multipart,
        )

    def _log_result(self, endpoint: str, status: str, started: float, http_status: int | None) -> None:
        logger.info(
            "telegram.result method=%s status=%s ms=%s bot=%s http=%s",
            endpoint,
            status,
            int((time.perf_counter() - started) * 1000),
            _token_hint(self._token),
            http_status,
        )

    def _api_error(self, endpoint: str, exc: httpx.HTTPStatusError) -> CouldNotSendNotification:
        err = CouldNotSendNotification.telegram_responded_with_an_error(exc)
        logger.warning("telegram.error method=%s http=%s: %s", endpoint, exc.response.status_code, err)
        return err

    def _transport_error(self, endpoint: str, exc: Exception) -> CouldNotSendNotification:
        logger.warning("telegram.error method=%s transport: %r", endpoint, exc)
        return CouldNotSendNotification.could_not_communicate_with_telegram(exc)


class Telegram(_BaseTelegram):
    """
    Blocking Bot API client.

    Example:
        telegram = Telegram("123:ABC")
        telegram.send_message({"chat_id": 42, "text": "Hello"})
        telegram.send_file({"chat_id": 42, "photo": open("cat.jpg", "rb")}, "photo", multipart=True)

    Every method returns the raw ``httpx.Response``.
    """

    def __init__(
        self,
        token: str | None = None,
        http_client: httpx.Client | None = None,
        api_url: str | None = None,
        *,
        timeout: float | None = None,
    ):
        super().__init__(token, api_url, timeout)
        self._http = http_client
        self._http_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> Telegram:
        settings = settings or get_settings()
        return cls(
            settings.telegram_bot_token or None,
            http_client,
            settings.telegram_api_url,
            timeout=settings.telegram_http_timeout,
        )

    def http_client(self) -> httpx.Client:
        """Return the transport, building it once on first use."""
        if self._http is None:
            with self._http_lock:
                if self._http is None:
                    self._http = httpx.Client(timeout=self._timeout)
                    self._owns_http = True
        return self._http

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http and self._http is not None and not self._http.is_closed:
            self._http.close()

    def __enter__(self) -> Telegram:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # === Messages ===

    def send_message(self, params: Params) -> httpx.Response:
        """
        sendMessage.

        Usual keys: chat_id, text, parse_mode, disable_web_page_preview,
        disable_notification, reply_to_message_id, reply_markup.
        """
        return self.send_request("sendMessage", params)

    def send_file(self, params: Params, file_type: str, multipart: bool = False) -> httpx.Response:
        """send<FileType>: multipart for uploads, form fields for URLs and file ids."""
        return self.send_request(file_endpoint(file_type), params, multipart)

    def send_location(self, params: Params) -> httpx.Response:
        """sendLocation."""
        return self.send_request("sendLocation", params)

    def send_request(self, endpoint: str, params: Params, multipart: bool = False) -> httpx.Response:
        url = self._endpoint_url(endpoint)
        started = time.perf_counter()
        http_status: int | None = None
        status = "error"
        try:
            fields = _as_mapping(params)
            self._log_call(endpoint, fields, multipart)
            response = self.http_client().post(url, **encode_body(fields, multipart))
            http_status = response.status_code
            if response.is_error:
                response.raise_for_status()
            status = "success"
        except httpx.HTTPStatusError as exc:
            raise self._api_error(endpoint, exc) from exc
        except Exception as exc:
            raise self._transport_error(endpoint, exc) from exc
        finally:
            self._log_result(endpoint, status, started, http_status)
        return response


class AsyncTelegram(_BaseTelegram):
    """
    Async Bot API client: one await per call, same contract as ``Telegram``.

    Example:
        async with AsyncTelegram("123:ABC") as telegram:
            await telegram.send_location({"chat_id": 42, "latitude": 1.0, "longitude": 2.0})
    """

    def __init__(
        self,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        api_url: str | None = None,
        *,
        timeout: float | None = None,
    ):
        super().__init__(token, api_url, timeout)
        self._http = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> AsyncTelegram:
        settings = settings or get_settings()
        return cls(
            settings.telegram_bot_token or None,
            http_client,
            settings.telegram_api_url,
            timeout=settings.telegram_http_timeout,
        )

    def http_client(self) -> httpx.AsyncClient:
        """Return a reused AsyncClient instance (lazy initialization)."""
        # No await between check and assignment, so one event loop never builds two.
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout)
            self._owns_http = True
        return self._http

    async def close(self) -> None:
        if self._owns_http and self._http is not None and not self._http.is_closed:
            await self._http.aclose()

    async def __aenter__(self) -> AsyncTelegram:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # === Messages ===

    async def send_message(self, params: Params) -> httpx.Response:
        """sendMessage."""
        return await self.send_request("sendMessage", params)

    async def send_file(self, params: Params, file_type: str, multipart: bool = False) -> httpx.Response:
        """send<FileType>."""
        return await self.send_request(file_endpoint(file_type), params, multipart)

    async def send_location(self, params: Params) -> httpx.Response:
        """sendLocation."""
        return await self.send_request("sendLocation", params)

    async def send_request(self, endpoint: str, params: Params, multipart: bool = False) -> httpx.Response:
        url = self._endpoint_url(endpoint)
        started = time.perf_counter()
        http_status: int | None = None
        status = "error"
        try:
            fields = _as_mapping(params)
            self._log_call(endpoint, fields, multipart)
            response = await self.http_client().post(url, **encode_body(fields, multipart))
            http_status = response.status_code
            if response.is_error:
                response.raise_for_status()
            status = "success"
        except httpx.HTTPStatusError as exc:
            raise self._api_error(endpoint, exc) from exc
        except Exception as exc:
            raise self._transport_error(endpoint, exc) from exc
        finally:
            self._log_result(endpoint, status, started, http_status)
        return response
