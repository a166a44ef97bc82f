from __future__ import annotations

import io
import sys
from pathlib import Path

import httpx
import pytest


ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "sdk"))

from telegram_channel import (  # noqa: E402
    ApiError,
    CouldNotSendNotification,
    FileParams,
    MessageParams,
    MissingToken,
    TransportError,
    build_url,
    describe_error,
    encode_body,
    file_endpoint,
    unwrap_result,
)


@pytest.mark.parametrize(
    ("file_type", "endpoint"),
    [
        ("photo", "sendPhoto"),
        ("document", "sendDocument"),
        ("videoNote", "sendVideoNote"),
        ("Audio", "sendAudio"),
    ],
)
def test_file_endpoint_capitalizes_first_character_only(file_type: str, endpoint: str) -> None:
    assert file_endpoint(file_type) == endpoint


def test_build_url() -> None:
    assert build_url("https://api.telegram.org/bot", "1:A", "sendMessage") == "https://api.telegram.org/bot1:A/sendMessage"


def test_encode_body_form_values() -> None:
    body = encode_body(
        {
            "chat_id": -100,
            "text": "hi",
            "disable_notification": False,
            "reply_to_message_id": None,
            "reply_markup": {"inline_keyboard": [[{"text": "ok", "callback_data": "ok"}]]},
        }
    )
    assert body == {
        "data": {
            "chat_id": "-100",
            "text": "hi",
            "disable_notification": "false",
            "reply_markup": '{"inline_keyboard":[[{"text":"ok","callback_data":"ok"}]]}',
        }
    }


def test_encode_body_multipart_splits_uploads() -> None:
    upload = ("a.png", b"png", "image/png")
    body = encode_body({"chat_id": 1, "photo": upload, "caption": None}, multipart=True)
    assert body == {"files": {"chat_id": (None, "1"), "photo": upload}}


def test_named_constructors() -> None:
    missing = CouldNotSendNotification.telegram_bot_token_not_provided("no token")
    assert isinstance(missing, MissingToken)
    assert str(missing) == "no token"

    cause = httpx.ConnectError("refused")
    transport = CouldNotSendNotification.could_not_communicate_with_telegram(cause)
    assert isinstance(transport, TransportError)
    assert transport.cause is cause
    assert "refused" in str(transport)


def test_unwrap_result_success() -> None:
    response = httpx.Response(200, json={"ok": True, "result": {"message_id": 9}})
    assert unwrap_result(response) == {"message_id": 9}


def test_unwrap_result_ok_false_on_http_200() -> None:
    response = httpx.Response(200, json={"ok": False, "error_code": 429, "description": "Too Many Requests: retry after 5"})

    with pytest.raises(ApiError) as exc_info:
        unwrap_result(response)

    assert exc_info.value.error_code == 429
    assert exc_info.value.status_code == 200
    assert exc_info.value.description == "Too Many Requests: retry after 5"


def test_unwrap_result_invalid_json() -> None:
    with pytest.raises(TransportError):
        unwrap_result(httpx.Response(200, text="<html>oops</html>"))


def test_describe_error() -> None:
    assert describe_error(httpx.Response(400, json={"ok": False, "description": "Bad Request"})) == "Bad Request"
    assert describe_error(httpx.Response(500, json={"ok": False})) == "telegram api error (500)"
    assert describe_error(httpx.Response(502, text="upstream down")) == "upstream down"


def test_message_params_drop_unset_and_keep_extra() -> None:
    params = MessageParams(chat_id="@channel", text="hi", protect_content=True)
    assert params.to_params() == {"chat_id": "@channel", "text": "hi", "protect_content": True}


def test_file_params_for_file() -> None:
    params = FileParams.for_file("photo", "https://example.com/a.jpg", chat_id=5, caption="look")
    assert params.to_params() == {"chat_id": 5, "caption": "look", "photo": "https://example.com/a.jpg"}


def test_encode_body_rejects_uploads_in_form_mode() -> None:
    with pytest.raises(TypeError, match="doc.*photo"):
        encode_body({"chat_id": 1, "photo": b"\x89PNG", "doc": io.BytesIO(b"x")})


def test_to_params_keeps_file_objects() -> None:
    fh = io.BytesIO(b"raw")
    params = FileParams.for_file("video", fh, chat_id=1).to_params()
    assert params == {"chat_id": 1, "video": fh}
