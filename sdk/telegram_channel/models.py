"""Typed parameter builders for the supported Bot API methods.

The client accepts plain mappings; these models are an optional convenience.
Unknown keys are kept so newer Bot API fields can be passed without a release.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Literal

from pydantic import BaseModel, ConfigDict


ParseMode = Literal["HTML", "MarkdownV2", "Markdown"]


def is_upload(value: Any) -> bool:
    """Bytes, a binary file object or a ``(filename, content[, type])`` tuple."""
    return isinstance(value, (bytes, tuple)) or hasattr(value, "read")


def dump_params(model: BaseModel) -> dict[str, Any]:
    """``model_dump`` that hands uploads through as the original objects."""
    params = model.model_dump(exclude_none=True)
    # model_dump wraps file objects into serialization iterators.
    params.update({key: value for key, value in model if is_upload(value)})
    return params


class _Params(BaseModel):
    model_config = ConfigDict(extra="allow")

    def to_params(self) -> dict[str, Any]:
        """Plain mapping without unset fields."""
        return dump_params(self)


class MessageParams(_Params):
    """sendMessage."""
    chat_id: int | str
    text: str
    parse_mode: ParseMode | None = None
    disable_web_page_preview: bool | None = None
    disable_notification: bool | None = None
    reply_to_message_id: int | None = None
    message_thread_id: int | None = None
    reply_markup: dict[str, Any] | str | None = None


class FileParams(_Params):
    """
    sendPhoto / sendDocument / sendVideo / ...

    The file itself goes under the key named after the file type
    (``photo``, ``document``...), either as a URL / file_id string or,
    for multipart uploads, as bytes, an open binary file or a
    ``(filename, content, content_type)`` tuple.
    """
    chat_id: int | str
    caption: str | None = None
    parse_mode: ParseMode | None = None
    disable_notification: bool | None = None
    reply_to_message_id: int | None = None
    message_thread_id: int | None = None
    reply_markup: dict[str, Any] | str | None = None

    @classmethod
    def for_file(
        cls,
        file_type: str,
        file: str | bytes | BinaryIO | tuple[Any, ...],
        **fields: Any,
    ) -> FileParams:
        return cls(**{file_type: file}, **fields)


class LocationParams(_Params):
    """sendLocation."""
    chat_id: int | str
    latitude: float
    longitude: float
    horizontal_accuracy: float | None = None
    live_period: int | None = None
    heading: int | None = None
    proximity_alert_radius: int | None = None
    disable_notification: bool | None = None
    reply_to_message_id: int | None = None
    message_thread_id: int | None = None
    reply_markup: dict[str, Any] | str | None = None
