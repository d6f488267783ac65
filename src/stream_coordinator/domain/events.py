"""Pydantic models for inbound Socket.IO event payloads."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class StreamEventPayload(BaseModel):
    """Base payload addressing a single stream."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    stream_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("streamId", "sessionId", "stream_id"),
    )


class CreateStreamPayload(StreamEventPayload):
    """Payload for create_stream."""

    email: str = Field(min_length=1)
    title: str | None = None
    category: str = Field(min_length=1)
    thumbnail_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("thumbnailUrl", "thumbnail_url"),
    )

    @field_validator("title", "thumbnail_url")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class JoinStreamPayload(StreamEventPayload):
    """Payload for join_stream."""

    email: str | None = None


class LeaveStreamPayload(StreamEventPayload):
    """Payload for leave_stream."""


class StopStreamPayload(StreamEventPayload):
    """Payload for stop_stream."""


class StreamMessagePayload(StreamEventPayload):
    """Payload for the generic stream_message relay."""

    message: str


class ChatMessagePayload(StreamEventPayload):
    """Payload for the structured chatMessage relay."""

    id: str | int
    user: str
    text: str
    is_system: bool = Field(
        default=False, validation_alias=AliasChoices("isSystem", "is_system")
    )
    timestamp: str | None = None


class SignalPayload(BaseModel):
    """Opaque point-to-point negotiation payload."""

    model_config = ConfigDict(extra="ignore")

    to: str = Field(min_length=1)
    data: Any = None
