"""Data models for the shortener relay bot.

Defines Pydantic models for all data structures used throughout the application
including per-chat settings, normalized inbound messages, outbound content
handed to the dispatcher, and shortener API responses.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

SETTINGS_KEYS = ("token", "header", "footer", "channel")


def setting_text(value: Any) -> str | None:
    """Normalize a raw store value to text, None for empty or non-scalar values."""
    if value is None or value == "" or isinstance(value, (dict, list)):
        return None
    return str(value)


class ChatSettings(BaseModel):
    """Per-chat configuration record.

    Attributes:
        token: PowerURLShortener API credential, None disables shortening.
        header: Text prepended to processed content.
        footer: Text appended to processed content before the branding line.
        channel: Broadcast target (numeric id, @username or +invite hash).
    """

    token: str | None = None
    header: str | None = None
    footer: str | None = None
    channel: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any] | None) -> "ChatSettings":
        """Build settings from a raw store record, ignoring unknown keys."""
        if not record:
            return cls()
        return cls(**{key: setting_text(record.get(key)) for key in SETTINGS_KEYS})


class InboundMessage(BaseModel):
    """Platform-independent view of a received message.

    Attributes:
        chat_id: Origin chat identifier.
        message_id: Message id, used for reply threading.
        text: Message text for plain messages.
        caption: Caption for media messages.
        photo_file_id: File id of the largest photo size.
        video_file_id: File id of the video.
        media_group_id: Album identifier shared by all fragments.
        is_forwarded: Whether the message was forwarded from elsewhere.
    """

    chat_id: int
    message_id: int
    text: str | None = None
    caption: str | None = None
    photo_file_id: str | None = None
    video_file_id: str | None = None
    media_group_id: str | None = None
    is_forwarded: bool = False

    @property
    def content(self) -> str:
        """Text or caption, whichever the message carries."""
        return self.text or self.caption or ""


class MediaItem(BaseModel):
    """Single entry of an outbound album."""

    type: Literal["photo", "video"]
    media: str
    caption: str | None = None


class OutboundContent(BaseModel):
    """Final content ready for delivery.

    Attributes:
        kind: Delivery method selector.
        text: Message body for text content.
        media: File id for single photo/video content.
        caption: Caption for single photo/video content.
        items: Album entries, caption only on the first.
        parse_mode: Telegram formatting mode for text and captions.
    """

    kind: Literal["text", "photo", "video", "album"]
    text: str | None = None
    media: str | None = None
    caption: str | None = None
    items: list[MediaItem] = Field(default_factory=list)
    parse_mode: str | None = None


class BalanceInfo(BaseModel):
    """Userinfo response from the shortener API."""

    status: str | None = None
    balance: str | float | None = None
    clicks: int | str | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == "success"


class PendingAlbum(BaseModel):
    """Fragments buffered for one media group during the debounce window."""

    album_id: str
    chat_id: int
    fragments: list[InboundMessage] = Field(default_factory=list)
