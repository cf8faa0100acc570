"""Bot utility functions.

Provides helpers shared by the command handlers: conversion of Telegram
messages into the pipeline's inbound model, command argument parsing and
broadcast channel normalization.
"""

import logging
import re

from telegram import Message

from ..models import InboundMessage

logger = logging.getLogger(__name__)

TELEGRAM_LINK_PATTERN = re.compile(
    r"(?:https?://)?(?:t\.me|telegram\.me)/([a-zA-Z0-9_+-]+)", re.IGNORECASE
)
CHANNEL_PREFIXES = ("-100", "@", "+")


def normalize_channel(raw: str) -> str | None:
    """Normalize user input into a broadcast target identifier.

    Public links (``t.me/name``) become ``@name`` and private invite links
    (``t.me/+hash``) become ``+hash``. Numeric channel ids and ``@username``
    values pass through unchanged.

    Args:
        raw: Channel id, username or Telegram link as typed by the user.

    Returns:
        Normalized identifier, or None if the input is not a valid target.
    """
    channel = raw.strip()

    match = TELEGRAM_LINK_PATTERN.search(channel)
    if match:
        extracted = match.group(1)
        if extracted.startswith("+"):
            channel = extracted
            logger.info(f"Extracted private channel invite hash from link: {channel}")
        else:
            channel = f"@{extracted}"
            logger.info(f"Extracted public channel username from link: {channel}")

    if not channel.startswith(CHANNEL_PREFIXES):
        return None
    return channel


def command_argument(text: str | None) -> str:
    """Return everything after the command word, keeping inner newlines."""
    if not text:
        return ""
    parts = text.split(maxsplit=1)
    return parts[1].strip() if len(parts) > 1 else ""


def inbound_from_telegram(message: Message) -> InboundMessage:
    """Convert a Telegram message into the pipeline's inbound model.

    Args:
        message: Message received from Telegram.

    Returns:
        InboundMessage with the largest photo size and forward marker resolved.
    """
    photo_file_id = message.photo[-1].file_id if message.photo else None
    video_file_id = message.video.file_id if message.video else None

    return InboundMessage(
        chat_id=message.chat_id,
        message_id=message.message_id,
        text=message.text,
        caption=message.caption,
        photo_file_id=photo_file_id,
        video_file_id=video_file_id,
        media_group_id=message.media_group_id,
        is_forwarded=message.forward_origin is not None,
    )
