"""Outbound delivery of processed content.

Sends text, single media and albums through the Telegram Bot API to the chat
the content came from and mirrors it to the chat's broadcast channel when
one is configured. Each destination is delivered independently: a failure in
one is logged and never prevents delivery to the other.
"""

import logging
from typing import Any, Literal

from telegram import Bot, InputMediaPhoto, InputMediaVideo
from telegram.error import BadRequest, Forbidden, TelegramError

from ..models import OutboundContent
from ..services.settings_store import SettingsStore
from .messages import CHANNEL_DELIVERY_FAILED

logger = logging.getLogger(__name__)

DeliveryStatus = Literal["sent", "chat_not_found", "failed", "skipped"]


def _is_chat_not_found(error: TelegramError) -> bool:
    return isinstance(error, BadRequest) and "chat not found" in error.message.lower()


class Dispatcher:
    """Delivers OutboundContent to Telegram chats."""

    def __init__(self, settings_store: SettingsStore, bot: Bot | None = None) -> None:
        """Initialize dispatcher.

        Args:
            settings_store: Source of each chat's broadcast channel.
            bot: Telegram bot, may be attached later with ``attach_bot``.
        """
        self.settings_store = settings_store
        self.bot = bot

    def attach_bot(self, bot: Bot) -> None:
        self.bot = bot

    async def _send_by_kind(
        self, bot: Bot, destination: int | str, content: OutboundContent, options: dict[str, Any]
    ) -> None:
        if content.kind == "text":
            await bot.send_message(chat_id=destination, text=content.text or "", **options)
        elif content.kind == "photo":
            await bot.send_photo(
                chat_id=destination, photo=content.media, caption=content.caption, **options
            )
        elif content.kind == "video":
            await bot.send_video(
                chat_id=destination, video=content.media, caption=content.caption, **options
            )
        elif content.kind == "album":
            media = [
                InputMediaPhoto(media=item.media, caption=item.caption)
                if item.type == "photo"
                else InputMediaVideo(media=item.media, caption=item.caption)
                for item in content.items
            ]
            await bot.send_media_group(chat_id=destination, media=media, **options)
        else:
            logger.warning(f"Unknown content kind {content.kind} for chat {destination}")

    async def send(
        self,
        destination: int | str | None,
        content: OutboundContent,
        reply_to_message_id: int | None = None,
    ) -> DeliveryStatus:
        """Send content to one destination, catching delivery errors.

        Args:
            destination: Chat id, @username or invite hash.
            content: Content to deliver.
            reply_to_message_id: Message to thread the reply under.

        Returns:
            Outcome of the delivery attempt.
        """
        if not destination:
            logger.warning(f"Attempted to send {content.kind} to an empty destination")
            return "skipped"
        if self.bot is None:
            raise RuntimeError("Dispatcher has no bot attached")

        options: dict[str, Any] = {}
        if reply_to_message_id is not None:
            options["reply_to_message_id"] = reply_to_message_id
        if content.parse_mode:
            options["parse_mode"] = content.parse_mode

        try:
            await self._send_by_kind(self.bot, destination, content, options)
        except TelegramError as e:
            if _is_chat_not_found(e):
                logger.warning(
                    f"Chat {destination} not found: wrong id, bot blocked or missing admin rights"
                )
                return "chat_not_found"
            if isinstance(e, Forbidden):
                logger.warning(f"Bot is not allowed to post {content.kind} to {destination}: {e}")
            else:
                logger.error(f"Failed to send {content.kind} to chat {destination}: {e}")
            return "failed"

        logger.debug(f"Sent {content.kind} to chat {destination}")
        return "sent"

    async def deliver(
        self, chat_id: int, content: OutboundContent, reply_to_message_id: int | None = None
    ) -> dict[str, DeliveryStatus]:
        """Deliver content to the origin chat and the chat's broadcast channel.

        A missing broadcast channel is reported to the user in their own chat,
        never inside the channel.

        Returns:
            Delivery status keyed by ``"origin"`` and, if configured, ``"channel"``.
        """
        statuses: dict[str, DeliveryStatus] = {
            "origin": await self.send(chat_id, content, reply_to_message_id=reply_to_message_id)
        }

        channel = self.settings_store.get(chat_id, "channel")
        if channel:
            statuses["channel"] = await self.send(channel, content)
            if statuses["channel"] == "chat_not_found":
                notice = OutboundContent(kind="text", text=CHANNEL_DELIVERY_FAILED)
                await self.send(chat_id, notice)

        return statuses
