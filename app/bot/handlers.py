"""Telegram bot handlers.

Thin command handlers that read and write the per-chat settings store, plus
the main message handler that relays text, single media and albums through
the content pipeline. Components are resolved from the DI container so tests
can substitute fakes.
"""

import logging

from telegram import Message, Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes
from telegram.helpers import escape_markdown

from ..core.container import container
from ..models import InboundMessage, OutboundContent
from ..services.shortener import ShortenerError
from .messages import (
    BALANCE_API_ERROR,
    BALANCE_API_ERROR_DEFAULT,
    BALANCE_LINE,
    BALANCE_UNAVAILABLE,
    CHANNEL_CURRENT,
    CHANNEL_INVALID,
    CHANNEL_NONE,
    CHANNEL_NOT_SET,
    CHANNEL_REMOVED,
    CHANNEL_SET,
    FOOTER_SAVED,
    FOOTER_USAGE,
    HEADER_SAVED,
    HEADER_USAGE,
    START_MESSAGE,
    TOKEN_MISSING,
    TOKEN_SAVED,
    TOKEN_USAGE,
)
from .utils import command_argument, inbound_from_telegram, normalize_channel

logger = logging.getLogger(__name__)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command.

    Sends welcome message with usage instructions addressed to the user.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if not update.message:
        return

    user = update.effective_user
    name = " ".join(filter(None, [user.first_name, user.last_name])) if user else ""
    await update.message.reply_text(
        START_MESSAGE.format(name=escape_markdown(name or "there", version=1)),
        parse_mode=ParseMode.MARKDOWN,
        disable_web_page_preview=True,
    )


async def set_token(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /api command storing the chat's shortener token."""
    message = update.message
    if message is None:
        return

    token = command_argument(message.text)
    if not token:
        await message.reply_text(TOKEN_USAGE, parse_mode=ParseMode.MARKDOWN)
        return

    container.settings_store().set(message.chat_id, "token", token)
    logger.info(f"API token updated for chat {message.chat_id}")
    await message.reply_text(TOKEN_SAVED)


async def _save_text_setting(message: Message, key: str, usage: str, saved: str) -> None:
    text = command_argument(message.text)
    if not text:
        await message.reply_text(usage)
        return

    # Header/footer text is stored as-is, links in it are not shortened
    container.settings_store().set(message.chat_id, key, text)
    await message.reply_text(saved.format(text=text), disable_web_page_preview=True)


async def add_header(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add_header command."""
    if update.message:
        await _save_text_setting(update.message, "header", HEADER_USAGE, HEADER_SAVED)


async def add_footer(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add_footer command."""
    if update.message:
        await _save_text_setting(update.message, "footer", FOOTER_USAGE, FOOTER_SAVED)


async def set_channel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /set_channel command.

    Accepts a numeric channel id, an @username, or a public/private t.me link.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    message = update.message
    if message is None:
        return

    channel = normalize_channel(command_argument(message.text))
    if channel is None:
        await message.reply_text(CHANNEL_INVALID, parse_mode=ParseMode.MARKDOWN)
        return

    container.settings_store().set(message.chat_id, "channel", channel)
    logger.info(f"Chat {message.chat_id} set auto-post channel {channel}")
    await message.reply_text(CHANNEL_SET.format(channel=channel), parse_mode=ParseMode.MARKDOWN)


async def remove_channel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /remove_channel command."""
    message = update.message
    if message is None:
        return

    removed = container.settings_store().delete(message.chat_id, "channel")
    await message.reply_text(CHANNEL_REMOVED if removed else CHANNEL_NOT_SET)


async def my_channel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /my_channel command."""
    message = update.message
    if message is None:
        return

    channel = container.settings_store().get(message.chat_id, "channel")
    if channel:
        await message.reply_text(
            CHANNEL_CURRENT.format(channel=channel), parse_mode=ParseMode.MARKDOWN
        )
    else:
        await message.reply_text(CHANNEL_NONE)


async def balance(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /balance command.

    Queries the shortener API for the account balance and click counter.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    message = update.message
    if message is None:
        return

    token = container.settings_store().get(message.chat_id, "token")
    if not token:
        await message.reply_text(TOKEN_MISSING, parse_mode=ParseMode.MARKDOWN)
        return

    try:
        logger.info(f"Fetching balance for chat {message.chat_id}")
        info = await container.shortener().get_balance(token)
    except ShortenerError as e:
        logger.error(f"Error fetching balance for chat {message.chat_id}: {e}")
        await message.reply_text(BALANCE_UNAVAILABLE)
        return

    if info.is_success:
        await message.reply_text(BALANCE_LINE.format(balance=info.balance, clicks=info.clicks))
    else:
        await message.reply_text(
            BALANCE_API_ERROR.format(message=info.message or BALANCE_API_ERROR_DEFAULT)
        )


def _single_content(inbound: InboundMessage, body: str) -> OutboundContent:
    if inbound.photo_file_id:
        return OutboundContent(kind="photo", media=inbound.photo_file_id, caption=body)
    if inbound.video_file_id:
        return OutboundContent(kind="video", media=inbound.video_file_id, caption=body)
    return OutboundContent(kind="text", text=body)


async def relay_message(inbound: InboundMessage) -> OutboundContent | None:
    """Process one inbound message and deliver the result.

    Args:
        inbound: Normalized message.

    Returns:
        Delivered content, or None when the message was buffered, blocked or ignored.
    """
    settings = container.settings_store().get_settings(inbound.chat_id)
    dispatcher = container.dispatcher()

    if not settings.token:
        warning = OutboundContent(kind="text", text=TOKEN_MISSING, parse_mode=ParseMode.MARKDOWN)
        await dispatcher.send(inbound.chat_id, warning)
        return None

    if inbound.media_group_id:
        container.album_aggregator().add(inbound)
        return None

    is_media = bool(inbound.photo_file_id or inbound.video_file_id)
    pipeline = container.content_pipeline()

    if inbound.is_forwarded and is_media:
        body = await pipeline.process_text(inbound.chat_id, inbound.caption, settings)
    elif pipeline.extractor.has_links(inbound.content):
        body = await pipeline.process_text(inbound.chat_id, inbound.content, settings)
    elif inbound.text and inbound.text.strip() and not inbound.text.startswith("/"):
        body = await pipeline.process_text(inbound.chat_id, inbound.text, settings)
    else:
        logger.debug(f"Nothing to relay for message {inbound.message_id} in chat {inbound.chat_id}")
        return None

    content = _single_content(inbound, body)
    await dispatcher.deliver(inbound.chat_id, content, reply_to_message_id=inbound.message_id)
    return content


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle text, photo and video messages.

    Main handler that shortens links, applies the chat's header and footer and
    relays the result to the chat and its auto-post channel.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if not update.message:
        return

    await relay_message(inbound_from_telegram(update.message))
