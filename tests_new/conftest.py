"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including environment setup,
an in-memory settings store, mocked Telegram bot and HTTP session, a manual
scheduler for album flushing and a DI container wired with these fakes.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
from dependency_injector import providers
from telegram import Bot, Chat, Message, MessageOriginUser, PhotoSize, User, Video

from app.bot.album_aggregator import AlbumAggregator
from app.core.container import Container
from app.services.settings_store import InMemorySettingsStore
from app.services.shortener import ShortenerClient

# Test constants
TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "test_bot_token_placeholder")
TEST_CHAT_ID = 100
TEST_CHANNEL = "@relay_channel"
POWERED_BY = "✅ Powered by PowerURLShortener.link"


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        'BOT_TOKEN': TEST_BOT_TOKEN,
        'ENVIRONMENT': 'test',
        'LOG_LEVEL': 'DEBUG'
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


class FakeScheduler:
    """Records scheduled callbacks so tests decide when timers fire."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))

    async def fire_all(self):
        calls, self.calls = self.calls, []
        for _, callback in calls:
            await callback()


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture
def memory_store():
    """Settings store with one fully configured chat."""
    return InMemorySettingsStore(
        {
            str(TEST_CHAT_ID): {
                "token": "user-api-token",
                "header": "HEAD\n",
                "footer": "FOOT",
                "channel": TEST_CHANNEL,
            }
        }
    )


@pytest.fixture
def mock_bot():
    """Mock Telegram bot with async send methods."""
    bot = AsyncMock(spec=Bot)
    return bot


@pytest.fixture
def mock_shortener():
    """Shortener that maps each link to a predictable short link."""
    shortener = AsyncMock(spec=ShortenerClient)

    def _shorten_many(token, urls, session=None):
        return [f"https://s.ly/{index}" for index, _ in enumerate(urls, start=1)]

    shortener.shorten_many.side_effect = _shorten_many
    return shortener


@pytest.fixture
def mock_http_session():
    """Mock aiohttp.ClientSession for testing HTTP requests."""
    session = AsyncMock(spec=aiohttp.ClientSession)

    # Mock successful response
    response = AsyncMock()
    response.status = 200
    response.text = AsyncMock(return_value="")
    response.json = AsyncMock(return_value={"status": "success", "shortenedUrl": "https://s.ly/1"})

    session.get.return_value.__aenter__.return_value = response

    return session


@pytest.fixture
def app_container(memory_store, mock_bot, mock_shortener, fake_scheduler):
    """Container wired with fakes and patched into the handlers module."""
    container = Container()
    container.config.from_dict(
        {
            "storage": {"db_path": "unused.json"},
            "shortener": {"powered_by": POWERED_BY},
            "album": {"debounce_seconds": 0.5},
        }
    )
    container.settings_store.override(providers.Object(memory_store))
    container.shortener.override(providers.Object(mock_shortener))
    container.album_aggregator.override(
        providers.Singleton(
            AlbumAggregator,
            pipeline=container.content_pipeline,
            dispatcher=container.dispatcher,
            scheduler=fake_scheduler,
            debounce_seconds=0.5,
        )
    )
    container.dispatcher().attach_bot(mock_bot)

    with patch("app.bot.handlers.container", container):
        yield container


def make_telegram_message(
    *,
    chat_id=TEST_CHAT_ID,
    message_id=1,
    text=None,
    caption=None,
    photo_id=None,
    video_id=None,
    media_group_id=None,
    forwarded=False,
):
    """Build a real telegram.Message for adapter and handler tests."""
    now = datetime.now(timezone.utc)
    photo = (
        [PhotoSize(f"{photo_id}-small", "u-small", 90, 90), PhotoSize(photo_id, "u-large", 1280, 1280)]
        if photo_id
        else None
    )
    video = Video(video_id, "u-video", 640, 480, 10) if video_id else None
    forward_origin = (
        MessageOriginUser(date=now, sender_user=User(id=7, first_name="Origin", is_bot=False))
        if forwarded
        else None
    )
    return Message(
        message_id=message_id,
        date=now,
        chat=Chat(id=chat_id, type=Chat.PRIVATE),
        text=text,
        caption=caption,
        photo=photo,
        video=video,
        media_group_id=media_group_id,
        forward_origin=forward_origin,
    )


@pytest.fixture
def command_update():
    """Factory for mocked command updates in the style of Telegram handlers."""
    def _make(text, chat_id=TEST_CHAT_ID):
        update = MagicMock()
        update.message.text = text
        update.message.chat_id = chat_id
        update.message.reply_text = AsyncMock()
        update.effective_user = MagicMock(first_name="Test", last_name="User", id=chat_id)
        return update

    return _make


@pytest.fixture
def telegram_message():
    """Factory fixture around make_telegram_message."""
    return make_telegram_message
