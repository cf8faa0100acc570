"""Media group reassembly.

Telegram delivers each item of an album as a separate update. Fragments are
buffered per album id for a short debounce window that starts with the first
fragment; when it elapses the buffered set is processed once as a single
album. All buffer mutation happens on the event loop thread, so no locking
is involved, and a scheduled flush is never cancelled.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..config import config
from ..models import InboundMessage, MediaItem, OutboundContent, PendingAlbum
from .content_pipeline import ContentPipeline
from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)

FlushCallback = Callable[[], Awaitable[None]]
Scheduler = Callable[[float, FlushCallback], None]


class AsyncioScheduler:
    """Runs a callback once after a delay on the running event loop."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def __call__(self, delay: float, callback: FlushCallback) -> None:
        async def _run_later() -> None:
            await asyncio.sleep(delay)
            await callback()

        task = asyncio.get_running_loop().create_task(_run_later())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


def to_media_item(fragment: InboundMessage) -> MediaItem | None:
    """Convert a fragment to an album entry, None for unsupported media."""
    if fragment.photo_file_id:
        return MediaItem(type="photo", media=fragment.photo_file_id)
    if fragment.video_file_id:
        return MediaItem(type="video", media=fragment.video_file_id)
    return None


class AlbumAggregator:
    """Buffers album fragments and flushes each album once."""

    def __init__(
        self,
        pipeline: ContentPipeline,
        dispatcher: Dispatcher,
        scheduler: Scheduler | None = None,
        debounce_seconds: float | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            pipeline: Content pipeline for the album caption.
            dispatcher: Delivery of the reassembled album.
            scheduler: One-shot delayed callback runner.
            debounce_seconds: Wait between first fragment and flush.
        """
        self.pipeline = pipeline
        self.dispatcher = dispatcher
        self.scheduler = scheduler or AsyncioScheduler()
        self.debounce_seconds = (
            debounce_seconds if debounce_seconds is not None else config.album.debounce_seconds
        )
        self.pending: dict[str, PendingAlbum] = {}

    def add(self, fragment: InboundMessage) -> None:
        """Buffer an album fragment, scheduling the flush on first sight."""
        album_id = fragment.media_group_id
        if not album_id:
            raise ValueError("Fragment has no media_group_id")

        album = self.pending.get(album_id)
        if album is None:
            album = PendingAlbum(album_id=album_id, chat_id=fragment.chat_id)
            self.pending[album_id] = album
            self.scheduler(self.debounce_seconds, lambda: self._flush_safely(album_id))
            logger.debug(f"Started buffering album {album_id} for chat {fragment.chat_id}")

        album.fragments.append(fragment)

    async def _flush_safely(self, album_id: str) -> None:
        try:
            await self.flush(album_id)
        except Exception as e:
            logger.error(f"Failed to process album {album_id}: {e}")

    async def flush(self, album_id: str) -> OutboundContent | None:
        """Process and deliver a buffered album.

        Returns:
            Content handed to the dispatcher, None if nothing was sent.
        """
        album = self.pending.pop(album_id, None)
        if album is None or not album.fragments:
            return None

        caption = next((f.caption for f in album.fragments if f.caption), "")
        final_caption = await self.pipeline.process_text(album.chat_id, caption)

        items = [item for item in map(to_media_item, album.fragments) if item is not None]
        if not items:
            logger.info(f"Album {album_id} has no supported media, skipping")
            return None

        items[0].caption = final_caption
        content = OutboundContent(kind="album", items=items)

        logger.info(f"Flushing album {album_id} with {len(items)} item(s) for chat {album.chat_id}")
        await self.dispatcher.deliver(
            album.chat_id, content, reply_to_message_id=album.fragments[0].message_id
        )
        return content
