"""Content processing pipeline for relayed messages.

Coordinates link extraction, concurrent shortening and substitution, then
wraps the result with the chat's header and footer. Used for plain text,
single media captions and album captions alike.
"""

import logging

from ..config import config
from ..models import ChatSettings
from ..services.settings_store import SettingsStore
from ..services.shortener import ShortenerClient
from .link_extractor import LinkExtractor
from .text_rewriter import replace_links, wrap_with_header_footer

logger = logging.getLogger(__name__)


class ContentPipeline:
    """Turns raw text into the final relayed body for a chat.

    Responsibilities:
    - Find links in the text
    - Shorten them with the chat's token, preserving order
    - Substitute every occurrence in place
    - Apply header, footer and branding
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        shortener: ShortenerClient,
        extractor: LinkExtractor | None = None,
        powered_by: str | None = None,
    ) -> None:
        self.settings_store = settings_store
        self.shortener = shortener
        self.extractor = extractor or LinkExtractor()
        self.powered_by = powered_by if powered_by is not None else config.shortener.powered_by

    async def shorten_text(self, text: str, settings: ChatSettings) -> str:
        """Replace all links in ``text`` with short links.

        Raises:
            MissingTokenError: If links are present but the chat has no token.
        """
        links = self.extractor.extract_links(text)
        if not links:
            return text

        shortened = await self.shortener.shorten_many(settings.token, links)
        return replace_links(text, links, shortened)

    async def process_text(
        self, chat_id: int | str, text: str | None, settings: ChatSettings | None = None
    ) -> str:
        """Run the full pipeline for one text or caption.

        Args:
            chat_id: Chat whose settings apply.
            text: Source text, may be empty.
            settings: Preloaded settings, read from the store when omitted.

        Returns:
            Final body ready for delivery.
        """
        if settings is None:
            settings = self.settings_store.get_settings(chat_id)

        body = await self.shorten_text(text or "", settings)
        return wrap_with_header_footer(body, settings, self.powered_by)
