"""Link detection in message text and captions.

Provides the helper used by the content pipeline and album aggregator to find
every URL-like substring in free-form text. All public methods are fully typed
to support strict mypy settings.
"""

from __future__ import annotations

import logging
import re
from typing import Final

logger = logging.getLogger(__name__)


class LinkExtractor:
    """Finds links that should be sent through the shortener."""

    URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"(https?://\S+|www\.\S+)")

    def extract_links(self, text: str | None) -> list[str]:
        """Extract links from free-form text.

        Matches keep their left-to-right order and repeat when the same link
        occurs several times, so results can be paired by index with the
        shortener output.
        """
        if not text:
            return []

        links = self.URL_PATTERN.findall(text)
        logger.debug("Extracted %d links from text", len(links))
        return links

    def has_links(self, text: str | None) -> bool:
        return bool(text) and self.URL_PATTERN.search(text or "") is not None


link_extractor = LinkExtractor()
