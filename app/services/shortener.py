"""PowerURLShortener API client.

Shortens URLs one request per link and reads account balance. Shortening is
best-effort: any transport, HTTP or payload problem yields the original URL so
the message can still be delivered. Balance lookups raise so the command can
tell the user what went wrong.
"""

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from ..config import ShortenerConfig, config
from ..models import BalanceInfo

logger = logging.getLogger(__name__)


class ShortenerError(Exception):
    """Shortener API could not be reached or returned an unusable response."""


class MissingTokenError(ShortenerError):
    """No API token is configured for the chat."""


class ShortenerClient:
    """Async client for the shortener HTTP API."""

    def __init__(self, shortener_config: ShortenerConfig | None = None):
        """Initialize the client.

        Args:
            shortener_config: API settings, defaults to the global config.
        """
        settings = shortener_config or config.shortener
        self.api_url = settings.api_url
        self.result_fields = list(settings.result_fields)
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout)

    def _extract_short_url(self, payload: Any) -> str | None:
        """Pick the short link from the first known field that has one."""
        if not isinstance(payload, dict):
            return None
        for field in self.result_fields:
            value = payload.get(field)
            if isinstance(value, str) and value:
                return value
        return None

    async def shorten(self, token: str, url: str, session: aiohttp.ClientSession) -> str:
        """Shorten a single URL.

        Args:
            token: Chat's API token.
            url: URL to shorten.
            session: HTTP session for the request.

        Returns:
            Shortened URL, or the original URL if shortening failed.
        """
        params = {"api": token, "url": url}
        try:
            async with session.get(self.api_url, params=params, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    logger.error(
                        f"Shortener API error for {url}: status {response.status}, body {body[:200]}"
                    )
                    return url

                payload = await response.json(content_type=None)

        except asyncio.TimeoutError:
            logger.warning(f"Shortener API timed out for {url}")
            return url
        except Exception as e:
            logger.error(f"Error shortening URL {url}: {e}")
            return url

        short_url = self._extract_short_url(payload)
        if short_url is None:
            logger.warning(f"Shortener response for {url} has no short link: {payload!r}")
            return url
        return short_url

    async def shorten_many(
        self, token: str | None, urls: list[str], session: aiohttp.ClientSession | None = None
    ) -> list[str]:
        """Shorten several URLs concurrently.

        Args:
            token: Chat's API token.
            urls: URLs in the order they appear in the text.
            session: Optional HTTP session, a temporary one is opened otherwise.

        Returns:
            Short links paired by index with ``urls``.

        Raises:
            MissingTokenError: If no token is configured.
        """
        if not token:
            raise MissingTokenError("API token is not set")
        if not urls:
            return []

        close_session = False
        if session is None:
            session = aiohttp.ClientSession(timeout=self.timeout)
            close_session = True

        try:
            results = await asyncio.gather(
                *[self.shorten(token, url, session) for url in urls], return_exceptions=True
            )
        finally:
            if close_session:
                await session.close()

        shortened: list[str] = []
        for url, result in zip(urls, results):
            if isinstance(result, BaseException) or not result:
                shortened.append(url)
            else:
                shortened.append(result)

        logger.info(f"Shortened {len(urls)} link(s)")
        return shortened

    async def get_balance(
        self, token: str, session: aiohttp.ClientSession | None = None
    ) -> BalanceInfo:
        """Fetch account balance and click counters.

        Args:
            token: Chat's API token.
            session: Optional HTTP session, a temporary one is opened otherwise.

        Returns:
            BalanceInfo as reported by the API.

        Raises:
            ShortenerError: On network, HTTP or decoding failures.
        """
        params = {"api": token, "action": "userinfo"}

        close_session = False
        if session is None:
            session = aiohttp.ClientSession(timeout=self.timeout)
            close_session = True

        try:
            async with session.get(self.api_url, params=params, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    raise ShortenerError(f"HTTP {response.status}: {body[:200]}")
                payload = await response.json(content_type=None)
        except ShortenerError:
            raise
        except Exception as e:
            raise ShortenerError(str(e)) from e
        finally:
            if close_session:
                await session.close()

        logger.debug(f"Shortener userinfo response: {payload!r}")
        if not isinstance(payload, dict):
            raise ShortenerError("Unexpected userinfo payload")
        try:
            return BalanceInfo.model_validate(payload)
        except ValidationError as e:
            raise ShortenerError(f"Malformed userinfo payload: {e}") from e
