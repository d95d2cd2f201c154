"""
HarborBot - Fun API Client
==========================

Outbound HTTP for /joke, /meme and /q.

One aiohttp session is created lazily and reused for the life of the
cog; FunCog.cog_unload() closes it.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from src.core.constants import API_TIMEOUT, JOKE_API_URL, MEME_API_URL, YESNO_API_URL
from src.core.logger import logger


JOKE_BLACKLIST = "nsfw,religious,political,racist,sexist,explicit"


class FunApiError(Exception):
    """An external API was unreachable or answered with an error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FunApiClient:
    """Thin JSON client for the joke, meme and yes/no services."""

    def __init__(self) -> None:
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create persistent HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=API_TIMEOUT),
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        session = await self._get_session()
        try:
            async with session.get(url, params=params) as response:
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("Fun API Request Failed", [
                ("URL", url),
                ("Error", f"{type(e).__name__}: {str(e)[:80]}"),
            ])
            raise FunApiError("Please try again later.") from e

        if not isinstance(data, dict):
            raise FunApiError("Invalid API response")
        return data

    # =========================================================================
    # Endpoints
    # =========================================================================

    async def joke(self, category: str = "Any") -> Dict[str, Any]:
        """
        A safe-for-work joke.

        Returns:
            {"category", "text"} with two-part jokes joined and the punchline spoilered.
        """
        data = await self._get_json(
            JOKE_API_URL.format(category=category),
            params={"blacklistFlags": JOKE_BLACKLIST},
        )
        if data.get("error"):
            raise FunApiError(data.get("message") or "Unknown error")

        if data.get("type") == "single":
            text = data.get("joke", "")
        else:
            text = f"{data.get('setup', '')}\n\n||{data.get('delivery', '')}||"
        return {"category": data.get("category", category), "text": text}

    async def meme(self, subreddit: Optional[str] = None) -> Dict[str, Any]:
        url = MEME_API_URL.format(subreddit=(subreddit or "").strip()).rstrip("/")
        data = await self._get_json(url)
        if data.get("code"):
            raise FunApiError(data.get("message") or "Unknown error")
        return data

    async def yes_no(self) -> str:
        data = await self._get_json(YESNO_API_URL)
        answer = data.get("answer")
        if not answer:
            raise FunApiError("Invalid API response")
        return str(answer).upper()


__all__ = ["FunApiClient", "FunApiError", "JOKE_BLACKLIST"]
