"""
Google Fonts catalogue proxy.

The public metadata endpoint needs no key; the Web Fonts API is only tried
when it fails and ``GOOGLE_FONTS_API_KEY`` is configured. Results are kept in
process for ``GOOGLE_FONTS_CACHE_SECONDS``.
"""
import asyncio
import json
import logging
import time
from functools import lru_cache
from typing import Any, Callable

import httpx

from brandkeeper.core.errors import UpstreamFailure
from brandkeeper.core.fonts.schemas import FontRead
from brandkeeper.settings import get_settings

logger = logging.getLogger(__name__)

METADATA_URL = "https://fonts.google.com/metadata/fonts"
WEBFONTS_URL = "https://www.googleapis.com/webfonts/v1/webfonts"
DEFAULT_CATEGORY = "sans-serif"
# fonts.google.com prefixes some JSON responses with an anti-XSSI guard
_XSSI_PREFIX = ")]}'"


def parse_metadata(payload: dict[str, Any]) -> list[FontRead]:
    return [
        FontRead(
            family=item["family"],
            variants=list((item.get("fonts") or {}).keys()),
            category=item.get("category") or DEFAULT_CATEGORY,
        )
        for item in payload.get("familyMetadataList") or []
        if item.get("family")
    ]


def parse_webfonts(payload: dict[str, Any]) -> list[FontRead]:
    return [
        FontRead(
            family=item["family"],
            variants=list(item.get("variants") or []),
            category=item.get("category") or DEFAULT_CATEGORY,
        )
        for item in payload.get("items") or []
        if item.get("family")
    ]


def _load_json(text: str) -> dict[str, Any]:
    text = text.lstrip()
    if text.startswith(_XSSI_PREFIX):
        text = text[len(_XSSI_PREFIX):]
    return json.loads(text)


class FontCatalogue:
    def __init__(
        self,
        ttl_seconds: int,
        api_key: str = "",
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.api_key = api_key
        self._client_factory = client_factory or (lambda: httpx.AsyncClient(timeout=15.0))
        self._clock = clock
        self._lock = asyncio.Lock()
        self._fonts: list[FontRead] | None = None
        self._fetched_at = 0.0

    def _fresh(self) -> bool:
        return self._fonts is not None and self._clock() - self._fetched_at < self.ttl_seconds

    async def get_fonts(self) -> list[FontRead]:
        if self._fresh():
            return self._fonts
        async with self._lock:
            if not self._fresh():
                self._fonts = await self._fetch()
                self._fetched_at = self._clock()
                logger.info("Loaded %d fonts from Google Fonts", len(self._fonts))
        return self._fonts

    async def _fetch(self) -> list[FontRead]:
        async with self._client_factory() as client:
            try:
                response = await client.get(
                    METADATA_URL,
                    headers={"Accept": "application/json", "User-Agent": "Mozilla/5.0 (compatible; BrandKeeper/1.0)"},
                )
                if response.status_code == 200:
                    return parse_metadata(_load_json(response.text))
                logger.warning("Google Fonts metadata returned %s", response.status_code)
            except (httpx.RequestError, ValueError) as exc:
                logger.warning("Google Fonts metadata unavailable: %s", exc)

            if self.api_key:
                try:
                    response = await client.get(
                        WEBFONTS_URL,
                        params={"sort": "popularity", "key": self.api_key},
                        headers={"Accept": "application/json"},
                    )
                    if response.status_code == 200:
                        return parse_webfonts(response.json())
                    logger.warning("Google Web Fonts API returned %s", response.status_code)
                except (httpx.RequestError, ValueError) as exc:
                    logger.warning("Google Web Fonts API unavailable: %s", exc)

        raise UpstreamFailure("No se pudo obtener la lista de fuentes")


@lru_cache
def get_font_catalogue() -> FontCatalogue:
    settings = get_settings()
    return FontCatalogue(settings.GOOGLE_FONTS_CACHE_SECONDS, settings.GOOGLE_FONTS_API_KEY)
