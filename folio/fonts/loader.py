"""Web font loading with a per-loader cache of loaded families."""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Protocol

import httpx

from folio.fonts.catalog import (
    DEFAULT_FONT,
    DEFAULT_WEIGHT,
    FONT_CONFIG,
    POPULAR_FONTS,
    FontConfig,
    build_stylesheet_url,
)

logger = logging.getLogger(__name__)

CUSTOMIZATION_WEIGHTS = (300, 400, 500, 600, 700)
PRELOAD_WEIGHTS = (400, 600, 700)


class FontLoadError(Exception):
    """Raised when a font stylesheet could not be fetched."""

    def __init__(self, family: str, reason: str = ""):
        self.family = family
        message = f"Failed to load font: {family}"
        super().__init__(f"{message} ({reason})" if reason else message)


class StylesheetFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class HttpxStylesheetFetcher:
    """Fetch font stylesheets over HTTP with a shared httpx client."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def fetch(self, url: str) -> str:
        response = await self._client.get(url)
        response.raise_for_status()
        return response.text


class FontLoader:
    """Loads font stylesheets and remembers which families succeeded.

    Each instance owns its loaded set, so tests and separate apps never share
    state. Requests for a family that is still in flight are not merged: a
    second call before the first finishes fetches the stylesheet again.
    """

    def __init__(
        self,
        fetcher: StylesheetFetcher,
        base_url: str = "https://fonts.googleapis.com/css2",
        catalog: Optional[Mapping[str, FontConfig]] = None,
    ):
        self._fetcher = fetcher
        self._base_url = base_url
        self._catalog = FONT_CONFIG if catalog is None else catalog
        self._loaded: set[str] = set()
        self._links: list[str] = []

    @property
    def catalog(self) -> Mapping[str, FontConfig]:
        return self._catalog

    @property
    def links(self) -> list[str]:
        """Stylesheet URLs requested so far, in request order."""
        return list(self._links)

    def is_loaded(self, name: str) -> bool:
        return name in self._loaded

    def loaded_fonts(self) -> list[str]:
        return sorted(self._loaded)

    def clear(self) -> None:
        """Forget every loaded family and requested stylesheet."""
        self._loaded.clear()
        self._links.clear()

    async def load(self, name: str, weights: Iterable[int] = (DEFAULT_WEIGHT,)) -> None:
        """Load one family, raising FontLoadError when the fetch fails."""
        if name == DEFAULT_FONT or name in self._loaded:
            return

        config = self._catalog.get(name)
        if config is None:
            logger.warning(f'Font "{name}" not found in configuration')
            return

        url = build_stylesheet_url(self._base_url, name, config, list(weights))
        self._links.append(url)

        try:
            await self._fetcher.fetch(url)
        except httpx.HTTPError as e:
            logger.error(f"Failed to load font: {name}: {e}")
            raise FontLoadError(name, str(e)) from e

        self._loaded.add(name)
        logger.info(f"Loaded font: {name}")

    async def load_many(
        self, names: Iterable[str], weights: Iterable[int] = (DEFAULT_WEIGHT,)
    ) -> list[str]:
        """Load families concurrently; one failure never blocks the rest.

        Returns the names that failed to load.
        """
        names = list(names)
        weights = list(weights)
        results = await asyncio.gather(
            *(self.load(name, weights) for name in names),
            return_exceptions=True,
        )

        failed = []
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error(f"Some fonts failed to load: {result}")
                failed.append(name)

        if not failed:
            logger.info("All fonts loaded successfully")
        return failed

    async def load_from_customizations(self, customizations: Optional[Mapping[str, Any]]) -> list[str]:
        """Load every font family referenced in ``customizations.fonts``."""
        fonts = (customizations or {}).get("fonts")
        if not isinstance(fonts, Mapping):
            return []

        families = []
        for family in fonts.values():
            if isinstance(family, str) and family and family != DEFAULT_FONT and family not in families:
                families.append(family)

        if not families:
            return []
        return await self.load_many(families, CUSTOMIZATION_WEIGHTS)

    async def preload_popular_fonts(self) -> list[str]:
        return await self.load_many(POPULAR_FONTS, PRELOAD_WEIGHTS)
