"""Unit tests for the font loader cache."""

import asyncio

import httpx
import pytest

from folio.fonts.catalog import FontConfig
from folio.fonts.loader import FontLoader, FontLoadError, HttpxStylesheetFetcher


class RecordingFetcher:
    """Stylesheet fetcher that records URLs and never touches the network."""

    def __init__(self, fail_for: tuple[str, ...] = ()):
        self.urls: list[str] = []
        self.fail_for = fail_for

    async def fetch(self, url: str) -> str:
        self.urls.append(url)
        if any(name in url for name in self.fail_for):
            raise httpx.ConnectError("connection refused")
        return "@font-face {}"


class BlockingFetcher:
    """Holds every fetch until ``release`` is set."""

    def __init__(self):
        self.urls: list[str] = []
        self.release = asyncio.Event()

    async def fetch(self, url: str) -> str:
        self.urls.append(url)
        await self.release.wait()
        return "@font-face {}"


@pytest.mark.asyncio
class TestFontLoader:
    """Tests for FontLoader.load."""

    async def test_load_marks_font_loaded(self):
        fetcher = RecordingFetcher()
        loader = FontLoader(fetcher)

        await loader.load("Inter", [400])

        assert loader.is_loaded("Inter") is True
        assert loader.loaded_fonts() == ["Inter"]
        assert fetcher.urls == [
            "https://fonts.googleapis.com/css2?family=Inter:wght@400..400&display=swap"
        ]

    async def test_second_load_is_a_no_op(self):
        """Verify a loaded family is fetched and recorded exactly once."""
        fetcher = RecordingFetcher()
        loader = FontLoader(fetcher)

        await loader.load("Inter", [400])
        await loader.load("Inter", [400])

        assert loader.loaded_fonts().count("Inter") == 1
        assert len(fetcher.urls) == 1
        assert len(loader.links) == 1

    async def test_default_font_never_fetched(self):
        fetcher = RecordingFetcher()
        loader = FontLoader(fetcher)

        await loader.load("default", [400, 700])

        assert fetcher.urls == []
        assert loader.loaded_fonts() == []

    async def test_unknown_font_is_skipped(self):
        fetcher = RecordingFetcher()
        loader = FontLoader(fetcher)

        await loader.load("Comic Neue")

        assert fetcher.urls == []
        assert loader.is_loaded("Comic Neue") is False

    async def test_failure_raises_font_load_error(self):
        fetcher = RecordingFetcher(fail_for=("Lato",))
        loader = FontLoader(fetcher)

        with pytest.raises(FontLoadError, match="Failed to load font: Lato") as exc_info:
            await loader.load("Lato", [400])

        assert exc_info.value.family == "Lato"
        assert loader.is_loaded("Lato") is False
        assert len(loader.links) == 1

    async def test_failed_font_can_be_retried(self):
        fetcher = RecordingFetcher(fail_for=("Lato",))
        loader = FontLoader(fetcher)
        with pytest.raises(FontLoadError):
            await loader.load("Lato")

        fetcher.fail_for = ()
        await loader.load("Lato")

        assert loader.is_loaded("Lato") is True
        assert len(fetcher.urls) == 2

    async def test_custom_base_url_and_catalog(self):
        fetcher = RecordingFetcher()
        loader = FontLoader(
            fetcher,
            base_url="https://cdn.test/css",
            catalog={"House Sans": FontConfig((400, 800), False)},
        )

        await loader.load("House Sans", [400, 800])
        await loader.load("Inter")

        assert fetcher.urls == ["https://cdn.test/css?family=House+Sans:wght@400;800&display=swap"]

    async def test_concurrent_loads_are_not_merged(self):
        """Verify two loads started before either finishes both fetch."""
        fetcher = BlockingFetcher()
        loader = FontLoader(fetcher)

        first = asyncio.create_task(loader.load("Inter"))
        second = asyncio.create_task(loader.load("Inter"))
        while len(fetcher.urls) < 2:
            await asyncio.sleep(0)
        fetcher.release.set()
        await asyncio.gather(first, second)

        assert len(fetcher.urls) == 2
        assert len(loader.links) == 2
        assert loader.loaded_fonts() == ["Inter"]

    async def test_loaders_do_not_share_state(self):
        first = FontLoader(RecordingFetcher())
        second = FontLoader(RecordingFetcher())

        await first.load("Inter")

        assert second.is_loaded("Inter") is False

    async def test_clear(self):
        loader = FontLoader(RecordingFetcher())
        await loader.load("Inter")

        loader.clear()

        assert loader.loaded_fonts() == []
        assert loader.links == []


@pytest.mark.asyncio
class TestLoadMany:
    """Tests for concurrent loading helpers."""

    async def test_failures_do_not_block_others(self):
        fetcher = RecordingFetcher(fail_for=("Lato",))
        loader = FontLoader(fetcher)

        failed = await loader.load_many(["Inter", "Lato", "Roboto"], [400])

        assert failed == ["Lato"]
        assert loader.loaded_fonts() == ["Inter", "Roboto"]

    async def test_all_loaded(self):
        loader = FontLoader(RecordingFetcher())

        assert await loader.load_many(["Inter", "Poppins"]) == []
        assert loader.loaded_fonts() == ["Inter", "Poppins"]

    async def test_load_from_customizations(self):
        fetcher = RecordingFetcher()
        loader = FontLoader(fetcher)

        failed = await loader.load_from_customizations(
            {"fonts": {"heading": "Poppins", "body": "Poppins", "mono": "default", "x": None}}
        )

        assert failed == []
        assert loader.loaded_fonts() == ["Poppins"]
        assert fetcher.urls == [
            "https://fonts.googleapis.com/css2?family=Poppins:wght@300;400;500;600;700&display=swap"
        ]

    @pytest.mark.parametrize("customizations", [None, {}, {"fonts": "Inter"}, {"fonts": {}}])
    async def test_load_from_customizations_without_fonts(self, customizations):
        fetcher = RecordingFetcher()
        loader = FontLoader(fetcher)

        assert await loader.load_from_customizations(customizations) == []
        assert fetcher.urls == []

    async def test_preload_popular_fonts(self):
        loader = FontLoader(RecordingFetcher())

        await loader.preload_popular_fonts()

        assert "Inter" in loader.loaded_fonts()
        assert "Playfair Display" in loader.loaded_fonts()


@pytest.mark.asyncio
class TestHttpxStylesheetFetcher:
    async def test_http_error_becomes_font_load_error(self, font_loader: FontLoader):
        """Verify a 5xx from the font service surfaces as FontLoadError."""
        with pytest.raises(FontLoadError):
            await font_loader.load("Anton")

        assert font_loader.is_loaded("Anton") is False

    async def test_success(self, font_loader: FontLoader):
        await font_loader.load("Inter", [400, 700])
        assert font_loader.is_loaded("Inter") is True

    async def test_returns_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="@font-face {}"))
        async with httpx.AsyncClient(transport=transport) as client:
            body = await HttpxStylesheetFetcher(client).fetch("https://fonts.test/css2")

        assert body == "@font-face {}"
