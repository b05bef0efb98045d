import asyncio
import json

import httpx
import pytest

from brandkeeper.core.errors import UpstreamFailure
from brandkeeper.core.fonts.service import METADATA_URL, WEBFONTS_URL, FontCatalogue, parse_metadata, parse_webfonts

METADATA = {
    "familyMetadataList": [
        {"family": "Inter", "category": "Sans Serif", "fonts": {"400": {}, "700": {}}},
        {"family": "Lora", "fonts": {"400i": {}}},
        {"category": "Serif"},
    ]
}
WEBFONTS = {"items": [{"family": "Roboto", "category": "sans-serif", "variants": ["regular", "700"]}]}


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def catalogue(handler, api_key="", clock=None) -> FontCatalogue:
    return FontCatalogue(
        ttl_seconds=60,
        api_key=api_key,
        client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        clock=clock or Clock(),
    )


def test_parse_metadata():
    fonts = parse_metadata(METADATA)
    assert [font.family for font in fonts] == ["Inter", "Lora"]
    assert fonts[0].variants == ["400", "700"]
    assert fonts[0].category == "Sans Serif"
    assert fonts[1].category == "sans-serif"


def test_parse_webfonts():
    fonts = parse_webfonts(WEBFONTS)
    assert fonts[0].family == "Roboto"
    assert fonts[0].variants == ["regular", "700"]


def test_metadata_with_xssi_prefix_is_cached():
    calls = []
    clock = Clock()

    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(200, text=")]}'\n" + json.dumps(METADATA))

    fonts = catalogue(handler, clock=clock)
    assert [f.family for f in asyncio.run(fonts.get_fonts())] == ["Inter", "Lora"]
    asyncio.run(fonts.get_fonts())
    assert calls == [METADATA_URL]

    clock.now = 61
    asyncio.run(fonts.get_fonts())
    assert len(calls) == 2


def test_falls_back_to_webfonts_api_with_key():
    def handler(request):
        if str(request.url).startswith(WEBFONTS_URL):
            assert request.url.params["key"] == "font-key"
            return httpx.Response(200, json=WEBFONTS)
        return httpx.Response(503)

    fonts = asyncio.run(catalogue(handler, api_key="font-key").get_fonts())
    assert [f.family for f in fonts] == ["Roboto"]


def test_fails_without_key_when_metadata_is_down():
    def handler(request):
        return httpx.Response(500)

    with pytest.raises(UpstreamFailure) as exc:
        asyncio.run(catalogue(handler).get_fonts())
    assert exc.value.message == "No se pudo obtener la lista de fuentes"
