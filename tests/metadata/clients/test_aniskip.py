"""Tests for the AniSkip timing-service client."""

import json
from pathlib import Path

import httpx
import pytest
import respx
from httpx import Response

from skipsync.metadata.clients.aniskip import AniSkipClient
from skipsync.metadata.settings import Settings

FIXTURES = Path(__file__).parent / "test_fixtures" / "aniskip"


def _load(name: str) -> dict:
    with open(FIXTURES / name) as f:
        return json.load(f)


@pytest.mark.asyncio
async def test_aniskip_fetch(settings: Settings) -> None:
    """Results are returned raw and the request names every skip type."""
    with respx.mock:
        route = respx.get(f"{settings.ANISKIP_API_URL}/38000/3").mock(
            return_value=Response(200, json=_load("skip_times_response.json"))
        )

        results = await AniSkipClient(settings).fetch(38000, 3)

        assert [r["skipType"] for r in results] == ["op", "ed"]
        assert results[0]["interval"]["startTime"] == 25.51
        params = route.calls.last.request.url.params
        assert params.get_list("types") == ["op", "ed", "recap"]
        assert params["episodeLength"] == "0"


@pytest.mark.asyncio
async def test_aniskip_not_found(settings: Settings) -> None:
    with respx.mock:
        respx.get(f"{settings.ANISKIP_API_URL}/1/99").mock(
            return_value=Response(404, json=_load("not_found_response.json"))
        )
        assert await AniSkipClient(settings).fetch(1, 99) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"found": False, "results": [{"interval": {}}]},
        {"found": True, "results": None},
        {"found": True},
        ["not", "a", "mapping"],
    ],
)
async def test_aniskip_unusable_payloads(settings: Settings, payload: object) -> None:
    with respx.mock:
        respx.get(f"{settings.ANISKIP_API_URL}/5/1").mock(
            return_value=Response(200, json=payload)
        )
        assert await AniSkipClient(settings).fetch(5, 1) == []


@pytest.mark.asyncio
async def test_aniskip_server_error_and_timeout(settings: Settings) -> None:
    with respx.mock:
        respx.get(f"{settings.ANISKIP_API_URL}/5/1").mock(return_value=Response(503))
        respx.get(f"{settings.ANISKIP_API_URL}/5/2").mock(
            side_effect=httpx.ReadTimeout("slow")
        )
        client = AniSkipClient(settings)
        assert await client.fetch(5, 1) == []
        assert await client.fetch(5, 2) == []
