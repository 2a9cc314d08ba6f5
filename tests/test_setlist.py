"""Tests for the setlist.fm client and setlist helpers"""

import pytest
from aiohttp import web

from daily_dose.api.setlist import SetlistClient, parse_setlist_sets
from daily_dose.exceptions import SetlistAuthError, SetlistRequestError
from daily_dose.models import SetlistSet
from daily_dose.utils.formatting import NO_SETLIST_TEXT, format_setlist_text
from fakes import serve

MBID = "6faa7ca7-0d99-4a5e-bfa6-1fd5037520c6"

SETLIST_RESPONSE = {
    "type": "setlists",
    "itemsPerPage": 20,
    "page": 1,
    "total": 1,
    "setlist": [
        {
            "eventDate": "08-05-1977",
            "sets": {
                "set": [
                    {
                        "name": "Set 1",
                        "song": [{"name": "New Minglewood Blues"}, {"name": "Loser"}],
                    },
                    {"song": [{"name": "Scarlet Begonias"}, {"name": ""}, {}]},
                    {"encore": 1, "song": [{"name": "One More Saturday Night"}]},
                ]
            },
        },
        {"sets": {"set": [{"name": "Other show", "song": [{"name": "Nope"}]}]}},
    ],
}


class TestParseSetlist:
    """Test extraction of sets from a search response"""

    def test_first_setlist_sets(self):
        """Only the first setlist is used; unnamed sets get a default name"""
        assert parse_setlist_sets(SETLIST_RESPONSE) == [
            SetlistSet("Set 1", ("New Minglewood Blues", "Loser")),
            SetlistSet("Set", ("Scarlet Begonias",)),
            SetlistSet("Encore", ("One More Saturday Night",)),
        ]

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"setlist": []},
            {"setlist": [{"id": "x"}]},
            {"setlist": [{"sets": {"set": "nope"}}]},
            [],
        ],
    )
    def test_missing_structure_is_empty(self, payload):
        """Anything without sets yields no sets"""
        assert parse_setlist_sets(payload) == []

    def test_format_setlist_text(self, sample_sets):
        """Sets render as headings followed by bulleted songs"""
        assert format_setlist_text(sample_sets) == (
            "Set 1:\n• New Minglewood Blues\n• Loser\n\nEncore:\n• One More Saturday Night"
        )
        assert format_setlist_text([]) == NO_SETLIST_TEXT


class TestSetlistClient:
    """Test requests against a local setlist.fm stand-in"""

    @pytest.mark.asyncio
    async def test_fetch_setlist_sends_key_and_params(self):
        """The key goes in x-api-key and the search is by mbid and date"""
        seen = {}

        async def handler(request):
            seen["key"] = request.headers.get("x-api-key")
            seen["accept"] = request.headers.get("Accept")
            seen["params"] = dict(request.query)
            return web.json_response(SETLIST_RESPONSE)

        async with serve(web.get("/search/setlists", handler)) as base_url:
            async with SetlistClient("secret", base_url=base_url) as client:
                sets = await client.fetch_setlist(MBID, "08-05-1977")

        assert seen == {
            "key": "secret",
            "accept": "application/json",
            "params": {"artistMbid": MBID, "date": "08-05-1977"},
        }
        assert [s.name for s in sets] == ["Set 1", "Set", "Encore"]

    @pytest.mark.asyncio
    async def test_unauthorized_raises_auth_error(self):
        """A rejected key is reported separately"""

        async def handler(request):
            return web.json_response({"code": 401}, status=401)

        async with serve(web.get("/search/setlists", handler)) as base_url:
            async with SetlistClient("bad", base_url=base_url) as client:
                with pytest.raises(SetlistAuthError):
                    await client.fetch_setlist(MBID, "08-05-1977")

    @pytest.mark.asyncio
    async def test_not_found_is_empty(self):
        """setlist.fm's 404 for no matches means no setlist"""

        async def handler(request):
            return web.json_response({"code": 404, "status": "Not Found"}, status=404)

        async with serve(web.get("/search/setlists", handler)) as base_url:
            async with SetlistClient("secret", base_url=base_url) as client:
                assert await client.fetch_setlist(MBID, "01-01-1960") == []

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        """Other failures are request errors"""

        async def handler(request):
            return web.Response(status=500)

        async with serve(web.get("/search/setlists", handler)) as base_url:
            async with SetlistClient("secret", base_url=base_url) as client:
                with pytest.raises(SetlistRequestError) as exc_info:
                    await client.fetch_setlist(MBID, "08-05-1977")

        assert not isinstance(exc_info.value, SetlistAuthError)
        assert exc_info.value.status == 500
