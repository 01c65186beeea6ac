"""
Tests for the cache-first RiotDataManager.
"""

from unittest.mock import AsyncMock

import pytest

from riftstats.core.riot_api.cache import TTLCache
from riftstats.core.riot_api.client import RiotAPIClient
from riftstats.core.riot_api.constants import RiotRegion
from riftstats.core.riot_api.data_manager import RiotDataManager
from riftstats.core.riot_api.endpoints import QueryType, RiotAPIEndpoints
from riftstats.core.riot_api.errors import NotFoundError, TransportError


@pytest.fixture
def mock_riot_client():
    return AsyncMock(spec=RiotAPIClient)


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def data_manager(mock_riot_client, cache):
    return RiotDataManager(mock_riot_client, cache, RiotAPIEndpoints())


async def test_cache_hit_skips_upstream(data_manager, mock_riot_client):
    """Test second identical query is served from cache"""
    # Setup
    mock_riot_client.fetch.return_value = {"metadata": {}, "info": {}}

    # Execute
    first = await data_manager.get_match_detail("EUW1_1", RiotRegion.EUW)
    second = await data_manager.get_match_detail("EUW1_1", RiotRegion.EUW)

    # Verify
    assert first == second
    mock_riot_client.fetch.assert_called_once_with(
        "https://europe.api.riotgames.com",
        "/lol/match/v5/matches/{match_id}",
        path_params={"match_id": "EUW1_1"},
        query_params=None,
    )


async def test_account_uses_routing_base_url(data_manager, mock_riot_client):
    """Test account lookups go to the routing host"""
    mock_riot_client.fetch.return_value = {"puuid": "p", "gameName": "Faker", "tagLine": "KR1"}

    await data_manager.get_account_by_riot_id("Faker", "KR1", RiotRegion.KR)

    args, kwargs = mock_riot_client.fetch.call_args
    assert args[0] == "https://asia.api.riotgames.com"
    assert kwargs["path_params"] == {"game_name": "Faker", "tag_line": "KR1"}


async def test_account_lookup_is_case_insensitive(data_manager, mock_riot_client):
    """Test Riot IDs differing only in case share one cache entry"""
    mock_riot_client.fetch.return_value = {"puuid": "p"}

    await data_manager.get_account_by_riot_id("Faker", "KR1", RiotRegion.KR)
    await data_manager.get_account_by_riot_id("faker", "kr1", RiotRegion.KR)

    assert mock_riot_client.fetch.call_count == 1


async def test_summoner_and_ranked_use_platform_base_url(data_manager, mock_riot_client):
    """Test summoner-v4 and league-v4 go to the platform host"""
    mock_riot_client.fetch.return_value = {}

    await data_manager.get_summoner_by_puuid("p", RiotRegion.NA)
    await data_manager.get_ranked_entries_by_puuid("p", RiotRegion.NA)

    base_urls = [c.args[0] for c in mock_riot_client.fetch.call_args_list]
    assert base_urls == ["https://na1.api.riotgames.com", "https://na1.api.riotgames.com"]


async def test_match_ids_window_goes_into_query_string(data_manager, mock_riot_client):
    """Test start/count are query params, not path params"""
    mock_riot_client.fetch.return_value = ["EUW1_1", "EUW1_2"]

    result = await data_manager.get_recent_match_ids("p", RiotRegion.EUW, count=2, start=5)

    assert result == ["EUW1_1", "EUW1_2"]
    mock_riot_client.fetch.assert_called_once_with(
        "https://europe.api.riotgames.com",
        "/lol/match/v5/matches/by-puuid/{puuid}/ids",
        path_params={"puuid": "p"},
        query_params={"start": 5, "count": 2},
    )


async def test_match_ids_with_different_count_are_separate(data_manager, mock_riot_client):
    """Test different windows do not share a cache entry"""
    mock_riot_client.fetch.return_value = ["EUW1_1"]

    await data_manager.get_recent_match_ids("p", RiotRegion.EUW, count=1)
    await data_manager.get_recent_match_ids("p", RiotRegion.EUW, count=10)

    assert mock_riot_client.fetch.call_count == 2


async def test_ttl_per_query_type(data_manager, mock_riot_client, clock):
    """Test match IDs expire after 30s while match details live 10 minutes"""
    mock_riot_client.fetch.return_value = ["EUW1_1"]
    await data_manager.get_recent_match_ids("p", RiotRegion.EUW, count=1)
    mock_riot_client.fetch.return_value = {"info": {}}
    await data_manager.get_match_detail("EUW1_1", RiotRegion.EUW)
    assert mock_riot_client.fetch.call_count == 2

    clock.advance(31)
    await data_manager.get_recent_match_ids("p", RiotRegion.EUW, count=1)
    await data_manager.get_match_detail("EUW1_1", RiotRegion.EUW)

    # Only the match-ID list was refetched
    assert mock_riot_client.fetch.call_count == 3


async def test_errors_propagate_and_are_not_cached(data_manager, mock_riot_client, cache):
    """Test upstream errors reach the caller unchanged and are retried next time"""
    mock_riot_client.fetch.side_effect = [
        NotFoundError("Resource not found", status_code=404),
        {"puuid": "p"},
    ]

    with pytest.raises(NotFoundError):
        await data_manager.get_account_by_riot_id("Ghost", "NA1", RiotRegion.NA)
    assert len(cache) == 0

    result = await data_manager.get_account_by_riot_id("Ghost", "NA1", RiotRegion.NA)
    assert result == {"puuid": "p"}
    assert mock_riot_client.fetch.call_count == 2


async def test_transport_error_propagates(data_manager, mock_riot_client):
    """Test transport errors are surfaced unchanged"""
    mock_riot_client.fetch.side_effect = TransportError("Request timed out")

    with pytest.raises(TransportError):
        await data_manager.get_match_detail("EUW1_1", RiotRegion.EUW)


async def test_regions_do_not_share_entries(data_manager, mock_riot_client):
    """Test the same match ID under two routing regions is two entries"""
    mock_riot_client.fetch.return_value = {"info": {}}

    await data_manager.get_match_detail("X_1", RiotRegion.EUW)
    await data_manager.get_match_detail("X_1", RiotRegion.NA)

    assert mock_riot_client.fetch.call_count == 2


def test_cache_key_matches_query(data_manager):
    """Test cache_key delegates to the key builder for the query type"""
    key = data_manager.cache_key(QueryType.SUMMONER, RiotRegion.BR, puuid="p")
    assert key == "summoner:br1:p"


def test_custom_host_template():
    """Test the endpoints honour a configured host template"""
    endpoints = RiotAPIEndpoints("http://localhost:8080/{}")
    assert endpoints.base_url_for(QueryType.MATCH_DETAIL, RiotRegion.OCE) == (
        "http://localhost:8080/americas"
    )
    assert endpoints.base_url_for(QueryType.RANKED, RiotRegion.OCE) == (
        "http://localhost:8080/oc1"
    )
