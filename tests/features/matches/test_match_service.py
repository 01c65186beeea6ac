import asyncio
from unittest.mock import AsyncMock

import pytest

from riftstats.core.riot_api.constants import RiotRegion
from riftstats.core.riot_api.data_manager import RiotDataManager
from riftstats.core.riot_api.errors import (
    MatchFetchError,
    NotFoundError,
    ParseError,
    TransportError,
)
from riftstats.features.matches.service import MatchService

PUUID = "subject"


@pytest.fixture
def match_doc(match_factory, participant_factory):
    def build(match_id: str, kills: int = 0):
        return match_factory(match_id, [participant_factory(PUUID, 100, kills=kills)])

    return build


class SlowMatchSource:
    """Serves match documents after a per-match delay and tracks concurrency."""

    def __init__(self, match_doc, delays=None, failures=None, default_delay=0.0):
        self.match_doc = match_doc
        self.delays = delays or {}
        self.failures = failures or {}
        self.default_delay = default_delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed = []

    async def get_match_detail(self, match_id, region):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(match_id, self.default_delay))
            if match_id in self.failures:
                raise self.failures[match_id]
            self.completed.append(match_id)
            return self.match_doc(match_id, kills=len(self.completed))
        finally:
            self.in_flight -= 1


@pytest.fixture
def mock_data_manager():
    return AsyncMock(spec=RiotDataManager)


def make_service(data_manager, match_ids, source, **kwargs):
    data_manager.get_recent_match_ids.return_value = match_ids
    data_manager.get_match_detail.side_effect = source.get_match_detail
    return MatchService(data_manager, **kwargs)


async def test_summaries_keep_upstream_order(mock_data_manager, match_doc):
    """Test output order follows the ID list, not completion order"""
    # Setup
    source = SlowMatchSource(match_doc, delays={"A": 0.06, "B": 0.03, "C": 0.0})
    service = make_service(mock_data_manager, ["A", "B", "C"], source)

    # Execute
    summaries = await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 3)

    # Verify
    assert source.completed == ["C", "B", "A"]
    assert [s.match_id for s in summaries] == ["A", "B", "C"]
    assert [s.kills for s in summaries] == [3, 2, 1]


async def test_detail_fetches_run_concurrently(mock_data_manager, match_doc):
    """Test fan-out actually overlaps detail fetches"""
    source = SlowMatchSource(match_doc, default_delay=0.02)
    service = make_service(mock_data_manager, ["A", "B", "C", "D"], source, concurrency=4)

    await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 4)

    assert source.max_in_flight == 4


async def test_concurrency_bound_is_respected(mock_data_manager, match_doc):
    """Test no more than `concurrency` details are in flight"""
    match_ids = [f"EUW1_{i}" for i in range(8)]
    source = SlowMatchSource(match_doc, default_delay=0.01)
    service = make_service(mock_data_manager, match_ids, source, concurrency=2)

    summaries = await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 8)

    assert len(summaries) == 8
    assert source.max_in_flight == 2


async def test_concurrency_bound_is_shared_between_requests(mock_data_manager, match_doc):
    """Test the bound holds across concurrent aggregations on one service"""
    source = SlowMatchSource(match_doc, default_delay=0.01)
    service = make_service(mock_data_manager, ["A", "B", "C"], source, concurrency=2)

    results = await asyncio.gather(
        service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 3),
        service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 3),
    )

    assert [len(r) for r in results] == [3, 3]
    assert source.max_in_flight == 2


async def test_one_failure_fails_the_batch(mock_data_manager, match_doc):
    """Test a single failing match raises MatchFetchError naming it"""
    source = SlowMatchSource(
        match_doc,
        delays={"A": 0.5, "B": 0.0, "C": 0.5},
        failures={"B": NotFoundError("Resource not found", status_code=404)},
    )
    service = make_service(mock_data_manager, ["A", "B", "C"], source)

    with pytest.raises(MatchFetchError) as exc_info:
        await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 3)

    assert exc_info.value.match_id == "B"
    assert isinstance(exc_info.value.cause, NotFoundError)
    assert exc_info.value.status_code == 404

    # Siblings were cancelled rather than left running
    await asyncio.sleep(0.01)
    assert source.in_flight == 0
    assert source.completed == []


async def test_malformed_match_fails_the_batch(mock_data_manager, match_doc):
    """Test a match document without a recognizable shape fails the batch"""
    mock_data_manager.get_recent_match_ids.return_value = ["A", "B"]
    mock_data_manager.get_match_detail.side_effect = [match_doc("A"), ["not", "a", "match"]]
    service = MatchService(mock_data_manager)

    with pytest.raises(MatchFetchError) as exc_info:
        await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 2)

    assert exc_info.value.match_id == "B"
    assert isinstance(exc_info.value.cause, ParseError)


async def test_zero_count_returns_empty(mock_data_manager):
    """Test count <= 0 does no upstream work"""
    service = MatchService(mock_data_manager)

    assert await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 0) == []
    assert await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, -3) == []
    mock_data_manager.get_recent_match_ids.assert_not_called()


async def test_empty_history(mock_data_manager):
    """Test a player with no matches gets an empty list"""
    mock_data_manager.get_recent_match_ids.return_value = []
    service = MatchService(mock_data_manager)

    assert await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 5) == []
    mock_data_manager.get_match_detail.assert_not_called()


async def test_match_ids_are_truncated_to_count(mock_data_manager):
    """Test at most `count` IDs are used even if upstream returns more"""
    mock_data_manager.get_recent_match_ids.return_value = ["A", "B", "C", "D"]
    service = MatchService(mock_data_manager)

    match_ids = await service.get_recent_match_ids(PUUID, RiotRegion.KR, 2, start=10)

    assert match_ids == ["A", "B"]
    mock_data_manager.get_recent_match_ids.assert_called_once_with(PUUID, RiotRegion.KR, 2, 10)


async def test_match_ids_must_be_a_list(mock_data_manager):
    """Test a non-array ID document is a ParseError"""
    mock_data_manager.get_recent_match_ids.return_value = {"ids": []}
    service = MatchService(mock_data_manager)

    with pytest.raises(ParseError):
        await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 5)


async def test_aggregation_timeout(mock_data_manager, match_doc):
    """Test the optional overall timeout surfaces as TransportError"""
    source = SlowMatchSource(match_doc, default_delay=1.0)
    service = make_service(
        mock_data_manager, ["A", "B"], source, aggregation_timeout=0.05
    )

    with pytest.raises(TransportError, match="timed out"):
        await service.get_recent_match_summaries(PUUID, RiotRegion.EUW, 2)

    await asyncio.sleep(0.01)
    assert source.in_flight == 0


async def test_get_full_match_detail(mock_data_manager, sample_match_data):
    """Test fetching and normalizing one match"""
    mock_data_manager.get_match_detail.return_value = sample_match_data
    service = MatchService(mock_data_manager)

    detail = await service.get_full_match_detail("EUW1_1234567890", RiotRegion.EUW)

    assert detail.match_id == "EUW1_1234567890"
    assert len(detail.participants) == 10
    mock_data_manager.get_match_detail.assert_called_once_with("EUW1_1234567890", RiotRegion.EUW)


async def test_get_full_match_detail_propagates_errors(mock_data_manager):
    """Test upstream errors are not wrapped for single-match lookups"""
    mock_data_manager.get_match_detail.side_effect = NotFoundError(
        "Resource not found", status_code=404
    )
    service = MatchService(mock_data_manager)

    with pytest.raises(NotFoundError):
        await service.get_full_match_detail("EUW1_404", RiotRegion.EUW)


def test_extract_full_match_detail_is_pure(sample_match_data):
    """Test normalizing an already-fetched document needs no I/O"""
    detail = MatchService.extract_full_match_detail(sample_match_data, "EUW1_1234567890")
    assert detail.participant("subject").kills == 10


def test_invalid_concurrency(mock_data_manager):
    with pytest.raises(ValueError):
        MatchService(mock_data_manager, concurrency=0)
