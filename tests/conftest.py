"""Shared fixtures for riftstats tests."""

from typing import Any, Dict, List, Optional

import pytest


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def build_participant(
    puuid: str,
    team_id: int = 100,
    kills: int = 0,
    deaths: int = 0,
    assists: int = 0,
    win: bool = False,
    **extra: Any,
) -> Dict[str, Any]:
    participant: Dict[str, Any] = {
        "puuid": puuid,
        "riotIdGameName": f"Player-{puuid}",
        "riotIdTagline": "EUW",
        "summonerName": "",
        "championId": 238,
        "championName": "Zed",
        "teamId": team_id,
        "kills": kills,
        "deaths": deaths,
        "assists": assists,
        "win": win,
        "champLevel": 16,
        "totalDamageDealtToChampions": 21000,
        "totalDamageTaken": 18000,
        "goldEarned": 12000,
        "totalMinionsKilled": 180,
        "neutralMinionsKilled": 12,
        "summoner1Id": 4,
        "summoner2Id": 14,
        "item0": 3142,
        "item1": 6692,
        "item2": 3111,
        "item3": 3814,
        "item4": 6694,
        "item5": 0,
        "item6": 3364,
        "perks": {
            "styles": [
                {"style": 8100, "selections": [{"perk": 8112}, {"perk": 8139}]},
                {"style": 8300, "selections": [{"perk": 8304}]},
            ]
        },
        "wardsPlaced": 9,
        "wardsKilled": 3,
        "visionWardsBoughtInGame": 2,
        "doubleKills": 1,
        "tripleKills": 0,
        "quadraKills": 0,
        "pentaKills": 0,
    }
    participant.update(extra)
    return participant


def build_match(
    match_id: str = "EUW1_1234567890",
    participants: Optional[List[Dict[str, Any]]] = None,
    **info_overrides: Any,
) -> Dict[str, Any]:
    participants = participants if participants is not None else []
    info: Dict[str, Any] = {
        "gameCreation": 1710000000000,
        "gameDuration": 1800,
        "gameEndTimestamp": 1710001800000,
        "queueId": 420,
        "mapId": 11,
        "gameVersion": "14.20.555.5555",
        "gameMode": "CLASSIC",
        "participants": participants,
        "teams": [
            {
                "teamId": 100,
                "win": True,
                "bans": [{"championId": 157, "pickTurn": 1}, {"championId": 84}],
                "objectives": {
                    "baron": {"first": True, "kills": 1},
                    "dragon": {"first": False, "kills": 3},
                    "tower": {"first": True, "kills": 8},
                },
            },
            {
                "teamId": 200,
                "win": False,
                "bans": [{"championId": 55}],
                "objectives": {"dragon": {"kills": 1}, "tower": {"kills": 2}},
            },
        ],
        "platformId": "EUW1",
    }
    info.update(info_overrides)
    return {
        "metadata": {
            "matchId": match_id,
            "participants": [p.get("puuid") for p in participants if isinstance(p, dict)],
        },
        "info": info,
    }


@pytest.fixture
def participant_factory():
    return build_participant


@pytest.fixture
def match_factory():
    return build_match


@pytest.fixture
def sample_match_data() -> Dict[str, Any]:
    """Five-versus-five match where the subject is on team 100."""
    blue = [
        build_participant("subject", 100, kills=10, deaths=2, assists=8, win=True),
        build_participant("ally-1", 100, kills=4, deaths=3, assists=9, win=True),
        build_participant("ally-2", 100, kills=3, deaths=5, assists=7, win=True),
        build_participant("ally-3", 100, kills=2, deaths=4, assists=12, win=True),
        build_participant("ally-4", 100, kills=1, deaths=6, assists=15, win=True),
    ]
    red = [
        build_participant(f"enemy-{i}", 200, kills=2, deaths=4, assists=3)
        for i in range(5)
    ]
    return build_match("EUW1_1234567890", blue + red)
