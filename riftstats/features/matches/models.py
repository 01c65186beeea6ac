"""Domain records for normalized matches.

``MatchDetail`` is player-independent and identical for every requester.
``MatchSummary`` is a view of one match from one player's perspective.
All records are immutable and serialize with camelCase aliases.
"""

from typing import Annotated, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ITEM_SLOTS = 7
AUGMENT_SLOTS = 4
SUMMONER_SPELL_SLOTS = 2

ItemSlots = Annotated[
    Tuple[int, ...], Field(min_length=ITEM_SLOTS, max_length=ITEM_SLOTS)
]
AugmentSlots = Annotated[
    Tuple[int, ...], Field(min_length=AUGMENT_SLOTS, max_length=AUGMENT_SLOTS)
]
SpellSlots = Annotated[
    Tuple[int, ...],
    Field(min_length=SUMMONER_SPELL_SLOTS, max_length=SUMMONER_SPELL_SLOTS),
]


class DomainModel(BaseModel):
    """Base for immutable domain records."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )


class ParticipantRef(DomainModel):
    """Lightweight participant reference used in ally/enemy lists."""

    name: str
    tagline: str
    champion_name: str
    puuid: str


class Participant(DomainModel):
    """Full per-player statistics for one match."""

    name: str
    tagline: str
    champion_id: int
    champion_name: str
    puuid: str
    team_id: int
    kills: int
    deaths: int
    assists: int
    champion_level: int
    damage_dealt: int = Field(..., description="Damage dealt to champions")
    damage_taken: int
    gold: int
    items: ItemSlots
    minions: int
    neutral_minions: int
    summoner_spells: SpellSlots
    primary_rune_id: int
    secondary_rune_style_id: int
    wards_placed: int
    wards_killed: int
    vision_wards_bought: int
    double_kills: int
    triple_kills: int
    quadra_kills: int
    penta_kills: int
    win: bool
    placement: int = Field(0, description="Arena placement (1-8), 0 elsewhere")
    subteam_id: int = Field(0, description="Arena subteam, 0 elsewhere")

    @property
    def cs(self) -> int:
        """Total creep score."""
        return self.minions + self.neutral_minions


class Objectives(DomainModel):
    """Objective kill counts for one team."""

    baron_kills: int = 0
    dragon_kills: int = 0
    tower_kills: int = 0


class Team(DomainModel):
    """Team-level result, bans and objectives."""

    team_id: int
    win: bool
    banned_champion_ids: Tuple[int, ...] = ()
    objectives: Objectives = Objectives()


class MatchDetail(DomainModel):
    """Full, player-independent match record."""

    match_id: str
    queue_id: int
    duration_sec: int = Field(..., alias="gameDurationSec")
    end_timestamp: int = Field(..., alias="gameEndTimestamp")
    game_mode: str
    game_version: str
    teams: Tuple[Team, ...] = ()
    participants: Tuple[Participant, ...] = ()

    def participant(self, puuid: str) -> Optional[Participant]:
        """Find a participant by PUUID."""
        return next((p for p in self.participants if p.puuid == puuid), None)

    def team(self, team_id: int) -> Optional[Team]:
        """Find a team by ID."""
        return next((t for t in self.teams if t.team_id == team_id), None)


class MatchSummary(DomainModel):
    """One match seen from the subject player's perspective."""

    match_id: str
    champion_name: str
    kills: int
    deaths: int
    assists: int
    win: bool
    duration_sec: int = Field(..., alias="gameDurationSec")
    end_timestamp: int = Field(..., alias="gameEndTimestamp")
    champion_level: int
    summoner_spells: SpellSlots
    items: ItemSlots
    minions: int
    neutral_minions: int
    queue_id: int
    team_total_kills: int
    allies: Tuple[ParticipantRef, ...] = ()
    enemies: Tuple[ParticipantRef, ...] = ()
    primary_rune_id: int
    secondary_rune_style_id: int
    augments: AugmentSlots
    placement: int = 0

    @property
    def kill_participation(self) -> float:
        """Share of team kills the subject took part in (0.0-1.0)."""
        if self.team_total_kills == 0:
            return 0.0
        return (self.kills + self.assists) / self.team_total_kills
