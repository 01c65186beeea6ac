"""Player profile and ranked records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlayerProfile(BaseModel):
    """Riot account merged with summoner profile data."""

    puuid: str
    game_name: str
    tag_line: str
    profile_icon_id: int = 0
    summoner_level: int = 0

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )


class RankedEntry(BaseModel):
    """Ranked standing in one queue."""

    queue_type: str
    tier: str
    rank: str
    league_points: int = 0
    wins: int = 0
    losses: int = 0

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    @property
    def win_rate(self) -> float:
        """Calculate win rate."""
        total_games = self.wins + self.losses
        if total_games == 0:
            return 0.0
        return (self.wins / total_games) * 100
