"""Player lookups: Riot ID profile and ranked standings."""

from typing import List

import structlog

from riftstats.core.decorators import service_error_handler
from riftstats.core.riot_api.constants import RiotRegion
from riftstats.core.riot_api.data_manager import RiotDataManager
from riftstats.core.riot_api.errors import ParseError
from riftstats.core.validation import read_int, read_str, require_list, require_mapping

from .models import PlayerProfile, RankedEntry

logger = structlog.get_logger(__name__)


class PlayerService:
    """Resolves players by Riot ID and reads their ranked entries."""

    def __init__(self, data_manager: RiotDataManager):
        self.data_manager = data_manager

    @service_error_handler("PlayerService")
    async def get_profile(
        self, game_name: str, tag_line: str, region: RiotRegion
    ) -> PlayerProfile:
        """
        Resolve a Riot ID and enrich it with the summoner's profile icon.

        Account-v1 returns puuid, gameName and tagLine but no profile icon,
        so a second summoner-v4 lookup supplies it.

        :raises NotFoundError: If the Riot ID does not exist
        :raises ParseError: If the account has no PUUID
        """
        account = require_mapping(
            await self.data_manager.get_account_by_riot_id(game_name, tag_line, region),
            "account",
        )
        puuid, has_puuid = read_str(account, "puuid", allow_empty=False)
        if not has_puuid:
            raise ParseError(f"Account {game_name}#{tag_line} has no puuid")

        summoner = require_mapping(
            await self.data_manager.get_summoner_by_puuid(puuid, region), "summoner"
        )

        return PlayerProfile(
            puuid=puuid,
            game_name=read_str(account, "gameName", default=game_name)[0],
            tag_line=read_str(account, "tagLine", default=tag_line)[0],
            profile_icon_id=read_int(summoner, "profileIconId")[0],
            summoner_level=read_int(summoner, "summonerLevel")[0],
        )

    @service_error_handler("PlayerService")
    async def get_ranked_info(self, puuid: str, region: RiotRegion) -> List[RankedEntry]:
        """
        Ranked entries (Solo/Duo, Flex, ...) for a player.

        :raises ParseError: If the league response is not a list
        """
        raw_entries = require_list(
            await self.data_manager.get_ranked_entries_by_puuid(puuid, region),
            "ranked entries",
        )

        entries = [
            RankedEntry(
                queue_type=read_str(entry, "queueType")[0],
                tier=read_str(entry, "tier")[0],
                rank=read_str(entry, "rank")[0],
                league_points=read_int(entry, "leaguePoints")[0],
                wins=read_int(entry, "wins")[0],
                losses=read_int(entry, "losses")[0],
            )
            for entry in raw_entries
            if isinstance(entry, dict)
        ]

        logger.debug("Ranked entries parsed", puuid=puuid, entries=len(entries))
        return entries
