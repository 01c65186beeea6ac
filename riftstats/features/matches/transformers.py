"""Transform raw Riot match documents into domain records.

The upstream match schema is not contractually stable per field, so every
read goes through the typed accessors in ``riftstats.core.validation`` and
falls back to a default. Only documents without a recognizable shape raise
``ParseError``.
"""

from typing import Any, Dict, List, Optional, Tuple

import structlog

from riftstats.core.riot_api.errors import ParseError
from riftstats.core.validation import (
    UNKNOWN,
    read_bool,
    read_int,
    read_int_slots,
    read_list,
    read_mapping,
    read_str,
    require_mapping,
)

from .models import (
    AUGMENT_SLOTS,
    ITEM_SLOTS,
    MatchDetail,
    MatchSummary,
    Objectives,
    Participant,
    ParticipantRef,
    Team,
)

logger = structlog.get_logger(__name__)


def _match_info(raw: Any, match_id: str) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """Return the ``info`` object and its participant objects."""
    root = require_mapping(raw, f"match {match_id}")

    info = root.get("info", {})
    if not isinstance(info, dict):
        raise ParseError(
            f"Match {match_id}: 'info' must be an object, got {type(info).__name__}"
        )

    participants = info.get("participants", [])
    if not isinstance(participants, list):
        raise ParseError(
            f"Match {match_id}: 'info.participants' must be an array, "
            f"got {type(participants).__name__}"
        )

    # Non-object entries carry no usable data
    return info, [p for p in participants if isinstance(p, dict)]


def _display_name(p: Dict[str, Any]) -> str:
    """Riot ID game name, falling back to the legacy summoner name."""
    name, present = read_str(p, "riotIdGameName", allow_empty=False)
    if present:
        return name
    return read_str(p, "summonerName", default=UNKNOWN, allow_empty=False)[0]


def _runes(p: Dict[str, Any]) -> Tuple[int, int]:
    """
    Extract (primary rune, secondary rune style).

    Primary is the first selection of the first style; secondary is the
    second style's identifier, 0 when there is no second style.
    """
    perks, _ = read_mapping(p, "perks")
    styles = [s for s in read_list(perks, "styles")[0] if isinstance(s, dict)]

    primary_rune_id = 0
    secondary_rune_style_id = 0
    if styles:
        selections = [
            s for s in read_list(styles[0], "selections")[0] if isinstance(s, dict)
        ]
        if selections:
            primary_rune_id = read_int(selections[0], "perk")[0]
        if len(styles) > 1:
            secondary_rune_style_id = read_int(styles[1], "style")[0]
    return primary_rune_id, secondary_rune_style_id


def _participant_ref(p: Dict[str, Any]) -> ParticipantRef:
    return ParticipantRef(
        name=_display_name(p),
        tagline=read_str(p, "riotIdTagline")[0],
        champion_name=read_str(p, "championName", default=UNKNOWN)[0],
        puuid=read_str(p, "puuid")[0],
    )


class MatchNormalizer:
    """Converts raw match-v5 documents into ``MatchDetail`` / ``MatchSummary``."""

    @staticmethod
    def participant_from(p: Dict[str, Any]) -> Participant:
        """Build a full participant record from one participant object."""
        primary_rune_id, secondary_rune_style_id = _runes(p)
        return Participant(
            name=_display_name(p),
            tagline=read_str(p, "riotIdTagline")[0],
            champion_id=read_int(p, "championId")[0],
            champion_name=read_str(p, "championName", default=UNKNOWN)[0],
            puuid=read_str(p, "puuid")[0],
            team_id=read_int(p, "teamId")[0],
            kills=read_int(p, "kills")[0],
            deaths=read_int(p, "deaths")[0],
            assists=read_int(p, "assists")[0],
            champion_level=read_int(p, "champLevel")[0],
            damage_dealt=read_int(p, "totalDamageDealtToChampions")[0],
            damage_taken=read_int(p, "totalDamageTaken")[0],
            gold=read_int(p, "goldEarned")[0],
            items=tuple(read_int_slots(p, "item", range(ITEM_SLOTS))),
            minions=read_int(p, "totalMinionsKilled")[0],
            neutral_minions=read_int(p, "neutralMinionsKilled")[0],
            summoner_spells=(
                read_int(p, "summoner1Id")[0],
                read_int(p, "summoner2Id")[0],
            ),
            primary_rune_id=primary_rune_id,
            secondary_rune_style_id=secondary_rune_style_id,
            wards_placed=read_int(p, "wardsPlaced")[0],
            wards_killed=read_int(p, "wardsKilled")[0],
            vision_wards_bought=read_int(p, "visionWardsBoughtInGame")[0],
            double_kills=read_int(p, "doubleKills")[0],
            triple_kills=read_int(p, "tripleKills")[0],
            quadra_kills=read_int(p, "quadraKills")[0],
            penta_kills=read_int(p, "pentaKills")[0],
            win=read_bool(p, "win")[0],
            placement=read_int(p, "placement")[0],
            subteam_id=read_int(p, "playerSubteamId")[0],
        )

    @staticmethod
    def team_from(t: Dict[str, Any]) -> Team:
        """Build a team record with bans and objective kills."""
        bans = [
            read_int(b, "championId")[0]
            for b in read_list(t, "bans")[0]
            if isinstance(b, dict)
        ]
        objectives, _ = read_mapping(t, "objectives")

        def objective_kills(name: str) -> int:
            return read_int(read_mapping(objectives, name)[0], "kills")[0]

        return Team(
            team_id=read_int(t, "teamId")[0],
            win=read_bool(t, "win")[0],
            banned_champion_ids=tuple(bans),
            objectives=Objectives(
                baron_kills=objective_kills("baron"),
                dragon_kills=objective_kills("dragon"),
                tower_kills=objective_kills("tower"),
            ),
        )

    @staticmethod
    def detail_from(raw: Any, match_id: str) -> MatchDetail:
        """
        Parse a raw match document into a full ``MatchDetail``.

        Args:
            raw: Decoded match-v5 document
            match_id: Match identifier the document was fetched for

        Returns:
            Player-independent match record

        Raises:
            ParseError: If the document has no recognizable match shape
        """
        info, participants = _match_info(raw, match_id)

        teams = [
            MatchNormalizer.team_from(t)
            for t in read_list(info, "teams")[0]
            if isinstance(t, dict)
        ]

        return MatchDetail(
            match_id=match_id,
            queue_id=read_int(info, "queueId")[0],
            duration_sec=read_int(info, "gameDuration")[0],
            end_timestamp=read_int(info, "gameEndTimestamp")[0],
            game_mode=read_str(info, "gameMode")[0],
            game_version=read_str(info, "gameVersion")[0],
            teams=tuple(teams),
            participants=tuple(MatchNormalizer.participant_from(p) for p in participants),
        )

    @staticmethod
    def summary_for(raw: Any, puuid: str, match_id: str) -> MatchSummary:
        """
        Parse a raw match document into the summary for one player.

        A missing subject participant is tolerated: subject fields fall back
        to zero / False / "Unknown" and every participant on a non-zero team
        is reported as an enemy.

        Raises:
            ParseError: If the document has no recognizable match shape
        """
        info, participants = _match_info(raw, match_id)

        me: Optional[Dict[str, Any]] = next(
            (p for p in participants if read_str(p, "puuid")[0] == puuid), None
        )
        if me is None:
            logger.warning(
                "Subject participant not found in match",
                match_id=match_id,
                puuid=puuid,
                participants=len(participants),
            )
        subject: Dict[str, Any] = me or {}

        primary_rune_id, secondary_rune_style_id = _runes(subject)
        my_team_id = read_int(subject, "teamId")[0]

        team_total_kills = 0
        allies: List[ParticipantRef] = []
        enemies: List[ParticipantRef] = []
        for p in participants:
            if read_int(p, "teamId")[0] == my_team_id:
                team_total_kills += read_int(p, "kills")[0]
                if p is not me:
                    allies.append(_participant_ref(p))
            else:
                enemies.append(_participant_ref(p))

        return MatchSummary(
            match_id=match_id,
            champion_name=read_str(subject, "championName", default=UNKNOWN)[0],
            kills=read_int(subject, "kills")[0],
            deaths=read_int(subject, "deaths")[0],
            assists=read_int(subject, "assists")[0],
            win=read_bool(subject, "win")[0],
            duration_sec=read_int(info, "gameDuration")[0],
            end_timestamp=read_int(info, "gameEndTimestamp")[0],
            champion_level=read_int(subject, "champLevel")[0],
            summoner_spells=(
                read_int(subject, "summoner1Id")[0],
                read_int(subject, "summoner2Id")[0],
            ),
            items=tuple(read_int_slots(subject, "item", range(ITEM_SLOTS))),
            minions=read_int(subject, "totalMinionsKilled")[0],
            neutral_minions=read_int(subject, "neutralMinionsKilled")[0],
            queue_id=read_int(info, "queueId")[0],
            team_total_kills=team_total_kills,
            allies=tuple(allies),
            enemies=tuple(enemies),
            primary_rune_id=primary_rune_id,
            secondary_rune_style_id=secondary_rune_style_id,
            augments=tuple(
                read_int_slots(subject, "playerAugment", range(1, AUGMENT_SLOTS + 1))
            ),
            placement=read_int(subject, "placement")[0],
        )
