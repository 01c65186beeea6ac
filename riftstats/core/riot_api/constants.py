"""Riot API constants and enum definitions."""

from enum import Enum


class Region(str, Enum):
    """Riot API regions for regional routing."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    NA1 = "na1"
    OC1 = "oc1"


class RiotRegion(Enum):
    """
    User-facing region codes.

    Each code maps to:
    - routing region (account-v1, match-v5): americas / europe / asia
    - platform region (summoner-v4, league-v4): na1 / euw1 / kr / ...
    """

    NA = (Region.AMERICAS, Platform.NA1)
    EUW = (Region.EUROPE, Platform.EUW1)
    KR = (Region.ASIA, Platform.KR)
    JP = (Region.ASIA, Platform.JP1)
    BR = (Region.AMERICAS, Platform.BR1)
    OCE = (Region.AMERICAS, Platform.OC1)

    @property
    def routing(self) -> Region:
        return self.value[0]

    @property
    def platform(self) -> Platform:
        return self.value[1]

    @classmethod
    def parse(cls, code: "str | RiotRegion") -> "RiotRegion":
        """Resolve a user-facing region code, case-insensitively."""
        if isinstance(code, cls):
            return code
        try:
            return cls[str(code).strip().upper()]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown region '{code}'. Expected one of: {valid}") from None
