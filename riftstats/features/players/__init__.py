"""Players feature: profile lookup and ranked standings."""

from .models import PlayerProfile, RankedEntry
from .service import PlayerService

__all__ = ["PlayerProfile", "RankedEntry", "PlayerService"]
