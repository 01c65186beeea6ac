"""Matches feature: normalization and fan-out over match details."""

from .models import (
    MatchDetail,
    MatchSummary,
    Objectives,
    Participant,
    ParticipantRef,
    Team,
)
from .service import MatchService
from .transformers import MatchNormalizer

__all__ = [
    "MatchDetail",
    "MatchSummary",
    "Objectives",
    "Participant",
    "ParticipantRef",
    "Team",
    "MatchService",
    "MatchNormalizer",
]
