"""Domain models. Pure business entities."""

from tabs_vs_spaces.domain.models.vote import Candidate, Vote, VoteSummary

__all__ = [
    "Candidate",
    "Vote",
    "VoteSummary",
]
