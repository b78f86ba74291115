"""Domain validators. Pure validation functions."""

from tabs_vs_spaces.domain.validators.vote_validator import INVALID_TEAM_MESSAGE, parse_candidate

__all__ = [
    "INVALID_TEAM_MESSAGE",
    "parse_candidate",
]
