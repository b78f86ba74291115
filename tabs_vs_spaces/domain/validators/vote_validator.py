"""Validators for vote domain rules. Pure functions, no infrastructure or DB access."""

from typing import Any

from tabs_vs_spaces.domain.exceptions import InvalidCandidateError
from tabs_vs_spaces.domain.models.vote import Candidate

INVALID_TEAM_MESSAGE = "Invalid team specified."


def parse_candidate(raw: Any) -> Candidate:
    """
    Convert a wire value into a Candidate. Only the exact strings "TABS" and "SPACES" are accepted;
    anything else (None, empty, other case, non-string) raises InvalidCandidateError.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidCandidateError(INVALID_TEAM_MESSAGE)
    try:
        return Candidate(raw)
    except ValueError:
        raise InvalidCandidateError(INVALID_TEAM_MESSAGE) from None
