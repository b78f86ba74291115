"""Domain layer: models, validators, exceptions. Pure business logic only."""

from tabs_vs_spaces.domain.exceptions import (
    DomainError,
    DomainValidationError,
    InvalidCandidateError,
)
from tabs_vs_spaces.domain.models import Candidate, Vote, VoteSummary
from tabs_vs_spaces.domain.validators import parse_candidate

__all__ = [
    "Candidate",
    "DomainError",
    "DomainValidationError",
    "InvalidCandidateError",
    "Vote",
    "VoteSummary",
    "parse_candidate",
]
