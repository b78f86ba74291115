"""Vote application service. Validates and records votes; assembles the tally page data."""

import asyncio
import logging
from datetime import datetime
from typing import Any

from tabs_vs_spaces.application.exceptions import StorageError
from tabs_vs_spaces.application.vote_repository import VoteRepository
from tabs_vs_spaces.domain.exceptions import InvalidCandidateError
from tabs_vs_spaces.domain.models.vote import Candidate, Vote, VoteSummary
from tabs_vs_spaces.domain.validators.vote_validator import parse_candidate

RECENT_VOTES_LIMIT = 5


class VoteService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI, no direct SQL.
    Invalid input never reaches the repository; storage failures are logged and re-raised.
    """

    def __init__(
        self,
        repository: VoteRepository,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._logger = logger

    async def cast_vote(self, team: Any, cast_at: datetime) -> Vote:
        """
        Validate the raw team value and insert exactly one vote stamped with cast_at.
        Raises InvalidCandidateError (nothing persisted) or StorageError (vote not cast).
        """
        try:
            candidate = parse_candidate(team)
        except InvalidCandidateError:
            self._logger.info("vote_rejected", extra={"team": repr(team)})
            raise

        try:
            vote = await self._repository.add(candidate, cast_at)
        except StorageError as e:
            self._logger.error(
                "vote_cast_failed",
                extra={"candidate": candidate.value, "error": e.message},
            )
            raise

        self._logger.info(
            "vote_cast",
            extra={"vote_id": vote.vote_id, "candidate": vote.candidate.value},
        )
        return vote

    async def get_summary(self) -> VoteSummary:
        """Run the recent-votes query and both counts concurrently; return once all three finish."""
        recent_votes, tab_count, space_count = await asyncio.gather(
            self._repository.recent(RECENT_VOTES_LIMIT),
            self._repository.count(Candidate.TABS),
            self._repository.count(Candidate.SPACES),
        )
        self._logger.info(
            "summary_loaded",
            extra={"tab_count": tab_count, "space_count": space_count},
        )
        return VoteSummary(
            tab_count=tab_count,
            space_count=space_count,
            recent_votes=list(recent_votes),
        )
