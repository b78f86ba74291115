"""FastAPI dependency injection: pool from app state, vote repository, vote service."""

import logging
from typing import Annotated

from fastapi import Depends, Request

from tabs_vs_spaces.application.vote_repository import VoteRepository
from tabs_vs_spaces.application.vote_service import VoteService
from tabs_vs_spaces.infrastructure.database.pool import Database
from tabs_vs_spaces.infrastructure.database.vote_repository_db import DbVoteRepository


def get_database(request: Request) -> Database:
    """Return the pool built during startup (set on app.state by the lifespan)."""
    return request.app.state.database


def get_vote_repository(
    database: Annotated[Database, Depends(get_database)],
) -> VoteRepository:
    return DbVoteRepository(database)


def get_vote_service(
    repository: Annotated[VoteRepository, Depends(get_vote_repository)],
) -> VoteService:
    """Build VoteService with injected repository and logger."""
    logger = logging.getLogger("tabs_vs_spaces.application.vote_service")
    return VoteService(repository=repository, logger=logger)


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
