# Application layer: services that orchestrate domain and infrastructure.

from tabs_vs_spaces.application.exceptions import (
    ApplicationError,
    ConnectTimeoutError,
    DatabaseUnavailableError,
    PoolExhaustedError,
    PoolTimeoutError,
    QueryError,
    StorageError,
)
from tabs_vs_spaces.application.vote_repository import VoteRepository
from tabs_vs_spaces.application.vote_service import RECENT_VOTES_LIMIT, VoteService

__all__ = [
    "ApplicationError",
    "ConnectTimeoutError",
    "DatabaseUnavailableError",
    "PoolExhaustedError",
    "PoolTimeoutError",
    "QueryError",
    "RECENT_VOTES_LIMIT",
    "StorageError",
    "VoteRepository",
    "VoteService",
]
