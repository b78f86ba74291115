"""Vote repository protocol. Application layer depends on this; infrastructure implements it."""

from datetime import datetime
from typing import List, Protocol

from tabs_vs_spaces.domain.models.vote import Candidate, Vote


class VoteRepository(Protocol):
    """Protocol for the append-only vote store. Every call runs on its own pooled connection."""

    async def add(self, candidate: Candidate, cast_at: datetime) -> Vote:
        """Insert one vote record and return it with its assigned id."""
        ...

    async def recent(self, limit: int) -> List[Vote]:
        """Return at most `limit` votes, newest first (ties broken by id, newest first)."""
        ...

    async def count(self, candidate: Candidate) -> int:
        """Return the number of persisted votes for one candidate."""
        ...
