"""DB-backed vote repository. Persists votes to the votes table through the connection pool."""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import func, insert, select

from tabs_vs_spaces.domain.models.vote import Candidate, Vote
from tabs_vs_spaces.infrastructure.database.models import VoteRecord
from tabs_vs_spaces.infrastructure.database.pool import Database


def _to_storage(cast_at: datetime) -> datetime:
    if cast_at.tzinfo is None:
        return cast_at
    return cast_at.astimezone(timezone.utc).replace(tzinfo=None)


def _from_storage(time_cast: datetime) -> datetime:
    if time_cast.tzinfo is None:
        return time_cast.replace(tzinfo=timezone.utc)
    return time_cast


class DbVoteRepository:
    """Implements VoteRepository protocol. Each call checks out its own pooled connection."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def add(self, candidate: Candidate, cast_at: datetime) -> Vote:
        stmt = insert(VoteRecord).values(
            time_cast=_to_storage(cast_at),
            candidate=candidate.value,
        )
        vote_id = await self._database.insert(stmt)
        return Vote(vote_id=vote_id, cast_at=cast_at, candidate=candidate)

    async def recent(self, limit: int) -> List[Vote]:
        stmt = (
            select(VoteRecord.vote_id, VoteRecord.time_cast, VoteRecord.candidate)
            .order_by(VoteRecord.time_cast.desc(), VoteRecord.vote_id.desc())
            .limit(limit)
        )
        rows = await self._database.fetch_all(stmt)
        return [
            Vote(
                vote_id=row.vote_id,
                cast_at=_from_storage(row.time_cast),
                candidate=Candidate(row.candidate.strip()),
            )
            for row in rows
        ]

    async def count(self, candidate: Candidate) -> int:
        stmt = select(func.count(VoteRecord.vote_id)).where(
            VoteRecord.candidate == candidate.value
        )
        return int(await self._database.fetch_scalar(stmt))
