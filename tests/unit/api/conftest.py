"""Fixtures for API unit tests: in-memory vote repository, fake pool, AsyncClient."""

import asyncio
from datetime import datetime
from typing import List

import pytest
from httpx import ASGITransport, AsyncClient

from tabs_vs_spaces.application.exceptions import DatabaseUnavailableError
from tabs_vs_spaces.config.settings import AppSettings
from tabs_vs_spaces.domain.models.vote import Candidate, Vote
from tabs_vs_spaces.main import create_app


class FakeVoteRepository:
    """In-memory VoteRepository for unit tests."""

    def __init__(self):
        self.votes: List[Vote] = []
        self.fail_writes = False

    async def add(self, candidate: Candidate, cast_at: datetime) -> Vote:
        await asyncio.sleep(0)
        if self.fail_writes:
            raise DatabaseUnavailableError("connection reset by peer")
        vote = Vote(vote_id=len(self.votes) + 1, cast_at=cast_at, candidate=candidate)
        self.votes.append(vote)
        return vote

    async def recent(self, limit: int) -> List[Vote]:
        ordered = sorted(self.votes, key=lambda v: (v.cast_at, v.vote_id), reverse=True)
        return ordered[:limit]

    async def count(self, candidate: Candidate) -> int:
        return sum(1 for v in self.votes if v.candidate is candidate)


class FakeDatabase:
    def __init__(self):
        self.healthy = True

    async def ping(self) -> bool:
        if not self.healthy:
            raise DatabaseUnavailableError("database down")
        return True


@pytest.fixture
def fake_repository():
    return FakeVoteRepository()


@pytest.fixture
def fake_database():
    return FakeDatabase()


@pytest.fixture
def app_with_overrides(fake_repository, fake_database):
    """App with repository and pool overridden; the lifespan is not entered, so no database is touched."""
    from tabs_vs_spaces.api import dependencies

    app = create_app(AppSettings(_env_file=None, environment="test"))
    app.dependency_overrides[dependencies.get_vote_repository] = lambda: fake_repository
    app.dependency_overrides[dependencies.get_database] = lambda: fake_database
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_overrides):
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
