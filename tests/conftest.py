"""Shared fixtures: a file-backed aiosqlite Database with the votes schema in place."""

import pytest

from tabs_vs_spaces.infrastructure.database.pool import Database


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'votes.db'}"


@pytest.fixture
async def database(sqlite_url):
    db = Database(sqlite_url, pool_size=5, acquire_timeout=5.0)
    await db.ensure_schema()
    yield db
    await db.dispose()
