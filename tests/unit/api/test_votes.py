"""Tests for GET / and POST /: tally page, vote submission, validation guard, storage failure."""

import asyncio
from datetime import datetime

import pytest
from httpx import AsyncClient

from tabs_vs_spaces.api.routers.votes import CAST_FAILED_MESSAGE
from tabs_vs_spaces.application.exceptions import PoolTimeoutError
from tabs_vs_spaces.domain.models.vote import Candidate
from tabs_vs_spaces.main import STORAGE_ERROR_MESSAGE


def _counts(repo):
    return (
        sum(1 for v in repo.votes if v.candidate is Candidate.TABS),
        sum(1 for v in repo.votes if v.candidate is Candidate.SPACES),
    )


@pytest.mark.asyncio
async def test_empty_table_renders_zero_counts(client: AsyncClient):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert '<h3 id="tab-count">0 votes</h3>' in r.text
    assert '<h3 id="space-count">0 votes</h3>' in r.text
    assert "No votes yet." in r.text
    assert "evenly matched" in r.text


@pytest.mark.asyncio
async def test_post_form_vote_succeeds(client: AsyncClient, fake_repository):
    r = await client.post("/", data={"team": "TABS"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    prefix = "Successfully voted for TABS at "
    assert r.text.startswith(prefix)
    stamp = datetime.fromisoformat(r.text[len(prefix):])
    assert stamp.tzinfo is not None
    assert _counts(fake_repository) == (1, 0)


@pytest.mark.asyncio
async def test_post_json_vote_succeeds(client: AsyncClient, fake_repository):
    r = await client.post("/", json={"team": "SPACES"})
    assert r.status_code == 200
    assert r.text.startswith("Successfully voted for SPACES at ")
    assert _counts(fake_repository) == (0, 1)


@pytest.mark.asyncio
async def test_post_then_get_shows_vote(client: AsyncClient):
    await client.post("/", data={"team": "TABS"})
    r = await client.get("/")
    assert '<h3 id="tab-count">1 vote</h3>' in r.text
    assert '<h3 id="space-count">0 votes</h3>' in r.text
    assert r.text.count('class="vote"') == 1
    assert "<strong>TABS</strong>" in r.text
    assert "TABS are winning by 1 vote!" in r.text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": {"team": "BOGUS"}},
        {"data": {"team": ""}},
        {"data": {"team": "tabs"}},
        {"data": {}},
        {"json": {"team": "BOGUS"}},
        {"json": {"other": "TABS"}},
        {"json": ["TABS"]},
        {"content": b"{not json", "headers": {"content-type": "application/json"}},
        {"content": b"team=TABS", "headers": {"content-type": "multipart/form-data"}},
    ],
)
async def test_invalid_team_returns_400_and_persists_nothing(client: AsyncClient, fake_repository, kwargs):
    r = await client.post("/", **kwargs)
    assert r.status_code == 400
    assert r.text == "Invalid team specified."
    assert fake_repository.votes == []


@pytest.mark.asyncio
async def test_storage_failure_returns_500(client: AsyncClient, fake_repository):
    fake_repository.fail_writes = True
    r = await client.post("/", data={"team": "TABS"})
    assert r.status_code == 500
    assert r.text == CAST_FAILED_MESSAGE
    assert "connection reset" not in r.text
    assert fake_repository.votes == []


@pytest.mark.asyncio
async def test_concurrent_votes_are_all_counted(client: AsyncClient, fake_repository):
    teams = ["TABS"] * 6 + ["SPACES"] * 4
    responses = await asyncio.gather(*(client.post("/", data={"team": t}) for t in teams))
    assert all(r.status_code == 200 for r in responses)
    assert _counts(fake_repository) == (6, 4)
    assert len({v.vote_id for v in fake_repository.votes}) == 10

    page = await client.get("/")
    assert '<h3 id="tab-count">6 votes</h3>' in page.text
    assert '<h3 id="space-count">4 votes</h3>' in page.text
    assert page.text.count('class="vote"') == 5


@pytest.mark.asyncio
async def test_get_is_side_effect_free(client: AsyncClient, fake_repository):
    await client.post("/", data={"team": "SPACES"})
    before = list(fake_repository.votes)
    for _ in range(3):
        r = await client.get("/")
        assert r.status_code == 200
    assert fake_repository.votes == before


@pytest.mark.asyncio
async def test_correlation_id_preserved(client: AsyncClient):
    r = await client.get("/", headers={"X-Correlation-ID": "corr-42"})
    assert r.headers["X-Correlation-ID"] == "corr-42"


@pytest.mark.asyncio
async def test_correlation_id_generated(client: AsyncClient):
    r = await client.post("/", data={"team": "TABS"})
    assert len(r.headers["X-Correlation-ID"]) > 0


@pytest.mark.asyncio
async def test_read_failure_returns_generic_500(client: AsyncClient, fake_repository):
    async def unavailable(limit):
        raise PoolTimeoutError("QueuePool limit of size 5 overflow 0 reached")

    fake_repository.recent = unavailable
    r = await client.get("/")
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == STORAGE_ERROR_MESSAGE
    assert "QueuePool" not in r.text
