"""Votes router: GET / renders the tally page, POST / records one vote."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from tabs_vs_spaces.api.dependencies import get_vote_service
from tabs_vs_spaces.application.exceptions import StorageError
from tabs_vs_spaces.application.vote_service import VoteService
from tabs_vs_spaces.domain.exceptions import InvalidCandidateError

CAST_FAILED_MESSAGE = (
    "Unable to successfully cast vote! Please check the application logs for more details."
)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))


async def _read_team(request: Request) -> Any:
    """Pull `team` from a JSON or form-encoded body. Unparseable bodies count as missing."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return None
        return body.get("team") if isinstance(body, dict) else None
    try:
        form = await request.form()
    except (MultiPartException, HTTPException):
        return None
    return form.get("team")


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    vote_service: Annotated[VoteService, Depends(get_vote_service)],
):
    """Render the tally page: both counts, who is ahead, and the five most recent votes."""
    summary = await vote_service.get_summary()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "summary": summary,
            "tab_count": summary.tab_count,
            "space_count": summary.space_count,
            "recent_votes": summary.recent_votes,
        },
    )


@router.post("/", response_class=PlainTextResponse)
async def cast_vote(
    request: Request,
    vote_service: Annotated[VoteService, Depends(get_vote_service)],
):
    """Record one vote for TABS or SPACES. Every branch returns exactly one response."""
    cast_at = datetime.now(timezone.utc)
    team = await _read_team(request)

    try:
        vote = await vote_service.cast_vote(team, cast_at)
    except InvalidCandidateError as e:
        return PlainTextResponse(e.message, status_code=400)
    except StorageError:
        return PlainTextResponse(CAST_FAILED_MESSAGE, status_code=500)

    return PlainTextResponse(
        f"Successfully voted for {vote.candidate.value} at {vote.cast_at.isoformat()}"
    )
