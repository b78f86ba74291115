"""Domain model for votes. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Candidate(str, Enum):
    """The two fixed voting options. Values are the wire and storage representation."""

    TABS = "TABS"
    SPACES = "SPACES"


@dataclass(frozen=True)
class Vote:
    """A single persisted vote. Append-only: never updated or deleted once stored."""

    vote_id: int
    cast_at: datetime
    candidate: Candidate


@dataclass(frozen=True)
class VoteSummary:
    """Read-path snapshot: recent votes (newest first) and the per-candidate tally."""

    tab_count: int
    space_count: int
    recent_votes: List[Vote] = field(default_factory=list)

    @property
    def leader(self) -> Optional[Candidate]:
        """Candidate with more votes, or None when tied."""
        if self.tab_count > self.space_count:
            return Candidate.TABS
        if self.space_count > self.tab_count:
            return Candidate.SPACES
        return None

    @property
    def margin(self) -> int:
        return abs(self.tab_count - self.space_count)

    @property
    def leader_message(self) -> str:
        leader = self.leader
        if leader is None:
            return "TABS and SPACES are evenly matched!"
        noun = "vote" if self.margin == 1 else "votes"
        return f"{leader.value} are winning by {self.margin} {noun}!"
