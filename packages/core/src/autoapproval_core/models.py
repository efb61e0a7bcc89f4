"""Pull request, review and decision types consumed and produced by the engine.

All types are frozen: an Event is created once per webhook delivery and the
engine never mutates what it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EventKind(str, Enum):
    OPENED = "opened"
    REOPENED = "reopened"
    LABELED = "labeled"
    EDITED = "edited"
    REVIEW_SUBMITTED = "review_submitted"
    REVIEW_DISMISSED = "review_dismissed"


class ReviewState(str, Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"

    @classmethod
    def parse(cls, value: str | None) -> ReviewState:
        """Map a platform review state to a ReviewState; unknown values count as COMMENTED."""
        try:
            return cls((value or "").upper())
        except ValueError:
            return cls.COMMENTED


class Action(str, Enum):
    NONE = "NONE"
    APPROVE = "APPROVE"
    APPROVE_AND_LABEL = "APPROVE_AND_LABEL"
    RE_APPROVE = "RE_APPROVE"


@dataclass(frozen=True)
class PullRequestSnapshot:
    """State of a pull request at the moment the event was received."""

    number: int
    title: str = ""
    body: str = ""
    labels: tuple[str, ...] = ()
    author: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    repo: str = ""  # owner/name
    html_url: str = ""


@dataclass(frozen=True)
class Event:
    kind: EventKind
    snapshot: PullRequestSnapshot


@dataclass(frozen=True)
class Review:
    author: str
    state: ReviewState


@dataclass(frozen=True)
class Decision:
    """What the caller should do for one event.

    ``message`` is the log line explaining the outcome; for skipped events it
    names the specific cause.
    """

    action: Action
    reason: str | None = None
    message: str = ""
    labels: tuple[str, ...] = ()

    @property
    def approves(self) -> bool:
        return self.action is not Action.NONE

    @classmethod
    def skip(cls, message: str) -> Decision:
        return cls(action=Action.NONE, message=message)
