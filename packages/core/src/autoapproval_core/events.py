"""Turn a GitHub webhook delivery into an Event.

Missing fields in the payload become empty defaults so every pull request,
however minimal, still reaches a decision.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from autoapproval_core.models import Event, EventKind, PullRequestSnapshot

logger = logging.getLogger(__name__)

_EVENT_KINDS: dict[tuple[str, str], EventKind] = {
    ("pull_request", "opened"): EventKind.OPENED,
    ("pull_request", "reopened"): EventKind.REOPENED,
    ("pull_request", "labeled"): EventKind.LABELED,
    ("pull_request", "edited"): EventKind.EDITED,
    ("pull_request_review", "submitted"): EventKind.REVIEW_SUBMITTED,
    ("pull_request_review", "dismissed"): EventKind.REVIEW_DISMISSED,
}


def load_event_file(path: str) -> dict:
    """Read the JSON payload GitHub Actions stores at $GITHUB_EVENT_PATH."""
    return json.loads(Path(path).read_text(encoding="utf-8")) or {}


def parse_timestamp(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        # GitHub sends "2024-05-01T12:00:00Z"; fromisoformat wants an explicit offset.
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp: %r", value)
        return None


def snapshot_from_payload(pr: dict, repo: str = "") -> PullRequestSnapshot:
    labels = tuple(label.get("name") or "" for label in pr.get("labels") or [] if isinstance(label, dict))
    return PullRequestSnapshot(
        number=pr.get("number") or 0,
        title=pr.get("title") or "",
        body=pr.get("body") or "",
        labels=labels,
        author=(pr.get("user") or {}).get("login") or "",
        created_at=parse_timestamp(pr.get("created_at")),
        updated_at=parse_timestamp(pr.get("updated_at")),
        repo=repo,
        html_url=pr.get("html_url") or "",
    )


def parse_event(event_name: str, payload: dict) -> Event | None:
    """Return the Event for a delivery, or None when it is not one the engine handles."""
    action = payload.get("action") or ""
    kind = _EVENT_KINDS.get((event_name, action))
    if kind is None:
        logger.info("Ignoring unsupported event: %s.%s", event_name, action)
        return None

    pr = payload.get("pull_request")
    if not isinstance(pr, dict):
        logger.info("Ignoring %s.%s delivery without a pull_request payload", event_name, action)
        return None

    repo = (payload.get("repository") or {}).get("full_name") or ""
    return Event(kind=kind, snapshot=snapshot_from_payload(pr, repo=repo))
