"""Predicate checks that make up the approval funnel.

Each check takes a CheckContext and returns a CheckResult. The engine runs
them in list order and stops at the first one that does not pass, so new rules
are added by appending a function to PRE_FETCH_CHECKS or REVIEW_CHECKS.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from autoapproval_core.config import EngineSettings
from autoapproval_core.models import Event, EventKind, PullRequestSnapshot, Review, ReviewState

_CANONICAL_KINDS = (EventKind.OPENED, EventKind.REOPENED)


@dataclass(frozen=True)
class CheckContext:
    event: Event
    settings: EngineSettings
    reviews: tuple[Review, ...] = ()


@dataclass(frozen=True)
class CheckResult:
    check_id: str
    passed: bool
    message: str = ""


Check = Callable[[CheckContext], CheckResult]


def should_process(event: Event) -> bool:
    """Return False for the extra deliveries GitHub fires while a PR is being created.

    Labels or reviewer requests added during creation produce their own events
    with ``updated_at`` equal to ``created_at``; only the opened/reopened
    delivery is processed in that case.
    """
    if event.kind in _CANONICAL_KINDS:
        return True
    return event.snapshot.created_at != event.snapshot.updated_at


def blacklisted_title_terms(title: str, blacklist: Iterable[str]) -> list[str]:
    lowered = (title or "").lower()
    return [term for term in blacklist if term.lower() in lowered]


def blacklisted_labels(labels: Iterable[str], blacklist: Iterable[str]) -> list[str]:
    lowered = {label.lower() for label in labels}
    return [term for term in blacklist if term.lower() in lowered]


def is_blacklisted(snapshot: PullRequestSnapshot, blacklist: Sequence[str]) -> bool:
    return bool(blacklisted_title_terms(snapshot.title, blacklist) or blacklisted_labels(snapshot.labels, blacklist))


def has_foreign_approval(reviews: Iterable[Review], kind: EventKind) -> bool:
    """True when the PR already carries an approval and this is not a dismissal event."""
    if kind is EventKind.REVIEW_DISMISSED:
        return False
    return any(review.state is ReviewState.APPROVED for review in reviews)


def bot_reviews(reviews: Iterable[Review], bot_login: str) -> list[Review]:
    return [review for review in reviews if review.author == bot_login]


def check_admission(context: CheckContext) -> CheckResult:
    if should_process(context.event):
        return CheckResult("admission", True)
    return CheckResult(
        "admission",
        False,
        f"Ignoring additional creation event: {context.event.kind.value}",
    )


def check_title(context: CheckContext) -> CheckResult:
    terms = blacklisted_title_terms(context.event.snapshot.title, context.settings.blacklist)
    if not terms:
        return CheckResult("blacklisted-title", True)
    return CheckResult("blacklisted-title", False, f"PR title contains blacklisted term(s): {', '.join(terms)}")


def check_labels(context: CheckContext) -> CheckResult:
    labels = blacklisted_labels(context.event.snapshot.labels, context.settings.blacklist)
    if not labels:
        return CheckResult("blacklisted-labels", True)
    return CheckResult("blacklisted-labels", False, f"PR has blacklisted label(s): {', '.join(labels)}")


def check_existing_approval(context: CheckContext) -> CheckResult:
    if not has_foreign_approval(context.reviews, context.event.kind):
        return CheckResult("existing-approval", True)
    return CheckResult(
        "existing-approval",
        False,
        "PR already has approvals from at least one reviewer. Skipping auto-approval.",
    )


# Checks that only need the event snapshot; they run before reviews are fetched.
PRE_FETCH_CHECKS: list[Check] = [check_admission, check_title, check_labels]

# Checks that need the live review list.
REVIEW_CHECKS: list[Check] = [check_existing_approval]


def first_failure(checks: Iterable[Check], context: CheckContext) -> CheckResult | None:
    for check in checks:
        result = check(context)
        if not result.passed:
            return result
    return None
