"""Approval decision engine.

decide() is a pure function of (event, reviews, settings). process_event()
wraps it with the client calls in strict order: fetch reviews, decide,
approve, then label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from autoapproval_core.checks import PRE_FETCH_CHECKS, REVIEW_CHECKS, CheckContext, bot_reviews, first_failure
from autoapproval_core.config import EngineSettings
from autoapproval_core.gh.base import BasePullRequestClient, CollaboratorError
from autoapproval_core.models import Action, Decision, Event, EventKind, Review
from autoapproval_core.outputs import ActionOutputs
from autoapproval_core.utils.reason import extract_reason

logger = logging.getLogger(__name__)

_MISSING_REASON = 'Missing required "auto-approve reason: <text>" in PR description. Skipping approval.'


@dataclass
class ApprovalResult:
    """Outcome of process_event: the decision plus what the caller should report."""

    decision: Decision
    outputs: ActionOutputs
    label_error: str | None = None


def select_action(kind: EventKind, reviews: Iterable[Review], reason: str, settings: EngineSettings) -> Decision:
    """Choose the approval action once every check has passed.

    Keyed on whether the bot has already reviewed the PR: a first evaluation
    approves (and labels), a repeat evaluation re-approves only when a review
    was dismissed.
    """
    if not bot_reviews(reviews, settings.bot_login):
        if settings.approved_label:
            return Decision(
                action=Action.APPROVE_AND_LABEL,
                reason=reason,
                message="PR approved first time",
                labels=(settings.approved_label,),
            )
        return Decision(action=Action.APPROVE, reason=reason, message="PR approved first time")

    if kind is EventKind.REVIEW_DISMISSED:
        return Decision(action=Action.RE_APPROVE, reason=reason, message="Review was dismissed, approve again")

    return Decision.skip(f"PR already has a review from {settings.bot_login}. Skipping duplicate approval.")


def decide(event: Event, reviews: Iterable[Review], settings: EngineSettings) -> Decision:
    """Run the full funnel for one event against an already-fetched review list."""
    context = CheckContext(event=event, settings=settings, reviews=tuple(reviews))

    failed = first_failure([*PRE_FETCH_CHECKS, *REVIEW_CHECKS], context)
    if failed is not None:
        return Decision.skip(failed.message)

    reason = extract_reason(event.snapshot.body)
    if reason is None:
        return Decision.skip(_MISSING_REASON)

    return select_action(event.kind, context.reviews, reason, settings)


def process_event(
    event: Event,
    client: BasePullRequestClient,
    settings: EngineSettings,
    dry_run: bool = False,
) -> ApprovalResult:
    """Decide on one event and perform the resulting approval/label calls.

    Review-fetch and approval failures propagate to the caller unchanged. A
    label failure after a successful approval is logged and reported in
    ``label_error``; the approval stands.
    """
    snapshot = event.snapshot
    outputs = ActionOutputs.initial(snapshot.author)
    logger.info("PR: %s#%s %s (%s)", snapshot.repo, snapshot.number, snapshot.html_url, event.kind.value)

    failed = first_failure(PRE_FETCH_CHECKS, CheckContext(event=event, settings=settings))
    if failed is not None:
        logger.info(failed.message)
        return ApprovalResult(decision=Decision.skip(failed.message), outputs=outputs)

    reviews = list(client.list_reviews())
    decision = decide(event, reviews, settings)
    result = ApprovalResult(decision=decision, outputs=outputs)

    if not decision.approves:
        logger.info(decision.message)
        return result

    if dry_run:
        logger.info("Dry run: would perform %s (%s)", decision.action.value, decision.message)
        return result

    client.submit_approval(settings.approval_comment)
    outputs.mark_approved(decision.reason or "")
    logger.info(decision.message)

    if decision.action is Action.APPROVE_AND_LABEL and decision.labels:
        try:
            client.apply_labels(decision.labels)
        except CollaboratorError as e:
            # The approval already took effect; report the label failure without rolling back.
            logger.warning("Approved, but could not apply labels %s: %s", list(decision.labels), e)
            result.label_error = str(e)

    return result
