"""Tests for the funnel predicates: admission, blacklist and existing approvals."""

from datetime import datetime, timedelta, timezone

import pytest

from autoapproval_core.checks import (
    PRE_FETCH_CHECKS,
    CheckContext,
    blacklisted_labels,
    blacklisted_title_terms,
    bot_reviews,
    first_failure,
    has_foreign_approval,
    is_blacklisted,
    should_process,
)
from autoapproval_core.config import EngineSettings
from autoapproval_core.models import Event, EventKind, PullRequestSnapshot, Review, ReviewState

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
BLACKLIST = ("do-not-merge", "dnl", "wip")


def make_event(kind=EventKind.OPENED, title="Fix typo", labels=(), updated=None):
    snapshot = PullRequestSnapshot(
        number=1,
        title=title,
        labels=tuple(labels),
        created_at=CREATED,
        updated_at=updated if updated is not None else CREATED,
    )
    return Event(kind=kind, snapshot=snapshot)


class TestShouldProcess:
    @pytest.mark.parametrize("kind", [EventKind.OPENED, EventKind.REOPENED])
    def test_opened_and_reopened_always_admitted(self, kind):
        assert should_process(make_event(kind=kind)) is True

    @pytest.mark.parametrize(
        "kind",
        [EventKind.LABELED, EventKind.EDITED, EventKind.REVIEW_SUBMITTED, EventKind.REVIEW_DISMISSED],
    )
    def test_creation_time_side_events_rejected(self, kind):
        assert should_process(make_event(kind=kind)) is False

    def test_later_edit_admitted(self):
        event = make_event(kind=EventKind.EDITED, updated=CREATED + timedelta(minutes=5))
        assert should_process(event) is True

    def test_missing_timestamps_treated_as_duplicate(self):
        event = Event(kind=EventKind.LABELED, snapshot=PullRequestSnapshot(number=1))
        assert should_process(event) is False


class TestBlacklist:
    def test_title_substring_any_case(self):
        assert blacklisted_title_terms("[WIP] refactor parser", BLACKLIST) == ["wip"]

    def test_title_substring_inside_word(self):
        assert blacklisted_title_terms("Swipe gesture support", BLACKLIST) == ["wip"]

    def test_title_multiple_terms(self):
        assert blacklisted_title_terms("DNL: do-not-merge yet", BLACKLIST) == ["do-not-merge", "dnl"]

    def test_clean_title(self):
        assert blacklisted_title_terms("Bump dependency", BLACKLIST) == []

    def test_label_exact_match_any_case(self):
        assert blacklisted_labels(["DNL", "docs"], BLACKLIST) == ["dnl"]

    def test_label_partial_match_does_not_count(self):
        assert blacklisted_labels(["wip-ish", "dnl2"], BLACKLIST) == []

    def test_is_blacklisted_by_label_independent_of_title(self):
        snapshot = PullRequestSnapshot(number=1, title="Perfectly fine", labels=("Dnl",))
        assert is_blacklisted(snapshot, BLACKLIST) is True

    def test_is_blacklisted_false_for_clean_pr(self):
        snapshot = PullRequestSnapshot(number=1, title="Perfectly fine", labels=("docs",))
        assert is_blacklisted(snapshot, BLACKLIST) is False

    def test_custom_blacklist(self):
        snapshot = PullRequestSnapshot(number=1, title="Experimental: new cache")
        assert is_blacklisted(snapshot, ("experimental",)) is True
        assert is_blacklisted(snapshot, BLACKLIST) is False


class TestForeignApproval:
    def test_existing_approval_blocks(self):
        reviews = [Review("alice", ReviewState.APPROVED)]
        assert has_foreign_approval(reviews, EventKind.LABELED) is True

    def test_dismissal_event_ignores_existing_approval(self):
        reviews = [Review("alice", ReviewState.APPROVED)]
        assert has_foreign_approval(reviews, EventKind.REVIEW_DISMISSED) is False

    def test_non_approving_reviews_do_not_block(self):
        reviews = [Review("alice", ReviewState.COMMENTED), Review("bob", ReviewState.CHANGES_REQUESTED)]
        assert has_foreign_approval(reviews, EventKind.OPENED) is False

    def test_no_reviews(self):
        assert has_foreign_approval([], EventKind.OPENED) is False


def test_bot_reviews_filters_by_login():
    reviews = [Review("autoapproval[bot]", ReviewState.DISMISSED), Review("alice", ReviewState.COMMENTED)]
    assert bot_reviews(reviews, "autoapproval[bot]") == [reviews[0]]


class TestFirstFailure:
    def test_returns_none_when_all_pass(self):
        context = CheckContext(event=make_event(), settings=EngineSettings())
        assert first_failure(PRE_FETCH_CHECKS, context) is None

    def test_stops_at_first_failing_check(self):
        event = make_event(kind=EventKind.LABELED, title="WIP")
        result = first_failure(PRE_FETCH_CHECKS, CheckContext(event=event, settings=EngineSettings()))
        assert result.check_id == "admission"
        assert "labeled" in result.message

    def test_title_message_names_terms(self):
        event = make_event(title="WIP: do-not-merge")
        result = first_failure(PRE_FETCH_CHECKS, CheckContext(event=event, settings=EngineSettings()))
        assert result.check_id == "blacklisted-title"
        assert "do-not-merge" in result.message and "wip" in result.message

    def test_label_message_names_labels(self):
        event = make_event(labels=["WIP"])
        result = first_failure(PRE_FETCH_CHECKS, CheckContext(event=event, settings=EngineSettings()))
        assert result.check_id == "blacklisted-labels"
        assert "wip" in result.message
