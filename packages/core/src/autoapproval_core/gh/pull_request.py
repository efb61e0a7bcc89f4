from __future__ import annotations

import logging
from typing import Iterable

from github import Auth, Github, GithubException

from autoapproval_core.config import DEFAULT_CONFIG_PATH, parse_config_text
from autoapproval_core.gh.base import BasePullRequestClient, CollaboratorError
from autoapproval_core.models import PullRequestSnapshot, Review, ReviewState

logger = logging.getLogger(__name__)


def get_repo(repo_name: str, token: str):
    return Github(auth=Auth.Token(token)).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def snapshot_from_pull(pr, repo_name: str = "") -> PullRequestSnapshot:
    """Build a snapshot from a PyGithub PullRequest (used when no webhook payload exists)."""
    return PullRequestSnapshot(
        number=pr.number,
        title=pr.title or "",
        body=pr.body or "",
        labels=tuple(label.name for label in pr.labels or []),
        author=pr.user.login if pr.user else "",
        created_at=pr.created_at,
        updated_at=pr.updated_at,
        repo=repo_name,
        html_url=pr.html_url or "",
    )


def _error_message(e: GithubException) -> str:
    data = e.data if isinstance(e.data, dict) else {}
    return f"{e.status} {data.get('message', '')}".strip()


class GithubPullRequestClient(BasePullRequestClient):
    """PyGithub-backed client bound to one pull request."""

    def __init__(self, repo, pr):
        self._repo = repo
        self._pr = pr

    @classmethod
    def connect(cls, repo_name: str, pr_number: int, token: str) -> GithubPullRequestClient:
        try:
            repo = get_repo(repo_name, token)
            return cls(repo, get_pull(repo, pr_number))
        except GithubException as e:
            raise CollaboratorError("get_pull", f"{repo_name}#{pr_number}: {_error_message(e)}") from e

    @property
    def pull(self):
        return self._pr

    def list_reviews(self) -> list[Review]:
        try:
            return [
                Review(author=r.user.login if r.user else "", state=ReviewState.parse(r.state))
                for r in self._pr.get_reviews()
            ]
        except GithubException as e:
            raise CollaboratorError("list_reviews", _error_message(e)) from e

    def submit_approval(self, body: str) -> None:
        try:
            self._pr.create_review(body=body, event="APPROVE")
        except GithubException as e:
            raise CollaboratorError("submit_approval", _error_message(e)) from e

    def apply_labels(self, labels: Iterable[str]) -> None:
        labels = list(labels)
        if not labels:
            return
        try:
            # Only attach labels that already exist; get_label raises 404 otherwise.
            existing = [self._repo.get_label(name) for name in labels]
            self._pr.add_to_labels(*existing)
        except GithubException as e:
            raise CollaboratorError("apply_labels", _error_message(e)) from e

    def load_config(self, path: str = DEFAULT_CONFIG_PATH) -> dict:
        """Read autoapproval.yml from the repository's default branch; {} if absent."""
        try:
            contents = self._repo.get_contents(path)
        except GithubException as e:
            if e.status == 404:
                logger.debug("No %s in repository", path)
                return {}
            raise CollaboratorError("load_config", _error_message(e)) from e
        return parse_config_text(contents.decoded_content.decode("utf-8", errors="replace"))
