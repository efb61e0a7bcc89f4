"""Abstract pull request client.

The engine depends on BasePullRequestClient, not on PyGithub, so tests and
alternative platforms can supply their own implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from autoapproval_core.models import Review


class CollaboratorError(Exception):
    """A platform call (list reviews, approve, label, read config) failed."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class BasePullRequestClient(ABC):
    """Side-effecting operations on the single pull request an event refers to.

    Implementations perform no retries; the engine does not retry either.
    """

    @abstractmethod
    def list_reviews(self) -> list[Review]:
        """Return the current reviews on the PR, fetched fresh."""

    @abstractmethod
    def submit_approval(self, body: str) -> None:
        """Submit an APPROVE review authored by the bot identity."""

    @abstractmethod
    def apply_labels(self, labels: Iterable[str]) -> None:
        """Attach labels that already exist in the repository.

        Raises CollaboratorError when a label is missing.
        """

    def load_config(self, path: str) -> dict:
        """Return the autoapproval config stored in the repository, or {}.

        Optional; the default reads nothing.
        """
        return {}
