"""GitHub Actions step outputs: approved, auto_approve_reason, pr_author."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)


@dataclass
class ActionOutputs:
    approved: str = "false"
    auto_approve_reason: str = ""
    pr_author: str = ""

    @classmethod
    def initial(cls, pr_author: str) -> ActionOutputs:
        return cls(approved="false", auto_approve_reason="", pr_author=pr_author or "")

    def mark_approved(self, reason: str) -> None:
        self.approved = "true"
        self.auto_approve_reason = reason

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


def write_action_outputs(outputs: ActionOutputs, path: str | None = None) -> bool:
    """Append outputs to the $GITHUB_OUTPUT file using the multi-line syntax.

    Returns False without writing when no output file is configured or the
    write fails; outputs never abort a run.
    """
    path = path or os.environ.get("GITHUB_OUTPUT")
    if not path:
        return False

    chunks = []
    for name, value in outputs.as_dict().items():
        delimiter = f"EOF_{name}"
        chunks.append(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write("".join(chunks))
    except OSError as e:
        logger.warning("Failed to write action outputs to %s: %s", path, e)
        return False
    return True
