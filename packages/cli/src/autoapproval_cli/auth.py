"""GitHub token resolution.

Resolution order (stops at first success):
  1. GITHUB_TOKEN environment variable (workflow env / explicit override)
  2. INPUT_GITHUB_TOKEN (the `github-token` input of the packaged action)
  3. `gh auth token` (GitHub CLI session, for running `check` locally)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "INPUT_GITHUB_TOKEN")


def resolve_github_token() -> str | None:
    """Return a GitHub token or None if no source provides one. Never raises."""
    for name in _TOKEN_ENV_VARS:
        token = (os.environ.get(name) or "").strip()
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None

    if result.returncode == 0 and result.stdout.strip():
        logger.debug("Using GitHub token from the gh CLI session.")
        return result.stdout.strip()
    return None
