"""Helpers shared by the run and check commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from autoapproval_cli.auth import resolve_github_token
from autoapproval_core.config import EngineSettings, load_config
from autoapproval_core.engine import ApprovalResult
from autoapproval_core.gh.base import BasePullRequestClient, CollaboratorError

logger = logging.getLogger(__name__)

_ACTION_STYLE = {
    "NONE": "yellow",
    "APPROVE": "green",
    "APPROVE_AND_LABEL": "green",
    "RE_APPROVE": "cyan",
}


def require_token() -> str:
    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN (in Actions: ${{ secrets.GITHUB_TOKEN }}) "
            "or run `gh auth login` first."
        )
    return token


def load_settings(config_path: str, client: BasePullRequestClient) -> EngineSettings:
    """Build engine settings, reading the repository's config when no local file exists."""
    remote_config = None
    try:
        if not Path(config_path).exists():
            remote_config = client.load_config(config_path)
        config = load_config(config_path, remote_config=remote_config)
    except (CollaboratorError, ValueError) as e:
        raise click.ClickException(f"Could not load {config_path}: {e}")
    logger.debug("Loaded config: %s", {k: v for k, v in config.items() if k != "github_token"})
    return EngineSettings.from_config(config)


def print_result(console: Console, result: ApprovalResult, dry_run: bool = False) -> None:
    decision = result.decision
    style = _ACTION_STYLE.get(decision.action.value, "white")

    table = Table(title="Auto-approval" + (" (dry run)" if dry_run else ""), show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("action", f"[{style}]{decision.action.value}[/{style}]")
    table.add_row("detail", decision.message)
    for name, value in result.outputs.as_dict().items():
        table.add_row(name, value)
    if result.label_error:
        table.add_row("label error", f"[red]{result.label_error}[/red]")

    console.print(table)
