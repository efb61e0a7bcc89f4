"""check command — evaluate a live pull request from a terminal."""

from __future__ import annotations

import click
from rich.console import Console

from autoapproval_cli.runtime import load_settings, print_result, require_token
from autoapproval_core.engine import process_event
from autoapproval_core.gh.base import CollaboratorError
from autoapproval_core.gh.pull_request import GithubPullRequestClient, snapshot_from_pull
from autoapproval_core.models import Event, EventKind

console = Console()


@click.command("check")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--event",
    "event_kind",
    type=click.Choice([kind.value for kind in EventKind]),
    default=EventKind.OPENED.value,
    show_default=True,
    help="Event kind to evaluate the PR as.",
)
@click.option("--apply", "apply_", is_flag=True, help="Actually approve and label instead of a dry run.")
@click.pass_context
def check_cmd(ctx, repo: str, pr_number: int, event_kind: str, apply_: bool):
    """Show what autoapproval would do for a pull request.

    The PR's current title, labels, description and reviews are fetched from
    GitHub and run through the same checks as a webhook delivery. Nothing is
    posted unless --apply is given.
    """
    token = require_token()
    dry_run = not apply_
    try:
        client = GithubPullRequestClient.connect(repo, pr_number, token)
        event = Event(kind=EventKind(event_kind), snapshot=snapshot_from_pull(client.pull, repo_name=repo))
        settings = load_settings(ctx.obj["config_path"], client)
        result = process_event(event, client, settings, dry_run=dry_run)
    except CollaboratorError as e:
        raise click.ClickException(str(e))

    print_result(console, result, dry_run=dry_run)
