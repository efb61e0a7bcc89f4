"""run command — evaluate the webhook delivery of a GitHub Actions run."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from autoapproval_cli.runtime import load_settings, print_result, require_token
from autoapproval_core.checks import should_process
from autoapproval_core.engine import process_event
from autoapproval_core.events import load_event_file, parse_event
from autoapproval_core.gh.base import CollaboratorError
from autoapproval_core.gh.pull_request import GithubPullRequestClient
from autoapproval_core.outputs import ActionOutputs, write_action_outputs

console = Console()
logger = logging.getLogger(__name__)


@click.command("run")
@click.option(
    "--event-path",
    required=True,
    envvar="GITHUB_EVENT_PATH",
    type=click.Path(exists=True, dir_okay=False),
    help="Webhook payload file. Defaults to $GITHUB_EVENT_PATH.",
)
@click.option(
    "--event-name",
    required=True,
    envvar="GITHUB_EVENT_NAME",
    help="Webhook event name, e.g. pull_request. Defaults to $GITHUB_EVENT_NAME.",
)
@click.option("--dry-run", is_flag=True, help="Decide and report without approving or labelling.")
@click.pass_context
def run_cmd(ctx, event_path: str, event_name: str, dry_run: bool):
    """Approve the pull request of the current delivery if it qualifies.

    \b
    Writes these step outputs to $GITHUB_OUTPUT:
      approved             "true" or "false"
      auto_approve_reason  text after "auto-approve reason:" in the PR body
      pr_author            login of the PR author
    """
    payload = load_event_file(event_path)
    pr_author = ((payload.get("pull_request") or {}).get("user") or {}).get("login") or ""
    outputs = ActionOutputs.initial(pr_author)

    try:
        event = parse_event(event_name, payload)
        if event is None:
            console.print(f"[yellow]Nothing to do for {event_name}.{payload.get('action', '')}.[/yellow]")
            return

        # Creation-time duplicates are dropped before any GitHub call or config read.
        if not should_process(event):
            logger.info("Ignoring additional creation event: %s", event.kind.value)
            return

        token = require_token()
        snapshot = event.snapshot
        try:
            client = GithubPullRequestClient.connect(snapshot.repo, snapshot.number, token)
            settings = load_settings(ctx.obj["config_path"], client)
            result = process_event(event, client, settings, dry_run=dry_run)
        except CollaboratorError as e:
            raise click.ClickException(str(e))

        outputs = result.outputs
        print_result(console, result, dry_run=dry_run)
    finally:
        # Outputs are reported for every run, skipped or failed included.
        write_action_outputs(outputs)
