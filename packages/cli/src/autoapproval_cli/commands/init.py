"""init command — write a starter configuration and Actions workflow."""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from rich.console import Console

from autoapproval_core.config import DEFAULT_CONFIG

console = Console()

_WORKFLOW_PATH = Path(".github/workflows/autoapproval.yml")
_ACTIONS_BOT_LOGIN = "github-actions[bot]"

_WORKFLOW_TEMPLATE = """\
name: Auto-approval

on:
  pull_request:
    types: [opened, reopened, labeled, edited]
  pull_request_review:
    types: [submitted, dismissed]

jobs:
  autoapprove:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      pull-requests: write

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install autoapproval
        run: pip install "autoapproval=={version}"

      - name: Evaluate pull request
        id: autoapproval
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
        run: autoapproval run
"""

# Keys written by init; the reserved rule keys are left out of the starter file.
_STARTER_KEYS = ("blacklist", "bot_login", "approved_label", "approval_comment")


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file.")
@click.pass_context
def init_cmd(ctx, force: bool):
    """Create autoapproval.yml and optionally a GitHub Actions workflow."""
    config_path = Path(ctx.obj["config_path"])
    generate_workflow = click.confirm(f"Generate {_WORKFLOW_PATH} for GitHub Actions?", default=True)

    if config_path.exists() and not force:
        console.print(f"[yellow]{config_path} already exists. Use --force to overwrite.[/yellow]")
    else:
        # The generated workflow approves with GITHUB_TOKEN, so reviews are authored by github-actions[bot].
        default_bot = _ACTIONS_BOT_LOGIN if generate_workflow else DEFAULT_CONFIG["bot_login"]
        bot_login = click.prompt("Bot account that submits approvals", default=default_bot)
        label = click.prompt(
            "Label to apply on first approval (must already exist; '-' for none)",
            default=DEFAULT_CONFIG["approved_label"],
        )
        _write_config(config_path, bot_login=bot_login, approved_label="" if label == "-" else label)
        console.print(f"[green]Created {config_path}[/green]")

    if generate_workflow:
        _write_workflow()
        console.print(f"[green]Created {_WORKFLOW_PATH}[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print('PR authors opt in by adding a line "auto-approve reason: <why>" to the description.')


def _write_config(path: Path, bot_login: str, approved_label: str) -> None:
    config = {key: DEFAULT_CONFIG[key] for key in _STARTER_KEYS}
    config["bot_login"] = bot_login
    config["approved_label"] = approved_label
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(config, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("autoapproval")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow() -> None:
    _WORKFLOW_PATH.parent.mkdir(parents=True, exist_ok=True)
    _WORKFLOW_PATH.write_text(_WORKFLOW_TEMPLATE.format(version=_get_version()))
