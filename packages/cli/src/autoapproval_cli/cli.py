"""CLI entry point for autoapproval.

Commands:
  run    — evaluate the webhook delivery of the current GitHub Actions run
  check  — evaluate a live pull request from a terminal (dry run by default)
  init   — write a starter autoapproval.yml and Actions workflow
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from autoapproval_cli.commands.check import check_cmd
from autoapproval_cli.commands.init import init_cmd
from autoapproval_cli.commands.run import run_cmd
from autoapproval_core.config import DEFAULT_CONFIG_PATH

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("autoapproval"),
    prog_name="autoapproval",
)
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to the autoapproval configuration file.",
    envvar="AUTOAPPROVAL_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Approve pull requests that carry an auto-approve reason."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(run_cmd)
main.add_command(check_cmd)
main.add_command(init_cmd)
