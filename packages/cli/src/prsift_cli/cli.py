"""CLI entry point for prsift.

Commands:
  suggestions  — list a pull request's unresolved CodeRabbit suggestions
  parse        — run the same pipeline on a saved review body, offline
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prsift_cli.commands.parse import parse_cmd
from prsift_cli.commands.suggestions import suggestions_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prsift"),
    prog_name="prsift",
)
@click.option(
    "--config",
    "config_path",
    default=".prsift.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRSIFT_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log parser and filter decisions.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Sift actionable CodeRabbit suggestions out of GitHub PR reviews."""
    from prsift_core.config import load_config
    from prsift_cli.auth import resolve_github_token

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(suggestions_cmd)
main.add_command(parse_cmd)
