"""Filter switches shared by the suggestions and parse commands."""

from __future__ import annotations

import click

from prsift_core.config import build_filter_options, load_config
from prsift_core.models import SUGGESTION_KINDS

_FILTER_KEYS = (
    "include_nits",
    "include_duplicates",
    "include_additional",
    "suggestion_types",
    "prioritize_actionable",
    "group_by_type",
    "extract_agent_prompts",
    "include_status_indicators",
)


def filter_flags(f):
    """Attach the filter/ordering options to a command.

    Every switch defaults to None so an unset flag falls back to .prsift.yml.
    """
    decorators = [
        click.option("--nits/--no-nits", "include_nits", default=None, help="Include nitpick suggestions."),
        click.option(
            "--duplicates/--no-duplicates",
            "include_duplicates",
            default=None,
            help="Include duplicate-code suggestions.",
        ),
        click.option(
            "--additional/--no-additional",
            "include_additional",
            default=None,
            help="Include additional (outside-diff) suggestions.",
        ),
        click.option(
            "--type",
            "suggestion_types",
            type=click.Choice(SUGGESTION_KINDS),
            multiple=True,
            help="Only show these kinds. Repeat for several.",
        ),
        click.option(
            "--prioritize/--no-prioritize",
            "prioritize_actionable",
            default=None,
            help="List actionable suggestions first.",
        ),
        click.option("--group/--no-group", "group_by_type", default=None, help="Group by kind, then file."),
        click.option(
            "--prompts/--no-prompts",
            "extract_agent_prompts",
            default=None,
            help="Generate AI agent prompts for each suggestion.",
        ),
        click.option(
            "--status/--no-status",
            "include_status_indicators",
            default=None,
            help="Attach status indicators to each suggestion.",
        ),
    ]
    for decorator in reversed(decorators):
        f = decorator(f)
    return f


def pop_filter_overrides(kwargs: dict) -> dict:
    """Remove the filter flags from a command's kwargs and return them as config overrides."""
    overrides = {key: kwargs.pop(key, None) for key in _FILTER_KEYS}
    # click gives an empty tuple when --type is never passed.
    overrides["suggestion_types"] = list(overrides["suggestion_types"] or ()) or None
    return overrides


def resolve_options(ctx: click.Context, overrides: dict):
    """Merge a command's flags over the group's config and build FilterOptions.

    Returns (config, options). An invalid suggestion type becomes a UsageError.
    """
    config = dict(ctx.obj["config"]) if ctx.obj else load_config()
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    try:
        return config, build_filter_options(config)
    except ValueError as e:
        raise click.UsageError(str(e))
