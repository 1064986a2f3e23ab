"""parse command — run the pipeline on a saved review body, no GitHub access."""

from __future__ import annotations

import click
from rich.console import Console

from prsift_cli.commands.options import filter_flags, pop_filter_overrides, resolve_options
from prsift_cli.render import print_json, print_records
from prsift_core.models import PullRequestRef, ReviewDocument
from prsift_core.pipeline import process_issue_comment, process_review

console = Console()


@click.command("parse")
@click.argument("body_file", type=click.File("r", encoding="utf-8"))
@click.option("--author", default="coderabbitai[bot]", show_default=True, help="Author login to attribute.")
@click.option("--repo", default="owner/repo", show_default=True, help="Repository used in generated commands.")
@click.option("--pr", "pr_number", type=int, default=0, show_default=True, help="PR number used in commands.")
@click.option("--issue-comment", is_flag=True, help="Treat the input as an issue comment, not a review body.")
@filter_flags
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON.")
@click.option("--show-prompts", is_flag=True, help="Print the AI agent prompt under the table.")
@click.pass_context
def parse_cmd(
    ctx,
    body_file,
    author: str,
    repo: str,
    pr_number: int,
    issue_comment: bool,
    as_json: bool,
    show_prompts: bool,
    **filters,
):
    """Extract suggestions from a CodeRabbit review body saved to BODY_FILE.

    Use - to read from stdin, e.g. `gh api .../reviews/ID --jq .body | prsift parse -`.
    """
    config, options = resolve_options(ctx, pop_filter_overrides(filters))
    document = ReviewDocument(id=0, body=body_file.read(), author=author)
    pr = PullRequestRef.parse(repo, pr_number)
    include_status = config.get("include_status_indicators", True)

    if issue_comment:
        records = process_issue_comment(document, pr, options, include_status_indicators=include_status)
    else:
        records = process_review(document, pr, options, include_status_indicators=include_status)

    if as_json:
        print_json(records)
        return
    if not records:
        console.print("[yellow]Nothing actionable: not from CodeRabbit, filtered as noise, or no suggestions.[/yellow]")
        return
    print_records(records, show_prompts=show_prompts)
