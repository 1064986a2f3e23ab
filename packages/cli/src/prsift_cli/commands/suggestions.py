"""suggestions command — list a pull request's unresolved CodeRabbit suggestions."""

from __future__ import annotations

import click
from rich.console import Console

from prsift_cli.commands.options import filter_flags, pop_filter_overrides, resolve_options
from prsift_cli.render import print_json, print_records
from prsift_core.gh.pull_request import get_issue_comment_documents, get_pull, get_repo, get_review_documents
from prsift_core.models import PullRequestRef
from prsift_core.pipeline import collect_suggestions

console = Console()


@click.command("suggestions")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@filter_flags
@click.option(
    "--issue-comments/--no-issue-comments",
    "include_issue_comments",
    default=None,
    help="Also scan the PR's conversation comments.",
)
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON.")
@click.option("--show-prompts", is_flag=True, help="Print the AI agent prompt under the table.")
@click.pass_context
def suggestions_cmd(
    ctx,
    repo: str,
    pr_number: int,
    include_issue_comments: bool | None,
    as_json: bool,
    show_prompts: bool,
    **filters,
):
    """Fetch a PR's CodeRabbit reviews and list their actionable suggestions.

    Rate-limit notices, status dumps and encoded bot state are dropped; what
    remains is one row per suggestion, with an AI agent prompt and the gh
    commands to reply to it.

    \b
    Required environment variables:
      GITHUB_TOKEN   GitHub personal access token (or GH_TOKEN, or use gh CLI)
    """
    overrides = pop_filter_overrides(filters)
    overrides["include_issue_comments"] = include_issue_comments
    config, options = resolve_options(ctx, overrides)

    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    this_repo = get_repo(repo, token=token)
    try:
        this_pr = get_pull(this_repo, pr_number)
    except ValueError as e:
        raise click.ClickException(str(e))

    reviews = get_review_documents(this_pr)
    issue_comments = get_issue_comment_documents(this_pr) if config.get("include_issue_comments", True) else []
    if not as_json:
        console.print(
            f"[dim]Scanning {len(reviews)} review(s) and {len(issue_comments)} comment(s) "
            f"on {repo}#{pr_number}[/dim]"
        )

    records = collect_suggestions(
        reviews,
        issue_comments,
        PullRequestRef.parse(repo, pr_number),
        options,
        include_status_indicators=config.get("include_status_indicators", True),
    )

    if as_json:
        print_json(records)
    else:
        print_records(records, show_prompts=show_prompts)
