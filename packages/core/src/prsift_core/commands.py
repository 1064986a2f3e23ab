"""Default reply/resolve command generator.

The pipeline treats command generation as an injected collaborator: any
callable with the signature of ``generate_action_commands`` can be passed in.
This default emits GitHub CLI (``gh``) invocations a developer can paste.
"""

from __future__ import annotations

import shlex
from typing import Callable, Optional

from prsift_core.models import ActionCommands, PullRequestRef

CommandGenerator = Callable[[PullRequestRef, int, str, str, Optional[str]], ActionCommands]

_RESOLVE_CONDITION = "Run ONLY after you've verified the fix is in place."
_QUOTE_CHARS = 80


def _quote_excerpt(body: str) -> str:
    first_line = body.strip().splitlines()[0] if body.strip() else ""
    if len(first_line) > _QUOTE_CHARS:
        first_line = first_line[:_QUOTE_CHARS] + "..."
    return f"> {first_line}\n\n" if first_line else ""


def generate_action_commands(
    pr: PullRequestRef,
    source_id: int,
    source_type: str,
    body: str,
    file_path: str | None = None,
) -> ActionCommands:
    """Build the commands for replying to and resolving one suggestion.

    Inline review comments (``source_type`` "review_comment" with a real,
    positive id) are answered in their thread. Everything else, including the
    suggestions parsed out of a review body, can only be answered with a
    top-level PR comment.
    """
    repo = shlex.quote(pr.full_name)
    location = f" on `{file_path}`" if file_path else ""
    reply_body = shlex.quote(f"{_quote_excerpt(body)}YOUR_RESPONSE_HERE")
    resolve_body = shlex.quote(f"{_quote_excerpt(body)}✅ Fixed{location}")

    if source_type == "review_comment" and source_id > 0:
        reply_command = (
            f"gh api repos/{pr.full_name}/pulls/{pr.number}/comments/{source_id}/replies "
            f"-f body={shlex.quote('YOUR_RESPONSE_HERE')}"
        )
    else:
        reply_command = f"gh pr comment {pr.number} --repo {repo} --body {reply_body}"

    return ActionCommands(
        reply_command=reply_command,
        resolve_command=f"gh pr comment {pr.number} --repo {repo} --body {resolve_body}",
        resolve_condition=_RESOLVE_CONDITION,
        view_in_browser=f"gh pr view {pr.number} --repo {repo} --web",
    )
