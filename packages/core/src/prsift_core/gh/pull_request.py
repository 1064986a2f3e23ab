"""PyGithub access for the CLI.

Retrieval lives outside the suggestion pipeline: these helpers fetch a pull
request's reviews and issue comments and hand them over as ReviewDocuments.
"""

from __future__ import annotations

from datetime import datetime

from github import Github, GithubException

from prsift_core.models import ReviewDocument


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    try:
        return repo.get_pull(pr_number)
    except GithubException:
        raise ValueError(f"PR #{pr_number} not found in {repo.full_name}.")


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _login(user) -> str:
    return user.login if user is not None else ""


def _is_bot(user) -> bool:
    return user is not None and user.type == "Bot"


def get_review_documents(pr) -> list[ReviewDocument]:
    """Return every review on the PR that has a body."""
    documents = []
    for review in pr.get_reviews():
        if not review.body:
            continue
        submitted = _isoformat(review.submitted_at)
        documents.append(
            ReviewDocument(
                id=review.id,
                body=review.body,
                author=_login(review.user),
                created_at=submitted,
                updated_at=submitted,
                html_url=review.html_url,
                is_bot=_is_bot(review.user),
            )
        )
    return documents


def get_issue_comment_documents(pr) -> list[ReviewDocument]:
    """Return every top-level conversation comment on the PR."""
    return [
        ReviewDocument(
            id=comment.id,
            body=comment.body or "",
            author=_login(comment.user),
            created_at=_isoformat(comment.created_at),
            updated_at=_isoformat(comment.updated_at),
            html_url=comment.html_url,
            is_bot=_is_bot(comment.user),
        )
        for comment in pr.get_issue_comments()
    ]
