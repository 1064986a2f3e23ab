"""Entry points: turn CodeRabbit reviews and issue comments into suggestion records.

    review body → author gate → pre-filter → parse_sections
                → classify each item (+ action commands, status indicators)
                → apply_filters

Nothing here raises on document content. Documents that aren't from the bot
or that are noise simply produce no records.
"""

from __future__ import annotations

import logging

from prsift_core.classifier import Classifier
from prsift_core.commands import CommandGenerator, generate_action_commands
from prsift_core.filtering import apply_filters, section_is_included
from prsift_core.models import (
    KIND_ACTIONABLE,
    FilterOptions,
    PullRequestRef,
    ReviewDocument,
    StatusIndicators,
    SuggestionRecord,
)
from prsift_core.prefilter import is_bot_author, should_discard_issue_comment, should_discard_review_body
from prsift_core.sections import parse_sections
from prsift_core.status import StatusCalculator, calculate_status_indicators

logger = logging.getLogger(__name__)

_ISSUE_PROMPT_CHARS = 200
_ISSUE_FILE_PATH = "unknown"


def process_review(
    review: ReviewDocument,
    pr: PullRequestRef,
    options: FilterOptions | None = None,
    include_status_indicators: bool = True,
    classifier: Classifier | None = None,
    command_generator: CommandGenerator | None = None,
    status_calculator: StatusCalculator | None = None,
) -> list[SuggestionRecord]:
    """Extract the suggestions from one CodeRabbit review body."""
    if not is_bot_author(review.author):
        return []
    if should_discard_review_body(review.body):
        logger.debug("Review %s discarded by pre-filter", review.id)
        return []

    options = options or FilterOptions()
    classifier = classifier or Classifier()
    command_generator = command_generator or generate_action_commands
    status_calculator = status_calculator or calculate_status_indicators

    records: list[SuggestionRecord] = []
    for section in parse_sections(review.body):
        # Skip excluded sections before classifying so they don't use up ids.
        if not section_is_included(section.kind, options):
            continue
        for item in section.items:
            record = classifier.classify(
                item,
                section.kind,
                source=review,
                extract_agent_prompt=options.extract_agent_prompts is not False,
            )
            record.action_commands = command_generator(pr, review.id, "review", item.description, item.file_path)
            if include_status_indicators:
                record.status_indicators = status_calculator(record)
            records.append(record)

    logger.debug("Review %s produced %d record(s) before filtering", review.id, len(records))
    return apply_filters(records, options)


def process_issue_comment(
    comment: ReviewDocument,
    pr: PullRequestRef,
    options: FilterOptions | None = None,
    include_status_indicators: bool = True,
    command_generator: CommandGenerator | None = None,
) -> list[SuggestionRecord]:
    """Turn one CodeRabbit issue comment into a single actionable record.

    Issue comments have no section structure; the whole comment is one
    suggestion carrying the comment's real GitHub id.
    """
    if not is_bot_author(comment.author):
        return []
    if should_discard_issue_comment(comment.body):
        logger.debug("Issue comment %s discarded by pre-filter", comment.id)
        return []

    command_generator = command_generator or generate_action_commands
    record = SuggestionRecord(
        id=comment.id,
        body=comment.body,
        kind=KIND_ACTIONABLE,
        file_path=_ISSUE_FILE_PATH,
        severity="medium",
        category="general",
        agent_prompt=f"Review this CodeRabbit issue comment: {comment.body[:_ISSUE_PROMPT_CHARS]}...",
        source_type="issue_comment",
        author=comment.author,
        author_association=comment.author_association,
        is_bot=comment.is_bot,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        html_url=comment.html_url,
    )
    record.action_commands = command_generator(pr, comment.id, "issue_comment", comment.body, None)
    if include_status_indicators:
        record.status_indicators = StatusIndicators(
            resolution_status="unresolved",
            priority_score=5,
            is_actionable=True,
            has_manual_response=False,
            is_outdated=False,
            needs_external_resolution=False,
            suggested_action="reply",
        )
    return apply_filters([record], options)


def collect_suggestions(
    reviews: list[ReviewDocument],
    issue_comments: list[ReviewDocument],
    pr: PullRequestRef,
    options: FilterOptions | None = None,
    include_status_indicators: bool = True,
    classifier: Classifier | None = None,
    command_generator: CommandGenerator | None = None,
    status_calculator: StatusCalculator | None = None,
) -> list[SuggestionRecord]:
    """Process every document on a pull request and order the combined result.

    Each document is filtered on its own; the ordering options are then
    applied once more across documents so prioritisation and grouping hold
    for the whole pull request.
    """
    options = options or FilterOptions()
    classifier = classifier or Classifier()

    records: list[SuggestionRecord] = []
    for review in reviews:
        records.extend(
            process_review(
                review,
                pr,
                options,
                include_status_indicators=include_status_indicators,
                classifier=classifier,
                command_generator=command_generator,
                status_calculator=status_calculator,
            )
        )
    for comment in issue_comments:
        records.extend(
            process_issue_comment(
                comment,
                pr,
                options,
                include_status_indicators=include_status_indicators,
                command_generator=command_generator,
            )
        )

    if options.prioritize_actionable or options.group_by_type:
        records = apply_filters(records, options)
    return records
