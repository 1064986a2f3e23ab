"""Noise detection for CodeRabbit output.

The bot posts its real findings and its administrative chatter (rate-limit
notices, review-status dumps, base64-encoded internal state) through the
same channels. These checks run on raw text, before any parsing, and decide
whether a whole document is worth parsing at all.

The phrase lists and thresholds were calibrated against real bot output.
Phrases are counted once each (distinct phrases present), case-insensitively.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prsift_core.models import SuggestionRecord

logger = logging.getLogger(__name__)

# Review bodies with this many bookkeeping phrases are status commits.
_BOOKKEEPING_DISCARD_THRESHOLD = 2
# Review bodies longer than this with no actionable phrase are dropped.
_REVIEW_BODY_MAX_CHARS = 10_000
# Issue comments with this many rate-limit phrases are dropped.
_ISSUE_RATE_LIMIT_THRESHOLD = 2

# Opaque payload detection.
_ENCODED_RUN_MIN_CHARS = 100
_ENCODED_RUN_DISCARD_COUNT = 2
_ENCODED_RUN_HUGE_CHARS = 500

# Per-record detector used by the post-filter.
_RECORD_BODY_MAX_CHARS = 5_000
_RECORD_MIN_ACTIONABLE_HITS = 3

_BASE64_RUN_RE = re.compile(r"[A-Za-z0-9+/]{100,}={0,2}")

_RECORD_BOOKKEEPING_PHRASES = (
    "internal state",
    "state map",
    "internal map",
    "review state",
    "internal metadata",
    "review metadata",
    "commit metadata",
    "system generated",
    "auto generated",
    "internal review",
    "review summary",
    "no actionable items",
    "no suggestions",
    "review complete",
    "analysis complete",
)

# Review bodies additionally carry the bot's "still working" banners.
BOOKKEEPING_PHRASES = _RECORD_BOOKKEEPING_PHRASES + (
    "processing your request",
    "analyzing code changes",
)

RATE_LIMIT_PHRASES = (
    "rate limit exceeded",
    "rate limited",
    "reached my rate limit",
    "please try again later",
    "before requesting another review",
    "rate limit reached",
    "due to rate limiting",
)

ISSUE_RATE_LIMIT_PHRASES = (
    "rate limit exceeded",
    "rate limited by coderabbit.ai",
    "please wait",
    "before requesting another review",
    "exceeded the limit",
)

_RECORD_ACTIONABLE_PHRASES = (
    "suggestion:",
    "recommendation:",
    "consider:",
    "improve:",
    "refactor:",
    "fix:",
    "change:",
    "update:",
    "modify:",
    "replace:",
    "add:",
    "remove:",
    "delete:",
)

# Review bodies also announce their findings with section banners.
ACTIONABLE_PHRASES = (
    "actionable comments posted",
    "nitpick comments",
    "outside diff range comments",
    "additional comments",
) + _RECORD_ACTIONABLE_PHRASES


def _count_phrases(text_lower: str, phrases: tuple[str, ...]) -> int:
    return sum(1 for phrase in phrases if phrase in text_lower)


def _has_opaque_payload(text: str) -> bool:
    """Return True if text carries long base64 runs (encoded bot state)."""
    runs = [m for m in _BASE64_RUN_RE.findall(text) if len(m) >= _ENCODED_RUN_MIN_CHARS]
    if len(runs) >= _ENCODED_RUN_DISCARD_COUNT:
        return True
    return any(len(run) > _ENCODED_RUN_HUGE_CHARS for run in runs)


def should_discard_review_body(text: str) -> bool:
    """Return True if a review body is bot noise rather than a set of findings.

    Decision order (first match wins):
      1. two or more bookkeeping phrases  → discard
      2. any actionable phrase            → keep
      3. any bookkeeping/rate-limit hit   → discard
      4. longer than 10,000 characters    → discard
      5. otherwise                        → keep
    """
    lower = text.lower()
    bookkeeping = _count_phrases(lower, BOOKKEEPING_PHRASES)
    rate_limit = _count_phrases(lower, RATE_LIMIT_PHRASES)

    if bookkeeping >= _BOOKKEEPING_DISCARD_THRESHOLD:
        logger.debug("Discarding review body: %d bookkeeping phrases", bookkeeping)
        return True

    if _count_phrases(lower, ACTIONABLE_PHRASES) >= 1:
        return False

    if bookkeeping >= 1 or rate_limit >= 1:
        logger.debug(
            "Discarding review body: bookkeeping=%d rate_limit=%d, nothing actionable", bookkeeping, rate_limit
        )
        return True

    if len(text) > _REVIEW_BODY_MAX_CHARS:
        logger.debug("Discarding review body: %d chars with nothing actionable", len(text))
        return True

    return False


def should_discard_issue_comment(text: str) -> bool:
    """Return True if an issue comment is a rate-limit notice or an encoded state dump."""
    rate_limit = _count_phrases(text.lower(), ISSUE_RATE_LIMIT_PHRASES)
    if rate_limit >= _ISSUE_RATE_LIMIT_THRESHOLD:
        logger.debug("Discarding issue comment: %d rate-limit phrases", rate_limit)
        return True

    if _has_opaque_payload(text):
        logger.debug("Discarding issue comment: opaque encoded payload")
        return True

    return False


def is_main_review_commit(record: SuggestionRecord) -> bool:
    """Return True if a classified record is really the bot's main status commit.

    Short hashes and normal identifiers are fine; long encoded runs, several
    bookkeeping phrases, or a very large body with little actionable wording
    are not. Records that did not come out of the classifier (kind is None)
    are never flagged.
    """
    if record.kind is None:
        return False

    body = record.body
    if _has_opaque_payload(body):
        return True

    lower = body.lower()
    if _count_phrases(lower, _RECORD_BOOKKEEPING_PHRASES) >= _BOOKKEEPING_DISCARD_THRESHOLD:
        return True

    if len(body) > _RECORD_BODY_MAX_CHARS:
        if _count_phrases(lower, _RECORD_ACTIONABLE_PHRASES) < _RECORD_MIN_ACTIONABLE_HITS:
            return True

    return False


def is_bot_author(login: str | None) -> bool:
    """Return True if the login belongs to the CodeRabbit bot."""
    if not login:
        return False
    lower = login.lower()
    return lower == "coderabbitai" or "coderabbit" in lower
