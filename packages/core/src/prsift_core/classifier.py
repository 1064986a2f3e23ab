"""Turn parsed items into normalized suggestion records."""

from __future__ import annotations

import itertools
import logging
import threading

from prsift_core.models import KIND_ACTIONABLE, KIND_NIT, Item, ReviewDocument, SuggestionRecord

logger = logging.getLogger(__name__)

SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"

EFFORT_QUICK = "Quick fix (1-2 minutes)"
EFFORT_MEDIUM = "Medium effort (2-5 minutes)"

# Checked in order; the first category with a keyword in the description wins.
_CATEGORY_KEYWORDS = (
    ("security", ("security", "vulnerability")),
    ("performance", ("performance", "slow", "optimize")),
    ("style", ("style", "format", "lint")),
    ("bug", ("error", "exception", "bug")),
)
_DEFAULT_CATEGORY = "general"


class IdCounter:
    """Thread-safe source of synthetic record ids: -1, -2, -3, ...

    GitHub ids are always positive, so negative ids can never collide with a
    real comment. Only uniqueness and ordering are guaranteed; callers must
    not depend on the absolute values.
    """

    def __init__(self, start: int = -1):
        if start >= 0:
            raise ValueError("Synthetic ids must be negative.")
        self._ids = itertools.count(start, -1)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)


# Shared by every classifier that isn't given its own counter, so ids stay
# unique across all documents processed in this process.
_PROCESS_IDS = IdCounter()


def severity_for_kind(kind: str) -> str:
    if kind == KIND_NIT:
        return SEVERITY_LOW
    if kind == KIND_ACTIONABLE:
        return SEVERITY_HIGH
    return SEVERITY_MEDIUM


def effort_for_kind(kind: str) -> str:
    return EFFORT_QUICK if kind == KIND_NIT else EFFORT_MEDIUM


def _positive_int(text: str) -> int | None:
    text = text.strip()
    if not text.isdecimal():
        return None
    value = int(text)
    return value if value > 0 else None


def parse_line_range(line_range: str | None) -> tuple[int | None, int | None]:
    """Parse "42" or "42-45" into (start, end).

    Both values are None unless both halves are positive integers and
    end >= start. A single number is a one-line range.
    """
    parts = (line_range or "").split("-")
    start = _positive_int(parts[0])
    end = _positive_int(parts[1]) if len(parts) > 1 else start
    if start is None or end is None or end < start:
        return None, None
    return start, end


def infer_category(description: str) -> str:
    lower = description.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return category
    return _DEFAULT_CATEGORY


def build_agent_prompt(item: Item, kind: str) -> str:
    """Build a self-contained instruction an AI coding agent can act on."""
    header = f"CodeRabbit {kind} suggestion for {item.file_path}:{item.line_range}"
    priority = severity_for_kind(kind).capitalize()

    if item.code_suggestion is not None:
        return (
            f"{header}\n\n"
            f"Current code:\n```\n{item.code_suggestion.old_code}\n```\n\n"
            f"Suggested change:\n```\n{item.code_suggestion.new_code}\n```\n\n"
            f"Context: {item.description}\n"
            f"Priority: {priority}\n"
            f"Effort: {effort_for_kind(kind)}"
        )

    return f"{header}\n\nDescription: {item.description}\nPriority: {priority}"


class Classifier:
    """Builds SuggestionRecords from parsed items.

    Each classifier draws ids from its own IdCounter when given one, which
    keeps tests independent; otherwise it shares the process-wide counter.
    """

    def __init__(self, ids: IdCounter | None = None):
        self.ids = ids if ids is not None else _PROCESS_IDS

    def classify(
        self,
        item: Item,
        section_kind: str,
        source: ReviewDocument | None = None,
        extract_agent_prompt: bool = True,
    ) -> SuggestionRecord:
        line_start, line_end = parse_line_range(item.line_range)
        if line_start is None:
            logger.debug("Unusable line range %r for %s", item.line_range, item.file_path)

        record = SuggestionRecord(
            id=self.ids.next_id(),
            body=item.description,
            kind=section_kind,
            file_path=item.file_path,
            line_start=line_start,
            line_end=line_end,
            severity=severity_for_kind(section_kind),
            category=infer_category(item.description),
            agent_prompt=build_agent_prompt(item, section_kind) if extract_agent_prompt else None,
            effort_estimate=effort_for_kind(section_kind),
            code_suggestion=item.code_suggestion,
        )
        if source is not None:
            record.author = source.author
            record.author_association = source.author_association
            record.is_bot = source.is_bot
            record.created_at = source.created_at
            record.updated_at = source.updated_at
            record.html_url = source.html_url
        return record
