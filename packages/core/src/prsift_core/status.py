"""Default status indicator calculator.

Injected into the pipeline like the command generator; only attached to
records when the caller asks for status indicators.
"""

from __future__ import annotations

from typing import Callable

from prsift_core.models import KIND_ACTIONABLE, KIND_NIT, StatusIndicators, SuggestionRecord

StatusCalculator = Callable[[SuggestionRecord], StatusIndicators]

_SEVERITY_SCORE = {"high": 30, "medium": 20, "low": 10}
_CATEGORY_BONUS = {"security": 20, "bug": 10, "performance": 5}
_ACTIONABLE_BONUS = 20
_MAX_SCORE = 100


def priority_score(record: SuggestionRecord) -> int:
    """Score 0-100; higher means look at it sooner."""
    score = _SEVERITY_SCORE.get(record.severity or "", 0)
    score += _CATEGORY_BONUS.get(record.category or "", 0)
    if record.kind == KIND_ACTIONABLE:
        score += _ACTIONABLE_BONUS
    return min(score, _MAX_SCORE)


def calculate_status_indicators(record: SuggestionRecord) -> StatusIndicators:
    if record.code_suggestion is not None:
        action = "apply_suggestion"
    elif record.kind == KIND_NIT:
        action = "optional_fix"
    else:
        action = "reply"

    return StatusIndicators(
        resolution_status="unresolved",
        priority_score=priority_score(record),
        is_actionable=record.kind == KIND_ACTIONABLE,
        has_manual_response=False,
        # Review bodies are never marked outdated by GitHub; a suggestion
        # whose line range could not be read is the closest signal.
        is_outdated=record.file_path is not None and record.line_start is None,
        # Synthetic ids have no GitHub thread to resolve.
        needs_external_resolution=record.id < 0,
        suggested_action=action,
    )
