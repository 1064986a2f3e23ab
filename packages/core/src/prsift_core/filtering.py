"""Post-extraction filtering and ordering of suggestion records."""

from __future__ import annotations

import logging

from prsift_core.models import (
    KIND_ACTIONABLE,
    KIND_ADDITIONAL,
    KIND_DUPLICATE,
    KIND_NIT,
    FilterOptions,
    SuggestionRecord,
)
from prsift_core.prefilter import is_main_review_commit

logger = logging.getLogger(__name__)

_KIND_ORDER = {KIND_ACTIONABLE: 0, KIND_NIT: 1, KIND_DUPLICATE: 2, KIND_ADDITIONAL: 3}
_UNKNOWN_KIND_ORDER = 4


def section_is_included(kind: str, options: FilterOptions) -> bool:
    """Apply the type filter and the include_* switches to one kind.

    The switches only exclude when explicitly False, and never exclude
    actionable suggestions. ``suggestion_types`` is checked first and does
    apply to actionable ones.
    """
    if options.suggestion_types is not None and kind not in options.suggestion_types:
        return False
    if kind == KIND_NIT:
        return options.include_nits is not False
    if kind == KIND_DUPLICATE:
        return options.include_duplicates is not False
    if kind == KIND_ADDITIONAL:
        return options.include_additional is not False
    return True


def _keep(record: SuggestionRecord, options: FilterOptions) -> bool:
    if record.kind is None:
        return True
    if is_main_review_commit(record):
        logger.debug("Dropping record %d: looks like the main review commit", record.id)
        return False
    return section_is_included(record.kind, options)


def _group_key(record: SuggestionRecord) -> tuple[int, str]:
    return _KIND_ORDER.get(record.kind, _UNKNOWN_KIND_ORDER), record.file_path or ""


def apply_filters(records: list[SuggestionRecord], options: FilterOptions | None = None) -> list[SuggestionRecord]:
    """Filter and order records according to options.

    Stages: drop main-review-commit noise, drop excluded kinds, then
    optionally move actionable records first, then optionally group by kind
    and file path. Both orderings are stable; grouping runs last and so
    overrides prioritisation. The input list is not modified.
    """
    options = options or FilterOptions()
    filtered = [r for r in records if _keep(r, options)]

    if options.prioritize_actionable:
        filtered.sort(key=lambda r: r.kind != KIND_ACTIONABLE)

    if options.group_by_type:
        filtered.sort(key=_group_key)

    if len(filtered) != len(records):
        logger.debug("Filtered %d record(s) down to %d", len(records), len(filtered))
    return filtered
