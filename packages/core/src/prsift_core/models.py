"""Data models shared by every stage of the suggestion pipeline.

Plain dataclasses, like the rest of prsift: the parser produces Sections and
Items, the classifier turns Items into SuggestionRecords, and the CLI
serialises records with to_dict(). Absent optional values are always None,
never 0 or "", so callers can tell "missing" apart from "empty".
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

KIND_NIT = "nit"
KIND_DUPLICATE = "duplicate"
KIND_ADDITIONAL = "additional"
KIND_ACTIONABLE = "actionable"

SUGGESTION_KINDS = (KIND_ACTIONABLE, KIND_NIT, KIND_DUPLICATE, KIND_ADDITIONAL)

UNKNOWN_FILE = "unknown-file"


@dataclass(frozen=True)
class PullRequestRef:
    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def parse(cls, repo: str, number: int) -> PullRequestRef:
        """Build a ref from an ``owner/name`` string."""
        owner, _, name = repo.partition("/")
        return cls(owner=owner, repo=name, number=number)


@dataclass(frozen=True)
class ReviewDocument:
    """A raw review body or issue comment as posted on the pull request.

    Read-only input to the pipeline; the parser never mutates it.
    """

    id: int
    body: str
    author: str
    created_at: str | None = None
    updated_at: str | None = None
    html_url: str | None = None
    author_association: str = "NONE"
    is_bot: bool = True


@dataclass
class CodeSuggestion:
    """Old/new lines pulled out of a ```diff fence."""

    old_lines: list[str] = field(default_factory=list)
    new_lines: list[str] = field(default_factory=list)

    @property
    def old_code(self) -> str:
        return "\n".join(self.old_lines)

    @property
    def new_code(self) -> str:
        return "\n".join(self.new_lines)


@dataclass
class Item:
    file_path: str
    line_range: str  # raw capture: "42" or "42-45"
    title: str
    description: str
    code_suggestion: CodeSuggestion | None = None


@dataclass
class Section:
    kind: str  # one of SUGGESTION_KINDS
    title: str
    declared_count: int
    items: list[Item] = field(default_factory=list)


@dataclass
class ActionCommands:
    reply_command: str
    resolve_condition: str
    view_in_browser: str
    resolve_command: str | None = None


@dataclass
class StatusIndicators:
    resolution_status: str  # "unresolved" | "resolved"
    priority_score: int
    is_actionable: bool
    has_manual_response: bool
    is_outdated: bool
    needs_external_resolution: bool
    suggested_action: str


@dataclass
class SuggestionRecord:
    """The normalized unit returned to callers.

    ``kind`` is None for records that did not come out of the classifier;
    the post-filter leaves those alone.
    """

    id: int
    body: str
    kind: str | None = None
    file_path: str | None = None
    line_start: int | None = None
    line_end: int | None = None
    severity: str | None = None  # "low" | "medium" | "high"
    category: str | None = None  # "security" | "performance" | "style" | "bug" | "general"
    agent_prompt: str | None = None
    effort_estimate: str | None = None
    code_suggestion: CodeSuggestion | None = None
    action_commands: ActionCommands | None = None
    status_indicators: StatusIndicators | None = None
    source_type: str = "review"  # "review" | "issue_comment"
    author: str | None = None
    author_association: str | None = None
    is_bot: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    html_url: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.code_suggestion is not None:
            data["code_suggestion"] = {
                "old_code": self.code_suggestion.old_code,
                "new_code": self.code_suggestion.new_code,
            }
        return data


@dataclass
class FilterOptions:
    """Caller-supplied inclusion and ordering rules.

    Every field defaults to None, meaning "not set". The include_* switches
    only exclude a kind when explicitly False.
    """

    include_nits: bool | None = None
    include_duplicates: bool | None = None
    include_additional: bool | None = None
    suggestion_types: frozenset[str] | None = None
    prioritize_actionable: bool | None = None
    group_by_type: bool | None = None
    extract_agent_prompts: bool | None = None

    def __post_init__(self):
        if self.suggestion_types is not None:
            self.suggestion_types = frozenset(self.suggestion_types)
