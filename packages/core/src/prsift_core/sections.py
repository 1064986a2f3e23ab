"""Line scanner for CodeRabbit review bodies.

CodeRabbit renders its findings as collapsible HTML wrapped around markdown:

    <details>
    <summary>🧹 Nitpick comments (3)</summary><blockquote>
    <details>
    <summary>`src/app.ts` (2)</summary><blockquote>
    `42-45`: **Prefer const over let**

    The binding is never reassigned.

    ```diff
    -let x = 1;
    +const x = 1;
    ```

    ---
    ...

This is not a general HTML parser. It is a narrow, pattern-driven scan tuned
to the bot's conventions, plus a markdown-heading fallback for documents that
skip the <details> wrapper. The bot's format is not a contract, so the scan
never raises: anything it does not recognise is skipped and the result just
has fewer sections or items.

The scan keeps an explicit state object (sections found so far, the open
section, the current file) and walks the lines with an index. Each step
reports how many lines it consumed, which is more than one when a section
summary line or an item's description/diff is read ahead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from prsift_core.models import (
    KIND_ACTIONABLE,
    KIND_ADDITIONAL,
    KIND_DUPLICATE,
    KIND_NIT,
    UNKNOWN_FILE,
    CodeSuggestion,
    Item,
    Section,
)

logger = logging.getLogger(__name__)

# "♻️" is U+267B followed by a variation selector; it must come before the
# bare "♻" in the alternation.
_GLYPHS = "🧹|♻️|♻|📜|🐛|💡"

_MD_GLYPH_HEADER_RE = re.compile(rf"^#+\s*({_GLYPHS})\s*([^<]+?)\s*\((\d+)\)\s*$")
_MD_WORD_HEADER_RE = re.compile(
    r"^#+\s*(Bugs|Suggestions|Nitpicks|Duplicates|Additional)\b(?:.*?\((\d+)\))?.*$",
    re.IGNORECASE,
)
_GLYPH_SUMMARY_RE = re.compile(rf"<summary>\s*({_GLYPHS})\s*([^<]+?)\s*\((\d+)\)\s*</summary>")
_COUNTED_SUMMARY_RE = re.compile(r"<summary>\s*([^<]+?)\s*:\s*(\d+)\s*</summary>")
_FILE_SUMMARY_RE = re.compile(r"<summary>\s*`?([^<`]+?)`?\s*\((\d+)\)\s*</summary>", re.IGNORECASE)

# `42: **title**`, `42-45`: **title**, \`42\`: **title** (escaped when nested)
_ITEM_BOLD_RE = re.compile(r"^(?:`|\\`)?(\d+(?:-\d+)?)(?:`|\\`)?:\s*\*\*(.*?)\*\*")
_ITEM_PLAIN_RE = re.compile(r"^(?:`|\\`)?(\d+(?:-\d+)?)(?:`|\\`)?:\s*(.+)$")

_DIFF_OPEN_PREFIXES = ("```diff", "\\`\\`\\`diff")
_FENCE_PREFIXES = ("```", "\\`\\`\\`")
# Horizontal rule or closing block quote: end of one suggestion.
_ITEM_END_PREFIXES = ("---", "</blockquote>")


@dataclass
class _ParseState:
    sections: list[Section] = field(default_factory=list)
    current_section: Section | None = None
    current_file: str = ""

    def open_section(self, section: Section) -> None:
        self.sections.append(section)
        self.current_section = section


def _kind_for_glyph(glyph: str) -> str:
    if "🧹" in glyph:
        return KIND_NIT
    if "♻" in glyph:
        return KIND_DUPLICATE
    if "📜" in glyph:
        return KIND_ADDITIONAL
    # 🐛 bugs and 💡 suggestions are must-fix; so is anything unrecognised.
    return KIND_ACTIONABLE


def _kind_for_word(word: str) -> str:
    word = word.lower()
    if word.startswith(("bug", "suggest")):
        return KIND_ACTIONABLE
    if word.startswith("nit"):
        return KIND_NIT
    if word.startswith("dup"):
        return KIND_DUPLICATE
    return KIND_ADDITIONAL


def _markdown_section(line: str) -> Section | None:
    """Fallback for documents that use markdown headings instead of <details>."""
    match = _MD_GLYPH_HEADER_RE.match(line)
    if match:
        glyph, title, count = match.groups()
        return Section(kind=_kind_for_glyph(glyph), title=title.strip(), declared_count=int(count))

    match = _MD_WORD_HEADER_RE.match(line)
    if match:
        word, count = match.groups()
        return Section(kind=_kind_for_word(word), title=word.capitalize(), declared_count=int(count or 0))

    return None


def _summary_section(summary_line: str) -> Section | None:
    """Section opened by the summary line that follows a <details> opener."""
    match = _GLYPH_SUMMARY_RE.search(summary_line)
    if match:
        glyph, title, count = match.groups()
        return Section(kind=_kind_for_glyph(glyph), title=title.strip(), declared_count=int(count))

    # "Actionable comments posted: 2" carries no glyph.
    match = _COUNTED_SUMMARY_RE.search(summary_line)
    if match and "actionable" in summary_line.lower():
        title, count = match.groups()
        return Section(kind=KIND_ACTIONABLE, title=title.strip(), declared_count=int(count))

    return None


def _collapsible_section(lines: list[str], i: int) -> Section | None:
    if "<details>" not in lines[i] or i + 1 >= len(lines):
        return None
    return _summary_section(lines[i + 1])


def _item_header(line: str) -> tuple[str, str] | None:
    """Return (line_range, title) if the line opens a suggestion."""
    match = _ITEM_BOLD_RE.match(line) or _ITEM_PLAIN_RE.match(line)
    if match is None:
        return None
    return match.group(1), match.group(2)


def _begins_structure(lines: list[str], j: int) -> bool:
    """True if the scan would act on lines[j]: a new section, file or item."""
    line = lines[j]
    return (
        _markdown_section(line) is not None
        or _collapsible_section(lines, j) is not None
        or _FILE_SUMMARY_RE.search(line) is not None
        or _item_header(line) is not None
    )


def _split_diff(diff_lines: list[str]) -> CodeSuggestion | None:
    if not diff_lines:
        return None
    old_lines = [line[1:] for line in diff_lines if line.startswith("-") and not line.startswith("---")]
    new_lines = [line[1:] for line in diff_lines if line.startswith("+") and not line.startswith("+++")]
    return CodeSuggestion(old_lines=old_lines, new_lines=new_lines)


def _read_item_body(lines: list[str], start: int, title: str) -> tuple[str, CodeSuggestion | None, int]:
    """Read an item's description and optional diff, starting at lines[start].

    Returns (description, code_suggestion, consumed). The description starts
    with the title. Reading stops after a horizontal rule or closing block
    quote, after the first diff fence closes, or just before a line that
    opens another section, file or item.
    """
    description = [title]
    diff_lines: list[str] | None = None
    code_suggestion = None
    j = start

    while j < len(lines):
        line = lines[j]
        if diff_lines is None:
            if line.startswith(_DIFF_OPEN_PREFIXES):
                diff_lines = []
                description.append(line)
            elif line.startswith(_ITEM_END_PREFIXES):
                j += 1
                break
            elif _begins_structure(lines, j):
                break
            elif line.strip() and not line.startswith("<summary>"):
                description.append(line)
        else:
            description.append(line)
            if line.startswith(_FENCE_PREFIXES):
                code_suggestion = _split_diff(diff_lines)
                j += 1
                break
            diff_lines.append(line)
        j += 1

    return "\n".join(description), code_suggestion, j - start


def _step(state: _ParseState, lines: list[str], i: int) -> int:
    """Process lines[i] and return how many lines were consumed."""
    line = lines[i]

    section = _markdown_section(line)
    if section is not None:
        state.open_section(section)
        return 1

    section = _collapsible_section(lines, i)
    if section is not None:
        state.open_section(section)
        return 2  # the summary line is part of the opener

    if state.current_section is None:
        return 1

    match = _FILE_SUMMARY_RE.search(line)
    if match:
        state.current_file = match.group(1)
        return 1

    header = _item_header(line)
    if header is None:
        return 1

    line_range, title = header
    description, code_suggestion, consumed = _read_item_body(lines, i + 1, title)
    state.current_section.items.append(
        Item(
            file_path=state.current_file or UNKNOWN_FILE,
            line_range=line_range,
            title=title,
            description=description,
            code_suggestion=code_suggestion,
        )
    )
    return 1 + consumed


def parse_sections(text: str) -> list[Section]:
    """Parse a review body into typed sections of suggestion items."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    state = _ParseState()

    i = 0
    while i < len(lines):
        i += _step(state, lines, i)

    logger.debug(
        "Parsed %d section(s), %d item(s)",
        len(state.sections),
        sum(len(s.items) for s in state.sections),
    )
    return state.sections
