"""Tests for the review / issue-comment entry points."""

from prsift_core.classifier import Classifier, IdCounter
from prsift_core.models import ActionCommands, FilterOptions, PullRequestRef, ReviewDocument, StatusIndicators
from prsift_core.pipeline import collect_suggestions, process_issue_comment, process_review

PR = PullRequestRef(owner="octo", repo="widgets", number=7)

REVIEW_BODY = """**Actionable comments posted: 1**

<details>
<summary>Actionable comments posted: 1</summary>
<details>
<summary>`src/db.py` (1)</summary><blockquote>

`20-22`: **Close the cursor**

The cursor leaks when the query raises; this can exhaust the connection pool.

```diff
-    cur = conn.cursor()
+    with conn.cursor() as cur:
```

</blockquote></details>
</details>

<details>
<summary>🧹 Nitpick comments (1)</summary><blockquote>
<details>
<summary>`src/app.py` (1)</summary><blockquote>

`3`: **Sort imports**

Run the formatter over this file.

</blockquote></details>
</blockquote></details>
"""


def make_review(body=REVIEW_BODY, author="coderabbitai[bot]", review_id=1234):
    return ReviewDocument(
        id=review_id,
        body=body,
        author=author,
        created_at="2025-01-01T00:00:00+00:00",
        updated_at="2025-01-01T00:00:00+00:00",
        html_url=f"https://github.com/octo/widgets/pull/7#pullrequestreview-{review_id}",
    )


def make_comment(body="Please add tests for the parser.", author="coderabbitai[bot]", comment_id=555):
    return ReviewDocument(
        id=comment_id,
        body=body,
        author=author,
        html_url=f"https://github.com/octo/widgets/pull/7#issuecomment-{comment_id}",
    )


class TestProcessReview:
    def test_extracts_records_from_each_section(self):
        records = process_review(make_review(), PR, classifier=Classifier(IdCounter()))
        assert [(r.kind, r.file_path, r.line_start, r.line_end) for r in records] == [
            ("actionable", "src/db.py", 20, 22),
            ("nit", "src/app.py", 3, 3),
        ]
        assert [r.id for r in records] == [-1, -2]

    def test_records_carry_classification(self):
        actionable, nit = process_review(make_review(), PR, classifier=Classifier(IdCounter()))
        assert actionable.severity == "high"
        assert actionable.category == "general"
        assert actionable.code_suggestion.new_code == "    with conn.cursor() as cur:"
        assert nit.severity == "low"
        assert nit.category == "style"
        assert nit.author == "coderabbitai[bot]"
        assert nit.html_url.endswith("pullrequestreview-1234")

    def test_attaches_action_commands_and_status(self):
        record = process_review(make_review(), PR, classifier=Classifier(IdCounter()))[0]
        assert isinstance(record.action_commands, ActionCommands)
        assert "gh pr comment 7 --repo octo/widgets" in record.action_commands.reply_command
        assert isinstance(record.status_indicators, StatusIndicators)
        assert record.status_indicators.needs_external_resolution is True

    def test_status_indicators_optional(self):
        records = process_review(make_review(), PR, include_status_indicators=False)
        assert all(r.status_indicators is None for r in records)

    def test_injected_collaborators_are_used(self):
        calls = []

        def commands(pr, source_id, source_type, body, file_path):
            calls.append((pr, source_id, source_type, file_path))
            return ActionCommands(reply_command="r", resolve_condition="c", view_in_browser="v")

        def status(record):
            return StatusIndicators("unresolved", 1, True, False, False, True, "reply")

        records = process_review(
            make_review(),
            PR,
            classifier=Classifier(IdCounter()),
            command_generator=commands,
            status_calculator=status,
        )
        assert calls == [(PR, 1234, "review", "src/db.py"), (PR, 1234, "review", "src/app.py")]
        assert records[0].action_commands.reply_command == "r"
        assert records[0].status_indicators.priority_score == 1

    def test_non_bot_author_yields_nothing(self):
        assert process_review(make_review(author="octocat"), PR) == []

    def test_rate_limit_review_yields_nothing(self):
        body = "I've reached my rate limit for this repository. Please try again later."
        assert process_review(make_review(body=body), PR) == []

    def test_excluded_sections_do_not_consume_ids(self):
        ids = IdCounter()
        records = process_review(make_review(), PR, FilterOptions(include_nits=False), classifier=Classifier(ids))
        assert [r.kind for r in records] == ["actionable"]
        assert ids.next_id() == -2

    def test_agent_prompts_can_be_disabled(self):
        records = process_review(make_review(), PR, FilterOptions(extract_agent_prompts=False))
        assert all(r.agent_prompt is None for r in records)

    def test_group_by_type_and_suggestion_types(self):
        records = process_review(make_review(), PR, FilterOptions(suggestion_types={"nit"}))
        assert [r.kind for r in records] == ["nit"]

    def test_review_without_structure_yields_nothing(self):
        assert process_review(make_review(body="LGTM, nice work."), PR) == []


class TestProcessIssueComment:
    def test_single_record_with_real_id(self):
        records = process_issue_comment(make_comment(), PR)
        assert len(records) == 1
        record = records[0]
        assert record.id == 555
        assert record.kind == "actionable"
        assert record.severity == "medium"
        assert record.category == "general"
        assert record.file_path == "unknown"
        assert record.source_type == "issue_comment"
        assert record.agent_prompt == "Review this CodeRabbit issue comment: Please add tests for the parser...."

    def test_agent_prompt_truncates_body(self):
        record = process_issue_comment(make_comment(body="x" * 300), PR)[0]
        assert record.agent_prompt.endswith("x" * 200 + "...")
        assert "x" * 201 not in record.agent_prompt

    def test_fixed_status_indicators(self):
        status = process_issue_comment(make_comment(), PR)[0].status_indicators
        assert status.resolution_status == "unresolved"
        assert status.priority_score == 5
        assert status.suggested_action == "reply"

    def test_status_indicators_optional(self):
        record = process_issue_comment(make_comment(), PR, include_status_indicators=False)[0]
        assert record.status_indicators is None

    def test_non_bot_author_yields_nothing(self):
        assert process_issue_comment(make_comment(author="octocat"), PR) == []

    def test_rate_limit_comment_yields_nothing(self):
        body = "Rate limit exceeded. Please wait 10 minutes before requesting another review."
        assert process_issue_comment(make_comment(body=body), PR) == []

    def test_encoded_state_comment_yields_nothing(self):
        body = "<!-- internal state -->\n<!-- " + "QUJD" * 200 + " -->"
        assert process_issue_comment(make_comment(body=body), PR) == []

    def test_suggestion_types_can_exclude_issue_comments(self):
        assert process_issue_comment(make_comment(), PR, FilterOptions(suggestion_types={"nit"})) == []


class TestCollectSuggestions:
    def test_combines_reviews_and_comments(self):
        records = collect_suggestions([make_review()], [make_comment()], PR, classifier=Classifier(IdCounter()))
        assert [r.id for r in records] == [-1, -2, 555]

    def test_ordering_applies_across_documents(self):
        records = collect_suggestions(
            [make_review()],
            [make_comment()],
            PR,
            FilterOptions(group_by_type=True),
            classifier=Classifier(IdCounter()),
        )
        assert [(r.kind, r.file_path) for r in records] == [
            ("actionable", "src/db.py"),
            ("actionable", "unknown"),
            ("nit", "src/app.py"),
        ]

    def test_noise_documents_contribute_nothing(self):
        noise = make_review(body="Rate limit exceeded", review_id=1)
        human = make_comment(author="octocat")
        records = collect_suggestions([noise, make_review()], [human], PR, classifier=Classifier(IdCounter()))
        assert [r.kind for r in records] == ["actionable", "nit"]
