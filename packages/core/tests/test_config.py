"""Tests for configuration loading."""

import pytest

from prsift_core.config import build_filter_options, load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["include_nits"] is True
    assert config["suggestion_types"] is None
    assert config["prioritize_actionable"] is False
    assert config["include_issue_comments"] is True


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prsift.yml"
    cfg.write_text("include_nits: false\ngroup_by_type: true\n")
    config = load_config(config_path=str(cfg))
    assert config["include_nits"] is False
    assert config["group_by_type"] is True


def test_suggestion_types_loaded(tmp_path):
    cfg = tmp_path / ".prsift.yml"
    cfg.write_text("suggestion_types:\n  - actionable\n  - nit\n")
    config = load_config(config_path=str(cfg))
    assert config["suggestion_types"] == ["actionable", "nit"]


def test_empty_config_file(tmp_path):
    cfg = tmp_path / ".prsift.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["include_duplicates"] is True


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".prsift.yml"
    cfg.write_text("include_nits: false\n")
    config = load_config(config_path=str(cfg), cli_overrides={"include_nits": True})
    assert config["include_nits"] is True


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".prsift.yml"
    cfg.write_text("include_nits: false\n")
    config = load_config(config_path=str(cfg), cli_overrides={"include_nits": None})
    assert config["include_nits"] is False


def test_env_token_loaded(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    config = load_config(config_path="nonexistent.yml")
    assert config["github_token"] == "gh-token"


class TestBuildFilterOptions:
    def test_defaults(self):
        options = build_filter_options(load_config(config_path="nonexistent.yml"))
        assert options.include_nits is True
        assert options.suggestion_types is None
        assert options.extract_agent_prompts is True

    def test_types_become_frozenset(self):
        options = build_filter_options({"suggestion_types": ["nit", "actionable"]})
        assert options.suggestion_types == frozenset({"nit", "actionable"})

    def test_single_type_string(self):
        assert build_filter_options({"suggestion_types": "nit"}).suggestion_types == frozenset({"nit"})

    def test_empty_type_list_kept(self):
        assert build_filter_options({"suggestion_types": []}).suggestion_types == frozenset()

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="nitpick"):
            build_filter_options({"suggestion_types": ["nitpick"]})

    def test_missing_keys_are_unset(self):
        options = build_filter_options({})
        assert options.include_nits is None
        assert options.prioritize_actionable is None
