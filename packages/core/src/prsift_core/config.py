import os
from pathlib import Path
from typing import Optional

import yaml

from prsift_core.models import SUGGESTION_KINDS, FilterOptions

DEFAULT_CONFIG: dict = {
    "include_nits": True,
    "include_duplicates": True,
    "include_additional": True,
    "suggestion_types": None,  # None = every kind; a list restricts to those kinds
    "prioritize_actionable": False,
    "group_by_type": False,
    "extract_agent_prompts": True,
    "include_status_indicators": True,
    "include_issue_comments": True,
}


def load_config(config_path: str = ".prsift.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prsift.yml in the current directory
      3. CLI argument overrides (None values are ignored)
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def build_filter_options(config: dict) -> FilterOptions:
    """Map config keys onto FilterOptions.

    Raises ValueError on an unknown suggestion type so a typo in
    .prsift.yml doesn't silently filter everything out.
    """
    types = config.get("suggestion_types")
    if types is not None:
        if isinstance(types, str):
            types = [types]
        unknown = sorted(set(types) - set(SUGGESTION_KINDS))
        if unknown:
            raise ValueError(
                f"Unknown suggestion type(s): {', '.join(unknown)}. Choose from {', '.join(SUGGESTION_KINDS)}."
            )

    return FilterOptions(
        include_nits=config.get("include_nits"),
        include_duplicates=config.get("include_duplicates"),
        include_additional=config.get("include_additional"),
        suggestion_types=frozenset(types) if types is not None else None,
        prioritize_actionable=config.get("prioritize_actionable"),
        group_by_type=config.get("group_by_type"),
        extract_agent_prompts=config.get("extract_agent_prompts"),
    )
