import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = ".github/autoapproval.yml"

DEFAULT_CONFIG: dict = {
    "blacklist": ["do-not-merge", "dnl", "wip"],
    "bot_login": "autoapproval[bot]",
    "approved_label": "auto_approved",  # empty string disables labelling
    "approval_comment": "Approved :+1:",
    # Reserved for owner / required-label rules; loaded but never consulted.
    "from_owner": [],
    "required_labels": [],
    "required_labels_mode": "one_of",
}

_LIST_KEYS = ("blacklist", "from_owner", "required_labels")


def load_config(
    config_path: str = DEFAULT_CONFIG_PATH,
    cli_overrides: Optional[dict] = None,
    remote_config: Optional[dict] = None,
) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. autoapproval.yml fetched from the repository (``remote_config``)
      3. Local autoapproval.yml at ``config_path``
      4. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG}
    for key in _LIST_KEYS:
        config[key] = list(DEFAULT_CONFIG[key])

    if remote_config:
        config.update(remote_config)

    path = Path(config_path)
    if path.exists():
        config.update(parse_config_text(path.read_text()))

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def parse_config_text(text: str) -> dict:
    """Parse autoapproval.yml content; an empty document yields {}."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"autoapproval.yml is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("autoapproval.yml must contain a mapping at the top level.")
    return data


@dataclass(frozen=True)
class EngineSettings:
    """Immutable per-deployment settings the decision engine is built with."""

    blacklist: tuple[str, ...] = ("do-not-merge", "dnl", "wip")
    bot_login: str = "autoapproval[bot]"
    approved_label: str = "auto_approved"
    approval_comment: str = "Approved :+1:"

    @classmethod
    def from_config(cls, config: dict) -> "EngineSettings":
        blacklist = config.get("blacklist")
        if blacklist is None:
            blacklist = DEFAULT_CONFIG["blacklist"]
        return cls(
            blacklist=tuple(str(term).lower() for term in blacklist),
            bot_login=config.get("bot_login") or DEFAULT_CONFIG["bot_login"],
            approved_label=config.get("approved_label", DEFAULT_CONFIG["approved_label"]) or "",
            approval_comment=config.get("approval_comment") or DEFAULT_CONFIG["approval_comment"],
        )
