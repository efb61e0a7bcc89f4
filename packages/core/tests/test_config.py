"""Tests for configuration loading and engine settings."""

import pytest

from autoapproval_core.config import EngineSettings, load_config, parse_config_text


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["blacklist"] == ["do-not-merge", "dnl", "wip"]
    assert config["bot_login"] == "autoapproval[bot]"
    assert config["approved_label"] == "auto_approved"
    assert config["approval_comment"] == "Approved :+1:"
    assert config["from_owner"] == []
    assert config["required_labels"] == []


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("bot_login: my-bot[bot]\nblacklist:\n  - hold\n")
    config = load_config(config_path=str(cfg))
    assert config["bot_login"] == "my-bot[bot]"
    assert config["blacklist"] == ["hold"]


def test_local_file_overrides_remote_config(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("approved_label: local\n")
    config = load_config(config_path=str(cfg), remote_config={"approved_label": "remote", "bot_login": "remote-bot"})
    assert config["approved_label"] == "local"
    assert config["bot_login"] == "remote-bot"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("approval_comment: from file\n")
    config = load_config(config_path=str(cfg), cli_overrides={"approval_comment": "from cli"})
    assert config["approval_comment"] == "from cli"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("approval_comment: from file\n")
    config = load_config(config_path=str(cfg), cli_overrides={"approval_comment": None})
    assert config["approval_comment"] == "from file"


def test_empty_config_file(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["bot_login"] == "autoapproval[bot]"


def test_non_mapping_local_file_rejected(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("- hold\n- wip\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(config_path=str(cfg))


def test_invalid_yaml_local_file_rejected(tmp_path):
    cfg = tmp_path / "autoapproval.yml"
    cfg.write_text("blacklist: [unclosed\n")
    with pytest.raises(ValueError, match="not valid YAML"):
        load_config(config_path=str(cfg))


def test_env_token_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-token"


def test_blacklist_is_not_shared_reference(tmp_path):
    """Mutating one config's blacklist must not affect another."""
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["blacklist"].append("hold")
    assert config_b["blacklist"] == ["do-not-merge", "dnl", "wip"]


class TestParseConfigText:
    def test_mapping(self):
        assert parse_config_text("bot_login: x\n") == {"bot_login": "x"}

    def test_empty_document(self):
        assert parse_config_text("") == {}

    def test_non_mapping_rejected(self):
        with pytest.raises(ValueError):
            parse_config_text("- a\n- b\n")


class TestEngineSettings:
    def test_from_default_config(self, tmp_path):
        settings = EngineSettings.from_config(load_config(config_path=str(tmp_path / "none.yml")))
        assert settings == EngineSettings()

    def test_blacklist_lowercased_and_immutable(self):
        settings = EngineSettings.from_config({"blacklist": ["HOLD", "Draft"]})
        assert settings.blacklist == ("hold", "draft")

    def test_empty_label_disables_labelling(self):
        assert EngineSettings.from_config({"approved_label": ""}).approved_label == ""

    def test_missing_keys_fall_back_to_defaults(self):
        settings = EngineSettings.from_config({})
        assert settings.bot_login == "autoapproval[bot]"
        assert settings.approved_label == "auto_approved"
        assert settings.blacklist == ("do-not-merge", "dnl", "wip")
