# ============================================================================
# ReportDesk - Configuration Tests
#
# Purpose: Test YAML loading, env var overrides and invalid configuration
# Inputs: Temporary YAML files, monkeypatched environment
# Outputs: Test pass/fail
# Dependencies: pytest, ReportDesk.config
# Usage: pytest tests/test_config.py -v
#
# Changelog:
#   2026-09-02: Initial config tests
#   2026-09-24: Rendering section overrides
# ============================================================================

import pytest

from ReportDesk.config import Config
from ReportDesk.errors import ConfigurationError


def _write(tmp_path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.store.type == "local_file"
        assert config.rendering.currency_symbol == "$"
        assert config.rendering.portfolio_row_limit == 20

    def test_from_yaml(self, tmp_path):
        path = _write(tmp_path, "store:\n  type: sqlite\nrendering:\n  portfolio_row_limit: 5\n")
        config = Config.from_yaml(path)
        assert config.store.type == "sqlite"
        assert config.rendering.portfolio_row_limit == 5
        assert config.logging.level == "INFO"

    def test_empty_yaml(self, tmp_path):
        assert Config.from_yaml(_write(tmp_path, "")) == Config()

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REPORTDESK_STORE_TYPE", "sqlite")
        monkeypatch.setenv("REPORTDESK_RENDERING_CURRENCY_SYMBOL", "GH₵")
        monkeypatch.setenv("REPORTDESK_RENDERING_PORTFOLIO_ROW_LIMIT", "8")
        config = Config.from_yaml(_write(tmp_path, "store:\n  type: local_file\n"))
        assert config.store.type == "sqlite"
        assert config.rendering.currency_symbol == "GH₵"
        assert config.rendering.portfolio_row_limit == 8

    def test_unknown_env_key_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REPORTDESK_STORE_COLOR", "blue")
        config = Config.from_yaml(_write(tmp_path, ""))
        assert not hasattr(config.store, "color")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(str(tmp_path / "missing.yaml"))

    def test_malformed_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError):
            Config.from_yaml(_write(tmp_path, "store: [unclosed\n"))

    def test_invalid_values(self, tmp_path):
        with pytest.raises(ConfigurationError):
            Config.from_yaml(_write(tmp_path, "store:\n  type: postgres\n"))
        with pytest.raises(ConfigurationError):
            Config.from_yaml(_write(tmp_path, "rendering:\n  portfolio_row_limit: 0\n"))

    def test_from_default(self):
        config = Config.from_default()
        assert config.rendering.default_engagement_position == "Head of Client Engagement"


class TestParseEnvValue:
    @pytest.mark.parametrize(
        "raw,parsed",
        [("true", True), ("No", False), ("42", 42), ("0.5", 0.5), ("L$", "L$")],
    )
    def test_types(self, raw, parsed):
        assert Config._parse_env_value(raw) == parsed
