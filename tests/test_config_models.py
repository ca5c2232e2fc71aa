"""
Tests for ssmsession.config.models (Pydantic settings).
"""

import pytest
from pydantic import ValidationError

from ssmsession.config.models import SessionSettings


class TestSessionSettingsDefaults:
    """SessionSettings() with no args defers to boto3 and runs the real plugin."""

    def test_default_aws(self):
        s = SessionSettings()
        assert s.aws.region == ""
        assert s.aws.endpoint_url == ""
        assert s.aws.profile == ""

    def test_default_plugin(self):
        s = SessionSettings()
        assert s.plugin.executable == "session-manager-plugin"
        assert s.plugin.runner == "subprocess"

    def test_default_logging(self):
        s = SessionSettings()
        assert s.logging.level == "INFO"
        assert s.logging.json_format is True

    def test_metrics_export_disabled(self):
        assert SessionSettings().metrics.textfile == ""


class TestSessionSettingsPartial:
    """Partial config dicts should merge with defaults."""

    def test_partial_aws(self):
        s = SessionSettings(aws={"region": "eu-west-1"})
        assert s.aws.region == "eu-west-1"
        # Other fields keep defaults
        assert s.aws.profile == ""

    def test_partial_plugin(self):
        s = SessionSettings(plugin={"runner": "dry-run"})
        assert s.plugin.runner == "dry-run"
        assert s.plugin.executable == "session-manager-plugin"

    def test_extra_keys_ignored(self):
        """Unknown keys in YAML should not raise errors."""
        s = SessionSettings(aws={"region": "eu-west-1", "unknown_key": "ignored"}, extra={"a": 1})
        assert s.aws.region == "eu-west-1"

    def test_level_is_uppercased(self):
        s = SessionSettings(logging={"level": "debug"})
        assert s.logging.level == "DEBUG"

    def test_unknown_runner_rejected(self):
        with pytest.raises(ValidationError):
            SessionSettings(plugin={"runner": "docker"})


class TestSessionSettingsFromYaml:
    """Simulate loading from ssmsession.yml dict."""

    def test_full_yaml_dict(self):
        yaml_dict = {
            "aws": {
                "region": "ap-southeast-2",
                "endpoint_url": "https://vpce-0abc.ssm.ap-southeast-2.vpce.amazonaws.com",
                "profile": "ops",
            },
            "plugin": {"executable": "/usr/local/bin/session-manager-plugin", "runner": "dry-run"},
            "logging": {"level": "warning", "json_format": False},
            "metrics": {"textfile": "/var/lib/node_exporter/ssmsession.prom"},
        }
        s = SessionSettings(**yaml_dict)
        assert s.aws.region == "ap-southeast-2"
        assert s.aws.endpoint_url.startswith("https://vpce-")
        assert s.aws.profile == "ops"
        assert s.plugin.executable == "/usr/local/bin/session-manager-plugin"
        assert s.plugin.runner == "dry-run"
        assert s.logging.level == "WARNING"
        assert s.logging.json_format is False
        assert s.metrics.textfile == "/var/lib/node_exporter/ssmsession.prom"
