"""
Shared pytest fixtures for the ssm-session test suite.
"""

import logging
import os
from unittest.mock import MagicMock

import pytest

# ---------------------------------------------------------------------------
# Environment stubs – must be set BEFORE any ssmsession module is imported so
# that the module-level CONFIG_PATH never points at a real user config.
# ---------------------------------------------------------------------------

os.environ.setdefault("CONFIG_PATH", "/tmp/ssmsession-tests/config")
os.environ.setdefault("AWS_EC2_METADATA_DISABLED", "true")

# Import ssmsession modules AFTER env vars are set (they trigger module-level code)
from ssmsession.config.loader import SESSION_CONFIG_FILE, SessionConfig  # noqa: E402
from ssmsession.config.models import SessionSettings  # noqa: E402
from ssmsession.domain.handler import SessionHandler  # noqa: E402
from ssmsession.domain.runner.dry_run import DryRunRunner  # noqa: E402


REGION = "us-east-1"
ENDPOINT = "https://ssm.us-east-1.amazonaws.com"

SESSION_RESPONSE = {
    "SessionId": "alice-0a1b2c3d4e5f67890",
    "TokenValue": "AAEAAf4kZ2V0LXRva2VuLXZhbHVl",
    "StreamUrl": "wss://ssmmessages.us-east-1.amazonaws.com/v1/data-channel/alice-0a1b2c3d4e5f67890",
}


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_logging_setup(mocker):
    """Keep the CLI from reconfiguring the root logger."""
    return {
        "json": mocker.patch("ssmsession.cli.setup_json_logging"),
        "plain": mocker.patch("ssmsession.cli.setup_plain_logging"),
    }


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_session_config():
    yield
    SessionConfig.use_file(SESSION_CONFIG_FILE)


@pytest.fixture
def mock_session_config(mocker):
    """Patch SessionConfig.settings to return a dry-run configuration."""
    settings = SessionSettings(
        aws={"region": REGION},
        plugin={"runner": "dry-run"},
        logging={"level": "DEBUG", "json_format": False},
    )
    mocker.patch("ssmsession.config.loader.SessionConfig.settings", return_value=settings)
    return settings


# ---------------------------------------------------------------------------
# Broker mock
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_broker():
    """A broker that grants every session with a canned descriptor."""
    broker = MagicMock()
    broker.region = REGION
    broker.endpoint = ENDPOINT
    broker.start_session.return_value = dict(SESSION_RESPONSE)
    return broker


# ---------------------------------------------------------------------------
# Runner / logger / handler
# ---------------------------------------------------------------------------

@pytest.fixture
def dry_runner():
    return DryRunRunner()


@pytest.fixture
def handler_logger():
    """Dedicated logger so tests can control the debug threshold."""
    return logging.getLogger("tests.ssm-session.handler")


@pytest.fixture
def handler(fake_broker, dry_runner, handler_logger):
    """SessionHandler wired to the fake broker and a dry-run runner."""
    return SessionHandler(
        fake_broker,
        REGION,
        ENDPOINT,
        runner=dry_runner,
        logger=handler_logger,
    )


@pytest.fixture
def no_subprocess(mocker):
    """Fail loudly if anything tries to launch a real process."""
    return mocker.patch(
        "ssmsession.domain.runner.subprocess_runner.subprocess.Popen",
        side_effect=AssertionError("subprocess.Popen must not be called"),
    )


@pytest.fixture
def plugin_popen(mocker):
    """Stand-in for launching the plugin; the child exits 0 unless told otherwise."""
    popen = mocker.patch("ssmsession.domain.runner.subprocess_runner.subprocess.Popen")
    popen.return_value.wait.return_value = 0
    return popen
