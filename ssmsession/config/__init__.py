"""Configuration module for ssm-session."""

from ssmsession.config.settings import (
    PLUGIN_EXECUTABLE,
    PLUGIN_OPERATION,
    PLUGIN_PROFILE_PLACEHOLDER,
    DEFAULT_SHELL_DOCUMENT,
    PORT_FORWARDING_DOCUMENT,
    REMOTE_PORT_FORWARDING_DOCUMENT,
    LOCAL_PORT_PARAMETER,
    REMOTE_PORT_PARAMETER,
    HOST_PARAMETER,
    EPHEMERAL_LOCAL_PORT,
    get_env,
)
from ssmsession.config.models import SessionSettings
from ssmsession.config.loader import (
    SessionConfig,
    CONFIG_PATH,
    SESSION_CONFIG_FILE,
)

__all__ = [
    "PLUGIN_EXECUTABLE",
    "PLUGIN_OPERATION",
    "PLUGIN_PROFILE_PLACEHOLDER",
    "DEFAULT_SHELL_DOCUMENT",
    "PORT_FORWARDING_DOCUMENT",
    "REMOTE_PORT_FORWARDING_DOCUMENT",
    "LOCAL_PORT_PARAMETER",
    "REMOTE_PORT_PARAMETER",
    "HOST_PARAMETER",
    "EPHEMERAL_LOCAL_PORT",
    "get_env",
    "SessionSettings",
    "SessionConfig",
    "CONFIG_PATH",
    "SESSION_CONFIG_FILE",
]
