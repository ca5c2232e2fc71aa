"""
Constants and settings for ssm-session.
"""

import os

# =============================================================================
# Plugin calling convention
# =============================================================================

PLUGIN_EXECUTABLE = "session-manager-plugin"
PLUGIN_OPERATION = "StartSession"
# Profile slot of the plugin's argv; credentials never travel through it
PLUGIN_PROFILE_PLACEHOLDER = ""

# =============================================================================
# Session documents
# =============================================================================

# Document the broker applies when a request names none
DEFAULT_SHELL_DOCUMENT = "SSM-SessionManagerRunShell"
PORT_FORWARDING_DOCUMENT = "AWS-StartPortForwardingSession"
REMOTE_PORT_FORWARDING_DOCUMENT = "AWS-StartPortForwardingSessionToRemoteHost"

LOCAL_PORT_PARAMETER = "localPortNumber"
REMOTE_PORT_PARAMETER = "portNumber"
HOST_PARAMETER = "host"

# Let the plugin pick a free local port
EPHEMERAL_LOCAL_PORT = "0"

CONFIG_FILE_NAME = "ssmsession.yml"
DEFAULT_CONFIG_PATH = "~/.config/ssmsession"


def get_env(key: str, default: str = None, required: bool = False) -> str:
    """
    Retrieve an environment variable.

    Args:
        key: Configuration key (``config_path`` -> ``CONFIG_PATH``)
        default: Default value
        required: Whether the value is required

    Returns:
        Configuration value

    Raises:
        ValueError: If required value is missing
    """
    env_key = key.upper().replace("-", "_")
    value = os.environ.get(env_key, default)
    if required and not value:
        raise ValueError(f"Required configuration missing: {key}")
    return value
