"""
Dry-run implementation of the plugin runner.
"""

import logging
import threading

from ssmsession.config.settings import DEFAULT_SHELL_DOCUMENT
from ssmsession.domain.types import PluginCommand

logger = logging.getLogger("ssm-session")


class DryRunRunner:
    """Records plugin commands without ever executing them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._commands: list[PluginCommand] = []

    @property
    def commands(self) -> list[PluginCommand]:
        """Commands recorded so far, oldest first."""
        with self._lock:
            return list(self._commands)

    @property
    def last_command(self) -> PluginCommand | None:
        with self._lock:
            return self._commands[-1] if self._commands else None

    def run(self, command: PluginCommand) -> int:
        with self._lock:
            self._commands.append(command)
        request = command.session_request
        logger.info(
            f"Dry run: not launching {command.executable} "
            f"({request.document_name or DEFAULT_SHELL_DOCUMENT} on {request.target})"
        )
        return 0

    def clear(self) -> None:
        with self._lock:
            self._commands.clear()
