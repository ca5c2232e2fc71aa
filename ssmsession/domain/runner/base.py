"""
Base classes and protocols for running the session plugin.
"""

from __future__ import annotations

import signal
from typing import Protocol

from ssmsession.domain.types import PluginCommand


class PluginExitError(Exception):
    """Raised when the plugin ran but exited unsuccessfully."""

    def __init__(self, returncode: int, command: PluginCommand) -> None:
        self.returncode = returncode
        self.command = command
        if returncode < 0:
            reason = f"was terminated by {self._signal_name(-returncode)}"
        else:
            reason = f"exited with status {returncode}"
        super().__init__(f"{command.executable} {reason}")

    @property
    def signal(self) -> int | None:
        """Signal number that killed the plugin, if any."""
        return -self.returncode if self.returncode < 0 else None

    @staticmethod
    def _signal_name(signum: int) -> str:
        try:
            return signal.Signals(signum).name
        except ValueError:
            return f"signal {signum}"


class ProcessRunner(Protocol):
    """Protocol defining how a composed plugin command gets executed."""

    def run(self, command: PluginCommand) -> int:
        """
        Run the plugin with the caller's terminal attached.

        Args:
            command: Composed plugin invocation

        Returns:
            Process exit status (negative for a terminating signal)

        Raises:
            OSError: If the executable cannot be launched
        """
        ...
