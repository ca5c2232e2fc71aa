"""
Subprocess implementation of the plugin runner.
"""

import logging
import signal
import subprocess
import threading
from contextlib import contextmanager

from ssmsession.domain.types import PluginCommand

logger = logging.getLogger("ssm-session")


def _ignore_interrupt(signum, frame) -> None:
    pass


@contextmanager
def interrupts_left_to_plugin():
    """
    Stop Ctrl-C from interrupting us while the plugin owns the terminal.

    The terminal delivers SIGINT to the whole foreground process group, so
    without this the parent would raise KeyboardInterrupt and tear the
    session down. A Python-level handler (rather than SIG_IGN) is reset to
    the default on exec, so the plugin still sees SIGINT normally.

    Signal handlers can only be changed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, _ignore_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


class SubprocessRunner:
    """Runs the plugin as a blocking child process sharing our terminal."""

    def run(self, command: PluginCommand) -> int:
        """
        Execute the plugin and wait for it to exit.

        stdin, stdout and stderr are left as None so the child inherits
        our file descriptors and talks to the terminal directly.

        Args:
            command: Composed plugin invocation

        Returns:
            Process exit status
        """
        with interrupts_left_to_plugin():
            process = subprocess.Popen(command.argv, stdin=None, stdout=None, stderr=None)
            returncode = process.wait()
        logger.debug(f"{command.executable} exited with {returncode}")
        return returncode
