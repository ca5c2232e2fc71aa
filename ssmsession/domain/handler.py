"""
Session handler: turns a shell or port-forward intent into a broker call
followed by a session-manager-plugin run.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Mapping, Sequence

from ssmsession.config.settings import (
    DEFAULT_SHELL_DOCUMENT,
    HOST_PARAMETER,
    LOCAL_PORT_PARAMETER,
    PLUGIN_EXECUTABLE,
    PORT_FORWARDING_DOCUMENT,
    REMOTE_PORT_FORWARDING_DOCUMENT,
    REMOTE_PORT_PARAMETER,
)
from ssmsession.domain.broker.base import SessionBroker
from ssmsession.domain.runner.base import PluginExitError, ProcessRunner
from ssmsession.domain.runner.subprocess_runner import SubprocessRunner
from ssmsession.domain.types import PluginCommand, SessionRequest
from ssmsession.observability import (
    BROKER_ERRORS_TOTAL,
    PLUGIN_EXITS,
    SESSION_DURATION,
    SESSIONS_STARTED,
)


class SessionHandler:
    """
    Creates shell and port-forwarding sessions on managed instances.

    The handler asks the broker for a session, then hands the broker's
    response and the original request to the plugin, which owns the
    terminal until the session ends. Errors from the broker and from
    launching the plugin propagate unchanged; a plugin that runs and exits
    non-zero raises :class:`PluginExitError`.
    """

    def __init__(
        self,
        broker: SessionBroker,
        region: str,
        endpoint: str,
        runner: ProcessRunner | None = None,
        logger: logging.Logger | None = None,
        executable: str = PLUGIN_EXECUTABLE,
    ) -> None:
        """
        Args:
            broker: Session broker client
            region: Region passed to the plugin
            endpoint: Broker endpoint passed to the plugin
            runner: Executes the plugin (defaults to a real subprocess)
            logger: Log sink; the debug command echo honours its level
            executable: Plugin executable name or path
        """
        self.broker = broker
        self.region = region
        self.endpoint = endpoint
        self.runner = runner if runner is not None else SubprocessRunner()
        self.log = logger if logger is not None else logging.getLogger("ssm-session")
        self.executable = executable

    @classmethod
    def from_broker(
        cls,
        broker: SessionBroker,
        runner: ProcessRunner | None = None,
        logger: logging.Logger | None = None,
        executable: str = PLUGIN_EXECUTABLE,
    ) -> SessionHandler:
        """Create a handler using the region and endpoint the broker resolved."""
        return cls(
            broker,
            broker.region,
            broker.endpoint,
            runner=runner,
            logger=logger,
            executable=executable,
        )

    def with_logger(self, logger: logging.Logger) -> SessionHandler:
        """Swap the log sink; returns the handler for chaining."""
        self.log = logger
        return self

    # ------------------------------------------------------------------
    # Session types
    # ------------------------------------------------------------------

    def start_session(self, target: str) -> None:
        """Open an interactive shell on ``target``."""
        self.start_document_session(target)

    def forward_port(self, target: str, local_port: str, remote_port: str) -> None:
        """
        Forward ``local_port`` on this machine to ``remote_port`` on ``target``.

        A local port of "0" lets the plugin pick a free port. Port values
        are passed through as given.
        """
        self.start_document_session(
            target,
            PORT_FORWARDING_DOCUMENT,
            {
                LOCAL_PORT_PARAMETER: [local_port],
                REMOTE_PORT_PARAMETER: [remote_port],
            },
        )

    def forward_remote_port(
        self, target: str, host: str, local_port: str, remote_port: str
    ) -> None:
        """Forward ``local_port`` to ``host:remote_port`` reached through ``target``."""
        self.start_document_session(
            target,
            REMOTE_PORT_FORWARDING_DOCUMENT,
            {
                HOST_PARAMETER: [host],
                LOCAL_PORT_PARAMETER: [local_port],
                REMOTE_PORT_PARAMETER: [remote_port],
            },
        )

    def start_document_session(
        self,
        target: str,
        document_name: str | None = None,
        parameters: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """
        Start a session using an arbitrary session document.

        Args:
            target: Instance identifier
            document_name: Session document, None for the default shell
            parameters: Document parameters

        Raises:
            PluginExitError: If the plugin exits non-zero
        """
        request = SessionRequest(
            target=target,
            document_name=document_name,
            parameters={k: list(v) for k, v in (parameters or {}).items()},
        )
        self._run(self.build_command(request))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def build_command(self, request: SessionRequest) -> PluginCommand:
        """
        Start the session on the broker and compose the plugin invocation.

        Args:
            request: Session request

        Returns:
            Plugin command ready to run
        """
        document = request.document_name or DEFAULT_SHELL_DOCUMENT
        try:
            response = self.broker.start_session(request)
        except Exception:
            BROKER_ERRORS_TOTAL.labels(document=document).inc()
            raise
        SESSIONS_STARTED.labels(document=document).inc()

        command = PluginCommand(
            executable=self.executable,
            response=json.dumps(response),
            region=self.region,
            request=json.dumps(request.to_api()),
            endpoint=self.endpoint,
        )

        if self.log.isEnabledFor(logging.DEBUG):
            self.log.debug(f"COMMAND: {command.command_line}")
        return command

    def _run(self, command: PluginCommand) -> None:
        started = time.monotonic()
        try:
            returncode = self.runner.run(command)
        except OSError:
            PLUGIN_EXITS.labels(outcome="launch_error").inc()
            raise
        SESSION_DURATION.observe(time.monotonic() - started)

        if returncode != 0:
            PLUGIN_EXITS.labels(outcome="failure").inc()
            raise PluginExitError(returncode, command)
        PLUGIN_EXITS.labels(outcome="success").inc()
