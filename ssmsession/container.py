"""
Lightweight DI container for ssm-session services.

Built once per CLI invocation from the effective settings; every service
is created lazily on first access.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssmsession.config.models import SessionSettings

if TYPE_CHECKING:
    from ssmsession.domain.broker.base import SessionBroker
    from ssmsession.domain.handler import SessionHandler
    from ssmsession.domain.runner.base import ProcessRunner


class ServiceContainer:
    """Lightweight service container holding shared service instances."""

    def __init__(self, settings: SessionSettings | None = None) -> None:
        self._settings = settings
        self._broker: SessionBroker | None = None
        self._runner: ProcessRunner | None = None
        self._handler: SessionHandler | None = None

    @property
    def settings(self) -> SessionSettings:
        if self._settings is None:
            from ssmsession.config.loader import SessionConfig

            self._settings = SessionConfig.settings()
        return self._settings

    @property
    def broker(self) -> SessionBroker:
        if self._broker is None:
            from ssmsession.domain.broker.ssm import SsmBroker

            self._broker = SsmBroker.from_settings(self.settings.aws)
        return self._broker

    @property
    def runner(self) -> ProcessRunner:
        if self._runner is None:
            from ssmsession.domain.runner.factory import create_runner

            self._runner = create_runner(self.settings.plugin.runner)
        return self._runner

    @property
    def handler(self) -> SessionHandler:
        if self._handler is None:
            from ssmsession.domain.handler import SessionHandler

            self._handler = SessionHandler.from_broker(
                self.broker,
                runner=self.runner,
                logger=logging.getLogger("ssm-session"),
                executable=self.settings.plugin.executable,
            )
        return self._handler
