"""Domain module containing session logic."""

from ssmsession.domain.types import PluginCommand, SessionRequest
from ssmsession.domain.handler import SessionHandler
from ssmsession.domain.broker import SessionBroker, SsmBroker
from ssmsession.domain.runner import (
    DryRunRunner,
    PluginExitError,
    ProcessRunner,
    SubprocessRunner,
)

__all__ = [
    "PluginCommand",
    "SessionRequest",
    "SessionHandler",
    "SessionBroker",
    "SsmBroker",
    "DryRunRunner",
    "PluginExitError",
    "ProcessRunner",
    "SubprocessRunner",
]
