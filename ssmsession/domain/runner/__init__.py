"""
Plugin runner module.

Supports real subprocess execution and a dry-run backend that only records
the composed command.
"""

from ssmsession.domain.runner.base import PluginExitError, ProcessRunner
from ssmsession.domain.runner.dry_run import DryRunRunner
from ssmsession.domain.runner.factory import create_runner
from ssmsession.domain.runner.subprocess_runner import SubprocessRunner

__all__ = [
    "PluginExitError",
    "ProcessRunner",
    "DryRunRunner",
    "SubprocessRunner",
    "create_runner",
]
