"""
Factory for creating plugin runners.
"""

from __future__ import annotations

import logging

from ssmsession.domain.runner.base import ProcessRunner

logger = logging.getLogger("ssm-session")


def create_runner(backend: str) -> ProcessRunner:
    """
    Build a runner for the given backend name.

    Args:
        backend: "subprocess" or "dry-run"

    Returns:
        ProcessRunner instance

    Raises:
        ValueError: If the backend is unknown
    """
    logger.debug(f"Initializing {backend} plugin runner")

    if backend == "dry-run":
        from ssmsession.domain.runner.dry_run import DryRunRunner

        return DryRunRunner()
    if backend == "subprocess":
        from ssmsession.domain.runner.subprocess_runner import SubprocessRunner

        return SubprocessRunner()
    raise ValueError(f"Unknown plugin runner: {backend}")
