"""
Observability module: Prometheus metrics and structured JSON logging.

- Session counters and plugin run duration (Histogram)
- JSON structured logging via python-json-logger
- Masking of session tokens and other secrets in log records
- Export to a Prometheus textfile once the session ends
"""

import logging
import re
import sys

from prometheus_client import REGISTRY, Counter, Histogram, write_to_textfile

logger = logging.getLogger("ssm-session")


# =============================================================================
# Prometheus Custom Metrics
# =============================================================================

SESSIONS_STARTED = Counter(
    "ssmsession_sessions_started_total",
    "Sessions granted by the broker",
    ["document"],
)

BROKER_ERRORS_TOTAL = Counter(
    "ssmsession_broker_errors_total",
    "StartSession calls that failed",
    ["document"],
)

PLUGIN_EXITS = Counter(
    "ssmsession_plugin_exits_total",
    "Plugin runs by outcome (success, failure, launch_error)",
    ["outcome"],
)

SESSION_DURATION = Histogram(
    "ssmsession_session_duration_seconds",
    "Wall-clock time the plugin kept the session open",
    buckets=(1, 10, 60, 300, 900, 1800, 3600, 14400),
)


# =============================================================================
# Sensitive data filter
# =============================================================================

class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    SENSITIVE_PATTERNS = [
        (re.compile(r'("TokenValue"\s*:\s*")[^"]*(")'), r'\1***\2'),
        (re.compile(r'password["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'password=***'),
        (re.compile(r'token["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'token=***'),
        (re.compile(r'secret["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'secret=***'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            message = record.getMessage()
            for pattern, replacement in self.SENSITIVE_PATTERNS:
                message = pattern.sub(replacement, message)
            record.msg = message
            record.args = ()
        return True


# =============================================================================
# Logging setup
# =============================================================================

def _install(handler: logging.Handler, level: str, target: logging.Logger | None) -> None:
    handler.addFilter(SensitiveDataFilter())

    target = target or logging.getLogger()
    target.handlers.clear()
    target.addHandler(handler)
    target.setLevel(level.upper())


def setup_json_logging(level: str = "INFO", target: logging.Logger | None = None) -> None:
    """
    Configure a logger (the root logger by default) with JSON structured
    output on stderr.

    stdout belongs to the plugin while a session is open, so nothing is
    logged there.
    """
    from pythonjsonlogger.json import JsonFormatter

    handler = logging.StreamHandler(sys.stderr)
    formatter = JsonFormatter(
        fmt="%(timestamp)s %(name)s %(levelname)s %(message)s",
        rename_fields={"levelname": "level", "asctime": "timestamp"},
        timestamp=True,
    )
    handler.setFormatter(formatter)
    _install(handler, level, target)


def setup_plain_logging(level: str = "INFO", target: logging.Logger | None = None) -> None:
    """Configure a logger (the root logger by default) with human-readable output on stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    _install(handler, level, target)


# =============================================================================
# Metrics Export
# =============================================================================

def export_metrics(path: str) -> None:
    """
    Write the registry to ``path`` in Prometheus text format.

    Each run is a short-lived process, so the metrics are handed to
    node_exporter's textfile collector instead of being served. The file
    is replaced atomically. Failing to write it never fails the session.
    """
    try:
        write_to_textfile(path, REGISTRY)
    except OSError as e:
        logger.warning(f"Could not write metrics to {path}: {e}")
        return
    logger.debug(f"Metrics written to {path}")
