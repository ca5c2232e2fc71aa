"""
Command line interface: ``ssmsession shell|forward|forward-remote``.
"""

from __future__ import annotations

import logging
from typing import Callable

import click
from botocore.exceptions import BotoCoreError, ClientError

from ssmsession.config.loader import SessionConfig
from ssmsession.config.models import SessionSettings
from ssmsession.config.settings import EPHEMERAL_LOCAL_PORT
from ssmsession.container import ServiceContainer
from ssmsession.domain.handler import SessionHandler
from ssmsession.domain.runner.base import PluginExitError
from ssmsession.observability import export_metrics, setup_json_logging, setup_plain_logging

logger = logging.getLogger("ssm-session")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Shell conventions for "command not found" and "found but not executable"
EXIT_PLUGIN_MISSING = 127
EXIT_PLUGIN_NOT_EXECUTABLE = 126


def apply_overrides(
    settings: SessionSettings,
    region: str | None = None,
    endpoint_url: str | None = None,
    profile: str | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
    dry_run: bool = False,
    metrics_file: str | None = None,
) -> SessionSettings:
    """Return a copy of ``settings`` with command line values applied."""
    aws = {
        key: value
        for key, value in (("region", region), ("endpoint_url", endpoint_url), ("profile", profile))
        if value is not None
    }
    log = {}
    if log_level is not None:
        log["level"] = log_level.upper()
    if json_logs is not None:
        log["json_format"] = json_logs

    return settings.model_copy(update={
        "aws": settings.aws.model_copy(update=aws),
        "plugin": settings.plugin.model_copy(update={"runner": "dry-run"} if dry_run else {}),
        "logging": settings.logging.model_copy(update=log),
        "metrics": settings.metrics.model_copy(
            update={"textfile": metrics_file} if metrics_file is not None else {}
        ),
    })


@click.group()
@click.option("--region", help="Region of the target instance.")
@click.option("--endpoint-url", help="Override the Systems Manager endpoint.")
@click.option("--profile", help="Named AWS profile supplying credentials.")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    help="Path to ssmsession.yml.",
)
@click.option(
    "-l", "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (DEBUG echoes the plugin command line).",
)
@click.option("--json-logs/--plain-logs", default=None, help="Log format on stderr.")
@click.option("--dry-run", is_flag=True, help="Start the session but do not launch the plugin.")
@click.option(
    "--metrics-file",
    type=click.Path(dir_okay=False),
    help="Write Prometheus metrics to this file when the session ends.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    region: str | None,
    endpoint_url: str | None,
    profile: str | None,
    config_path: str | None,
    log_level: str | None,
    json_logs: bool | None,
    dry_run: bool,
    metrics_file: str | None,
) -> None:
    """Open shells and port forwards to managed instances."""
    if config_path:
        SessionConfig.use_file(config_path)

    settings = apply_overrides(
        SessionConfig.settings(),
        region=region,
        endpoint_url=endpoint_url,
        profile=profile,
        log_level=log_level,
        json_logs=json_logs,
        dry_run=dry_run,
        metrics_file=metrics_file,
    )

    if settings.logging.json_format:
        setup_json_logging(level=settings.logging.level)
    else:
        setup_plain_logging(level=settings.logging.level)

    ctx.obj = ServiceContainer(settings)


def _invoke(ctx: click.Context, operation: Callable[[SessionHandler], None]) -> None:
    """Run ``operation`` against the container's handler and map failures to exit codes."""
    services: ServiceContainer = ctx.obj
    try:
        operation(services.handler)
    except PluginExitError as e:
        logger.error(str(e))
        ctx.exit(e.returncode if e.returncode > 0 else 128 + (e.signal or 0))
    except FileNotFoundError as e:
        logger.error(f"Session Manager plugin not found: {e.filename or e}")
        ctx.exit(EXIT_PLUGIN_MISSING)
    except OSError as e:
        logger.error(f"Session Manager plugin could not be started: {e}")
        ctx.exit(EXIT_PLUGIN_NOT_EXECUTABLE)
    except (ClientError, BotoCoreError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        if services.settings.metrics.textfile:
            export_metrics(services.settings.metrics.textfile)


@cli.command()
@click.argument("target")
@click.pass_context
def shell(ctx: click.Context, target: str) -> None:
    """Open an interactive shell on TARGET."""
    _invoke(ctx, lambda handler: handler.start_session(target))


@cli.command()
@click.argument("target")
@click.option("-r", "--remote-port", required=True, help="Port on the instance.")
@click.option(
    "-p", "--local-port",
    default=EPHEMERAL_LOCAL_PORT,
    show_default=True,
    help="Local port; 0 picks a free one.",
)
@click.pass_context
def forward(ctx: click.Context, target: str, remote_port: str, local_port: str) -> None:
    """Forward a local port to a port on TARGET."""
    _invoke(ctx, lambda handler: handler.forward_port(target, local_port, remote_port))


@cli.command("forward-remote")
@click.argument("target")
@click.option("--host", required=True, help="Host reachable from TARGET.")
@click.option("-r", "--remote-port", required=True, help="Port on the remote host.")
@click.option(
    "-p", "--local-port",
    default=EPHEMERAL_LOCAL_PORT,
    show_default=True,
    help="Local port; 0 picks a free one.",
)
@click.pass_context
def forward_remote(
    ctx: click.Context, target: str, host: str, remote_port: str, local_port: str
) -> None:
    """Forward a local port to HOST through TARGET."""
    _invoke(
        ctx,
        lambda handler: handler.forward_remote_port(target, host, local_port, remote_port),
    )


def main() -> None:
    cli(prog_name="ssmsession")
