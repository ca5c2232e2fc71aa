"""
Pydantic models for ssm-session configuration.

Provides typed access to all ssmsession.yml settings via
SessionConfig.settings().
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from ssmsession.config.settings import PLUGIN_EXECUTABLE


class AwsConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Empty values defer to boto3's own resolution (env, ~/.aws/config)
    region: str = ""
    endpoint_url: str = ""
    profile: str = ""


class PluginConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    executable: str = PLUGIN_EXECUTABLE
    runner: Literal["subprocess", "dry-run"] = "subprocess"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: str = "INFO"
    json_format: bool = True

    @field_validator("level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()


class MetricsConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Prometheus textfile written when a session ends; empty disables export
    textfile: str = ""


class SessionSettings(BaseModel):
    """Root settings model mirroring ssmsession.yml structure."""

    model_config = ConfigDict(extra="ignore")

    aws: AwsConfig = AwsConfig()
    plugin: PluginConfig = PluginConfig()
    logging: LoggingConfig = LoggingConfig()
    metrics: MetricsConfig = MetricsConfig()
