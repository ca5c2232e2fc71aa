"""
Typed data structures for the session domain.
"""

from __future__ import annotations

import json
import shlex
from dataclasses import dataclass, field
from typing import Any

from ssmsession.config.settings import PLUGIN_OPERATION, PLUGIN_PROFILE_PLACEHOLDER


@dataclass(frozen=True)
class SessionRequest:
    """Typed representation of a broker StartSession request."""

    target: str
    document_name: str | None = None
    parameters: dict[str, list[str]] = field(default_factory=dict)

    def to_api(self) -> dict[str, Any]:
        """Return the request in the broker's wire shape, absent fields omitted."""
        data: dict[str, Any] = {"Target": self.target}
        if self.document_name is not None:
            data["DocumentName"] = self.document_name
        if self.parameters:
            data["Parameters"] = {k: list(v) for k, v in self.parameters.items()}
        return data

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SessionRequest:
        parameters = data.get("Parameters") or {}
        return cls(
            target=data.get("Target", ""),
            document_name=data.get("DocumentName"),
            parameters={k: list(v) for k, v in parameters.items()},
        )


@dataclass(frozen=True)
class PluginCommand:
    """A fully composed session-manager-plugin invocation."""

    executable: str
    response: str  # JSON-encoded broker response
    region: str
    request: str  # JSON-encoded SessionRequest
    endpoint: str

    @property
    def args(self) -> list[str]:
        """Positional arguments in the plugin's required order."""
        return [
            self.response,
            self.region,
            PLUGIN_OPERATION,
            PLUGIN_PROFILE_PLACEHOLDER,
            self.request,
            self.endpoint,
        ]

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)

    @property
    def session_request(self) -> SessionRequest:
        """The request this command carries, decoded back from JSON."""
        return SessionRequest.from_api(json.loads(self.request))
