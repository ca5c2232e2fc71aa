"""
AWS Systems Manager implementation of the session broker.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3

from ssmsession.config.models import AwsConfig
from ssmsession.domain.types import SessionRequest

logger = logging.getLogger("ssm-session")


class SsmBroker:
    """Session broker backed by the boto3 SSM client."""

    def __init__(
        self,
        client: Any = None,
        *,
        session: boto3.session.Session | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """
        Initialize the SSM client.

        Args:
            client: Pre-built boto3 SSM client (takes precedence)
            session: boto3 session supplying credentials and default region
            region: Region override
            endpoint_url: Endpoint override (VPC endpoints, local stacks)
        """
        if client is None:
            session = session or boto3.session.Session()
            client = session.client(
                "ssm",
                region_name=region or None,
                endpoint_url=endpoint_url or None,
            )
        self._client = client

    @classmethod
    def from_settings(cls, aws: AwsConfig) -> SsmBroker:
        """Build a broker from the ``aws`` section of the settings."""
        session = boto3.session.Session(profile_name=aws.profile or None)
        return cls(session=session, region=aws.region, endpoint_url=aws.endpoint_url)

    @property
    def client(self) -> Any:
        """Get the boto3 SSM client."""
        return self._client

    @property
    def region(self) -> str:
        return self._client.meta.region_name

    @property
    def endpoint(self) -> str:
        return self._client.meta.endpoint_url

    def start_session(self, request: SessionRequest) -> dict[str, Any]:
        """
        Call SSM StartSession.

        Errors from botocore propagate unchanged.

        Args:
            request: Session request

        Returns:
            The raw StartSession response
        """
        logger.debug(f"Starting session on {request.target} (document={request.document_name})")
        return self._client.start_session(**request.to_api())
