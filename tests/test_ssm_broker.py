"""
Tests for ssmsession.domain.broker.ssm.SsmBroker.
"""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from ssmsession.config.models import AwsConfig
from ssmsession.domain.broker.ssm import SsmBroker
from ssmsession.domain.types import SessionRequest

from tests.conftest import SESSION_RESPONSE


def _stubbed_broker() -> SsmBroker:
    session = boto3.session.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
    )
    return SsmBroker(session=session)


# ---------------------------------------------------------------------------
# Mocked client
# ---------------------------------------------------------------------------

class TestSsmBrokerMockedClient:

    def test_region_and_endpoint_from_client(self):
        client = MagicMock()
        client.meta.region_name = "eu-west-1"
        client.meta.endpoint_url = "https://ssm.eu-west-1.amazonaws.com"

        broker = SsmBroker(client)
        assert broker.region == "eu-west-1"
        assert broker.endpoint == "https://ssm.eu-west-1.amazonaws.com"
        assert broker.client is client

    def test_start_session_sends_wire_shape(self):
        client = MagicMock()
        client.start_session.return_value = SESSION_RESPONSE

        response = SsmBroker(client).start_session(SessionRequest("i-0123"))

        client.start_session.assert_called_once_with(Target="i-0123")
        assert response == SESSION_RESPONSE

    def test_start_session_with_document(self):
        client = MagicMock()
        request = SessionRequest(
            "i-0123",
            "AWS-StartPortForwardingSession",
            {"localPortNumber": ["0"], "portNumber": ["22"]},
        )

        SsmBroker(client).start_session(request)

        client.start_session.assert_called_once_with(
            Target="i-0123",
            DocumentName="AWS-StartPortForwardingSession",
            Parameters={"localPortNumber": ["0"], "portNumber": ["22"]},
        )

    def test_from_settings(self, mocker):
        session_cls = mocker.patch("ssmsession.domain.broker.ssm.boto3.session.Session")

        SsmBroker.from_settings(AwsConfig(region="eu-west-1"))

        session_cls.assert_called_once_with(profile_name=None)
        session_cls.return_value.client.assert_called_once_with(
            "ssm", region_name="eu-west-1", endpoint_url=None
        )

    def test_from_settings_with_profile_and_endpoint(self, mocker):
        session_cls = mocker.patch("ssmsession.domain.broker.ssm.boto3.session.Session")

        SsmBroker.from_settings(AwsConfig(
            profile="ops", endpoint_url="https://vpce-0abc.ssm.eu-west-1.vpce.amazonaws.com"
        ))

        session_cls.assert_called_once_with(profile_name="ops")
        session_cls.return_value.client.assert_called_once_with(
            "ssm",
            region_name=None,
            endpoint_url="https://vpce-0abc.ssm.eu-west-1.vpce.amazonaws.com",
        )


# ---------------------------------------------------------------------------
# botocore Stubber
# ---------------------------------------------------------------------------

class TestSsmBrokerStubbed:

    def test_resolved_region_and_endpoint(self):
        broker = _stubbed_broker()
        assert broker.region == "us-east-1"
        assert broker.endpoint == "https://ssm.us-east-1.amazonaws.com"

    def test_start_session(self):
        broker = _stubbed_broker()
        request = SessionRequest(
            "i-0123",
            "AWS-StartPortForwardingSession",
            {"localPortNumber": ["0"], "portNumber": ["22"]},
        )

        with Stubber(broker.client) as stubber:
            stubber.add_response("start_session", SESSION_RESPONSE, request.to_api())
            response = broker.start_session(request)
            stubber.assert_no_pending_responses()

        assert response["SessionId"] == SESSION_RESPONSE["SessionId"]
        assert response["StreamUrl"] == SESSION_RESPONSE["StreamUrl"]

    def test_client_error_propagates(self):
        broker = _stubbed_broker()

        with Stubber(broker.client) as stubber:
            stubber.add_client_error(
                "start_session",
                service_error_code="TargetNotConnected",
                service_message="i-0123 is not connected.",
                http_status_code=400,
            )
            with pytest.raises(ClientError) as exc_info:
                broker.start_session(SessionRequest("i-0123"))

        assert exc_info.value.response["Error"]["Code"] == "TargetNotConnected"
