"""
Session broker clients.

The SSM backend talks to AWS through boto3; any object with
``start_session``, ``region`` and ``endpoint`` can stand in for it.
"""

from ssmsession.domain.broker.base import SessionBroker
from ssmsession.domain.broker.ssm import SsmBroker

__all__ = ["SessionBroker", "SsmBroker"]
