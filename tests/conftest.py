# pyright: reportUnknownParameterType=false, reportUnknownMemberType=false
from unittest.mock import Mock

import pytest

from courier.networking.types import TransportResult


@pytest.fixture
def fake_transport():
    transport = Mock()
    transport.perform.return_value = TransportResult(
        headers=("HTTP/1.1 200 OK", "Content-Type: application/json"),
        body=b'{"success":true}',
        connected=True,
        encoding="utf-8",
    )
    return transport
