import pytest

from srconpy.protocol import RCONClientProtocol, SequentialRequestIds


@pytest.fixture
def client() -> RCONClientProtocol:
    return RCONClientProtocol(request_ids=SequentialRequestIds())


@pytest.fixture
def strict_client() -> RCONClientProtocol:
    return RCONClientProtocol(
        request_ids=SequentialRequestIds(),
        require_login=True,
    )
