import pytest

from srconpy import ClientConfig, RCONClient, RCONClientProtocol, SequentialRequestIds

from . import FakeTransportFactory


@pytest.fixture
def factory() -> FakeTransportFactory:
    return FakeTransportFactory()


@pytest.fixture
def client(factory: FakeTransportFactory) -> RCONClient:
    return RCONClient(
        protocol=RCONClientProtocol(request_ids=SequentialRequestIds()),
        transport_factory=factory,
    )


@pytest.fixture
def strict_client(factory: FakeTransportFactory) -> RCONClient:
    return RCONClient(
        config=ClientConfig(require_login=True),
        transport_factory=factory,
    )
