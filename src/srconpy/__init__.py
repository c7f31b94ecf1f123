from .client import ClientConfig as ClientConfig, RCONClient as RCONClient
from .errors import (
    AuthenticationError as AuthenticationError,
    MalformedFrameError as MalformedFrameError,
    NotConnectedError as NotConnectedError,
    RCONConnectionError as RCONConnectionError,
    RCONError as RCONError,
)
from .io import AsyncTransport as AsyncTransport, StreamTransport as StreamTransport
from .protocol import (
    ClientAuthEvent as ClientAuthEvent,
    ClientCommandEvent as ClientCommandEvent,
    ClientEvent as ClientEvent,
    ClientState as ClientState,
    InvalidStateError as InvalidStateError,
    Packet as Packet,
    PacketType as PacketType,
    RandomRequestIds as RandomRequestIds,
    RCONClientProtocol as RCONClientProtocol,
    RequestIdSupplier as RequestIdSupplier,
    SequentialRequestIds as SequentialRequestIds,
    decode as decode,
    encode as encode,
)


def _get_version() -> str:
    from importlib.metadata import version

    return version("srconpy")


__version__ = _get_version()
