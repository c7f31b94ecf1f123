"""Contains a Sans-IO implementation of the Source RCON protocol.

Suggested reading about sansio:
    https://fractalideas.com/blog/sans-io-when-rubber-meets-road/
    https://sans-io.readthedocs.io/index.html

"""

from .client import (
    LOGIN_FAILED_ID as LOGIN_FAILED_ID,
    ClientState as ClientState,
    RCONClientProtocol as RCONClientProtocol,
)
from .errors import InvalidStateError as InvalidStateError
from .events import (
    ClientAuthEvent as ClientAuthEvent,
    ClientCommandEvent as ClientCommandEvent,
    ClientEvent as ClientEvent,
)
from .ids import (
    RandomRequestIds as RandomRequestIds,
    RequestIdSupplier as RequestIdSupplier,
    SequentialRequestIds as SequentialRequestIds,
)
from .packet import (
    Packet as Packet,
    PacketType as PacketType,
    decode as decode,
    encode as encode,
)
