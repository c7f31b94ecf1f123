"""
Defines the packet format exchanged between the client and server.

Every frame is laid out as follows, with integers being signed,
32-bit and little-endian::

    offset  size  field
    0       4     length      (bytes remaining after this field)
    4       4     request ID
    8       4     type
    12      N     payload     (UTF-8, N = length - 10)
    12+N    2     terminator  (0x00 0x00)

"""
import enum
import functools
from dataclasses import dataclass
from typing import Type

from ..errors import MalformedFrameError

__all__ = (
    "PacketType",
    "Packet",
    "encode",
    "decode",
    "HEADER_SIZE",
    "MIN_LENGTH",
)

HEADER_SIZE = 12
"""The size of the length, request ID, and type fields combined."""
MIN_LENGTH = 10
"""The smallest valid length field, i.e. a frame with an empty payload."""
TERMINATOR = b"\x00\x00"


def _convert_exception(
    from_exc: Type[Exception],
    to_exc: Type[Exception],
    message: str | None = None,
):
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except from_exc as e:
                if message is not None:
                    raise to_exc(message) from e
                raise to_exc from e

        return wrapper

    return decorator


class PacketType(enum.IntEnum):
    """The type of a packet.

    Being an :py:class:`~enum.IntEnum`, members compare equal to the raw
    integers found on the wire.

    """

    MULTIPACKET = 0
    """Marks a continuation of a response split across multiple packets."""

    COMMAND = 2
    """Used for command requests and their responses."""

    LOGIN = 3
    """Used to authenticate the client with a password."""


def _int32_to_bytes(n: int) -> bytes:
    return n.to_bytes(4, "little", signed=True)


def _int32_from_bytes(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 4], "little", signed=True)


@dataclass(frozen=True)
class Packet:
    """A single RCON packet in its decoded form.

    Packets are usually created through :py:meth:`create()` when sending
    and :py:meth:`from_bytes()` when receiving.

    """

    length: int
    """The byte count of the frame after the length field itself."""
    request_id: int
    """The ID correlating a response to the request that produced it."""
    type: PacketType | int
    """The packet's type. Unknown values are kept as plain integers."""
    payload: str
    """The command or response text."""

    @classmethod
    def create(cls, payload: str, request_id: int, type: int) -> "Packet":
        """Creates a packet whose length is computed from the payload."""
        length = 4 + 4 + len(payload.encode()) + 2
        return cls(length, request_id, _coerce_type(type), payload)

    @classmethod
    @_convert_exception(OverflowError, ValueError, "integer does not fit in 32 bits")
    def to_bytes(cls, payload: str, request_id: int, type: int) -> bytes:
        """Encodes a payload into a frame ready to be sent.

        :param payload: The command or response text.
        :param request_id: A signed 32-bit request ID.
        :param type: The :py:class:`PacketType` or raw type of the packet.
        :returns: A buffer of exactly ``4 + length`` bytes.
        :raises ValueError:
            The request ID or type cannot be represented in 32 bits.

        """
        payload_bytes = payload.encode()
        length = 4 + 4 + len(payload_bytes) + 2

        buffer = bytearray(_int32_to_bytes(length))
        buffer.extend(_int32_to_bytes(request_id))
        buffer.extend(_int32_to_bytes(type))
        buffer.extend(payload_bytes)
        buffer.extend(TERMINATOR)
        return bytes(buffer)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Packet":
        """Decodes the first frame found in the given data.

        Any bytes after the end of the frame are ignored so a fixed-size
        receive buffer can be passed directly. Invalid UTF-8 in the payload
        is substituted with replacement characters.

        :param data: The data to parse.
        :returns: The decoded packet.
        :raises MalformedFrameError:
            The data is shorter than the header, the length field is
            below the minimum, or the data ends before the frame does.

        """
        if len(data) < HEADER_SIZE:
            raise MalformedFrameError(
                f"expected at least {HEADER_SIZE} bytes, received {len(data)}"
            )

        length = _int32_from_bytes(data, 0)
        if length < MIN_LENGTH:
            raise MalformedFrameError(
                f"length field must be {MIN_LENGTH} or higher, not {length}"
            )
        elif len(data) < 4 + length:
            raise MalformedFrameError(
                f"frame is truncated ({len(data)} of {4 + length} bytes)"
            )

        request_id = _int32_from_bytes(data, 4)
        ptype = _int32_from_bytes(data, 8)
        payload = data[HEADER_SIZE : HEADER_SIZE + length - MIN_LENGTH]

        return cls(
            length=length,
            request_id=request_id,
            type=_coerce_type(ptype),
            payload=payload.decode(errors="replace"),
        )

    def encode(self) -> bytes:
        """Encodes this packet into a frame.

        The length is recomputed from the payload rather than taken
        from :py:attr:`length`.

        """
        return self.to_bytes(self.payload, self.request_id, self.type)


def _coerce_type(ptype: int) -> PacketType | int:
    try:
        return PacketType(ptype)
    except ValueError:
        return ptype


def encode(payload: str, request_id: int, type: int) -> bytes:
    """A shorthand for :py:meth:`Packet.to_bytes()`."""
    return Packet.to_bytes(payload, request_id, type)


def decode(data: bytes) -> Packet:
    """A shorthand for :py:meth:`Packet.from_bytes()`."""
    return Packet.from_bytes(data)
