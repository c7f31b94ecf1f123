import asyncio
import collections

from srconpy import (
    AsyncTransport,
    PacketType,
    RCONConnectionError,
    decode,
    encode,
)

expected_password = "foobar2000"
incorrect_password = "abc123"


class EchoTransport(AsyncTransport):
    """An in-memory transport that plays the part of an RCON server.

    Commands are answered with a packet echoing the request ID and
    payload. Logins are accepted only with :py:data:`expected_password`.
    Every operation is recorded in :py:attr:`calls` in the order it
    was made.

    """

    def __init__(self):
        self.calls: list[tuple[str, object]] = []
        self.closed = False
        self.fail_on: str | None = None
        self.stall_on: str | None = None
        self._responses: collections.deque[bytes | None] = collections.deque()

    async def write(self, data: bytes) -> None:
        self.calls.append(("write", data))
        packet = decode(data)

        if packet.payload == self.fail_on:
            self._responses.append(b"")
        elif packet.payload == self.stall_on:
            self._responses.append(None)
        elif packet.type == PacketType.LOGIN:
            request_id = packet.request_id
            if packet.payload != expected_password:
                request_id = -1
            self._responses.append(encode("", request_id, PacketType.COMMAND))
        else:
            self._responses.append(
                encode(packet.payload, packet.request_id, PacketType.COMMAND)
            )

    async def read(self, max_bytes: int) -> bytes:
        self.calls.append(("read", max_bytes))
        data = self._responses.popleft()
        if data is None:
            # Never answer, leaving the read to be cancelled
            await asyncio.Event().wait()
        if not data:
            raise RCONConnectionError("connection was closed by the server")
        return data[:max_bytes]

    async def close(self) -> None:
        self.calls.append(("close", None))
        self.closed = True

    def is_closing(self) -> bool:
        return self.closed

    @property
    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    @property
    def sent(self) -> list[str]:
        return [decode(data).payload for name, data in self.calls if name == "write"]


class FakeTransportFactory:
    """Hands out :py:class:`EchoTransport` objects and records connections."""

    def __init__(self, exc: Exception | None = None):
        self.exc = exc
        self.addresses: list[tuple[str, int, float | None]] = []
        self.transports: list[EchoTransport] = []

    async def __call__(self, host: str, port: int, *, timeout: float | None = None):
        self.addresses.append((host, port, timeout))
        if self.exc is not None:
            raise self.exc

        transport = EchoTransport()
        self.transports.append(transport)
        return transport

    @property
    def transport(self) -> EchoTransport:
        return self.transports[-1]

