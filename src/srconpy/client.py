import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Iterable

from .errors import AuthenticationError, NotConnectedError, RCONConnectionError
from .io import AsyncTransport, StreamTransport
from .protocol import (
    ClientAuthEvent,
    ClientState,
    Packet,
    PacketType,
    RCONClientProtocol,
)

__all__ = ("ClientConfig", "RCONClient", "TransportFactory")

log = logging.getLogger(__name__)

TransportFactory = Callable[..., Awaitable[AsyncTransport]]
"""
A coroutine function accepting ``(host, port, *, timeout)`` and
returning a connected :py:class:`AsyncTransport`.
"""


@dataclass
class ClientConfig:
    """Specifies the configuration used for the :py:class:`RCONClient`."""

    receive_size: int = 4410
    """
    The maximum number of bytes read for each response.

    Only one read is done per request. A response frame larger than
    this cannot be decoded and raises :py:exc:`MalformedFrameError`,
    which also closes the connection.
    """
    connect_timeout: float | None = None
    """
    The amount of time in seconds to wait when opening a connection,
    or ``None`` to wait indefinitely.
    """
    require_login: bool = False
    """
    Whether commands should be rejected with :py:exc:`InvalidStateError`
    until the server has accepted a login.
    """


class RCONClient:
    """An implementation of the Source RCON client protocol using asyncio.

    Example usage::

        client = srconpy.RCONClient()
        async with client.session(host, port, password):
            response = await client.write("list")
            print(response.payload)

    Only one request may be in flight at a time. Concurrent calls to
    :py:meth:`write()` are queued and sent one after the other.

    .. note::

        Servers may split long responses across several packets.
        These are not reassembled: each request performs a single read
        of up to :py:attr:`ClientConfig.receive_size` bytes and returns
        the first packet found. Any further packets in the same read
        are discarded, while packets arriving after it stay in the stream
        and are returned for the next request.

        A single read may also return only part of a frame if the
        response arrives in several TCP segments, in which case
        :py:exc:`MalformedFrameError` is raised.

    If a request fails or is cancelled after being sent, for example
    by :py:func:`asyncio.wait_for()`, the connection is closed since its
    response could otherwise be mistaken for the next one. Subsequent
    requests raise :py:exc:`NotConnectedError` until :py:meth:`connect()`
    is called again.

    """

    transport: AsyncTransport | None
    """The connection to the server, or ``None`` when disconnected."""

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        protocol: RCONClientProtocol | None = None,
        transport_factory: TransportFactory | None = None,
    ):
        """
        :param config:
            The configuration to use.
            Defaults to an instance of :py:class:`ClientConfig`.
        :param protocol:
            The protocol to use for building and parsing packets.
            Defaults to an instance of :py:class:`RCONClientProtocol`
            using the ``require_login`` setting of the config.
        :param transport_factory:
            The coroutine function used to open connections.
            Defaults to :py:meth:`StreamTransport.open()`.
        """
        if config is None:
            config = ClientConfig()
        if protocol is None:
            protocol = RCONClientProtocol(require_login=config.require_login)
        if transport_factory is None:
            transport_factory = StreamTransport.open

        self.config = config
        self.protocol = protocol
        self.transport_factory = transport_factory
        self.transport = None

        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "RCONClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def is_connected(self) -> bool:
        """Indicates if the client has an open connection with the server."""
        return self.transport is not None and not self.transport.is_closing()

    def is_logged_in(self) -> bool:
        """Indicates if the server has accepted a login on this connection."""
        return self.protocol.state is ClientState.LOGGED_IN

    # Connection methods

    async def connect(self, host: str, port: int) -> None:
        """Opens a connection to the given server.

        If the client is already connected, the previous connection
        is closed first.

        :raises RCONConnectionError:
            The connection could not be established.

        """
        await self.close()

        try:
            self.transport = await self.transport_factory(
                host, port, timeout=self.config.connect_timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            raise RCONConnectionError(
                f"failed to connect to RCON server at {host}:{port}"
            ) from e

        log.info(f"connected to {host}:{port}")

    async def close(self) -> None:
        """Closes the connection.

        This method is idempotent and can be called multiple times consecutively.

        """
        transport, self.transport = self.transport, None
        self.protocol.reset()

        if transport is not None:
            await transport.close()
            log.debug("connection closed")

    @contextlib.asynccontextmanager
    async def session(
        self,
        host: str,
        port: int,
        password: str | None = None,
    ) -> AsyncIterator["RCONClient"]:
        """Returns an asynchronous context manager that connects to the
        given server, logs in if a password is given, and closes the
        connection on exit.

        :raises RCONConnectionError:
            The connection could not be established.
        :raises AuthenticationError:
            The password was refused by the server.

        """
        try:
            await self.connect(host, port)
            if password is not None:
                await self.login(password)
            yield self
        finally:
            await self.close()

    async def login(self, password: str) -> None:
        """Authenticates with the server using the given password.

        No retries are made.

        :raises AuthenticationError: The password was refused by the server.
        :raises NotConnectedError: The client is not connected.

        """
        async with self._lock:
            self._check_connection()
            packet = self.protocol.authenticate(password)
            await self._round_trip(packet)

            for event in self.protocol.events_received():
                if isinstance(event, ClientAuthEvent) and not event.success:
                    raise AuthenticationError("invalid password provided")

        log.info("successfully logged in")

    # Commands

    async def write(self, command: str, type: int = PacketType.COMMAND) -> Packet:
        """Sends a packet to the server and waits for one response.

        :param command: The payload of the packet.
        :param type: The type of the packet, defaults to :py:attr:`PacketType.COMMAND`.
        :returns: The server's response.
        :raises NotConnectedError: The client is not connected.
        :raises InvalidStateError:
            :py:attr:`ClientConfig.require_login` is enabled
            and the client has not logged in.
        :raises MalformedFrameError:
            The response could not be decoded. The connection is closed.
        :raises RCONConnectionError: The server closed the connection.

        """
        async with self._lock:
            self._check_connection()
            packet = self.protocol.send_command(command, type)
            response = await self._round_trip(packet)
            self.protocol.events_received()
            return response

    async def multi_command(self, commands: Iterable[str]) -> list[Packet]:
        """Sends each command in order, waiting for each response
        before sending the next command.

        If any command fails, the error is propagated and the
        responses received so far are discarded.

        :param commands: The commands to send.
        :returns: The responses in the same order as the commands.
        :raises NotConnectedError: The client is not connected.

        """
        self._check_connection()

        responses = []
        for command in commands:
            responses.append(await self.write(command))
        return responses

    def _check_connection(self) -> AsyncTransport:
        if self.transport is None:
            raise NotConnectedError("not connected to RCON server")
        return self.transport

    async def _round_trip(self, packet: Packet) -> Packet:
        transport = self._check_connection()

        try:
            await transport.write(packet.encode())
            log.debug(
                f"sent {_type_name(packet.type)} packet (request ID {packet.request_id})"
            )

            data = await transport.read(self.config.receive_size)
            response = self.protocol.receive_data(data)
        except BaseException:
            # The stream may still hold a response to this request
            log.debug("round trip interrupted, closing connection")
            await self.close()
            raise

        log.debug(
            f"received {_type_name(response.type)} packet "
            f"(request ID {response.request_id}, {response.length} bytes)"
        )
        return response


def _type_name(ptype: PacketType | int) -> str:
    if isinstance(ptype, PacketType):
        return ptype.name
    return f"type {ptype}"
