import asyncio
import logging
from abc import ABC, abstractmethod

from .errors import RCONConnectionError

__all__ = ("AsyncTransport", "StreamTransport")

log = logging.getLogger(__name__)


class AsyncTransport(ABC):
    """
    Provides a bridge between :py:class:`RCONClient` and the underlying
    byte stream.

    A transport is owned by exactly one client and is never
    read from or written to concurrently.
    """

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Writes all of the given data to the stream.

        :raises OSError: The data could not be written.

        """

    @abstractmethod
    async def read(self, max_bytes: int) -> bytes:
        """Waits for data and returns up to ``max_bytes`` of it.

        :raises RCONConnectionError: The stream was closed by the server.
        :raises OSError: The data could not be read.

        """

    @abstractmethod
    async def close(self) -> None:
        """Closes the stream. Closing more than once is a no-op."""

    @abstractmethod
    def is_closing(self) -> bool:
        """Indicates if the stream is closed or in the process of closing."""


class StreamTransport(AsyncTransport):
    """An asyncio streams implementation of :py:class:`AsyncTransport`."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self.reader = reader
        self.writer = writer

    def __repr__(self) -> str:
        return "<{} peer={}>".format(
            type(self).__name__,
            self.writer.get_extra_info("peername"),
        )

    @classmethod
    async def open(
        cls,
        host: str,
        port: int,
        *,
        timeout: float | None = None,
    ) -> "StreamTransport":
        """Opens a TCP connection to the given address.

        :param host: The hostname or IP address of the server.
        :param port: The port of the server.
        :param timeout:
            The amount of time in seconds to wait for the connection
            before giving up, or ``None`` to wait indefinitely.
        :raises OSError: The connection could not be established.
        :raises asyncio.TimeoutError: The timeout was exceeded.

        """
        log.debug(f"opening connection to {host}:{port}")
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port),
            timeout=timeout,
        )
        return cls(reader, writer)

    async def write(self, data: bytes) -> None:
        self.writer.write(data)
        await self.writer.drain()

    async def read(self, max_bytes: int) -> bytes:
        data = await self.reader.read(max_bytes)
        if not data:
            raise RCONConnectionError("connection was closed by the server")
        return data

    async def close(self) -> None:
        if self.writer.is_closing():
            return

        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            # The peer may have already reset the connection
            log.debug("error while closing connection", exc_info=e)

    def is_closing(self) -> bool:
        return self.writer.is_closing()
