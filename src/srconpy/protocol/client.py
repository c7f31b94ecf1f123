import enum
import logging

from .errors import InvalidStateError
from .events import ClientAuthEvent, ClientCommandEvent, ClientEvent
from .ids import RandomRequestIds, RequestIdSupplier
from .packet import Packet, PacketType

__all__ = ("ClientState", "RCONClientProtocol", "LOGIN_FAILED_ID")

log = logging.getLogger(__name__)

LOGIN_FAILED_ID = -1
"""The request ID echoed by the server when a login is refused."""


class ClientState(enum.Enum):
    """Defines the current state of the protocol."""

    AUTHENTICATING = enum.auto()
    """The client has not been authenticated by the server yet."""
    LOGGED_IN = enum.auto()
    """The server has accepted the client's password."""


class RCONClientProtocol:
    """Implements the client-side portion of the protocol without any I/O.

    Requests are strictly sequential: each packet returned by
    :py:meth:`authenticate()` or :py:meth:`send_command()` becomes the
    pending request, and the next call to :py:meth:`receive_data()` is
    treated as its response.

    :param request_ids:
        The :py:class:`RequestIdSupplier` used to generate request IDs.
        If ``None``, defaults to :py:class:`RandomRequestIds()`.
    :param require_login:
        If ``True``, commands cannot be sent until the server has
        accepted a login. By default commands are allowed at any time
        and the server decides whether to answer them.

    """

    state: ClientState
    """The current state of the protocol."""

    _events: list[ClientEvent]
    """A list of events waiting to be collected."""
    _pending: Packet | None
    """The request currently awaiting a response."""

    def __init__(
        self,
        *,
        request_ids: RequestIdSupplier | None = None,
        require_login: bool = False,
    ) -> None:
        if request_ids is None:
            request_ids = RandomRequestIds()

        self.request_ids = request_ids
        self.require_login = require_login
        self.reset()

    def __repr__(self) -> str:
        return "<{} {}, {} event(s), {}>".format(
            type(self).__name__,
            self.state.name.lower().replace("_", " "),
            len(self._events),
            "1 pending request" if self._pending is not None else "idle",
        )

    @property
    def pending(self) -> Packet | None:
        """The request currently awaiting a response, if any."""
        return self._pending

    def receive_data(self, data: bytes) -> Packet:
        """Handles a frame received from the server.

        :returns: The decoded packet.
        :raises MalformedFrameError: The data could not be decoded.

        """
        packet = Packet.from_bytes(data)
        self._events.append(self._handle_packet(packet))
        return packet

    def events_received(self) -> list[ClientEvent]:
        """Retrieves all events that have been parsed since this was last called."""
        current_events = self._events
        self._events = []
        return current_events

    def authenticate(self, password: str) -> Packet:
        """Returns the packet needed to authenticate with the server.

        Logging in again after a successful login is permitted.

        """
        return self._make_request(password, PacketType.LOGIN)

    def send_command(self, command: str, type: int = PacketType.COMMAND) -> Packet:
        """Returns the packet for sending a command.

        A fresh request ID is generated for every call.

        :raises InvalidStateError:
            :py:attr:`require_login` is enabled and the client
            has not logged in yet.

        """
        if self.require_login:
            self._assert_state(ClientState.LOGGED_IN)
        return self._make_request(command, type)

    def reset(self) -> None:
        """Resets the protocol to the beginning state.

        This should be invoked whenever a new connection is made.

        """
        self._events = []
        self._pending = None
        self.state = ClientState.AUTHENTICATING

    def _assert_state(self, *states: ClientState) -> None:
        if self.state not in states:
            raise InvalidStateError(self.state, states)

    def _make_request(self, payload: str, type: int) -> Packet:
        packet = Packet.create(payload, self.request_ids(), type)
        self._pending = packet
        return packet

    def _handle_packet(self, packet: Packet) -> ClientEvent:
        request, self._pending = self._pending, None

        if request is not None and request.type == PacketType.LOGIN:
            success = packet.request_id != LOGIN_FAILED_ID
            if success:
                self.state = ClientState.LOGGED_IN
                self._check_request_id(request, packet)
            else:
                self.state = ClientState.AUTHENTICATING
            return ClientAuthEvent(success, packet)

        if request is None:
            log.warning(f"received unsolicited packet (request ID {packet.request_id})")
        else:
            self._check_request_id(request, packet)
        return ClientCommandEvent(packet)

    @staticmethod
    def _check_request_id(request: Packet, response: Packet) -> None:
        # Request IDs only serve as a sanity check since
        # the connection never has more than one request in flight
        if request.request_id != response.request_id:
            log.warning(
                f"response request ID {response.request_id} does not match "
                f"the request ID that was sent ({request.request_id})"
            )
