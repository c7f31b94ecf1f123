from typing import Type, TypeVar

from srconpy.protocol import (
    LOGIN_FAILED_ID,
    Packet,
    PacketType,
    RCONClientProtocol,
    encode,
)

expected_password = "foobar2000"
incorrect_password = "abc123"

T = TypeVar("T")


def respond(
    request: Packet,
    payload: str = "",
    *,
    request_id: int | None = None,
    type: int = PacketType.COMMAND,
) -> bytes:
    """Returns the frame a server would send in response to the given request.

    By default the request ID is echoed back.

    """
    if request_id is None:
        request_id = request.request_id
    return encode(payload, request_id, type)


def login_response(request: Packet, password: str) -> bytes:
    """Returns the server's response to a login, accepting only
    :py:data:`expected_password`.
    """
    if password == expected_password:
        return respond(request)
    return respond(request, request_id=LOGIN_FAILED_ID)


def first_and_only_event(proto: RCONClientProtocol, event_cls: Type[T]) -> T:
    events = proto.events_received()
    assert len(events) == 1
    first_event = events[0]
    assert isinstance(first_event, event_cls)
    return first_event
