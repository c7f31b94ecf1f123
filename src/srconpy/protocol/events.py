"""Provides classes to be used as facades for :py:class:`Packet` objects."""
from dataclasses import dataclass

from .packet import Packet


class ClientEvent:
    """The base class for events produced by :py:class:`RCONClientProtocol`."""


@dataclass
class ClientAuthEvent(ClientEvent):
    """Indicates if an authentication request was successful."""

    success: bool
    """``True`` if the client was authenticated, ``False`` otherwise."""
    packet: Packet
    """The server's response to the login packet."""


@dataclass
class ClientCommandEvent(ClientEvent):
    """Represents the response to a given command."""

    packet: Packet
    """The server's response. Only the first packet of a split
    response is ever represented here.
    """
