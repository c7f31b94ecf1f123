from typing import Generic, TypeVar

from ..errors import RCONError

T = TypeVar("T")


class InvalidStateError(RCONError, Generic[T]):
    """The protocol is not in a state that allows the requested operation."""

    current_state: T
    """The state the protocol was in."""
    expected_states: tuple[T, ...]
    """The states that would have allowed the operation."""

    def __init__(self, current_state: T, expected_states: tuple[T, ...]):
        self.current_state = current_state
        self.expected_states = expected_states
        super().__init__(
            "protocol must be {}, not {}".format(
                " or ".join(s.name for s in self.expected_states),  # type: ignore
                self.current_state.name,  # type: ignore
            )
        )
