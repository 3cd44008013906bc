"""Official TCP state names and their mapping onto sender and receiver summaries."""

from __future__ import annotations

import enum

from .tcp_receiver import TCPReceiver


class ReceiverStateSummary(str, enum.Enum):
    """Descriptions of the states a receiver can be in."""

    ERROR = "error (connection was reset)"
    LISTEN = "waiting for SYN: ackno is empty"
    SYN_RECV = "SYN received (ackno exists), and input to stream hasn't ended"
    FIN_RECV = "input to stream has ended"


class SenderStateSummary(str, enum.Enum):
    """Descriptions of the states a sender can be in."""

    ERROR = "error (connection was reset)"
    CLOSED = "waiting for stream to begin (no SYN sent)"
    SYN_SENT = "stream started but nothing acknowledged"
    SYN_ACKED = "stream ongoing"
    FIN_SENT = "stream finished (FIN sent) but not fully acknowledged"
    FIN_ACKED = "stream finished and fully acknowledged"


class State(enum.Enum):
    """Official state names of a TCP connection."""

    LISTEN = 0
    SYN_RCVD = 1
    SYN_SENT = 2
    ESTABLISHED = 3
    CLOSE_WAIT = 4
    LAST_ACK = 5
    FIN_WAIT_1 = 6
    FIN_WAIT_2 = 7
    CLOSING = 8
    TIME_WAIT = 9
    CLOSED = 10
    RESET = 11


_R = ReceiverStateSummary
_S = SenderStateSummary

# state -> (receiver, sender, active, linger_after_streams_finish)
_STATE_TABLE: dict[State, tuple[ReceiverStateSummary, SenderStateSummary, bool, bool]] = {
    State.LISTEN: (_R.LISTEN, _S.CLOSED, True, True),
    State.SYN_RCVD: (_R.SYN_RECV, _S.SYN_SENT, True, True),
    State.SYN_SENT: (_R.LISTEN, _S.SYN_SENT, True, True),
    State.ESTABLISHED: (_R.SYN_RECV, _S.SYN_ACKED, True, True),
    State.CLOSE_WAIT: (_R.FIN_RECV, _S.SYN_ACKED, True, False),
    State.LAST_ACK: (_R.FIN_RECV, _S.FIN_SENT, True, False),
    State.CLOSING: (_R.FIN_RECV, _S.FIN_SENT, True, True),
    State.FIN_WAIT_1: (_R.SYN_RECV, _S.FIN_SENT, True, True),
    State.FIN_WAIT_2: (_R.SYN_RECV, _S.FIN_ACKED, True, True),
    State.TIME_WAIT: (_R.FIN_RECV, _S.FIN_ACKED, True, True),
    State.RESET: (_R.ERROR, _S.ERROR, False, False),
    State.CLOSED: (_R.FIN_RECV, _S.FIN_ACKED, False, False),
}


class TCPState:
    """A connection state expressed through sender and receiver summaries."""

    def __init__(self, state: State) -> None:
        receiver, sender, active, linger = _STATE_TABLE[state]
        self._receiver = receiver.value
        self._sender = sender.value
        self._active = active
        self._linger_after_streams_finish = linger

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TCPState):
            return NotImplemented
        return (
            self._active == other._active
            and self._linger_after_streams_finish == other._linger_after_streams_finish
            and self._sender == other._sender
            and self._receiver == other._receiver
        )

    __hash__ = None  # type: ignore[assignment]

    def name(self) -> str:
        """A one-line description of the state."""
        return (
            f"sender=`{self._sender}`, receiver=`{self._receiver}`, "
            f"active={int(self._active)}, "
            f"linger_after_streams_finish={int(self._linger_after_streams_finish)}"
        )

    def __repr__(self) -> str:
        return f"TCPState({self.name()})"

    @staticmethod
    def state_summary(receiver: TCPReceiver) -> str:
        """Describe the state of ``receiver``."""
        stream = receiver.stream_out()
        if stream.error():
            return ReceiverStateSummary.ERROR.value
        if receiver.ackno() is None:
            return ReceiverStateSummary.LISTEN.value
        if stream.input_ended():
            return ReceiverStateSummary.FIN_RECV.value
        return ReceiverStateSummary.SYN_RECV.value