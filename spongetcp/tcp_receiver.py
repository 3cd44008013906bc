"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from typing import Optional

from .byte_stream import ByteStream
from .stream_reassembler import StreamReassembler
from .tcp_header import WrappingInt32, unwrap, wrap
from .tcp_segment import TCPSegment


class TCPReceiver:
    """Turns incoming TCP segments into a reassembled byte stream.

    It also reports the acknowledgment number and window size that
    should be advertised back to the peer.
    """

    def __init__(self, capacity: int) -> None:
        self._reassembler = StreamReassembler(capacity)
        self._capacity = capacity
        self._syn_received = False
        self._fin_received = False
        self._isn = WrappingInt32(0)

    def segment_received(self, seg: TCPSegment) -> None:
        """Handle an inbound segment."""
        header = seg.header
        if not (header.syn or self._syn_received):
            return

        if not self._syn_received:
            self._syn_received = True
            self._isn = header.seqno

        data = bytes(seg.payload)
        if data and (header.syn or header.seqno != self._isn):
            # The SYN occupies one sequence number ahead of the first data byte.
            seqno = header.seqno - (0 if header.syn else 1)
            index = unwrap(seqno, self._isn, self._reassembler.wait_index())
            self._reassembler.push_substring(data, index, header.fin)

        if header.fin or self._fin_received:
            self._fin_received = True
            if self._reassembler.unassembled_bytes() == 0:
                self._reassembler.stream_out().end_input()

    def ackno(self) -> Optional[WrappingInt32]:
        """The next sequence number wanted from the peer, or ``None`` before the SYN."""
        if not self._syn_received:
            return None
        index = self._reassembler.wait_index() + 1
        if self._reassembler.stream_out().input_ended():
            index += 1
        return wrap(index, self._isn)

    def window_size(self) -> int:
        """Room left in the output stream, in bytes."""
        return self._capacity - self._reassembler.stream_out().buffer_size()

    def unassembled_bytes(self) -> int:
        """Number of bytes received but not yet assembled."""
        return self._reassembler.unassembled_bytes()

    def stream_out(self) -> ByteStream:
        """The stream of reassembled bytes."""
        return self._reassembler.stream_out()