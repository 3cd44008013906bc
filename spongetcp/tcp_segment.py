"""TCP segments, their checksum and the TCP configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .tcp_header import ParseError, ParseResult, TCPHeader, WrappingInt32, _parse_prefix


def internet_checksum(data: bytes, initial: int = 0) -> int:
    """The 16-bit ones'-complement Internet checksum of ``data``, seeded with ``initial``."""
    total = initial
    data = bytes(data)
    total += sum(data[0::2]) << 8
    total += sum(data[1::2])
    while total > 0xFFFF:
        total = (total >> 16) + (total & 0xFFFF)
    return ~total & 0xFFFF


@dataclass
class TCPSegment:
    """A TCP segment: a header and a payload."""

    header: TCPHeader = field(default_factory=TCPHeader)
    payload: bytes = b""

    @classmethod
    def parse(cls, data: bytes, datagram_layer_checksum: int = 0) -> TCPSegment:
        """Parse and checksum-verify a segment; raise :class:`ParseError` on failure."""
        data = bytes(data)
        if internet_checksum(data, datagram_layer_checksum):
            raise ParseError(ParseResult.BAD_CHECKSUM)
        header, offset, _, stream_error = _parse_prefix(data)
        if stream_error is not None:
            raise ParseError(stream_error)
        return cls(header=header, payload=data[offset:])

    def serialize(self, datagram_layer_checksum: int = 0) -> bytes:
        """Encode the segment, filling in the checksum over header and payload."""
        header_out = TCPHeader(**{name: getattr(self.header, name) for name in self.header.__dataclass_fields__})
        header_out.cksum = 0
        header_out.cksum = internet_checksum(header_out.serialize() + self.payload, datagram_layer_checksum)
        return header_out.serialize() + self.payload

    def length_in_sequence_space(self) -> int:
        """Payload length plus one for SYN and one for FIN."""
        return len(self.payload) + int(self.header.syn) + int(self.header.fin)


@dataclass
class TCPConfig:
    """Configuration shared by a TCP sender and receiver."""

    DEFAULT_CAPACITY: ClassVar[int] = 64000
    MAX_PAYLOAD_SIZE: ClassVar[int] = 1000
    TIMEOUT_DFLT: ClassVar[int] = 1000
    MAX_RETX_ATTEMPTS: ClassVar[int] = 8

    rt_timeout: int = TIMEOUT_DFLT
    recv_capacity: int = DEFAULT_CAPACITY
    send_capacity: int = DEFAULT_CAPACITY
    fixed_isn: Optional[WrappingInt32] = None