"""TCP sequence numbers and the TCP segment header."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

_MOD32 = 1 << 32
_HALF32 = 1 << 31


class ParseResult(enum.Enum):
    """Reasons why parsing a header or segment can fail."""

    BAD_CHECKSUM = "bad checksum"
    PACKET_TOO_SHORT = "not enough data to finish parsing"
    HEADER_TOO_SHORT = "header length is shorter than minimum required"


class ParseError(ValueError):
    """Raised when wire data cannot be parsed."""

    def __init__(self, result: ParseResult) -> None:
        super().__init__(result.value)
        self.result = result


class WrappingInt32:
    """A 32-bit sequence number that wraps around modulo 2**32."""

    __slots__ = ("_raw",)

    def __init__(self, value: int) -> None:
        self._raw = value % _MOD32

    def raw_value(self) -> int:
        """The underlying 32-bit value."""
        return self._raw

    def __add__(self, other: int) -> WrappingInt32:
        if isinstance(other, WrappingInt32) or not isinstance(other, int):
            return NotImplemented
        return WrappingInt32(self._raw + other)

    def __sub__(self, other: WrappingInt32 | int) -> WrappingInt32 | int:
        """Subtracting an int gives a sequence number; subtracting a sequence number gives a signed 32-bit distance."""
        if isinstance(other, WrappingInt32):
            diff = (self._raw - other._raw) % _MOD32
            return diff - _MOD32 if diff >= _HALF32 else diff
        if isinstance(other, int):
            return WrappingInt32(self._raw - other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WrappingInt32):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"WrappingInt32({self._raw})"

    def __str__(self) -> str:
        return str(self._raw)


def wrap(n: int, isn: WrappingInt32) -> WrappingInt32:
    """Convert an absolute 64-bit sequence number into a 32-bit one relative to ``isn``."""
    return isn + n


def unwrap(n: WrappingInt32, isn: WrappingInt32, checkpoint: int) -> int:
    """Return the absolute sequence number for ``n`` that lies closest to ``checkpoint``."""
    offset = n - wrap(checkpoint, isn)
    result = checkpoint + offset
    if result < 0:
        result += _MOD32
    return result


_FIXED = struct.Struct(">HHIIBBHHH")

_URG = 0b0010_0000
_ACK = 0b0001_0000
_PSH = 0b0000_1000
_RST = 0b0000_0100
_SYN = 0b0000_0010
_FIN = 0b0000_0001

_BOOL_NAMES = {True: "true", False: "false"}


class _Reader:
    """Reads big-endian integers; once short of data, every later read yields zero."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.offset = 0
        self.error: ParseResult | None = None

    def _check(self, n: int) -> bool:
        if self.error is None and self.offset + n > len(self._data):
            self.error = ParseResult.PACKET_TOO_SHORT
        return self.error is None

    def uint(self, n: int) -> int:
        if not self._check(n):
            return 0
        value = int.from_bytes(self._data[self.offset : self.offset + n], "big")
        self.offset += n
        return value

    def skip(self, n: int) -> None:
        if self._check(n):
            self.offset += n


@dataclass(eq=False)
class TCPHeader:
    """A TCP segment header. Options are not supported."""

    LENGTH = 20

    sport: int = 0
    dport: int = 0
    seqno: WrappingInt32 = field(default_factory=lambda: WrappingInt32(0))
    ackno: WrappingInt32 = field(default_factory=lambda: WrappingInt32(0))
    doff: int = LENGTH // 4
    urg: bool = False
    ack: bool = False
    psh: bool = False
    rst: bool = False
    syn: bool = False
    fin: bool = False
    win: int = 0
    cksum: int = 0
    uptr: int = 0

    @classmethod
    def parse(cls, data: bytes) -> TCPHeader:
        """Parse a header from the start of ``data``; raise :class:`ParseError` on failure."""
        header, _, header_error, stream_error = _parse_prefix(bytes(data))
        error = header_error or stream_error
        if error is not None:
            raise ParseError(error)
        return header

    def serialize(self) -> bytes:
        """Encode the header as wire bytes, without recomputing the checksum."""
        if self.doff < 5:
            raise ValueError("TCP header too short")
        flags = (
            (_URG if self.urg else 0)
            | (_ACK if self.ack else 0)
            | (_PSH if self.psh else 0)
            | (_RST if self.rst else 0)
            | (_SYN if self.syn else 0)
            | (_FIN if self.fin else 0)
        )
        fixed = _FIXED.pack(
            self.sport,
            self.dport,
            self.seqno.raw_value(),
            self.ackno.raw_value(),
            (self.doff << 4) & 0xFF,
            flags,
            self.win,
            self.cksum,
            self.uptr,
        )
        return fixed.ljust(4 * self.doff, b"\x00")

    def to_string(self) -> str:
        """The header's contents in human-readable form, numbers in hexadecimal."""
        names = {
            name: _BOOL_NAMES[bool(getattr(self, name))]
            for name in ("urg", "ack", "psh", "rst", "syn", "fin")
        }
        return (
            f"TCP source port: {self.sport:x}\n"
            f"TCP dest port: {self.dport:x}\n"
            f"TCP seqno: {self.seqno.raw_value():x}\n"
            f"TCP ackno: {self.ackno.raw_value():x}\n"
            f"TCP doff: {self.doff:x}\n"
            f"Flags: urg: {names['urg']} ack: {names['ack']} psh: {names['psh']}"
            f" rst: {names['rst']} syn: {names['syn']} fin: {names['fin']}\n"
            f"TCP winsize: {self.win:x}\n"
            f"TCP cksum: {self.cksum:x}\n"
            f"TCP uptr: {self.uptr:x}\n"
        )

    def summary(self) -> str:
        """A one-line summary of the flags, sequence numbers and window."""
        flags = (
            ("S" if self.syn else "")
            + ("A" if self.ack else "")
            + ("R" if self.rst else "")
            + ("F" if self.fin else "")
        )
        return f"Header(flags={flags},seqno={self.seqno},ack={self.ackno},win={self.win})"

    def __eq__(self, other: object) -> bool:
        """Compare all fields except ports and checksum."""
        if not isinstance(other, TCPHeader):
            return NotImplemented
        return (
            self.seqno == other.seqno
            and self.ackno == other.ackno
            and self.doff == other.doff
            and self.urg == other.urg
            and self.ack == other.ack
            and self.psh == other.psh
            and self.rst == other.rst
            and self.syn == other.syn
            and self.fin == other.fin
            and self.win == other.win
            and self.uptr == other.uptr
        )

    __hash__ = None  # type: ignore[assignment]


def _parse_prefix(
    data: bytes,
) -> tuple[TCPHeader, int, ParseResult | None, ParseResult | None]:
    """Parse a header; return it, the bytes consumed, the header's own error and the reader's error."""
    reader = _Reader(data)
    sport = reader.uint(2)
    dport = reader.uint(2)
    seqno = WrappingInt32(reader.uint(4))
    ackno = WrappingInt32(reader.uint(4))
    doff = reader.uint(1) >> 4
    flags = reader.uint(1)
    win = reader.uint(2)
    cksum = reader.uint(2)
    uptr = reader.uint(2)
    header = TCPHeader(
        sport=sport,
        dport=dport,
        seqno=seqno,
        ackno=ackno,
        doff=doff,
        urg=bool(flags & _URG),
        ack=bool(flags & _ACK),
        psh=bool(flags & _PSH),
        rst=bool(flags & _RST),
        syn=bool(flags & _SYN),
        fin=bool(flags & _FIN),
        win=win,
        cksum=cksum,
        uptr=uptr,
    )
    if doff < 5:
        return header, reader.offset, ParseResult.HEADER_TOO_SHORT, reader.error
    reader.skip(doff * 4 - TCPHeader.LENGTH)
    return header, reader.offset, None, reader.error