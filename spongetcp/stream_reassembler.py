"""Reassembly of possibly overlapping, out-of-order substrings into a byte stream."""

from __future__ import annotations

from .byte_stream import ByteStream


class StreamReassembler:
    """Assembles indexed substrings into a contiguous :class:`ByteStream`."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._output = ByteStream(capacity)
        self._pending: dict[int, bytes] = {}
        self._next_index = 0
        self._unassembled = 0
        self._eof_index: int | None = None

    def push_substring(self, data: bytes, index: int, eof: bool) -> None:
        """Accept ``data`` starting at stream position ``index``.

        ``eof`` marks ``data`` as the last substring of the stream.
        """
        data = bytes(data)
        new_index = self._find_new_index(index)
        size = len(data) - (new_index - index)
        size = self._trim_overlaps(new_index, size)

        if not self._has_space(new_index):
            return

        if size > 0:
            self._store(new_index, data[new_index - index : new_index - index + size])

        self._assemble_pending()

        if eof:
            self._eof_index = index + len(data)

        if self._eof_index is not None and self._eof_index <= self._next_index:
            self._output.end_input()

    def stream_out(self) -> ByteStream:
        """The stream that assembled bytes are written to."""
        return self._output

    def unassembled_bytes(self) -> int:
        """Number of bytes stored but not yet assembled."""
        return self._unassembled

    def wait_index(self) -> int:
        """Index of the next byte expected in order."""
        return self._next_index

    def empty(self) -> bool:
        """Whether no bytes are waiting to be assembled."""
        return self._unassembled == 0

    def ack_index(self) -> int:
        """Index of the first byte not yet assembled."""
        return self._next_index

    def _emplace(self, index: int, chunk: bytes) -> None:
        if index not in self._pending:
            self._pending[index] = chunk

    def _find_new_index(self, index: int) -> int:
        preceding = [start for start in self._pending if start <= index]
        if preceding:
            start = max(preceding)
            end = start + len(self._pending[start])
            if index < end:
                return end
        if index < self._next_index:
            return self._next_index
        return index

    def _trim_overlaps(self, new_index: int, size: int) -> int:
        for start in sorted(s for s in self._pending if s >= new_index):
            chunk_end = start + len(self._pending[start])
            data_end = new_index + size
            if start < data_end < chunk_end:
                return start - new_index
            if start < data_end:
                self._unassembled -= len(self._pending.pop(start))
                continue
            break
        return size

    def _has_space(self, new_index: int) -> bool:
        limit = self._next_index + self._capacity - self._output.buffer_size()
        return limit > new_index

    def _store(self, new_index: int, chunk: bytes) -> None:
        if new_index == self._next_index:
            written = self._output.write(chunk)
            self._next_index += written
            if written < len(chunk):
                rest = chunk[written:]
                self._unassembled += len(rest)
                self._emplace(self._next_index, rest)
        else:
            self._unassembled += len(chunk)
            self._emplace(new_index, chunk)

    def _assemble_pending(self) -> None:
        while self._pending:
            start = min(self._pending)
            if start != self._next_index:
                break
            chunk = self._pending[start]
            written = self._output.write(chunk)
            self._next_index += written
            if written < len(chunk):
                self._unassembled += len(chunk) - written
                self._emplace(self._next_index, chunk[written:])
            self._unassembled -= len(chunk)
            del self._pending[start]