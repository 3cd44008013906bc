"""A bounded, in-memory byte stream with a writing and a reading end."""

from __future__ import annotations


class ByteStream:
    """A flow-controlled byte stream of limited capacity.

    Bytes are written at one end and read from the other. Writing stores at
    most as many bytes as there is room for. Writing after the input has
    ended puts the stream into the error state.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._buffer = bytearray()
        self._bytes_written = 0
        self._bytes_read = 0
        self._input_ended = False
        self._error = False

    def write(self, data: bytes) -> int:
        """Store as much of ``data`` as fits and return how many bytes were taken."""
        if self._input_ended or self._error:
            self._error = True
            return 0
        accepted = bytes(data[: self.remaining_capacity()])
        self._buffer += accepted
        self._bytes_written += len(accepted)
        return len(accepted)

    def remaining_capacity(self) -> int:
        """Number of additional bytes the stream can hold right now."""
        return max(self._capacity - len(self._buffer), 0)

    def end_input(self) -> None:
        """Signal that no more bytes will be written."""
        self._input_ended = True

    def set_error(self) -> None:
        """Mark the stream as having suffered an error."""
        self._error = True

    def peek_output(self, length: int) -> bytes:
        """Return up to ``length`` bytes from the front of the buffer without removing them."""
        return bytes(self._buffer[:length])

    def pop_output(self, length: int) -> None:
        """Remove up to ``length`` bytes from the front of the buffer."""
        count = min(length, len(self._buffer))
        del self._buffer[:count]
        self._bytes_read += count

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes from the front of the buffer."""
        output = self.peek_output(length)
        self.pop_output(len(output))
        return output

    def input_ended(self) -> bool:
        """Whether the writer has ended the input."""
        return self._input_ended

    def error(self) -> bool:
        """Whether the stream is in the error state."""
        return self._error

    def buffer_size(self) -> int:
        """Number of bytes currently buffered and not yet read."""
        return len(self._buffer)

    def buffer_empty(self) -> bool:
        """Whether no bytes are buffered."""
        return not self._buffer

    def eof(self) -> bool:
        """Whether the input has ended and every byte has been read."""
        return self._input_ended and self.buffer_empty()

    def bytes_written(self) -> int:
        """Total number of bytes written so far."""
        return self._bytes_written

    def bytes_read(self) -> int:
        """Total number of bytes read so far."""
        return self._bytes_read