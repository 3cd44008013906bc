"""The receiving half of TCP: byte streams, reassembly, segments and receiver state."""

__version__ = "0.1.0"

__all__ = [
    "byte_stream",
    "stream_reassembler",
    "tcp_header",
    "tcp_segment",
    "tcp_receiver",
    "tcp_state",
]