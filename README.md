# spongetcp

The receiving half of TCP in plain Python, with no third-party dependencies.

## Modules

- `spongetcp.byte_stream`
  - `ByteStream(capacity)` is a bounded in-memory byte pipe.
  - `write(data)` stores as much as fits and returns the number of bytes taken.
  - Reading uses `peek_output(length)`, `pop_output(length)` and `read(length)`.
  - `end_input()` closes the writing end. `eof()` is true once input has ended and the buffer is empty.
  - Writing after `end_input()` (or after `set_error()`) returns 0 and puts the stream into the error state; check it with `error()`.
  - Counters: `bytes_written()`, `bytes_read()`, `buffer_size()`, `buffer_empty()` and `remaining_capacity()`.
- `spongetcp.stream_reassembler`
  - `StreamReassembler(capacity)` accepts substrings through `push_substring(data, index, eof)`. They may arrive out of order and may overlap.
  - It writes the contiguous prefix into `stream_out()`, which is a `ByteStream`.
  - `unassembled_bytes()` and `empty()` report what is stored but not yet assembled.
  - `wait_index()` and `ack_index()` give the index of the next byte expected.
- `spongetcp.tcp_header`
  - `WrappingInt32` is a 32-bit sequence number.
    - `seq + n` gives a sequence number.
    - `seq - n` gives a sequence number.
    - `seq - other_seq` gives the signed 32-bit distance between two sequence numbers.
  - `wrap(n, isn)` converts an absolute index to a sequence number.
  - `unwrap(n, isn, checkpoint)` converts a sequence number back to the absolute index closest to `checkpoint`.
  - `TCPHeader` is a dataclass of the header fields.
    - `TCPHeader.parse(data)` parses a header. On failure it raises `ParseError`, whose `result` is a `ParseResult`.
    - `serialize()` encodes the header. It raises `ValueError` if `doff < 5`.
    - `to_string()` and `summary()` give human-readable forms.
    - Equality ignores the ports and the checksum.
- `spongetcp.tcp_segment`
  - `internet_checksum(data, initial=0)` computes the 16-bit ones'-complement checksum.
  - `TCPSegment(header, payload)` pairs a header with its payload.
    - `TCPSegment.parse(data, datagram_layer_checksum=0)` verifies the checksum and parses the segment. It raises `ParseError` with `ParseResult.BAD_CHECKSUM` when the checksum is wrong.
    - `serialize(datagram_layer_checksum=0)` fills in the checksum.
    - `length_in_sequence_space()` counts the payload plus one for SYN and one for FIN.
  - `TCPConfig` holds default capacities, the retransmission timeout and an optional fixed ISN.
- `spongetcp.tcp_receiver`
  - `TCPReceiver(capacity)` takes segments through `segment_received(seg)` and reassembles their payloads into `stream_out()`.
  - `ackno()` reports the acknowledgement number to advertise. It returns `None` before a SYN has arrived.
  - `window_size()` and `unassembled_bytes()` report the window and the bytes not yet assembled.
- `spongetcp.tcp_state`
  - `State` enumerates the official TCP state names.
  - `TCPState(state)` expresses one of them as a sender summary, a receiver summary and two connection flags. `TCPState.name()` describes it.
  - `TCPState.state_summary(receiver)` gives the `ReceiverStateSummary` text that matches a `TCPReceiver`.
  - `SenderStateSummary` holds the sender-side texts.

## Installation

```
pip install .
```

## Example

```python
from spongetcp.byte_stream import ByteStream
from spongetcp.stream_reassembler import StreamReassembler

stream = ByteStream(15)
stream.write(b"cat")
stream.end_input()
assert stream.read(3) == b"cat"
assert stream.eof()

reassembler = StreamReassembler(1000)
reassembler.push_substring(b"b", 1, False)
reassembler.push_substring(b"a", 0, False)
assert reassembler.stream_out().read(2) == b"ab"
```

Receiving segments:

```python
from spongetcp.tcp_header import TCPHeader, WrappingInt32
from spongetcp.tcp_receiver import TCPReceiver
from spongetcp.tcp_segment import TCPSegment
from spongetcp.tcp_state import ReceiverStateSummary, TCPState

receiver = TCPReceiver(4000)
receiver.segment_received(TCPSegment(TCPHeader(syn=True, seqno=WrappingInt32(5))))
assert receiver.ackno() == WrappingInt32(6)
assert TCPState.state_summary(receiver) == ReceiverStateSummary.SYN_RECV.value
```

## What it does not do

The package has no sender, no connection object and no network I/O. It does not:

- open sockets;
- retransmit;
- send acknowledgements.

Segments must be built or parsed by the caller and handed to `TCPReceiver` directly. `SenderStateSummary` and the sender half of `TCPState` only describe states; nothing in the package produces them.

## Tests

```
pip install .[test]
pytest
```