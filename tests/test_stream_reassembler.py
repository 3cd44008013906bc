from spongetcp.stream_reassembler import StreamReassembler


def assert_available(reassembler, expected):
    stream = reassembler.stream_out()
    assert stream.buffer_size() == len(expected)
    assert stream.read(len(expected)) == expected


def assert_assembled(reassembler, count):
    assert reassembler.stream_out().bytes_written() == count


# Capacity cases


def test_cap_sequential_reads():
    r = StreamReassembler(2)
    r.push_substring(b"ab", 0, False)
    assert_assembled(r, 2)
    assert_available(r, b"ab")

    r.push_substring(b"cd", 2, False)
    assert_assembled(r, 4)
    assert_available(r, b"cd")

    r.push_substring(b"ef", 4, False)
    assert_assembled(r, 6)
    assert_available(r, b"ef")


def test_cap_full_rejects_until_read():
    r = StreamReassembler(2)
    r.push_substring(b"ab", 0, False)
    assert_assembled(r, 2)

    r.push_substring(b"cd", 2, False)
    assert_assembled(r, 2)

    assert_available(r, b"ab")
    assert_assembled(r, 2)

    r.push_substring(b"cd", 2, False)
    assert_assembled(r, 4)
    assert_available(r, b"cd")


def test_cap_one_byte():
    r = StreamReassembler(1)
    r.push_substring(b"ab", 0, False)
    assert_assembled(r, 1)

    r.push_substring(b"ab", 0, False)
    assert_assembled(r, 1)

    assert_available(r, b"a")
    assert_assembled(r, 1)

    r.push_substring(b"abc", 0, False)
    assert_assembled(r, 2)

    assert_available(r, b"b")
    assert_assembled(r, 2)


def test_cap_long_run():
    r = StreamReassembler(3)
    for i in range(0, 99997, 3):
        segment = bytes(v % 256 for v in (i, i + 1, i + 2, i + 13, i + 47, i + 9))
        r.push_substring(segment, i, False)
        assert_assembled(r, i + 3)
        assert_available(r, segment[:3])


# Overlapping cases


def test_overlapping_assembled_unread():
    r = StreamReassembler(1000)
    r.push_substring(b"a", 0, False)
    r.push_substring(b"ab", 0, False)
    assert_assembled(r, 2)
    assert_available(r, b"ab")


def test_overlapping_assembled_read():
    r = StreamReassembler(1000)
    r.push_substring(b"a", 0, False)
    assert_available(r, b"a")
    r.push_substring(b"ab", 0, False)
    assert_available(r, b"b")
    assert_assembled(r, 2)


def test_overlapping_unassembled_resulting_in_assembly():
    r = StreamReassembler(1000)
    r.push_substring(b"b", 1, False)
    assert_available(r, b"")
    r.push_substring(b"ab", 0, False)
    assert_available(r, b"ab")
    assert r.unassembled_bytes() == 0
    assert_assembled(r, 2)


def test_overlapping_unassembled_extending_right():
    r = StreamReassembler(1000)
    r.push_substring(b"b", 1, False)
    assert_available(r, b"")
    r.push_substring(b"bc", 1, False)
    assert_available(r, b"")
    assert r.unassembled_bytes() == 2
    assert_assembled(r, 0)


def test_overlapping_unassembled_covering():
    r = StreamReassembler(1000)
    r.push_substring(b"c", 2, False)
    assert_available(r, b"")
    r.push_substring(b"bcd", 1, False)
    assert_available(r, b"")
    assert r.unassembled_bytes() == 3
    assert_assembled(r, 0)


def test_overlapping_multiple_unassembled():
    r = StreamReassembler(1000)
    r.push_substring(b"b", 1, False)
    r.push_substring(b"d", 3, False)
    assert_available(r, b"")
    r.push_substring(b"bcde", 1, False)
    assert_available(r, b"")
    assert_assembled(r, 0)
    assert r.unassembled_bytes() == 4


def test_submission_over_existing():
    r = StreamReassembler(1000)
    r.push_substring(b"c", 2, False)
    r.push_substring(b"bcd", 1, False)
    assert_available(r, b"")
    assert_assembled(r, 0)
    assert r.unassembled_bytes() == 3

    r.push_substring(b"a", 0, False)
    assert_available(r, b"abcd")
    assert_assembled(r, 4)
    assert r.unassembled_bytes() == 0


def test_submission_within_existing():
    r = StreamReassembler(1000)
    r.push_substring(b"bcd", 1, False)
    r.push_substring(b"c", 2, False)
    assert_available(r, b"")
    assert_assembled(r, 0)
    assert r.unassembled_bytes() == 3

    r.push_substring(b"a", 0, False)
    assert_available(r, b"abcd")
    assert_assembled(r, 4)
    assert r.unassembled_bytes() == 0


# End of stream and index reporting


def test_eof_in_order():
    r = StreamReassembler(100)
    r.push_substring(b"abc", 0, True)
    assert r.stream_out().input_ended() is True
    assert r.stream_out().eof() is False
    assert_available(r, b"abc")
    assert r.stream_out().eof() is True


def test_eof_out_of_order():
    r = StreamReassembler(100)
    r.push_substring(b"b", 1, True)
    assert r.stream_out().input_ended() is False
    assert r.empty() is False
    r.push_substring(b"a", 0, False)
    assert r.stream_out().input_ended() is True
    assert r.empty() is True
    assert_available(r, b"ab")


def test_empty_eof_segment_ends_stream():
    r = StreamReassembler(10)
    r.push_substring(b"", 0, True)
    assert r.stream_out().eof() is True


def test_indices_track_assembly():
    r = StreamReassembler(100)
    r.push_substring(b"xyz", 3, False)
    assert r.wait_index() == 0
    assert r.ack_index() == 0
    r.push_substring(b"abc", 0, False)
    assert r.wait_index() == 6
    assert r.ack_index() == 6
    assert_available(r, b"abcxyz")


def test_segment_beyond_window_ignored():
    r = StreamReassembler(4)
    r.push_substring(b"zz", 4, False)
    assert r.unassembled_bytes() == 0
    assert r.empty() is True
    assert_assembled(r, 0)