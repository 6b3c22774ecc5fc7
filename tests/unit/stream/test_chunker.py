# tests/unit/stream/test_chunker.py
"""
Unit tests for StreamChunker and the chunked() stream stage.

Framing must not depend on where the transport happens to split
the byte stream.
"""

import random

import pytest

from ircconduit.stream.chunker import StreamChunker, chunked

WIRE = (
    b":irc.example NOTICE * :hello\r\n"
    b"PING :server\r\n"
    b":nick!u@h PRIVMSG #c :hi there\n"
)
FRAMES = [
    b":irc.example NOTICE * :hello",
    b"PING :server",
    b":nick!u@h PRIVMSG #c :hi there",
]


def feed_all(chunks):
    chunker = StreamChunker()
    frames = []
    for chunk in chunks:
        frames.extend(chunker.feed(chunk))
    return frames


# ================================================================
# BASIC FRAMING
# ================================================================
class TestStreamChunkerFeed:
    """Test single feed() steps."""

    def test_initial_leftover_is_empty(self):
        assert StreamChunker().leftover == b""

    def test_single_complete_line(self):
        chunker = StreamChunker()

        assert chunker.feed(b"PING :server\r\n") == [b"PING :server"]
        assert chunker.leftover == b""

    def test_bare_line_feed_terminator(self):
        assert feed_all([b"PING :server\n"]) == [b"PING :server"]

    def test_many_frames_in_one_chunk(self):
        assert feed_all([WIRE]) == FRAMES

    def test_chunk_without_terminator_is_held(self):
        """
        Test a chunk with no complete frame.

        WHY: A partial line must wait for the rest of its bytes.
        """
        chunker = StreamChunker()

        assert chunker.feed(b"PING :ser") == []
        assert chunker.leftover == b"PING :ser"

    def test_split_delivery(self):
        chunker = StreamChunker()

        assert chunker.feed(b"PING :ser") == []
        assert chunker.feed(b"ver\r\n") == [b"PING :server"]
        assert chunker.leftover == b""

    def test_trailing_partial_becomes_leftover(self):
        chunker = StreamChunker()

        assert chunker.feed(b"a\nb") == [b"a"]
        assert chunker.leftover == b"b"

    def test_split_between_cr_and_lf(self):
        assert feed_all([b"PING :server\r", b"\nPONG :x\r\n"]) == [
            b"PING :server",
            b"PONG :x",
        ]


# ================================================================
# CARRIAGE RETURNS AND EMPTY FRAMES
# ================================================================
class TestStreamChunkerFiltering:
    """Test CR stripping and empty-frame suppression."""

    def test_empty_frames_are_dropped(self):
        assert feed_all([b"a\n\nb\n"]) == [b"a", b"b"]

    def test_crlf_only_lines_are_dropped(self):
        assert feed_all([b"\r\n\r\na\r\n\r\n"]) == [b"a"]

    def test_carriage_returns_stripped_anywhere(self):
        """
        Test CR removal away from line ends.

        WHY: CR is never content; it is removed before splitting.
        """
        assert feed_all([b"PR\rIVMSG #c :x\ry\r\n"]) == [b"PRIVMSG #c :xy"]

    def test_lone_carriage_return_is_not_a_terminator(self):
        chunker = StreamChunker()

        assert chunker.feed(b"a\rb\r") == []
        assert chunker.leftover == b"ab"

    def test_frames_never_contain_delimiters(self):
        frames = feed_all([b"x\r\r\ny\n\r\rz\r\n"])

        assert frames == [b"x", b"y", b"z"]
        assert all(b"\r" not in f and b"\n" not in f for f in frames)

    def test_repeated_empty_chunks(self):
        chunker = StreamChunker()

        for _ in range(5):
            assert chunker.feed(b"") == []
        assert chunker.leftover == b""

        assert chunker.feed(b"a") == []
        assert chunker.feed(b"") == []
        assert chunker.leftover == b"a"
        assert chunker.feed(b"\n") == [b"a"]


# ================================================================
# CHUNK BOUNDARY INVARIANCE
# ================================================================
class TestChunkBoundaryInvariance:
    """Any split of the stream yields the same frames."""

    def test_one_byte_at_a_time(self):
        chunks = [WIRE[i : i + 1] for i in range(len(WIRE))]

        assert feed_all(chunks) == FRAMES

    def test_every_two_way_split(self):
        for cut in range(len(WIRE) + 1):
            assert feed_all([WIRE[:cut], WIRE[cut:]]) == FRAMES, cut

    @pytest.mark.parametrize("seed", range(10))
    def test_random_splits(self, seed):
        rng = random.Random(seed)
        chunks = []
        pos = 0
        while pos < len(WIRE):
            size = rng.randint(0, 7)
            chunks.append(WIRE[pos : pos + size])
            pos += size

        assert feed_all(chunks) == FRAMES


# ================================================================
# STREAM STAGE
# ================================================================
class TestChunkedStage:
    """Test the async chunked() stage."""

    @pytest.mark.asyncio
    async def test_yields_frames_in_order(self, stream_of, collect):
        frames = await collect(chunked(stream_of([b"a\r\nb", b"\r\nc\n"])))

        assert frames == [b"a", b"b", b"c"]

    @pytest.mark.asyncio
    async def test_unterminated_tail_is_discarded(self, stream_of, collect):
        """
        Test end-of-stream with a partial line pending.

        WHY: A truncated frame cannot be told apart from an incomplete
        read, so it is never emitted.
        """
        frames = await collect(chunked(stream_of([b"a\nb"])))

        assert frames == [b"a"]

    @pytest.mark.asyncio
    async def test_empty_source(self, stream_of, collect):
        assert await collect(chunked(stream_of([]))) == []

    @pytest.mark.asyncio
    async def test_only_empty_chunks(self, stream_of, collect):
        assert await collect(chunked(stream_of([b"", b"", b""]))) == []
