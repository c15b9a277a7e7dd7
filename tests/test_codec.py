"""Tests for img1viewer.services.codec — IMG1 encode/decode."""

import io
import struct

import numpy as np
import pytest

from img1viewer.models.errors import InvalidDimensions, InvalidFormat, TruncatedData
from img1viewer.models.image_model import ContainerHeader
from img1viewer.models.pixel_buffer import PixelBuffer
from img1viewer.services import codec

SCENARIO_BYTES = bytes.fromhex(
    '494D4731' '02000000' '02000000' '01000000'
    'FF0000' '00FF00' '0000FF' 'FFFFFF'
)


def _scenario_buffer() -> PixelBuffer:
    buf = PixelBuffer.create(2, 2)
    buf.set(0, 0, (255, 0, 0))
    buf.set(1, 0, (0, 255, 0))
    buf.set(0, 1, (0, 0, 255))
    buf.set(1, 1, (255, 255, 255))
    return buf


def _header(width: int, height: int, pixel_type: int = 1) -> bytes:
    return b'IMG1' + struct.pack('<iii', width, height, pixel_type)


class TestEncode:
    def test_two_by_two_scenario(self):
        data = codec.encode(_scenario_buffer())
        assert len(data) == 28
        assert data == SCENARIO_BYTES

    def test_size_is_header_plus_payload(self):
        buf = PixelBuffer.create(7, 3)
        assert len(codec.encode(buf)) == 16 + 3 * 7 * 3 == codec.expected_size(7, 3)

    def test_encode_to_stream(self):
        out = io.BytesIO()
        written = codec.encode_to(out, _scenario_buffer())
        assert written == 28
        assert out.getvalue() == SCENARIO_BYTES


class TestDecode:
    def test_two_by_two_scenario(self):
        buf = codec.decode_bytes(SCENARIO_BYTES)
        assert buf.size == (2, 2)
        assert buf.get(0, 0) == (255, 0, 0)
        assert buf.get(1, 0) == (0, 255, 0)
        assert buf.get(0, 1) == (0, 0, 255)
        assert buf.get(1, 1) == (255, 255, 255)

    def test_round_trip_random_buffers(self):
        rng = np.random.default_rng(1234)
        for _ in range(25):
            width, height = (int(v) for v in rng.integers(1, 51, size=2))
            arr = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
            original = PixelBuffer.from_array(arr)
            decoded = codec.decode(io.BytesIO(codec.encode(original)))
            assert decoded.size == (width, height)
            assert decoded == original

    @pytest.mark.parametrize('signature', [b'IMG2', b'img1', b'\x00\x00\x00\x00', b'PNG\x89'])
    def test_bad_signature(self, signature):
        data = signature + SCENARIO_BYTES[4:]
        with pytest.raises(InvalidFormat):
            codec.decode_bytes(data)

    def test_missing_signature(self):
        with pytest.raises(InvalidFormat):
            codec.decode_bytes(b'IM')

    def test_empty_stream(self):
        with pytest.raises(InvalidFormat):
            codec.decode_bytes(b'')

    def test_truncated_payload_by_one_byte(self):
        with pytest.raises(TruncatedData):
            codec.decode_bytes(SCENARIO_BYTES[:-1])

    def test_truncated_header(self):
        with pytest.raises(TruncatedData):
            codec.decode_bytes(SCENARIO_BYTES[:10])

    @pytest.mark.parametrize('width,height', [(0, 2), (2, 0), (-1, 2), (2, -3)])
    def test_non_positive_dimensions(self, width, height):
        with pytest.raises(InvalidDimensions):
            codec.decode_bytes(_header(width, height) + b'\x00' * 12)

    def test_trailing_bytes_ignored(self):
        buf = codec.decode_bytes(SCENARIO_BYTES + b'extra bytes')
        assert buf == _scenario_buffer()

    def test_unknown_pixel_type_accepted(self):
        data = _header(1, 1, pixel_type=42) + b'\x01\x02\x03'
        header, buf = codec.decode_with_header(io.BytesIO(data))
        assert header.pixel_type == 42
        assert buf.get(0, 0) == (1, 2, 3)


class TestReadHeader:
    def test_leaves_stream_at_payload(self):
        stream = io.BytesIO(SCENARIO_BYTES)
        header = codec.read_header(stream)
        assert (header.width, header.height, header.pixel_type) == (2, 2, 1)
        assert header.total_size == 28
        assert stream.tell() == 16

    def test_short_reads_are_retried(self):
        class Trickle(io.RawIOBase):
            def __init__(self, data):
                self._data = data

            def readable(self):
                return True

            def read(self, n=-1):
                chunk, self._data = self._data[:1], self._data[1:]
                return chunk

        assert codec.decode(Trickle(SCENARIO_BYTES)) == _scenario_buffer()


class TestCheckDimensions:
    def test_accepts_positive(self):
        codec.check_dimensions(ContainerHeader(width=1, height=1, pixel_type=1))

    @pytest.mark.parametrize('width,height', [(0, 1), (1, 0), (-1, 5), (0, 0)])
    def test_rejects_non_positive(self, width, height):
        with pytest.raises(InvalidDimensions, match=f'{width}x{height}'):
            codec.check_dimensions(ContainerHeader(width=width, height=height, pixel_type=1))

    def test_read_header_alone_does_not_check(self):
        header = codec.read_header(io.BytesIO(_header(-1, 5)))
        assert (header.width, header.height) == (-1, 5)
        with pytest.raises(InvalidDimensions):
            codec.check_dimensions(header)
