"""Tests for img1viewer.services.fixture_service — canonical test images."""

from pathlib import Path

from img1viewer.services import codec
from img1viewer.services.fixture_service import FixtureService


class TestPatterns:
    def test_gradient(self):
        buf = FixtureService().gradient()
        assert buf.size == (256, 256)
        assert buf.get(0, 0) == (0, 0, 128)
        assert buf.get(255, 0) == (255, 0, 128)
        assert buf.get(0, 255) == (0, 255, 128)

    def test_checkerboard(self):
        buf = FixtureService().checkerboard()
        assert buf.size == (64, 64)
        assert buf.get(0, 0) == (255, 255, 255)
        assert buf.get(7, 7) == (255, 255, 255)
        assert buf.get(8, 0) == (0, 0, 0)
        assert buf.get(0, 8) == (0, 0, 0)
        assert buf.get(8, 8) == (255, 255, 255)

    def test_colorbars(self):
        buf = FixtureService().colorbars()
        assert buf.size == (280, 100)
        # 40px per band
        assert buf.get(0, 0) == (255, 255, 255)
        assert buf.get(40, 50) == (255, 255, 0)
        assert buf.get(80, 99) == (0, 255, 255)
        assert buf.get(279, 0) == (0, 0, 255)

    def test_circles(self):
        buf = FixtureService().circles()
        assert buf.size == (200, 200)
        # distance 0 at the center: sin(0) = 0 -> 127
        assert buf.get(100, 100) == (127, 128, 128)

    def test_noise_is_seeded(self):
        a = FixtureService(seed=7).noise()
        b = FixtureService(seed=7).noise()
        c = FixtureService(seed=8).noise()
        assert a.size == (128, 128)
        assert a == b
        assert a != c


class TestWriteAll:
    def test_writes_five_decodable_files(self, tmp_path: Path):
        out = tmp_path / 'fixtures'
        paths = FixtureService(seed=1).write_all(out)
        assert sorted(p.name for p in paths) == [
            'test_checkerboard.img',
            'test_circles.img',
            'test_colorbars.img',
            'test_gradient.img',
            'test_noise.img',
        ]
        for path in paths:
            data = path.read_bytes()
            buf = codec.decode_bytes(data)
            assert len(data) == codec.expected_size(buf.width, buf.height)
