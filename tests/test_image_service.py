"""Tests for img1viewer.services.image_service — disk I/O and Pillow interchange."""

from pathlib import Path

import pytest
from PIL import Image

from img1viewer.models.errors import ImageIOError, InvalidFormat, TruncatedData
from img1viewer.models.pixel_buffer import PixelBuffer
from img1viewer.services import codec
from img1viewer.services.image_service import ImageService, from_pil, to_pil


def _buffer() -> PixelBuffer:
    buf = PixelBuffer.create(3, 2)
    buf.set(0, 0, (255, 0, 0))
    buf.set(2, 1, (10, 20, 30))
    return buf


class TestLoadSave:
    def test_save_then_load(self, tmp_path: Path) -> None:
        service = ImageService()
        path = tmp_path / 'a.img'
        size = service.save_image(path, _buffer())
        assert size == codec.expected_size(3, 2)
        image = service.load_image(path)
        assert image.buffer == _buffer()
        assert image.path == path
        assert image.size_bytes == size
        assert image.header.pixel_type == 1
        assert (image.width, image.height) == (3, 2)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ImageIOError):
            ImageService().load_image(tmp_path / 'nope.img')

    def test_io_error_is_chained(self, tmp_path: Path) -> None:
        with pytest.raises(ImageIOError) as info:
            ImageService().read_bytes(tmp_path / 'nope.img')
        assert isinstance(info.value.__cause__, OSError)

    def test_truncated_file(self, tmp_path: Path) -> None:
        path = tmp_path / 'short.img'
        path.write_bytes(codec.encode(_buffer())[:-1])
        with pytest.raises(TruncatedData):
            ImageService().load_image(path)

    def test_write_into_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ImageIOError):
            ImageService().save_image(tmp_path / 'no' / 'dir.img', _buffer())


class TestPillow:
    def test_to_and_from_pil(self) -> None:
        image = to_pil(_buffer())
        assert image.mode == 'RGB'
        assert image.size == (3, 2)
        assert image.getpixel((2, 1)) == (10, 20, 30)
        assert from_pil(image) == _buffer()

    def test_from_rgba_drops_alpha(self) -> None:
        image = Image.new('RGBA', (1, 1), (1, 2, 3, 4))
        assert from_pil(image).get(0, 0) == (1, 2, 3)

    def test_import_png(self, tmp_path: Path) -> None:
        path = tmp_path / 'in.png'
        Image.new('RGB', (4, 5), (9, 8, 7)).save(path)
        buf = ImageService().import_image(path)
        assert buf.size == (4, 5)
        assert buf.get(3, 4) == (9, 8, 7)

    def test_export_png(self, tmp_path: Path) -> None:
        path = tmp_path / 'out.png'
        ImageService().export_image(path, _buffer())
        with Image.open(path) as image:
            assert image.size == (3, 2)
            assert image.convert('RGB').getpixel((0, 0)) == (255, 0, 0)

    def test_import_not_an_image(self, tmp_path: Path) -> None:
        path = tmp_path / 'junk.png'
        path.write_bytes(b'this is not a png')
        with pytest.raises(InvalidFormat):
            ImageService().import_image(path)

    def test_export_unknown_extension(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidFormat):
            ImageService().export_image(tmp_path / 'out.unknownext', _buffer())
