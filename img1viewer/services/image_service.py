"""Загрузка и сохранение изображений IMG1 на диске, обмен с Pillow.

Принципы:
- SRP: класс отвечает только за файловый ввод-вывод и упаковку метаданных.
- OCP: другие форматы подключаются через Pillow (`import_image`/`export_image`).
- Ошибки ОС оборачиваются в `ImageIOError`, ошибки формата пробрасываются как есть.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from img1viewer.models.errors import ImageIOError, InvalidFormat
from img1viewer.models.image_model import ImageData
from img1viewer.models.pixel_buffer import PixelBuffer
from img1viewer.services import codec

logger = logging.getLogger(__name__)


def to_pil(buffer: PixelBuffer) -> Image.Image:
    """Преобразует буфер в `PIL.Image.Image` режима RGB."""
    return Image.fromarray(buffer.to_array())


def from_pil(image: Image.Image) -> PixelBuffer:
    """Преобразует изображение Pillow в буфер; альфа-канал отбрасывается."""
    rgb = image if image.mode == "RGB" else image.convert("RGB")
    return PixelBuffer.from_array(np.asarray(rgb, dtype=np.uint8))


class ImageService:
    def read_bytes(self, file_path: str | Path) -> bytes:
        path = Path(file_path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ImageIOError(f"Не удалось прочитать {path}: {exc.strerror or exc}") from exc

    def write_bytes(self, file_path: str | Path, data: bytes) -> None:
        path = Path(file_path)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise ImageIOError(f"Не удалось записать {path}: {exc.strerror or exc}") from exc

    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает IMG1 с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c буфером пикселей, заголовком и размером файла.

        Raises:
            ImageIOError: если файл нельзя прочитать.
            InvalidFormat / InvalidDimensions / TruncatedData: при ошибке формата.
        """
        path = Path(file_path)
        data = self.read_bytes(path)
        header, buffer = codec.decode_with_header(io.BytesIO(data))
        logger.info("Loaded %s (%dx%d, pixel type %d)", path, buffer.width, buffer.height, header.pixel_type)
        return ImageData(path=path, buffer=buffer, header=header, size_bytes=len(data))

    def save_image(self, file_path: str | Path, buffer: PixelBuffer) -> int:
        """Кодирует буфер и записывает его; возвращает размер файла в байтах."""
        data = codec.encode(buffer)
        self.write_bytes(file_path, data)
        logger.info("Saved %s (%dx%d, %d bytes)", file_path, buffer.width, buffer.height, len(data))
        return len(data)

    def import_image(self, file_path: str | Path) -> PixelBuffer:
        """Читает любой поддерживаемый Pillow формат (PNG, BMP, ...) в буфер.

        Raises:
            ImageIOError: если файл нельзя прочитать.
            InvalidFormat: если Pillow не распознал изображение.
        """
        path = Path(file_path)
        try:
            with Image.open(path) as image:
                return from_pil(image)
        except UnidentifiedImageError as exc:
            raise InvalidFormat(f"Файл не является изображением: {path}") from exc
        except OSError as exc:
            raise ImageIOError(f"Не удалось прочитать {path}: {exc}") from exc

    def export_image(self, file_path: str | Path, buffer: PixelBuffer) -> None:
        """Сохраняет буфер в формате, определяемом расширением файла (через Pillow)."""
        path = Path(file_path)
        try:
            to_pil(buffer).save(path)
        except ValueError as exc:
            # unknown extension
            raise InvalidFormat(f"Неизвестный формат для {path}: {exc}") from exc
        except OSError as exc:
            raise ImageIOError(f"Не удалось записать {path}: {exc}") from exc
