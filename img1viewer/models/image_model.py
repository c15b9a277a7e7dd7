"""Модели данных для изображений IMG1.

Принципы:
- SRP: только структура данных, без логики чтения/записи.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from img1viewer.models.pixel_buffer import PixelBuffer

SIGNATURE = b"IMG1"
HEADER_SIZE = 16
PIXEL_TYPE_RGB8 = 1


@dataclass(frozen=True)
class ContainerHeader:
    """Заголовок контейнера: сигнатура и три int32.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        pixel_type: Тег формата пикселя; 1 = упакованный RGB. Иные значения
            принимаются при чтении, но не интерпретируются.
    """
    width: int
    height: int
    pixel_type: int = PIXEL_TYPE_RGB8

    @property
    def payload_size(self) -> int:
        return max(self.width, 0) * max(self.height, 0) * 3

    @property
    def total_size(self) -> int:
        return HEADER_SIZE + self.payload_size


@dataclass(frozen=True)
class ImageData:
    """Загруженное изображение и его метаданные.

    Fields:
        path: Путь к исходному файлу (None для сгенерированных).
        buffer: Пиксели.
        header: Прочитанный заголовок контейнера.
        size_bytes: Размер файла, если доступен.
    """
    path: Optional[Path]
    buffer: PixelBuffer
    header: ContainerHeader
    size_bytes: Optional[int] = None

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height
