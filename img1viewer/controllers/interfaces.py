"""Узкие интерфейсы внешних зависимостей контроллера.

DIP: контроллер знает только эти протоколы; Tk-виджеты и тестовые заглушки
реализуют их структурно, без наследования.
"""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union

from img1viewer.models.image_model import ImageData
from img1viewer.models.pixel_buffer import PixelBuffer

Color = str  # "#RRGGBB"
PathLike = Union[str, Path]


class Renderer(Protocol):
    def clear(self, color: Color) -> None: ...

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None: ...

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: Color) -> None: ...


class StatusSink(Protocol):
    def set_text(self, text: str) -> None: ...


class ErrorReporter(Protocol):
    def show_error(self, title: str, message: str) -> None: ...


class ImageStore(Protocol):
    """Файловая система с точки зрения контроллера (реализация: `ImageService`)."""

    def load_image(self, file_path: PathLike) -> ImageData: ...

    def save_image(self, file_path: PathLike, buffer: PixelBuffer) -> int: ...
