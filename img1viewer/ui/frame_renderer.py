"""Рендерер в кадр Pillow: контроллер рисует в `PIL.Image`, виджет показывает его целиком.

Один кадр на перерисовку вместо элемента холста на каждый пиксель.
Tk здесь не нужен, поэтому кадр можно проверить в тестах без окна.
"""
from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageDraw


class FrameRenderer:
    """Реализует протокол `Renderer` поверх RGB-изображения размером с область просмотра."""

    def __init__(self, width: int = 1, height: int = 1, background: str = "#000000") -> None:
        self._size = (max(1, width), max(1, height))
        self._image = Image.new("RGB", self._size, background)
        self._draw = ImageDraw.Draw(self._image)

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        """Задаёт размер следующего кадра; применяется при `clear`."""
        self._size = (max(1, width), max(1, height))

    # ---- Renderer API ----
    def clear(self, color: str) -> None:
        self._image = Image.new("RGB", self._size, color)
        self._draw = ImageDraw.Draw(self._image)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        frame_w, frame_h = self._size
        if w <= 0 or h <= 0 or x + w <= 0 or y + h <= 0 or x >= frame_w or y >= frame_h:
            return
        # ImageDraw boxes include both corners
        self._draw.rectangle((x, y, x + w - 1, y + h - 1), fill=color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: str) -> None:
        self._draw.line([(x1, y1), (x2, y2)], fill=color, width=1)
