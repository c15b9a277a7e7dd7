"""Преобразование вида: масштаб и смещение изображения в окне.

Принципы:
- SRP: только арифметика координат, без знания о Tk или о пикселях.
- Инвариант: после любого умножения масштаб зажат в [min_scale, max_scale].
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

MIN_SCALE = 0.1
MAX_SCALE = 50.0
GRID_MIN_SCALE = 4.0

Segment = Tuple[int, int, int, int]


@dataclass
class ViewTransform:
    """Масштаб и накопленное панорамирование поверх центрирования.

    Fields:
        scale: Текущий масштаб, 1.0 = пиксель в пиксель.
        offset_x: Сдвиг по X в экранных пикселях.
        offset_y: Сдвиг по Y в экранных пикселях.
    """
    scale: float = 1.0
    offset_x: int = 0
    offset_y: int = 0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE

    def reset(self) -> None:
        self.scale = 1.0
        self.offset_x = 0
        self.offset_y = 0

    def zoom_by(self, factor: float) -> float:
        """Умножает масштаб на `factor` и зажимает его в допустимые пределы."""
        self.scale = max(self.min_scale, min(self.max_scale, self.scale * factor))
        return self.scale

    def pan(self, dx: int, dy: int) -> None:
        # unbounded: the image may be dragged fully off-screen
        self.offset_x += int(dx)
        self.offset_y += int(dy)

    def zoom_percent(self) -> int:
        return int(round(self.scale * 100))

    def cell_size_on_screen(self) -> int:
        return max(1, math.floor(self.scale))

    def screen_origin(
        self, viewport_width: int, viewport_height: int, image_width: int, image_height: int
    ) -> Tuple[int, int]:
        """Левый верхний угол изображения на экране: центрирование плюс сдвиг."""
        start_x = math.floor((viewport_width - image_width * self.scale) / 2) + self.offset_x
        start_y = math.floor((viewport_height - image_height * self.scale) / 2) + self.offset_y
        return start_x, start_y

    def image_to_screen(self, x: int, y: int, start_x: int, start_y: int) -> Tuple[int, int]:
        return start_x + math.floor(x * self.scale), start_y + math.floor(y * self.scale)

    def _axis_index(self, d: int, size: int) -> Optional[int]:
        # cells are painted in index order, so the last one starting at or before d is on top
        i = min(math.ceil((d + 1) / self.scale) - 1, size - 1)
        while i > 0 and math.floor(i * self.scale) > d:
            i -= 1
        while i + 1 < size and math.floor((i + 1) * self.scale) <= d:
            i += 1
        if math.floor(i * self.scale) + self.cell_size_on_screen() <= d:
            return None
        return i

    def screen_to_image(
        self, sx: int, sy: int, start_x: int, start_y: int, image_width: int, image_height: int
    ) -> Optional[Tuple[int, int]]:
        """Обратное преобразование; `None`, если точка вне изображения.

        Возвращает пиксель, чья ячейка видна в этой точке. При масштабе < 1
        несколько пикселей рисуются в одну экранную клетку, и виден последний
        из них; при дробном масштабе > 1 между ячейками бывают зазоры, где
        результат тоже `None`.
        """
        dx = sx - start_x
        dy = sy - start_y
        if dx < 0 or dy < 0 or image_width <= 0 or image_height <= 0:
            return None
        x = self._axis_index(dx, image_width)
        y = self._axis_index(dy, image_height)
        if x is None or y is None:
            return None
        return x, y

    def grid_visible(self, show_grid: bool, threshold: float = GRID_MIN_SCALE) -> bool:
        return show_grid and self.scale >= threshold

    def grid_lines(
        self, start_x: int, start_y: int, image_width: int, image_height: int
    ) -> List[Segment]:
        """Отрезки сетки по границам пикселей: сначала горизонтальные, затем вертикальные.

        Returns:
            `image_height + 1` горизонтальных и `image_width + 1` вертикальных
            отрезков в виде (x1, y1, x2, y2).
        """
        end_x = start_x + math.floor(image_width * self.scale)
        end_y = start_y + math.floor(image_height * self.scale)
        lines: List[Segment] = []
        for k in range(image_height + 1):
            y = start_y + math.floor(k * self.scale)
            lines.append((start_x, y, end_x, y))
        for k in range(image_width + 1):
            x = start_x + math.floor(k * self.scale)
            lines.append((x, start_y, x, end_y))
        return lines
