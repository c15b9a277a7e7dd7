from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from img1viewer.models.pixel_buffer import PixelBuffer
from img1viewer.services.image_service import ImageService

logger = logging.getLogger(__name__)

COLORBAR_COLORS = (
    (255, 255, 255),  # white
    (255, 255, 0),    # yellow
    (0, 255, 255),    # cyan
    (0, 255, 0),      # green
    (255, 0, 255),    # magenta
    (255, 0, 0),      # red
    (0, 0, 255),      # blue
)


class FixtureService:
    """Генератор эталонных тестовых изображений IMG1."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)

    # ---------- Паттерны ----------
    def gradient(self, width: int = 256, height: int = 256) -> PixelBuffer:
        """
        Горизонтальный градиент в красном, вертикальный в зелёном, синий = 128.
        """
        xs = np.arange(width, dtype=np.float64)
        ys = np.arange(height, dtype=np.float64)
        r = xs * 255.0 / max(width - 1, 1)
        g = ys * 255.0 / max(height - 1, 1)
        arr = np.empty((height, width, 3), dtype=np.uint8)
        arr[..., 0] = r[np.newaxis, :].astype(np.uint8)
        arr[..., 1] = g[:, np.newaxis].astype(np.uint8)
        arr[..., 2] = 128
        return PixelBuffer.from_array(arr)

    def checkerboard(self, width: int = 64, height: int = 64, cell: int = 8) -> PixelBuffer:
        yy, xx = np.mgrid[0:height, 0:width]
        white = ((xx // cell) + (yy // cell)) % 2 == 0
        level = np.where(white, 255, 0).astype(np.uint8)
        arr = np.repeat(level[..., np.newaxis], 3, axis=2)
        return PixelBuffer.from_array(arr)

    def colorbars(self, width: int = 280, height: int = 100) -> PixelBuffer:
        """
        Семь вертикальных полос: белый, жёлтый, голубой, зелёный, пурпурный, красный, синий.
        """
        palette = np.array(COLORBAR_COLORS, dtype=np.uint8)
        band = (np.arange(width) * len(COLORBAR_COLORS)) // width
        row = palette[band]
        arr = np.broadcast_to(row, (height, width, 3))
        return PixelBuffer.from_array(arr)

    def circles(self, width: int = 200, height: int = 200) -> PixelBuffer:
        """
        Концентрические синусоидальные кольца от центра изображения.
        """
        yy, xx = np.mgrid[0:height, 0:width].astype(np.float64)
        dist = np.hypot(xx - width / 2.0, yy - height / 2.0)
        v = ((np.sin(dist * 0.3) + 1.0) * 127.5).astype(np.uint8)
        arr = np.stack([v, 255 - v, np.full_like(v, 128)], axis=-1)
        return PixelBuffer.from_array(arr)

    def noise(self, width: int = 128, height: int = 128) -> PixelBuffer:
        arr = self._rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
        return PixelBuffer.from_array(arr)

    # ---------- Запись набора ----------
    def fixtures(self) -> Dict[str, Callable[[], PixelBuffer]]:
        return {
            "test_gradient.img": self.gradient,
            "test_checkerboard.img": self.checkerboard,
            "test_colorbars.img": self.colorbars,
            "test_circles.img": self.circles,
            "test_noise.img": self.noise,
        }

    def write_all(self, out_dir: str | Path, image_service: Optional[ImageService] = None) -> List[Path]:
        """
        Записывает все пять эталонных файлов в `out_dir` (создаёт каталог при необходимости).
        """
        service = image_service or ImageService()
        target = Path(out_dir)
        target.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for name, make in self.fixtures().items():
            buffer = make()
            path = target / name
            service.save_image(path, buffer)
            written.append(path)
        logger.info("Generated %d fixtures in %s", len(written), target)
        return written
