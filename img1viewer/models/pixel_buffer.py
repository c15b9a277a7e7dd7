"""Буфер пикселей 8-бит RGB фиксированного размера.

Принципы:
- SRP: только хранение и доступ по координатам с проверкой границ.
- Хранилище: numpy-массив `uint8` формы (height, width, 3), строки подряд,
  поэтому линейный индекс пикселя (x, y) равен `y * width + x`.
"""
from __future__ import annotations

from typing import Iterator, NamedTuple

import numpy as np

from img1viewer.models.errors import InvalidDimensions, OutOfBounds

# Largest pixel count whose RGB payload still fits an int32 byte offset.
MAX_PIXELS = (2**31 - 1) // 3


class Pixel(NamedTuple):
    """Неизменяемое значение цвета: три канала 0..255, без альфы."""
    r: int
    g: int
    b: int

    @classmethod
    def of(cls, r: int, g: int, b: int) -> "Pixel":
        """Создаёт пиксель с проверкой диапазона каналов.

        Raises:
            ValueError: если какой-либо канал вне 0..255.
        """
        for name, value in (("r", r), ("g", g), ("b", b)):
            if not 0 <= int(value) <= 255:
                raise ValueError(f"Канал {name}={value} вне диапазона 0..255")
        return cls(int(r), int(g), int(b))

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


BLACK = Pixel(0, 0, 0)


def _check_dimensions(width: int, height: int) -> None:
    if isinstance(width, bool) or isinstance(height, bool):
        raise InvalidDimensions(f"Некорректный размер: {width!r}x{height!r}")
    if not isinstance(width, (int, np.integer)) or not isinstance(height, (int, np.integer)):
        raise InvalidDimensions(f"Некорректный размер: {width!r}x{height!r}")
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Размер должен быть положительным: {width}x{height}")
    if int(width) * int(height) > MAX_PIXELS:
        raise InvalidDimensions(f"Слишком большое изображение: {width}x{height}")


class PixelBuffer:
    """Двумерный массив пикселей RGB с доступом по (x, y).

    Attributes:
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
    """

    __slots__ = ("_width", "_height", "_data")

    def __init__(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self._width = int(width)
        self._height = int(height)
        self._data = np.zeros((self._height, self._width, 3), dtype=np.uint8)

    # ---- Constructors ----
    @classmethod
    def create(cls, width: int, height: int) -> "PixelBuffer":
        """Создаёт буфер, заполненный чёрным (0, 0, 0)."""
        return cls(width, height)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Создаёт буфер из массива формы (height, width, 3); данные копируются."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise InvalidDimensions(f"Ожидался массив (H, W, 3), получено {arr.shape}")
        height, width = arr.shape[0], arr.shape[1]
        buffer = cls(width, height)
        buffer._data[...] = np.clip(arr, 0, 255).astype(np.uint8)
        return buffer

    @classmethod
    def from_bytes(cls, width: int, height: int, payload: bytes) -> "PixelBuffer":
        """Создаёт буфер из упакованных байт R,G,B построчно.

        Raises:
            ValueError: если длина `payload` не равна `3 * width * height`.
        """
        buffer = cls(width, height)
        expected = buffer.byte_size
        if len(payload) != expected:
            raise ValueError(f"Ожидалось {expected} байт пикселей, получено {len(payload)}")
        flat = np.frombuffer(payload, dtype=np.uint8)
        buffer._data[...] = flat.reshape(buffer._height, buffer._width, 3)
        return buffer

    # ---- Properties ----
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def pixel_count(self) -> int:
        return self._width * self._height

    @property
    def byte_size(self) -> int:
        return self.pixel_count * 3

    # ---- Access ----
    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBounds(f"Пиксель ({x}, {y}) вне {self._width}x{self._height}")

    def get(self, x: int, y: int) -> Pixel:
        """Возвращает пиксель (x, y).

        Raises:
            OutOfBounds: если координата вне буфера.
        """
        self._check(x, y)
        r, g, b = self._data[y, x]
        return Pixel(int(r), int(g), int(b))

    def set(self, x: int, y: int, pixel: tuple[int, int, int]) -> None:
        """Записывает пиксель (x, y).

        Raises:
            OutOfBounds: если координата вне буфера.
            ValueError: если канал вне 0..255.
        """
        self._check(x, y)
        self._data[y, x] = Pixel.of(*pixel)

    def get_index(self, index: int) -> Pixel:
        """Доступ по линейному индексу `y * width + x`."""
        if not 0 <= index < self.pixel_count:
            raise OutOfBounds(f"Индекс {index} вне 0..{self.pixel_count - 1}")
        y, x = divmod(index, self._width)
        return self.get(x, y)

    def pixels(self) -> Iterator[Pixel]:
        """Перебирает пиксели построчно (x меняется быстрее)."""
        for row in self._data:
            for r, g, b in row.tolist():
                yield Pixel(r, g, b)

    def to_array(self) -> np.ndarray:
        """Копия данных в виде массива (height, width, 3) `uint8`."""
        return self._data.copy()

    def to_bytes(self) -> bytes:
        """Пиксели как упакованные байты R,G,B построчно."""
        return self._data.tobytes()

    def copy(self) -> "PixelBuffer":
        return PixelBuffer.from_array(self._data)

    # ---- Dunder ----
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self._width}x{self._height})"
