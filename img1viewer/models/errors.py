"""Иерархия ошибок формата IMG1 и операций над буфером пикселей.

Принципы:
- Одна базовая ошибка `Img1Error`, чтобы UI и CLI ловили всё одним `except`.
- Ошибки, являющиеся по смыслу `ValueError`/`IndexError`, наследуются и от них.
"""
from __future__ import annotations


class Img1Error(Exception):
    """Базовая ошибка для всех сбоев загрузки, сохранения и доступа к пикселям."""


class InvalidFormat(Img1Error):
    """Сигнатура файла отсутствует или не равна "IMG1"."""


class InvalidDimensions(Img1Error, ValueError):
    """Ширина/высота не положительны или буфер такого размера не адресуем."""


class TruncatedData(Img1Error):
    """Поток закончился раньше, чем заголовок и пиксели были прочитаны."""


class OutOfBounds(Img1Error, IndexError):
    """Координата пикселя вне пределов буфера."""


class ImageIOError(Img1Error):
    """Ошибка чтения/записи файла (оборачивает `OSError`)."""
