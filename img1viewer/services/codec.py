"""Кодек контейнера IMG1: заголовок 16 байт + пиксели RGB построчно.

Формат (little-endian):
    0   4 байта  сигнатура "IMG1"
    4   int32    ширина
    8   int32    высота
    12  int32    тип пикселя (1 = RGB)
    16  3*w*h    пиксели R,G,B

Принципы:
- SRP: только (де)сериализация; файлы открывает `ImageService`.
- Тип пикселя читается, но не проверяется.
"""
from __future__ import annotations

import io
import struct
from typing import BinaryIO, Tuple

from img1viewer.models.errors import InvalidDimensions, InvalidFormat, TruncatedData
from img1viewer.models.image_model import HEADER_SIZE, PIXEL_TYPE_RGB8, SIGNATURE, ContainerHeader
from img1viewer.models.pixel_buffer import PixelBuffer

_FIELDS = struct.Struct("<iii")


def expected_size(width: int, height: int) -> int:
    """Точный размер закодированного файла в байтах."""
    return HEADER_SIZE + 3 * width * height


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    # read() may return fewer bytes than asked for on pipes and sockets
    chunks = []
    remaining = count
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_header(stream: BinaryIO) -> ContainerHeader:
    """Читает и проверяет заголовок, оставляя поток на начале пикселей.

    Raises:
        InvalidFormat: сигнатура не "IMG1".
        TruncatedData: заголовок обрезан.
    """
    signature = _read_exact(stream, len(SIGNATURE))
    if signature != SIGNATURE:
        raise InvalidFormat(f"Неверная сигнатура: {signature!r}")
    raw = _read_exact(stream, _FIELDS.size)
    if len(raw) < _FIELDS.size:
        raise TruncatedData(f"Заголовок обрезан: {len(raw) + len(SIGNATURE)} из {HEADER_SIZE} байт")
    width, height, pixel_type = _FIELDS.unpack(raw)
    return ContainerHeader(width=width, height=height, pixel_type=pixel_type)


def check_dimensions(header: ContainerHeader) -> None:
    """Проверяет размеры из заголовка.

    Raises:
        InvalidDimensions: ширина или высота <= 0.
    """
    if header.width <= 0 or header.height <= 0:
        raise InvalidDimensions(f"Размер должен быть положительным: {header.width}x{header.height}")


def decode_with_header(stream: BinaryIO) -> Tuple[ContainerHeader, PixelBuffer]:
    """Декодирует поток и возвращает заголовок вместе с пикселями."""
    header = read_header(stream)
    check_dimensions(header)
    buffer = PixelBuffer.create(header.width, header.height)
    payload = _read_exact(stream, buffer.byte_size)
    if len(payload) < buffer.byte_size:
        raise TruncatedData(f"Данные пикселей обрезаны: {len(payload)} из {buffer.byte_size} байт")
    # trailing bytes after the payload are left unread
    return header, PixelBuffer.from_bytes(header.width, header.height, payload)


def decode(stream: BinaryIO) -> PixelBuffer:
    """Читает изображение IMG1 из бинарного потока.

    Raises:
        InvalidFormat: неверная или отсутствующая сигнатура.
        InvalidDimensions: ширина или высота <= 0.
        TruncatedData: поток короче заголовка + пикселей.
    """
    _header, buffer = decode_with_header(stream)
    return buffer


def decode_bytes(data: bytes) -> PixelBuffer:
    return decode(io.BytesIO(data))


def encode_to(stream: BinaryIO, buffer: PixelBuffer) -> int:
    """Записывает изображение в поток; возвращает число записанных байт."""
    header = SIGNATURE + _FIELDS.pack(buffer.width, buffer.height, PIXEL_TYPE_RGB8)
    payload = buffer.to_bytes()
    stream.write(header)
    stream.write(payload)
    return len(header) + len(payload)


def encode(buffer: PixelBuffer) -> bytes:
    """Кодирует буфер: ровно `16 + 3 * width * height` байт."""
    out = io.BytesIO()
    encode_to(out, buffer)
    return out.getvalue()
