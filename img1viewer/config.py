"""Настройки просмотрщика: значения по умолчанию и переопределение из окружения.

Переменные окружения (все необязательные):
  IMG1_BACKGROUND   цвет фона холста, например "#202020"
  IMG1_GRID_COLOR   цвет линий сетки
  IMG1_WINDOW_SIZE  начальный размер окна "ШxВ", например "1024x768"
  IMG1_ASYNC_LOAD   1/0, декодировать файлы в фоновом потоке
  IMG1_LOG_LEVEL    уровень логирования (DEBUG, INFO, ...)

Пределы масштаба и шаги зума фиксированы.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from typing import Mapping, Tuple

from img1viewer.models.view_transform import GRID_MIN_SCALE, MAX_SCALE, MIN_SCALE

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_SIZE_RE = re.compile(r"^(\d+)x(\d+)$")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ViewerConfig:
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    key_zoom_step: float = 1.2
    wheel_zoom_step: float = 1.1
    grid_min_scale: float = GRID_MIN_SCALE
    background: str = "#202020"
    grid_color: str = "#808080"
    window_size: Tuple[int, int] = (900, 600)
    async_load: bool = True
    log_level: str = "INFO"


def _parse_color(name: str, value: str) -> str:
    if not _COLOR_RE.match(value):
        raise ValueError(f"{name}: ожидался цвет вида #RRGGBB, получено {value!r}")
    return value


def _parse_size(name: str, value: str) -> Tuple[int, int]:
    match = _SIZE_RE.match(value.strip())
    if not match or int(match.group(1)) <= 0 or int(match.group(2)) <= 0:
        raise ValueError(f"{name}: ожидался размер вида 900x600, получено {value!r}")
    return int(match.group(1)), int(match.group(2))


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name}: ожидалось 1/0, получено {value!r}")


def _parse_level(name: str, value: str) -> str:
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"{name}: неизвестный уровень {value!r}")
    return level


def load_config(environ: Mapping[str, str] | None = None) -> ViewerConfig:
    """Собирает `ViewerConfig` из значений по умолчанию и переменных `IMG1_*`.

    Raises:
        ValueError: если значение переменной не удаётся разобрать.
    """
    env = os.environ if environ is None else environ
    config = ViewerConfig()
    overrides = {}
    if "IMG1_BACKGROUND" in env:
        overrides["background"] = _parse_color("IMG1_BACKGROUND", env["IMG1_BACKGROUND"])
    if "IMG1_GRID_COLOR" in env:
        overrides["grid_color"] = _parse_color("IMG1_GRID_COLOR", env["IMG1_GRID_COLOR"])
    if "IMG1_WINDOW_SIZE" in env:
        overrides["window_size"] = _parse_size("IMG1_WINDOW_SIZE", env["IMG1_WINDOW_SIZE"])
    if "IMG1_ASYNC_LOAD" in env:
        overrides["async_load"] = _parse_bool("IMG1_ASYNC_LOAD", env["IMG1_ASYNC_LOAD"])
    if "IMG1_LOG_LEVEL" in env:
        overrides["log_level"] = _parse_level("IMG1_LOG_LEVEL", env["IMG1_LOG_LEVEL"])
    return replace(config, **overrides)
