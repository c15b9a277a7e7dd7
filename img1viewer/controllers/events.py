"""События ввода, которые понимает `ViewerController`.

Каждое событие: маленький неизменяемый dataclass; UI переводит в них
нажатия клавиш и движения мыши, тесты создают их напрямую.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class Open:
    path: Union[str, Path]


@dataclass(frozen=True)
class SaveAs:
    path: Union[str, Path]


@dataclass(frozen=True)
class ZoomIn:
    pass


@dataclass(frozen=True)
class ZoomOut:
    pass


@dataclass(frozen=True)
class ZoomWheel:
    delta: int


@dataclass(frozen=True)
class ResetView:
    pass


@dataclass(frozen=True)
class ToggleGrid:
    pass


@dataclass(frozen=True)
class DragStart:
    x: int
    y: int


@dataclass(frozen=True)
class DragMove:
    x: int
    y: int


@dataclass(frozen=True)
class DragEnd:
    pass


@dataclass(frozen=True)
class PointerMove:
    x: int
    y: int


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Exit:
    pass


Event = Union[
    Open, SaveAs, ZoomIn, ZoomOut, ZoomWheel, ResetView, ToggleGrid,
    DragStart, DragMove, DragEnd, PointerMove, Resize, Exit,
]
