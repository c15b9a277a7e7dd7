"""Контроллер просмотрщика: состояние вида и обработка событий ввода.

SOLID:
- SRP: класс владеет `ViewerState` и переводит события в изменения состояния.
- DIP: файловая система, отрисовка, строка статуса и диалог ошибок приходят
  извне как протоколы из `interfaces`; Tk здесь не импортируется.
Clean Code:
- Один обработчик на тип события, диспетчеризация через таблицу.
- Единственный писатель состояния: сам контроллер.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Type

from img1viewer.config import ViewerConfig
from img1viewer.controllers import events as ev
from img1viewer.controllers.interfaces import ErrorReporter, ImageStore, PathLike, Renderer, StatusSink
from img1viewer.models.errors import Img1Error
from img1viewer.models.image_model import ImageData
from img1viewer.models.pixel_buffer import Pixel
from img1viewer.models.view_transform import ViewTransform

logger = logging.getLogger(__name__)


@dataclass
class ViewerState:
    """Всё изменяемое состояние просмотрщика.

    Fields:
        image: Текущее изображение; None до первой успешной загрузки.
        transform: Масштаб и сдвиг.
        show_grid: Включена ли сетка пикселей.
        is_dragging: Идёт ли перетаскивание левой кнопкой.
        last_pointer: Последняя позиция указателя при перетаскивании.
        viewport: Размер области отрисовки (ширина, высота).
        status: Последний текст строки статуса.
        open_generation: Номер последнего начатого открытия файла.
        running: False после события Exit.
    """
    image: Optional[ImageData] = None
    transform: ViewTransform = field(default_factory=ViewTransform)
    show_grid: bool = False
    is_dragging: bool = False
    last_pointer: Optional[Tuple[int, int]] = None
    viewport: Tuple[int, int] = (0, 0)
    status: str = ""
    open_generation: int = 0
    running: bool = True


class ViewerController:
    """Связывает события ввода с состоянием вида и внешними зависимостями.

    Ответственности:
    - Загрузка/сохранение через `ImageStore`, ошибки в `ErrorReporter`.
    - Зум, панорамирование, сетка, сброс вида.
    - Запросы перерисовки (`on_redraw`) и сама отрисовка через `Renderer`.
    """

    def __init__(
        self,
        store: ImageStore,
        status: StatusSink,
        errors: ErrorReporter,
        config: Optional[ViewerConfig] = None,
    ) -> None:
        self._store = store
        self._status = status
        self._errors = errors
        self._config = config or ViewerConfig()
        self._state = ViewerState(
            transform=ViewTransform(min_scale=self._config.min_scale, max_scale=self._config.max_scale)
        )

        self.on_redraw: Optional[Callable[[], None]] = None
        self.on_exit: Optional[Callable[[], None]] = None
        self.on_image_loaded: Optional[Callable[[ImageData], None]] = None
        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Pixel]], None]] = None

        self._handlers: Dict[Type, Callable] = {
            ev.Open: self._handle_open,
            ev.SaveAs: self._handle_save_as,
            ev.ZoomIn: self._handle_zoom_in,
            ev.ZoomOut: self._handle_zoom_out,
            ev.ZoomWheel: self._handle_zoom_wheel,
            ev.ResetView: self._handle_reset,
            ev.ToggleGrid: self._handle_toggle_grid,
            ev.DragStart: self._handle_drag_start,
            ev.DragMove: self._handle_drag_move,
            ev.DragEnd: self._handle_drag_end,
            ev.PointerMove: self._handle_pointer_move,
            ev.Resize: self._handle_resize,
            ev.Exit: self._handle_exit,
        }

    @property
    def state(self) -> ViewerState:
        return self._state

    @property
    def config(self) -> ViewerConfig:
        return self._config

    def handle(self, event: ev.Event) -> None:
        """Применяет событие к состоянию."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Неизвестное событие: {event!r}")
        handler(event)

    # ---- Loading ----
    def begin_open(self, path: PathLike) -> int:
        """Регистрирует новое открытие файла и возвращает его номер.

        Результат более раннего открытия после этого будет отброшен.
        """
        self._state.open_generation += 1
        logger.debug("Open #%d started: %s", self._state.open_generation, path)
        return self._state.open_generation

    def finish_open(
        self,
        ticket: int,
        path: PathLike,
        image: Optional[ImageData] = None,
        error: Optional[Img1Error] = None,
    ) -> bool:
        """Применяет результат открытия, если он не устарел.

        Returns:
            True, если результат применён (успех или ошибка показаны пользователю).
        """
        if ticket != self._state.open_generation:
            logger.debug("Discarding stale open #%d (%s), newest is #%d", ticket, path, self._state.open_generation)
            return False
        if error is not None or image is None:
            message = str(error) if error is not None else "Пустой результат загрузки"
            logger.warning("Failed to open %s: %s", path, message)
            self._set_status(f"Error: {message}")
            self._errors.show_error("Не удалось открыть файл", f"{Path(path).name}: {message}")
            return True

        # swap image and view in one step so a redraw never sees a mix
        state = self._state
        state.image = image
        state.transform.reset()
        state.is_dragging = False
        state.last_pointer = None
        self._set_status(f"Loaded: {image.width}x{image.height}")
        if self.on_image_loaded:
            self.on_image_loaded(image)
        self._request_redraw()
        return True

    def load(self, path: PathLike) -> ImageData:
        """Читает и декодирует файл, не трогая состояние (можно вызывать из фонового потока)."""
        return self._store.load_image(path)

    def complete_load(self, ticket: int, path: PathLike, future: "Future[ImageData]") -> bool:
        """Применяет результат фоновой загрузки из завершённого `future`.

        Любое исключение загрузки показывается пользователю как ошибка открытия;
        непредвиденные дополнительно пишутся в лог с трассировкой.
        """
        try:
            image = future.result()
        except Img1Error as exc:
            return self.finish_open(ticket, path, error=exc)
        except Exception as exc:
            logger.exception("Unexpected failure while loading %s", path)
            return self.finish_open(ticket, path, error=Img1Error(f"Непредвиденная ошибка: {exc!r}"))
        return self.finish_open(ticket, path, image=image)

    # ---- Handlers ----
    def _handle_open(self, event: ev.Open) -> None:
        ticket = self.begin_open(event.path)
        try:
            image = self.load(event.path)
        except Img1Error as exc:
            self.finish_open(ticket, event.path, error=exc)
            return
        self.finish_open(ticket, event.path, image=image)

    def _handle_save_as(self, event: ev.SaveAs) -> None:
        image = self._state.image
        if image is None:
            self._set_status("Error: No image loaded")
            self._errors.show_error("Не удалось сохранить файл", "No image loaded")
            return
        try:
            self._store.save_image(event.path, image.buffer)
        except Img1Error as exc:
            logger.warning("Failed to save %s: %s", event.path, exc)
            self._set_status(f"Error: {exc}")
            self._errors.show_error("Не удалось сохранить файл", str(exc))
            return
        self._set_status(f"Saved: {event.path}")

    def _handle_zoom_in(self, _event: ev.ZoomIn) -> None:
        self._zoom(self._config.key_zoom_step)

    def _handle_zoom_out(self, _event: ev.ZoomOut) -> None:
        self._zoom(1.0 / self._config.key_zoom_step)

    def _handle_zoom_wheel(self, event: ev.ZoomWheel) -> None:
        step = self._config.wheel_zoom_step
        self._zoom(step if event.delta > 0 else 1.0 / step)

    def _handle_reset(self, _event: ev.ResetView) -> None:
        self._state.transform.reset()
        self._set_status("Reset")
        self._request_redraw()

    def _handle_toggle_grid(self, _event: ev.ToggleGrid) -> None:
        self._state.show_grid = not self._state.show_grid
        self._set_status(f"Grid: {'ON' if self._state.show_grid else 'OFF'}")
        self._request_redraw()

    def _handle_drag_start(self, event: ev.DragStart) -> None:
        self._state.is_dragging = True
        self._state.last_pointer = (event.x, event.y)

    def _handle_drag_move(self, event: ev.DragMove) -> None:
        state = self._state
        if not state.is_dragging or state.last_pointer is None:
            return
        last_x, last_y = state.last_pointer
        state.transform.pan(event.x - last_x, event.y - last_y)
        state.last_pointer = (event.x, event.y)
        self._request_redraw()

    def _handle_drag_end(self, _event: ev.DragEnd) -> None:
        self._state.is_dragging = False

    def _handle_pointer_move(self, event: ev.PointerMove) -> None:
        image = self._state.image
        if image is None or self._state.is_dragging:
            return
        coords = self.pixel_at(event.x, event.y)
        if coords is None:
            if self.on_cursor_move:
                self.on_cursor_move(None, None, None)
            return
        x, y = coords
        pixel = image.buffer.get(x, y)
        # status line is left alone; readout goes to the sidebar only
        if self.on_cursor_move:
            self.on_cursor_move(x, y, pixel)

    def _handle_resize(self, event: ev.Resize) -> None:
        self._state.viewport = (max(0, event.width), max(0, event.height))
        self._request_redraw()

    def _handle_exit(self, _event: ev.Exit) -> None:
        self._state.running = False
        logger.info("Viewer session finished")
        if self.on_exit:
            self.on_exit()

    # ---- Rendering ----
    def origin(self) -> Optional[Tuple[int, int]]:
        image = self._state.image
        if image is None:
            return None
        vw, vh = self._state.viewport
        return self._state.transform.screen_origin(vw, vh, image.width, image.height)

    def pixel_at(self, sx: int, sy: int) -> Optional[Tuple[int, int]]:
        """Координаты пикселя изображения под точкой экрана или None."""
        image = self._state.image
        origin = self.origin()
        if image is None or origin is None:
            return None
        return self._state.transform.screen_to_image(sx, sy, origin[0], origin[1], image.width, image.height)

    def grid_visible(self) -> bool:
        return self._state.transform.grid_visible(self._state.show_grid, self._config.grid_min_scale)

    def redraw(self, renderer: Renderer) -> None:
        """Рисует текущее состояние: фон, ячейки пикселей построчно, затем сетку."""
        renderer.clear(self._config.background)
        image = self._state.image
        if image is None:
            return
        transform = self._state.transform
        start_x, start_y = self.origin()
        cell = transform.cell_size_on_screen()
        colors = image.buffer.to_array().tolist()
        for y, row in enumerate(colors):
            for x, (r, g, b) in enumerate(row):
                sx, sy = transform.image_to_screen(x, y, start_x, start_y)
                renderer.fill_rect(sx, sy, cell, cell, f"#{r:02X}{g:02X}{b:02X}")
        if self.grid_visible():
            for x1, y1, x2, y2 in transform.grid_lines(start_x, start_y, image.width, image.height):
                renderer.draw_line(x1, y1, x2, y2, self._config.grid_color)

    # ---- Helpers ----
    def _zoom(self, factor: float) -> None:
        transform = self._state.transform
        transform.zoom_by(factor)
        self._set_status(f"Zoom: {transform.zoom_percent()}%")
        self._request_redraw()

    def _set_status(self, text: str) -> None:
        self._state.status = text
        self._status.set_text(text)

    def _request_redraw(self) -> None:
        if self.on_redraw:
            self.on_redraw()
