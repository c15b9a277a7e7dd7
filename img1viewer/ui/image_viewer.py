"""Виджет просмотра изображений: показ готового кадра и перевод событий мыши в события контроллера.

Принципы:
- SRP: рисование примитивов делегируется `FrameRenderer`, виджет только
  выводит кадр на холст и принимает ввод.
- Чистый код: публичный API рендерера (`clear`, `fill_rect`, `draw_line`) отделён
  от внутренних обработчиков событий Tk.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
import tkinter as tk
from PIL import ImageTk

from img1viewer.controllers import events as ev
from img1viewer.ui.frame_renderer import FrameRenderer


class ImageViewer(ctk.CTkFrame):
    """Канва, на которую выводится кадр с ячейками пикселей и сеткой."""
    def __init__(self, master: ctk.CTk | tk.Misc, background: str = "#202020", **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._view_canvas = tk.Canvas(self, highlightthickness=0, bg=background)
        self._view_canvas.grid(row=0, column=0, sticky="nsew")

        self.on_event: Optional[Callable[[ev.Event], None]] = None
        self._frame = FrameRenderer(background=background)
        # Tk drops the picture once the PhotoImage is garbage collected
        self._tk_frame: Optional[ImageTk.PhotoImage] = None

        self._view_canvas.bind("<Configure>", self._on_canvas_resize)
        self._view_canvas.bind("<Motion>", self._on_mouse_move)

        # Mouse wheel zoom (cross-platform)
        self._view_canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._view_canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._view_canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

        # Panning with left mouse drag
        self._view_canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._view_canvas.bind("<B1-Motion>", self._on_pan_move)
        self._view_canvas.bind("<ButtonRelease-1>", self._on_pan_end)

    # ---- Renderer API ----
    def clear(self, color: str) -> None:
        self._frame.resize(self.viewport_width(), self.viewport_height())
        self._frame.clear(color)
        self._view_canvas.configure(bg=color)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        self._frame.fill_rect(x, y, w, h, color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: str) -> None:
        self._frame.draw_line(x1, y1, x2, y2, color)

    def present(self) -> None:
        """Выводит нарисованный кадр на холст одним изображением."""
        self._tk_frame = ImageTk.PhotoImage(self._frame.image)
        self._view_canvas.delete("all")
        self._view_canvas.create_image(0, 0, image=self._tk_frame, anchor="nw")

    # ---- Public API ----
    def viewport_width(self) -> int:
        return max(1, int(self._view_canvas.winfo_width()))

    def viewport_height(self) -> int:
        return max(1, int(self._view_canvas.winfo_height()))

    def focus_canvas(self) -> None:
        self._view_canvas.focus_set()

    # ---- Internals ----
    def _emit(self, event: ev.Event) -> None:
        if self.on_event:
            self.on_event(event)

    def _on_canvas_resize(self, event: tk.Event) -> None:
        self._emit(ev.Resize(event.width, event.height))

    def _on_mouse_move(self, event: tk.Event) -> None:
        self._emit(ev.PointerMove(event.x, event.y))

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta == 0:
            return
        self._emit(ev.ZoomWheel(event.delta))

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        self._emit(ev.ZoomWheel(1 if getattr(event, "num", None) == 4 else -1))

    # ---- Panning ----
    def _on_pan_start(self, event: tk.Event) -> None:
        self._view_canvas.focus_set()
        self._emit(ev.DragStart(event.x, event.y))

    def _on_pan_move(self, event: tk.Event) -> None:
        self._emit(ev.DragMove(event.x, event.y))

    def _on_pan_end(self, _event: tk.Event) -> None:
        self._emit(ev.DragEnd())
