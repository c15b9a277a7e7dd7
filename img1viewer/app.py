from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from tkinter import TclError, filedialog, messagebox
from typing import Optional

import customtkinter as ctk

from img1viewer.config import ViewerConfig
from img1viewer.controllers import events as ev
from img1viewer.controllers.viewer_controller import ViewerController
from img1viewer.models.image_model import ImageData
from img1viewer.services.image_service import ImageService
from img1viewer.ui.bottom_bar import BottomBar
from img1viewer.ui.image_viewer import ImageViewer
from img1viewer.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

FILE_TYPES = (("IMG1 images", "*.img"), ("All files", "*"))
_POLL_MS = 30


class MessageBoxReporter:
    def __init__(self, parent: ctk.CTk) -> None:
        self._parent = parent

    def show_error(self, title: str, message: str) -> None:
        try:
            messagebox.showerror(title, message, parent=self._parent)
        except TclError:
            # window already gone; the message is in the log
            logger.error("%s: %s", title, message)


class Img1ViewerApp(ctk.CTk):
    def __init__(self, config: Optional[ViewerConfig] = None) -> None:
        super().__init__()
        self._config = config or ViewerConfig()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("IMG1 Viewer")
        width, height = self._config.window_size
        self.geometry(f"{width}x{height}")
        self.minsize(600, 400)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self, background=self._config.background)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = ViewerController(
            store=ImageService(),
            status=self._bottom,
            errors=MessageBoxReporter(self),
            config=self._config,
        )
        self._executor: Optional[ThreadPoolExecutor] = (
            ThreadPoolExecutor(max_workers=1, thread_name_prefix="img1-load") if self._config.async_load else None
        )
        self._redraw_pending = False
        self._bind_events()

    @property
    def controller(self) -> ViewerController:
        return self._controller

    def _bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами и контроллером."""
        self._viewer.on_event = self.dispatch
        self._bottom.on_event = self.dispatch
        self._sidebar.on_open_file = self._ask_open
        self._sidebar.on_save_file = self._ask_save

        self._controller.on_redraw = self._schedule_redraw
        self._controller.on_exit = self._shutdown
        self._controller.on_image_loaded = self._sidebar.set_image_info
        self._controller.on_cursor_move = self._sidebar.update_cursor_info

        self.bind("<Key-o>", lambda _e: self._ask_open())
        self.bind("<Key-s>", lambda _e: self._ask_save())
        for key in ("<Key-plus>", "<Key-equal>", "<KP_Add>"):
            self.bind(key, lambda _e: self.dispatch(ev.ZoomIn()))
        for key in ("<Key-minus>", "<KP_Subtract>"):
            self.bind(key, lambda _e: self.dispatch(ev.ZoomOut()))
        for key in ("<Key-r>", "<Key-0>"):
            self.bind(key, lambda _e: self.dispatch(ev.ResetView()))
        self.bind("<Key-g>", lambda _e: self.dispatch(ev.ToggleGrid()))
        for key in ("<Key-q>", "<Escape>"):
            self.bind(key, lambda _e: self.dispatch(ev.Exit()))
        self.protocol("WM_DELETE_WINDOW", lambda: self.dispatch(ev.Exit()))

    # ---- Public API ----
    def dispatch(self, event: ev.Event) -> None:
        if isinstance(event, ev.Open) and self._executor is not None:
            self._open_in_background(event.path)
            return
        self._controller.handle(event)
        if isinstance(event, ev.ToggleGrid):
            self._bottom.set_grid_value(self._controller.state.show_grid)

    def open_path(self, path: str | Path) -> None:
        self.dispatch(ev.Open(path))

    # ---- Dialogs ----
    def _ask_open(self) -> None:
        try:
            file_path = filedialog.askopenfilename(title="Выберите изображение IMG1", filetypes=FILE_TYPES)
        except TclError:
            # Silent fail if dialog cannot open
            return
        if not file_path:
            return
        self.open_path(file_path)

    def _ask_save(self) -> None:
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить как", filetypes=FILE_TYPES, defaultextension=".img"
            )
        except TclError:
            return
        if not file_path:
            return
        self.dispatch(ev.SaveAs(file_path))

    # ---- Background loading ----
    def _open_in_background(self, path: str | Path) -> None:
        ticket = self._controller.begin_open(path)
        self._bottom.set_text(f"Loading: {Path(path).name}…")
        future = self._executor.submit(self._controller.load, path)
        self.after(_POLL_MS, self._poll_load, ticket, path, future)

    def _poll_load(self, ticket: int, path: str | Path, future: "Future[ImageData]") -> None:
        if not future.done():
            self.after(_POLL_MS, self._poll_load, ticket, path, future)
            return
        self._controller.complete_load(ticket, path, future)

    # ---- Rendering ----
    def _schedule_redraw(self) -> None:
        if self._redraw_pending:
            return
        self._redraw_pending = True
        self.after_idle(self._redraw)

    def _redraw(self) -> None:
        self._redraw_pending = False
        self._controller.redraw(self._viewer)
        self._viewer.present()

    def _shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
        self.destroy()
