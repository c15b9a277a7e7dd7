from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from img1viewer.controllers import events as ev


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=48, **kwargs)

        # callbacks
        self.on_event: Optional[Callable[[ev.Event], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # status stretches

        # Status line
        self._status_value = ctk.StringVar(value="Нажмите O, чтобы открыть файл .img")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status_value, anchor="w")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")

        # Zoom + view controls
        self._zoom_out_btn = ctk.CTkButton(self, text="−", width=36, command=lambda: self._emit(ev.ZoomOut()))
        self._zoom_out_btn.grid(row=0, column=1, padx=3, pady=8)
        self._zoom_in_btn = ctk.CTkButton(self, text="+", width=36, command=lambda: self._emit(ev.ZoomIn()))
        self._zoom_in_btn.grid(row=0, column=2, padx=3, pady=8)
        self._reset_btn = ctk.CTkButton(self, text="1:1", width=48, command=lambda: self._emit(ev.ResetView()))
        self._reset_btn.grid(row=0, column=3, padx=3, pady=8)

        self._grid_switch = ctk.CTkSwitch(self, text="Сетка", command=lambda: self._emit(ev.ToggleGrid()))
        self._grid_switch.grid(row=0, column=4, padx=(12, 10), pady=8)

    # public API (sync from controller)
    def set_text(self, text: str) -> None:
        self._status_value.set(text)

    def set_grid_value(self, enabled: bool) -> None:
        if enabled:
            self._grid_switch.select()
        else:
            self._grid_switch.deselect()

    # helpers
    def _emit(self, event: ev.Event) -> None:
        if self.on_event:
            self.on_event(event)
