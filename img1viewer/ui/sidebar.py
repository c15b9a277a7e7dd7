"""Боковая панель: открытие/сохранение файла, информация об изображении, курсор.

Принципы:
- SRP: управляет только UI, не содержит логики формата.
- ISP: события наружу через `on_*`, данные внутрь через `set_*`/`update_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from img1viewer.models.image_model import PIXEL_TYPE_RGB8, ImageData
from img1viewer.models.pixel_buffer import Pixel

HELP_TEXT = (
    "O — открыть\n"
    "S — сохранить как\n"
    "+ / − — масштаб\n"
    "колесо — масштаб\n"
    "R / 0 — сброс вида\n"
    "G — сетка (от 400%)\n"
    "ЛКМ — перетаскивание\n"
    "Q / Esc — выход"
)


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, курсор, подсказка."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=240, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_save_file: Optional[Callable[[], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Файл", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._save_btn = ctk.CTkButton(self, text="Сохранить как…", command=self._emit_save_file)
        self._save_btn.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._type_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=220, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_type = ctk.CTkLabel(self, textvariable=self._type_val, anchor="w", justify="left")

        self._info_path.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_type.grid(row=7, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgb_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgb = ctk.CTkLabel(self, textvariable=self._cursor_rgb_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgb.grid(row=10, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Key help
        self._help_title = ctk.CTkLabel(self, text="Клавиши", font=ctk.CTkFont(size=16, weight="bold"))
        self._help_title.grid(row=12, column=0, padx=8, pady=(12, 4), sticky="w")
        self._help = ctk.CTkLabel(self, text=HELP_TEXT, anchor="w", justify="left")
        self._help.grid(row=13, column=0, padx=8, pady=(0, 8), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, image: ImageData) -> None:
        self._path_val.set(str(image.path) if image.path else "—")
        if image.size_bytes is not None:
            self._size_val.set(f"Размер файла: {image.size_bytes:,} Б".replace(",", " "))
        else:
            self._size_val.set("Размер файла: —")
        self._dims_val.set(f"Размеры: {image.width} × {image.height}")
        tag = image.header.pixel_type
        label = "RGB 8 бит" if tag == PIXEL_TYPE_RGB8 else f"неизвестный ({tag})"
        self._type_val.set(f"Тип пикселя: {label}")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], pixel: Optional[Pixel]) -> None:
        if x is None or y is None or pixel is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgb_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"X: {x}, Y: {y}")
        self._cursor_rgb_val.set(f"RGB: {pixel.r}, {pixel.g}, {pixel.b}")
        self._cursor_hex_val.set(f"HEX: {pixel.to_hex()}")

    # ---- Internals ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_save_file(self) -> None:
        if self.on_save_file:
            self.on_save_file()
