from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Настраивает корневой логгер пакета: один потоковый обработчик в stderr."""
    root = logging.getLogger("img1viewer")
    root.setLevel(level)
    if not any(getattr(h, "_img1viewer", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._img1viewer = True  # type: ignore[attr-defined]
        root.addHandler(handler)
