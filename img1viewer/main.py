"""Точка входа в приложение."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from img1viewer.app import Img1ViewerApp
from img1viewer.config import load_config
from img1viewer.logging_setup import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="img1-viewer", description="Просмотр изображений IMG1.")
    parser.add_argument("path", nargs="?", help="Файл .img для открытия при запуске")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Уровень логирования (по умолчанию IMG1_LOG_LEVEL или INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Создаёт и запускает главное окно приложения."""
    args = _build_parser().parse_args(argv)
    try:
        config = load_config()
    except ValueError as exc:
        print(f"img1-viewer: {exc}", file=sys.stderr)
        sys.exit(2)
    configure_logging(args.log_level or config.log_level)

    app = Img1ViewerApp(config)
    if args.path:
        app.after_idle(app.open_path, args.path)
    app.mainloop()


if __name__ == "__main__":
    main()
