"""img1-tool: утилиты для файлов IMG1.

Usage:
  img1-tool generate OUTDIR [--seed N]   записать пять эталонных изображений
  img1-tool info PATH                    показать заголовок и проверить размер
  img1-tool convert SRC DST              PNG/BMP/... -> .img или .img -> PNG/BMP/...

Формат DST определяется расширением: `.img` означает IMG1, иначе через Pillow.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from img1viewer.logging_setup import configure_logging
from img1viewer.models.errors import Img1Error, ImageIOError
from img1viewer.services import codec
from img1viewer.services.fixture_service import FixtureService
from img1viewer.services.image_service import ImageService

IMG_SUFFIX = ".img"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img1-tool",
        description="Утилиты для растровых файлов IMG1.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Писать ход работы в stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Записать пять эталонных изображений")
    gen.add_argument("out_dir", help="Каталог назначения (создаётся при необходимости)")
    gen.add_argument("--seed", type=int, default=None, help="Зерно генератора для шумового изображения")

    info = sub.add_parser("info", help="Показать поля заголовка файла .img")
    info.add_argument("path", help="Путь к файлу .img")

    conv = sub.add_parser("convert", help="Преобразовать между IMG1 и форматами Pillow")
    conv.add_argument("src", help="Исходный файл")
    conv.add_argument("dst", help="Файл назначения; формат по расширению")
    return parser


def _cmd_generate(args: argparse.Namespace) -> int:
    for path in FixtureService(seed=args.seed).write_all(args.out_dir):
        print(path)
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    path = Path(args.path)
    try:
        with path.open("rb") as stream:
            header = codec.read_header(stream)
        actual = path.stat().st_size
    except OSError as exc:
        raise ImageIOError(f"Не удалось прочитать {path}: {exc}") from exc
    codec.check_dimensions(header)
    print(f"файл:        {path}")
    print(f"ширина:      {header.width}")
    print(f"высота:      {header.height}")
    print(f"тип пикселя: {header.pixel_type}")
    print(f"ожидается:   {header.total_size} Б")
    print(f"фактически:  {actual} Б")
    if actual < header.total_size:
        print("статус:      обрезан")
        return 1
    print("статус:      ok" if actual == header.total_size else "статус:      ok (лишние байты в конце)")
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    service = ImageService()
    src, dst = Path(args.src), Path(args.dst)
    if src.suffix.lower() == IMG_SUFFIX:
        buffer = service.load_image(src).buffer
    else:
        buffer = service.import_image(src)
    if dst.suffix.lower() == IMG_SUFFIX:
        service.save_image(dst, buffer)
    else:
        service.export_image(dst, buffer)
    print(f"{src} -> {dst} ({buffer.width}x{buffer.height})")
    return 0


_COMMANDS = {
    "generate": _cmd_generate,
    "info": _cmd_info,
    "convert": _cmd_convert,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging("INFO" if args.verbose else "WARNING")
    try:
        return _COMMANDS[args.command](args)
    except Img1Error as exc:
        print(f"img1-tool: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
