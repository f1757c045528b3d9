#!/usr/bin/env python3
"""
Перекодирование изображения по client hints.

Использование:
    python scripts/optimize_image.py photo.jpg out.webp --accept image/webp --dpr 2 --width 320
    python scripts/optimize_image.py photo.jpg out.jpg --save-data --downlink 0.5
"""

import sys
import argparse
from pathlib import Path

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from loguru import logger

from config.settings import validate_config, DEFAULT_MIME, SUPPORTED_MIME_TYPES
from hints_optimizer import (
    HintsOptimizerComponentFactory, HintsOptimizerError, ContractValidationError, build_options
)
from hints_optimizer.image_file_reader import ImageFileReader


def build_headers(args) -> dict:
    """Аргументы командной строки -> заголовки client hints."""
    headers = {}
    if args.accept:
        headers["Accept"] = args.accept
    if args.dpr is not None:
        headers["DPR"] = args.dpr
    if args.save_data:
        headers["Save-Data"] = "1"
    if args.viewport_width is not None:
        headers["Viewport-Width"] = args.viewport_width
    if args.width is not None:
        headers["Width"] = args.width
    if args.downlink is not None:
        headers["Downlink"] = args.downlink
    return headers


def main():
    parser = argparse.ArgumentParser(description="Client Hints image optimizer")
    parser.add_argument("input", help="Путь к исходному изображению")
    parser.add_argument("output", help="Куда записать результат")
    parser.add_argument("--mime", default=DEFAULT_MIME, choices=SUPPORTED_MIME_TYPES,
                        help="Формат, если Accept не содержит image/webp")
    parser.add_argument("--accept", help="Значение заголовка Accept")
    parser.add_argument("--dpr", help="DPR")
    parser.add_argument("--save-data", action="store_true", help="Save-Data: 1")
    parser.add_argument("--viewport-width", help="Viewport-Width")
    parser.add_argument("--width", help="Width (CSS px)")
    parser.add_argument("--downlink", help="Downlink (Mbps)")
    parser.add_argument("--quality", type=int, default=0, help="Явное качество (0 = эвристика)")
    parser.add_argument("--height", type=int, default=0, help="Целевая высота (0 = по пропорциям)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    try:
        validate_config()
    except ValueError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    try:
        base = build_options(mime=args.mime, quality=args.quality, height=args.height)
        image, _ = ImageFileReader.read(Path(args.input))
        pipeline = HintsOptimizerComponentFactory.create_pipeline()

        with open(args.output, "wb") as sink:
            result = pipeline.process(sink, image, build_headers(args), base=base)
    except (HintsOptimizerError, ContractValidationError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    print(f"[OK] {args.output}: {result.mime} {result.width}x{result.height}, "
          f"quality {result.quality}, {result.bytes_written} bytes")


if __name__ == "__main__":
    main()
