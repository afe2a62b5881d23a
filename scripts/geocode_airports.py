#!/usr/bin/env python3
"""
Геокодинг аэропортов из сохранённых записей штампов.

Использование:
    # Координаты для названий из командной строки
    python scripts/geocode_airports.py "Zurich Airport" "SPLIT AIRPORT"

    # Координаты + облако слов для записей из stamps.json
    python scripts/geocode_airports.py --stamps data/output/page_1/stamps.json
"""

import sys
import argparse
import asyncio
import json
from pathlib import Path
from typing import List

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import validate_config
from contracts.stamp_dto import PassportEntry
from src.geocoding import build_geocoding_service
from src.history import attach_coordinates, build_word_cloud, unique_stamp_images


def load_entries(stamps_file: Path) -> List[PassportEntry]:
    with open(stamps_file, "r", encoding="utf-8") as f:
        return [PassportEntry.from_record(record) for record in json.load(f)]


async def run(names: List[str], stamps_file: Path = None):
    service = build_geocoding_service()
    try:
        if stamps_file:
            entries = load_entries(stamps_file)
            records = await attach_coordinates(entries, service)
            print(json.dumps(records, ensure_ascii=False, indent=2))

            print("\n[WORD CLOUD]")
            for word in build_word_cloud(entry.airport for entry in entries):
                print(f"  {word.text}: {word.value}")

            print("\n[STAMP IMAGES]")
            for image in unique_stamp_images(entries):
                print(f"  {image}")
        else:
            results = await service.batch_geocode(names)
            for name, result in zip(names, results):
                coords = f"{result.lat:.5f}, {result.lng:.5f}" if result else "не найдено"
                print(f"  {name}: {coords}")
    finally:
        await service.close()


def main():
    """Главная функция геокодинга."""

    print("\n" + "=" * 60)
    print("  PASSPORT STAMPS OCR - Геокодинг аэропортов")
    print("=" * 60)

    parser = argparse.ArgumentParser(description="Airport Geocoding")
    parser.add_argument("names", nargs="*", help="Названия аэропортов")
    parser.add_argument("--stamps", type=Path, help="Путь к stamps.json")
    parser.add_argument("--verbose", action="store_true", help="Подробный лог (DEBUG)")
    args = parser.parse_args()

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if args.verbose else "INFO"
    )

    if not args.names and not args.stamps:
        parser.error("Укажите названия аэропортов или --stamps")

    try:
        validate_config(require_ocr=False, require_geocoding=True)
    except ValueError as e:
        print(f"\n[ERROR] {e}")
        sys.exit(1)

    asyncio.run(run(args.names, args.stamps))


if __name__ == "__main__":
    main()
