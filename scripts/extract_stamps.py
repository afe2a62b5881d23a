#!/usr/bin/env python3
"""
Извлечение штампов из фото страниц паспорта.

Использование:
    # Обработать все изображения из data/input/
    python scripts/extract_stamps.py

    # Обработать конкретное изображение
    python scripts/extract_stamps.py path/to/page.jpg

    # Пустая запись для ручного ввода, если штампов нет
    python scripts/extract_stamps.py path/to/page.jpg --placeholder

Результат: data/output/<имя файла>/stamps.json (записи в формате хранилища).
"""

import sys
import argparse
import json
from pathlib import Path

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import validate_config, INPUT_DIR, OUTPUT_DIR, SUPPORTED_IMAGE_FORMATS
from src.extraction import ExtractionComponentFactory, PassportPagePipeline


def process_image(pipeline: PassportPagePipeline, image_path: Path, output_dir: Path) -> bool:
    """
    Обрабатывает одну страницу и сохраняет записи штампов.

    Returns:
        True если найден хотя бы один штамп
    """
    entries = pipeline.process_page(image_path)

    result_dir = output_dir / image_path.stem
    result_dir.mkdir(parents=True, exist_ok=True)
    stamps_file = result_dir / "stamps.json"

    records = [entry.cleaned().to_record() for entry in entries]
    with open(stamps_file, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)

    print(f"  [SAVED] {stamps_file}")
    for record in records:
        print(
            f"  [{record['Sl_no']}] {record['Country']} | {record['Airport_Name_with_location']} | "
            f"{record['Arrival_Departure']} | {record['Date'] or '-'} | {record['StampImage'] or 'без картинки'}"
        )

    return any(not entry.is_manual_entry for entry in entries)


def main():
    """Главная функция извлечения штампов."""

    print("\n" + "=" * 60)
    print("  PASSPORT STAMPS OCR - Извлечение штампов")
    print("=" * 60)

    parser = argparse.ArgumentParser(description="Passport Stamps Extraction")
    parser.add_argument("path", nargs="?", help="Путь к изображению (опционально)")
    parser.add_argument("--placeholder", action="store_true", help="Пустая запись, если штампы не найдены")
    parser.add_argument("--verbose", action="store_true", help="Подробный лог (DEBUG)")
    args = parser.parse_args()

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if args.verbose else "INFO"
    )

    try:
        validate_config(require_ocr=True)
        print("\n[OK] Конфигурация проверена")
    except ValueError as e:
        print(f"\n[ERROR] {e}")
        sys.exit(1)

    if args.path:
        image_path = Path(args.path)
        if not image_path.exists():
            print(f"[ERROR] Файл не найден: {image_path}")
            sys.exit(1)
        image_paths = [image_path]
    else:
        image_paths = sorted(
            p for p in INPUT_DIR.iterdir()
            if p.suffix.lower() in SUPPORTED_IMAGE_FORMATS
        )
        if not image_paths:
            print(f"[WARNING] В директории {INPUT_DIR} не найдены изображения")
            sys.exit(0)

    pipeline = ExtractionComponentFactory.create_page_pipeline(placeholder_on_empty=args.placeholder)

    found_count = 0
    total_count = len(image_paths)

    for i, image_path in enumerate(image_paths, 1):
        print(f"\n[{i}/{total_count}] {image_path.name}")
        if process_image(pipeline, image_path, OUTPUT_DIR):
            found_count += 1

    print("\n" + "=" * 60)
    print(f"  ИТОГИ: штампы найдены на {found_count}/{total_count} страницах")
    print("=" * 60)


if __name__ == "__main__":
    main()
