"""
Нормализация даты штампа в формат DD/MM/YYYY.

Штампы пишут дату как угодно: 12.05.23, 12 MAY 2023, 2023-05-12, 12-MAY-23.
Сначала пробуем явные форматы (полное совпадение строки), потом ищем
дату regex'ом внутри строки. Двузначный год всегда 20YY.
"""

import re
from datetime import date
from typing import List, Optional, Tuple

from loguru import logger

MONTHS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

# Явные форматы в порядке приоритета: (название, regex, порядок групп)
# Порядок групп: d - день, m - месяц числом, b - месяц словом, y - год
EXPLICIT_FORMATS: List[Tuple[str, "re.Pattern", str]] = [
    ("dd.MM.yy", re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{2})"), "dmy"),
    ("dd.MM.yyyy", re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{4})"), "dmy"),
    ("dd MMM yyyy", re.compile(r"(\d{1,2}) ([A-Za-z]{3}) (\d{4})"), "dby"),
    ("dd-MM-yy", re.compile(r"(\d{1,2})-(\d{1,2})-(\d{2})"), "dmy"),
    ("dd-MM-yyyy", re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})"), "dmy"),
    ("dd MMM yy", re.compile(r"(\d{1,2}) ([A-Za-z]{3}) (\d{2})"), "dby"),
    ("yyyy-MM-dd", re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})"), "ymd"),
    ("yyyy.MM.dd", re.compile(r"(\d{4})\.(\d{1,2})\.(\d{1,2})"), "ymd"),
    ("dd-MMM-yyyy", re.compile(r"(\d{1,2})-([A-Za-z]{3})-(\d{4})"), "dby"),
    ("dd-MMM-yy", re.compile(r"(\d{1,2})-([A-Za-z]{3})-(\d{2})"), "dby"),
    ("MM.dd.yyyy", re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{4})"), "mdy"),
]

# Дата внутри произвольной строки
DATE_SEARCH_RE = re.compile(r"(\d{1,2})[.\s/-](\d{1,2}|\w{3})[.\s/-](\d{2,4})", re.IGNORECASE)


def _expand_year(year: str) -> int:
    return int(f"20{year}") if len(year) == 2 else int(year)


def _month_number(month: str) -> Optional[int]:
    if month.isdigit():
        return int(month)
    return MONTHS.get(month.upper())


def _build(day: int, month: Optional[int], year: int) -> Optional[date]:
    """Календарно корректная дата или None (без переноса 31.02 -> 03.03)."""
    if month is None:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _format(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def _parse_explicit(text: str) -> Optional[date]:
    for name, pattern, order in EXPLICIT_FORMATS:
        match = pattern.fullmatch(text)
        if not match:
            continue

        parts = dict(zip(order, match.groups()))
        month = parts.get("m") or parts.get("b")
        parsed = _build(int(parts["d"]), _month_number(month), _expand_year(parts["y"]))
        if parsed:
            logger.debug(f"[DateNormalizer] '{text}' разобрана по формату {name}")
            return parsed
    return None


def format_date(raw: Optional[str]) -> str:
    """
    Приводит дату к DD/MM/YYYY.

    Returns:
        Строка DD/MM/YYYY или "" если дату разобрать не удалось.

    Пример: format_date("15.03.99") -> "15/03/2099"
    """
    if not raw:
        return ""

    text = raw.strip()

    parsed = _parse_explicit(text)
    if parsed:
        return _format(parsed)

    match = DATE_SEARCH_RE.search(text)
    if match:
        day, month, year = match.groups()
        parsed = _build(int(day), _month_number(month), _expand_year(year))
        if parsed:
            return _format(parsed)
        logger.debug(f"[DateNormalizer] Некорректная дата: '{match.group(0)}'")

    return ""
