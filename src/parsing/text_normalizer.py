"""
Нормализация текста OCR.

Используется всеми детекторами: верхний регистр, только буквы/цифры,
пробелы, запятая, точка и дефис; пробелы схлопываются.
"""

import re

# Всё, что не буква/цифра/пробел/,.- (подчёркивание тоже убираем)
_NOISE_RE = re.compile(r"[^\w\s,.-]|_")
_SPACES_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Канонизирует строку.

    Чистая и тотальная функция, идемпотентна:
    normalize(normalize(x)) == normalize(x).

    Пример: "Zagreb ← 12.05.23 (HR)" → "ZAGREB 12.05.23 HR"
    """
    if not text:
        return ""
    upper = _NOISE_RE.sub("", text.upper())
    return _SPACES_RE.sub(" ", upper).strip()
