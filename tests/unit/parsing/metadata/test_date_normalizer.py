import pytest

from src.parsing.metadata import format_date


@pytest.mark.parametrize("raw, expected", [
    # Явные форматы
    ("12.05.23", "12/05/2023"),
    ("12.05.2023", "12/05/2023"),
    ("12 MAY 2023", "12/05/2023"),
    ("12-05-23", "12/05/2023"),
    ("1 jan 20", "01/01/2020"),
    ("2023-05-12", "12/05/2023"),
    ("2023.05.12", "12/05/2023"),
    ("12-May-2023", "12/05/2023"),
    ("12-May-23", "12/05/2023"),
    # dd.MM.yyyy невалиден -> MM.dd.yyyy
    ("12.31.2023", "31/12/2023"),
    # Дата внутри строки
    ("ZAGREB 12.05.23 HR", "12/05/2023"),
    ("12/05/23", "12/05/2023"),
    ("ENTRY 3 Jun 2022 SPLIT", "03/06/2022"),
])
def test_format_date(raw, expected):
    """Тест: разные форматы -> DD/MM/YYYY."""
    assert format_date(raw) == expected


def test_two_digit_year_always_20yy():
    """Тест: двузначный год всегда 20YY, даже 99."""
    assert format_date("15.03.99") == "15/03/2099"


@pytest.mark.parametrize("raw", [
    "",
    None,
    "DD.MM.YY",
    "31.02.2023",
    "12 XYZ 2023",
    "ZAGREB",
])
def test_format_date_unparseable(raw):
    """Тест: нет корректной даты -> пустая строка."""
    assert format_date(raw) == ""
