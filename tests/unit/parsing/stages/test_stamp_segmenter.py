import re

import pytest

from contracts.d1_extraction_dto import BoundingPoly
from contracts.stamp_dto import Direction
from src.parsing.stages import StampSegmenter, extract_stamps, split_blocks


@pytest.fixture
def two_stamp_page():
    """Fixture: страница с двумя соседними датами."""
    return "HR\nZAGREB\n12.05.23\n14.05.23\nPOLICE"


def test_split_blocks_skips_empty_lines():
    """Тест: пустые строки выброшены, индексы подряд."""
    blocks = split_blocks("Zagreb ←\n\n   \n12.05.23\n")
    assert [b.raw_text for b in blocks] == ["Zagreb ←", "12.05.23"]
    assert [b.text for b in blocks] == ["ZAGREB", "12.05.23"]
    assert [b.index for b in blocks] == [0, 1]


def test_two_adjacent_dates_give_two_candidates(two_stamp_page):
    """Тест: две соседние даты -> два перекрывающихся кандидата."""
    stamps = extract_stamps(two_stamp_page)

    assert [s.sl_no for s in stamps] == [1, 2]
    assert [s.date for s in stamps] == ["12/05/2023", "14/05/2023"]
    assert stamps[0].description == stamps[1].description == two_stamp_page

    for stamp in stamps:
        assert stamp.country == "Croatia"
        assert stamp.airport == "ZAGREB AIRPORT"
        assert stamp.direction == Direction.ARRIVAL
        assert stamp.confidence == 0.9


def test_stamp_ids_are_unique_hex(two_stamp_page):
    """Тест: каждому кандидату новый uuid4 (hex)."""
    stamps = extract_stamps(two_stamp_page)
    ids = [s.stamp_id for s in stamps]
    assert len(set(ids)) == 2
    assert all(re.fullmatch(r"[0-9a-f]{32}", i) for i in ids)


def test_no_dates_no_candidates():
    """Тест: нет строк с датой -> пустой список."""
    assert extract_stamps("ZAGREB\nAIRPORT\nPOLICE") == []
    assert extract_stamps("") == []


def test_placeholder_line_is_anchor():
    """Тест: незаполненный шаблон DD.MM.YY - тоже штамп, дата пустая."""
    stamps = extract_stamps("SPLIT\nDD.MM.YY")
    assert len(stamps) == 1
    assert stamps[0].date == ""
    assert stamps[0].airport == "SPLIT AIRPORT"


def test_description_window_is_three_lines_each_side():
    """Тест: описание = строки [i-3, i+3]."""
    lines = [f"LINE{n}" for n in range(10)]
    lines[5] = "01.02.2023"
    stamps = extract_stamps("\n".join(lines))

    assert len(stamps) == 1
    assert stamps[0].description.split("\n") == lines[2:9]


def test_window_is_clipped_at_page_edges():
    """Тест: окно обрезается по краям страницы."""
    stamps = extract_stamps("01.02.2023\nSPLIT")
    assert stamps[0].description == "01.02.2023\nSPLIT"


def test_direction_from_window():
    """Тест: направление по ключевым словам окна."""
    stamps = extract_stamps("AT\nWIEN\nAUSREISE\n03.04.2022")
    assert stamps[0].direction == Direction.DEPARTURE
    assert stamps[0].country == "Austria"


def test_default_country_and_confidence():
    """Тест: страна не найдена -> India, confidence = min(0.5, ...)."""
    stamps = extract_stamps("12.05.23")
    assert stamps[0].country == "India"
    assert stamps[0].airport == "Delhi International Airport"
    assert stamps[0].confidence == 0.5


def test_bounding_poly_passed_through():
    """Тест: полигон страницы передаётся каждому кандидату."""
    poly = BoundingPoly.from_points([{"x": 1, "y": 2}, {"x": 10, "y": 2}, {"x": 10, "y": 20}, {"x": 1, "y": 20}])
    stamps = extract_stamps("12.05.23\n13.05.23", bounding_poly=poly)
    assert all(s.bounding_poly == poly for s in stamps)


def test_missing_bounding_poly_keeps_candidates():
    """Тест: без полигона кандидаты не пропускаются."""
    stamps = extract_stamps("12.05.23")
    assert len(stamps) == 1
    assert stamps[0].bounding_poly is None


def test_custom_window():
    """Тест: ширина окна настраивается."""
    segmenter = StampSegmenter(window=1)
    stamps = segmenter.extract("A\nB\n01.02.2023\nC\nD")
    assert stamps[0].description == "B\n01.02.2023\nC"
