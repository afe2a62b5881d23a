import pytest

from src.parsing.detectors import DetectionResult, detect_country


@pytest.mark.parametrize("text, country, confidence", [
    ("HR\n12.05.23", "Croatia", 0.95),
    ("POLICIJA HR: 12.05.23", "Croatia", 0.95),
    ("NO 01.02.23", "Norway", 0.95),
    ("ZAGREB\n12.05.23", "Croatia", 0.9),
    ("Kobenhavn 01.02.23", "Denmark", 0.9),
    ("AUSTRIA BORDER", "Austria", 0.8),
    ("12.05.23", "India", 0.5),
    ("", "India", 0.5),
])
def test_detect_country(text, country, confidence):
    """Тест: приоритет код -> город -> название -> по умолчанию."""
    result = detect_country(text)
    assert result == DetectionResult(country, confidence)


def test_only_first_code_is_considered():
    """Тест: первый двухбуквенный токен неизвестен - код дальше не ищется."""
    result = detect_country("XX HR ZAGREB")
    assert result.value == "Croatia"
    assert result.confidence == 0.9


def test_alias_order_beats_text_position():
    """Тест: выигрывает первый алиас справочника, а не первый в тексте."""
    # PARIS объявлен раньше ZAGREB
    result = detect_country("ZAGREB PARIS")
    assert result.value == "France"


def test_detection_result_validates_confidence():
    """Тест: confidence вне [0, 1] -> ValueError."""
    with pytest.raises(ValueError):
        DetectionResult("Croatia", 1.5)
