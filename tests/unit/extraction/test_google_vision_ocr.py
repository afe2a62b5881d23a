from pathlib import Path
from types import SimpleNamespace

import pytest

from contracts.d1_extraction_dto import BoundingPoly, Vertex
from src.extraction.domain.exceptions import OCRResponseError
from src.extraction.infrastructure.adapters.google_vision_adapter import GoogleVisionOCRAdapter
from src.extraction.ocr.google_vision_ocr import GoogleVisionOCR


def _vertices(*points):
    return SimpleNamespace(vertices=[SimpleNamespace(x=x, y=y) for x, y in points])


class FakeVisionClient:
    """Заглушка ImageAnnotatorClient: запоминает вызовы text_detection."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def text_detection(self, image, image_context):
        self.calls.append((image, image_context))
        return self.response


@pytest.fixture
def vision_response():
    """Fixture: ответ Vision с текстом страницы и одним словом."""
    return SimpleNamespace(
        error=SimpleNamespace(message=""),
        text_annotations=[
            SimpleNamespace(
                description="HR\nZAGREB\n12.05.23",
                bounding_poly=_vertices((10, 20), (300, 20), (300, 200), (None, 200)),
            ),
            SimpleNamespace(description="ZAGREB", bounding_poly=_vertices((10, 20), (90, 20), (90, 40), (10, 40))),
        ],
        full_text_annotation=SimpleNamespace(pages=[SimpleNamespace(width=800, height=600)]),
    )


def test_recognize_builds_ocr_page(vision_response):
    """Тест: text_annotations -> OcrPage, первая аннотация - вся страница."""
    client = FakeVisionClient(vision_response)
    ocr = GoogleVisionOCR(client=client)

    page = ocr.recognize(b"image-bytes", source_file="page.jpg")

    assert len(client.calls) == 1
    assert page.has_text
    assert page.full_text == "HR\nZAGREB\n12.05.23"
    assert page.page_polygon == BoundingPoly(vertices=[
        Vertex(10, 20), Vertex(300, 20), Vertex(300, 200), Vertex(0, 200)
    ])
    assert [w.description for w in page.words] == ["ZAGREB"]
    assert page.metadata.source_file == "page.jpg"
    assert (page.metadata.image_width, page.metadata.image_height) == (800, 600)


def test_recognize_empty_page():
    """Тест: нет аннотаций -> пустая страница, размер 0x0."""
    response = SimpleNamespace(
        error=SimpleNamespace(message=""),
        text_annotations=[],
        full_text_annotation=None,
    )
    page = GoogleVisionOCR(client=FakeVisionClient(response)).recognize(b"x")

    assert not page.has_text
    assert page.full_text == ""
    assert page.page_polygon is None
    assert page.metadata.image_width == 0


def test_recognize_api_error():
    """Тест: ошибка Vision -> OCRResponseError."""
    response = SimpleNamespace(error=SimpleNamespace(message="quota exceeded"))
    ocr = GoogleVisionOCR(client=FakeVisionClient(response))

    with pytest.raises(OCRResponseError, match="quota exceeded"):
        ocr.recognize(b"x")


def test_recognize_from_file(tmp_path, vision_response):
    """Тест: чтение файла, имя файла в метаданных."""
    image_path = tmp_path / "page_1.jpg"
    image_path.write_bytes(b"fake")

    page = GoogleVisionOCR(client=FakeVisionClient(vision_response)).recognize_from_file(image_path)
    assert page.metadata.source_file == "page_1.jpg"


def test_missing_credentials(tmp_path):
    """Тест: файла credentials нет -> FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        GoogleVisionOCR(credentials_path=str(tmp_path / "missing.json"))


def test_adapter_wraps_unexpected_errors(tmp_path):
    """Тест: адаптер приводит ошибки клиента к OCRResponseError."""
    ocr = GoogleVisionOCR(client=FakeVisionClient(None))
    adapter = GoogleVisionOCRAdapter(ocr=ocr)

    with pytest.raises(OCRResponseError):
        adapter.recognize_from_file(Path(tmp_path / "missing.jpg"))
