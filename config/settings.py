"""
Настройки проекта Passport Stamps OCR.

ВАЖНО: Перед запуском укажите путь к вашему Google Cloud credentials файлу
и ключ LocationIQ (для карты)!
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# Окружение: в production (AWS App Runner) писать можно только в /tmp
APP_ENV = os.getenv("APP_ENV", os.getenv("NODE_ENV", "development"))
IS_PRODUCTION = APP_ENV == "production"

UPLOADS_DIR = Path(os.getenv(
    "UPLOADS_DIR",
    "/tmp/uploads" if IS_PRODUCTION else str(DATA_DIR / "uploads")
))
STAMPS_DIR = Path(os.getenv("STAMPS_DIR", str(UPLOADS_DIR / "stamps")))

# Публичный префикс ссылок на вырезанные штампы (отдаётся статикой)
STAMPS_PUBLIC_PATH = os.getenv("STAMPS_PUBLIC_PATH", "/uploads/stamps")


# =============================================================================
# GOOGLE CLOUD VISION API
# =============================================================================
# Путь к JSON-файлу с ключом сервисного аккаунта
GOOGLE_APPLICATION_CREDENTIALS = os.getenv(
    "GOOGLE_APPLICATION_CREDENTIALS",
    str(PROJECT_ROOT / "config" / "google_credentials.json")
)

# =============================================================================
# НАСТРОЙКИ ОБРАБОТКИ
# =============================================================================
# Поддерживаемые форматы изображений
SUPPORTED_IMAGE_FORMATS = [".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tiff"]

# Язык распознавания (для подсказки OCR). Штампы бывают на любом языке ЕС
OCR_LANGUAGE_HINTS = ["en", "de", "fr"]


# Качество JPEG для вырезанных штампов (0-100)
JPEG_QUALITY = 90

# =============================================================================
# НАСТРОЙКИ ИЗВЛЕЧЕНИЯ ШТАМПОВ
# =============================================================================
# Отступ вокруг bounding box штампа (доля от ширины/высоты)
CROP_PADDING_PERCENT = 0.15

# Сколько строк до/после строки с датой попадает в описание штампа
DESCRIPTION_WINDOW = 3

# Страна по умолчанию, если ничего не найдено (всегда отдаём догадку)
DEFAULT_COUNTRY = "India"

# Аэропорт, если страна неизвестна
UNKNOWN_AIRPORT = "Unknown International Airport"

# Confidence scores для детекторов
COUNTRY_CODE_CONFIDENCE = 0.95     # Отдельный код страны (HR, AT, ...)
COUNTRY_CITY_CONFIDENCE = 0.9      # Город/алиас
COUNTRY_NAME_CONFIDENCE = 0.8      # Полное название страны
COUNTRY_DEFAULT_CONFIDENCE = 0.5   # Страна по умолчанию

AIRPORT_TOKEN_CONFIDENCE = 0.9     # Код/название аэропорта
AIRPORT_KEYWORD_CONFIDENCE = 0.7   # Ключевое слово + главный аэропорт страны
AIRPORT_BLOCK_CONFIDENCE = 0.6     # Ключевое слово, но у страны нет аэропортов
AIRPORT_MAIN_CONFIDENCE = 0.5      # Главный аэропорт страны без подсказок
AIRPORT_UNKNOWN_CONFIDENCE = 0.3   # Неизвестная страна

# =============================================================================
# НАСТРОЙКИ ГЕОКОДИНГА (LocationIQ)
# =============================================================================
LOCATIONIQ_API_KEY = os.getenv("LOCATIONIQ_API_KEY", "")
LOCATIONIQ_URL = os.getenv("LOCATIONIQ_URL", "https://us1.locationiq.com/v1/search.php")

# Redis для долговременного кэша (опционально)
REDIS_URL = os.getenv("REDIS_URL", "")
GEOCODE_CACHE_PREFIX = "geocode:"
GEOCODE_CACHE_TTL = 60 * 60 * 24 * 30  # 30 дней (секунды)

# Батчи запросов к API (лимиты LocationIQ)
GEOCODE_BATCH_SIZE = 5
GEOCODE_BATCH_DELAY = 1.0          # Пауза между батчами (секунды)

# Повторы при HTTP 429
GEOCODE_MAX_ATTEMPTS = 3
GEOCODE_INITIAL_BACKOFF = 1.0      # Первая пауза (секунды), далее x2

# Таймаут одного HTTP запроса (секунды)
GEOCODE_HTTP_TIMEOUT = float(os.getenv("GEOCODE_HTTP_TIMEOUT", "10"))

# =============================================================================
# НАСТРОЙКИ АНАЛИТИКИ ИСТОРИИ
# =============================================================================
WORD_CLOUD_LIMIT = 50

# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config(require_ocr: bool = True, require_geocoding: bool = False):
    """Проверяет корректность конфигурации."""
    errors = []

    if require_ocr:
        if not GOOGLE_APPLICATION_CREDENTIALS:
            errors.append(
                "GOOGLE_APPLICATION_CREDENTIALS не указан!\n"
                "Укажите путь к JSON-ключу в config/settings.py или через переменную окружения."
            )
        elif not Path(GOOGLE_APPLICATION_CREDENTIALS).exists():
            errors.append(
                f"Файл credentials не найден: {GOOGLE_APPLICATION_CREDENTIALS}"
            )

    if require_geocoding and not LOCATIONIQ_API_KEY:
        errors.append(
            "LOCATIONIQ_API_KEY не указан!\n"
            "Геокодинг аэропортов без ключа невозможен."
        )

    if errors:
        raise ValueError("\n".join(errors))

    # Создаём директории если не существуют
    INPUT_DIR.mkdir(parents=True, exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    STAMPS_DIR.mkdir(parents=True, exist_ok=True)

    return True
