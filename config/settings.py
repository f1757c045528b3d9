"""
Настройки проекта Hints Optimizer.

Значения по умолчанию для вывода параметров кодирования из client hints.
Часть значений можно переопределить через переменные окружения.
"""

import os


def _env_float(name: str, default: float) -> float:
    """Читает float из окружения, при ошибке возвращает default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# =============================================================================
# ФОРМАТЫ
# =============================================================================
MIME_JPEG = "image/jpeg"
MIME_PNG = "image/png"
MIME_WEBP = "image/webp"
MIME_GIF = "image/gif"

SUPPORTED_MIME_TYPES = [MIME_JPEG, MIME_PNG, MIME_WEBP, MIME_GIF]

# Формат, если клиент не прислал Accept с image/webp
DEFAULT_MIME = os.getenv("HINTS_DEFAULT_MIME", MIME_JPEG)

# Подстрока в Accept, при наличии которой отдаём WEBP
WEBP_ACCEPT_TOKEN = MIME_WEBP

# =============================================================================
# CLIENT HINTS: ЗАГОЛОВКИ И ПАРАМЕТРЫ
# =============================================================================
HEADER_ACCEPT = "Accept"
HEADER_DPR = "DPR"
HEADER_SAVE_DATA = "Save-Data"
HEADER_VIEWPORT_WIDTH = "Viewport-Width"
HEADER_WIDTH = "Width"
HEADER_DOWNLINK = "Downlink"

PARAM_DPR = "dpr"
PARAM_SAVE_DATA = "save-data"
PARAM_VIEWPORT_WIDTH = "viewport-width"
PARAM_WIDTH = "width"
PARAM_DOWNLINK = "downlink"

# Значение Save-Data, включающее режим экономии
SAVE_DATA_ON = "1"

# =============================================================================
# ЭВРИСТИКА КАЧЕСТВА
# =============================================================================
DEFAULT_DPR = _env_float("HINTS_DEFAULT_DPR", 1.0)

# quality = BASE_QUALITY - dpr * DPR_QUALITY_PENALTY
BASE_QUALITY = 100
DPR_QUALITY_PENALTY = 30

# Ниже этого downlink (Mbps) качество умножается на downlink
SLOW_DOWNLINK_MBPS = 1.0

# Множитель качества при Save-Data
SAVE_DATA_QUALITY_FACTOR = 0.75

# =============================================================================
# КОДЕКИ И РЕСАЙЗ
# =============================================================================
DEFAULT_INTERPOLATION = "bicubic"
INTERPOLATIONS = ["bicubic", "bilinear", "nearest", "lanczos", "area"]

# Допустимый диапазон quality для библиотечных кодеков
CODEC_MIN_QUALITY = 0
CODEC_MAX_QUALITY = 100

# Сдвиг округления при вычислении второй стороны с сохранением пропорций
ASPECT_ROUNDING_OFFSET = 0.7

# Максимальная сторона после ресайза
MAX_RESIZE_DIMENSION = 16384


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if DEFAULT_MIME not in SUPPORTED_MIME_TYPES:
        errors.append(
            f"HINTS_DEFAULT_MIME={DEFAULT_MIME!r} не поддерживается. "
            f"Допустимые значения: {', '.join(SUPPORTED_MIME_TYPES)}"
        )

    if DEFAULT_DPR <= 0:
        errors.append(f"HINTS_DEFAULT_DPR должен быть > 0, получено: {DEFAULT_DPR}")

    if DEFAULT_INTERPOLATION not in INTERPOLATIONS:
        errors.append(f"Неизвестная интерполяция по умолчанию: {DEFAULT_INTERPOLATION}")

    if not 0 < SAVE_DATA_QUALITY_FACTOR <= 1:
        errors.append(
            f"SAVE_DATA_QUALITY_FACTOR должен быть в (0, 1], получено: {SAVE_DATA_QUALITY_FACTOR}"
        )

    if errors:
        raise ValueError("\n".join(errors))

    return True
