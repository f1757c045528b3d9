"""
Options: параметры кодирования, совместимые с Client Hints.

Запись создаётся на каждый запрос, заполняется OptionsDeriver,
нормализуется через optimize() и выбрасывается после encode().

Эвристика optimize():
1. width > 0  -> width = trunc(width * dpr)  (CSS px -> физические px)
2. dpr == 0   -> dpr = 1
3. quality == 0:
   a. quality = trunc(100 - dpr * 30)
   b. 0 < downlink < 1 -> quality = trunc(float32(quality) * float32(downlink))
   c. save_data        -> quality = trunc(float32(quality) * float32(0.75))
4. optimized = True

Умножения в шагах 3b/3c выполняются в float32: конкретные значения
quality зафиксированы в тестах потребителей.
"""

import math
from typing import Any

import numpy as np
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.settings import (
    BASE_QUALITY, DPR_QUALITY_PENALTY, SLOW_DOWNLINK_MBPS,
    SAVE_DATA_QUALITY_FACTOR, DEFAULT_INTERPOLATION, INTERPOLATIONS
)
from .contracts import ContractValidationError

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def truncate_int64(value: float) -> int:
    """
    Отбрасывает дробную часть с насыщением до границ int64.

    Inf и значения за пределами int64 прижимаются к границе, NaN -> INT64_MIN.
    Экстремальный dpr (например 1e308) не должен ронять запрос.
    """
    value = float(value)
    if math.isnan(value):
        return INT64_MIN
    if value >= INT64_MAX:
        return INT64_MAX
    if value <= INT64_MIN:
        return INT64_MIN
    return int(value)


class Options(BaseModel):
    """
    Client-Hints совместимый набор параметров кодирования изображения.

    Изменяемая запись: поля присваиваются на месте, каждое присваивание
    валидируется (validate_assignment).
    """

    model_config = ConfigDict(validate_assignment=True)

    mime: str = Field("", description="Запрошенный формат (image/jpeg, image/webp, ...)")
    width: int = Field(0, ge=0, description="Целевая ширина, 0 = авто")
    height: int = Field(0, ge=0, description="Целевая высота, 0 = авто")
    dpr: float = Field(0.0, description="Device pixel ratio, 0 = не задан")
    quality: int = Field(0, description="Качество, 0 = вычислить эвристикой")
    downlink: float = Field(0.0, description="Скорость сети в Mbps, 0 = неизвестна")
    viewport_width: float = Field(0.0, description="Ширина viewport (не используется эвристикой)")
    save_data: bool = Field(False, description="Клиент просит экономить трафик")
    interpolation: str = Field(DEFAULT_INTERPOLATION, description="Алгоритм ресайза")
    optimized: bool = Field(False, description="Эвристика уже применена")

    @field_validator('dpr', 'downlink', 'viewport_width')
    @classmethod
    def no_special_floats(cls, v: float) -> float:
        """Не допускаются NaN или Inf значения."""
        if math.isnan(v):
            raise ValueError("Значение не может быть NaN")
        if math.isinf(v):
            raise ValueError("Значение не может быть Inf")
        return v

    @field_validator('interpolation')
    @classmethod
    def interpolation_known(cls, v: str) -> str:
        if v not in INTERPOLATIONS:
            raise ValueError(f"Неизвестная интерполяция: {v} (допустимо: {', '.join(INTERPOLATIONS)})")
        return v

    def optimize(self) -> "Options":
        """
        Вычисляет итоговые width и quality. Повторный вызов ничего не делает.

        Returns:
            self
        """
        if self.optimized:
            return self

        if self.width > 0:
            self.width = max(truncate_int64(self.width * self.dpr), 0)

        if self.dpr == 0:
            self.dpr = 1.0

        # Качество не задано явно - подбираем
        if self.quality == 0:
            quality = truncate_int64(BASE_QUALITY - self.dpr * DPR_QUALITY_PENALTY)

            if 0 < self.downlink < SLOW_DOWNLINK_MBPS:
                quality = truncate_int64(np.float32(quality) * np.float32(self.downlink))

            if self.save_data:
                quality = truncate_int64(np.float32(quality) * np.float32(SAVE_DATA_QUALITY_FACTOR))

            self.quality = quality
            logger.debug(
                f"[Options] Качество подобрано: {quality} "
                f"(dpr={self.dpr}, downlink={self.downlink}, save_data={self.save_data})"
            )

        self.optimized = True
        return self


def build_options(**fields: Any) -> Options:
    """
    Создаёт Options, переводя ошибки pydantic в ContractValidationError.

    Raises:
        ContractValidationError: если значения нарушают контракт
    """
    try:
        return Options(**fields)
    except ValidationError as e:
        raise ContractValidationError("Options", "Options", e.errors())

