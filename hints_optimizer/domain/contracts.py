"""
Валидационные контракты Hints Optimizer.

EncodeResult - выходной контракт EncodeDispatcher.
ContractValidationError - обёртка над pydantic ValidationError.

Все модели используют Pydantic v2 с Field validators.
"""

from typing import List, Dict, Any, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator

from config.settings import SUPPORTED_MIME_TYPES


class EncodeResult(BaseModel):
    """Выходной контракт для EncodeDispatcher."""

    model_config = ConfigDict(frozen=True)

    mime: str = Field(..., description="Формат, в который закодировано изображение")
    quality: int = Field(..., description="Качество из Options (без клампа кодека)")
    width: int = Field(..., gt=0, description="Ширина закодированного изображения (pixels)")
    height: int = Field(..., gt=0, description="Высота закодированного изображения (pixels)")
    bytes_written: int = Field(..., gt=0, description="Сколько байт записано в sink")

    @field_validator('mime')
    @classmethod
    def mime_supported(cls, v: str) -> str:
        """Результат может быть только в одном из известных форматов."""
        if v not in SUPPORTED_MIME_TYPES:
            raise ValueError(f"Неизвестный формат результата: {v}")
        return v


class ContractValidationError(Exception):
    """Exception для нарушения контрактов (используется вместо Pydantic ValidationError)."""

    def __init__(self, component: str, contract_name: str, errors: Union[List[Dict[str, Any]], List[Any]]) -> None:
        self.component = component
        self.contract_name = contract_name
        self.errors = errors

        error_messages = []
        for err in errors:
            if isinstance(err, dict):
                loc = err.get('loc', [])[0] if err.get('loc') else 'unknown'
                err_type = err.get('type', 'unknown')
                msg = err.get('msg', 'unknown error')
                error_messages.append(f"  {loc} ({err_type}): {msg}")
            else:
                error_messages.append(f"  {str(err)}")

        message = (
            f"Contract violation in {component} ({contract_name}):\n"
            + "\n".join(error_messages)
        )
        super().__init__(message)
