"""
Исключения для Hints Optimizer.

Ошибки кодирования, ресайза и чтения изображений.
Некорректные client hints исключений не порождают.
"""

from typing import Optional


class HintsOptimizerError(Exception):
    """Базовое исключение Hints Optimizer."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class UnsupportedFormatError(HintsOptimizerError):
    """Запрошенный mime не поддерживается ни одним кодеком."""

    def __init__(self, mime: str, component: Optional[str] = None):
        self.mime = mime
        super().__init__(f"Format {mime} is not supported", component=component)


class ImageEncodingError(HintsOptimizerError):
    """Кодек сообщил о неудаче без исключения."""
    pass


class ImageResizeError(HintsOptimizerError):
    """Невалидный целевой размер ресайза."""
    pass


class ImageReadError(HintsOptimizerError):
    """Ошибка чтения или декодирования файла изображения."""
    pass


class ImageNotFoundError(ImageReadError):
    """Файл изображения не найден."""
    pass
