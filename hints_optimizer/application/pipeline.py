"""
Client Hints Pipeline.

Сырые client hints -> OptionsDeriver -> Options -> EncodeDispatcher -> sink.
Один вызов process() на один запрос; общего состояния между вызовами нет.
"""

from typing import Any, BinaryIO, Mapping, Optional

import numpy as np
from loguru import logger

from ..deriver.options_deriver import OptionsDeriver
from ..domain.contracts import EncodeResult
from ..domain.exceptions import HintsOptimizerError
from ..domain.options import Options
from ..encoder.dispatcher import EncodeDispatcher


class ClientHintsPipeline:
    """Вывод Options из hints и кодирование изображения."""

    def __init__(self, deriver: OptionsDeriver, dispatcher: EncodeDispatcher) -> None:
        self.deriver = deriver
        self.dispatcher = dispatcher
        logger.info("[ClientHintsPipeline] Инициализирован")

    def process(
        self,
        sink: BinaryIO,
        image: np.ndarray,
        headers: Mapping[str, Any],
        params: Optional[Mapping[str, Any]] = None,
        base: Optional[Options] = None
    ) -> EncodeResult:
        """
        Обрабатывает один запрос.

        Args:
            sink: Куда писать закодированные байты
            image: Декодированное изображение (BGR)
            headers: Заголовки запроса
            params: Query/form параметры
            base: Значения, выставленные вызывающим (mime по умолчанию, quality, height)

        Returns:
            EncodeResult

        Raises:
            UnsupportedFormatError: если итоговый mime не поддерживается
        """
        options = self.deriver.derive(headers, params, base)
        try:
            return self.dispatcher.encode(sink, image, options)
        except HintsOptimizerError as e:
            logger.error(f"[ClientHintsPipeline] Ошибка кодирования: {e}")
            raise
