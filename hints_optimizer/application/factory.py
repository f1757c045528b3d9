"""
Фабрика для создания компонентов Hints Optimizer.

Собирает deriver, resizer, кодеки и dispatcher в единый пайплайн.
"""

from typing import Any, Dict, Optional

from loguru import logger

from ..deriver.options_deriver import OptionsDeriver
from ..domain.interfaces import IImageCodec, IImageResizer
from ..encoder.codecs import default_codecs
from ..encoder.dispatcher import EncodeDispatcher
from ..encoder.resizer import OpenCVResizer
from .pipeline import ClientHintsPipeline


class HintsOptimizerComponentFactory:
    """Фабрика компонентов Hints Optimizer."""

    @staticmethod
    def create_resizer() -> IImageResizer:
        logger.debug("[HintsOptimizer] Создание ресайзера")
        return OpenCVResizer()

    @staticmethod
    def create_dispatcher(
        resizer: Optional[IImageResizer] = None,
        extra_codecs: Optional[Dict[str, IImageCodec]] = None
    ) -> EncodeDispatcher:
        """
        Создаёт EncodeDispatcher.

        Args:
            resizer: Ресайзер (опционально)
            extra_codecs: Дополнительные кодеки по mime; встроенные четыре
                формата остаются доступны

        Returns:
            EncodeDispatcher
        """
        logger.debug("[HintsOptimizer] Создание dispatcher")
        if resizer is None:
            resizer = HintsOptimizerComponentFactory.create_resizer()
        return EncodeDispatcher(resizer=resizer, codecs=extra_codecs)

    @staticmethod
    def create_pipeline(
        resizer: Optional[IImageResizer] = None,
        extra_codecs: Optional[Dict[str, IImageCodec]] = None
    ) -> ClientHintsPipeline:
        """Создаёт ClientHintsPipeline с указанными или дефолтными компонентами."""
        logger.debug("[HintsOptimizer] Создание пайплайна")
        return ClientHintsPipeline(
            deriver=OptionsDeriver(),
            dispatcher=HintsOptimizerComponentFactory.create_dispatcher(resizer, extra_codecs)
        )

    @staticmethod
    def get_info() -> Dict[str, Any]:
        """Информация о доступных форматах и компонентах."""
        return {
            "formats": sorted(default_codecs()),
            "components": {
                "deriver": "OptionsDeriver",
                "resizer": "OpenCVResizer",
                "dispatcher": "EncodeDispatcher",
                "pipeline": "ClientHintsPipeline"
            },
            "dependencies": ["OpenCV", "Pillow", "NumPy"]
        }
