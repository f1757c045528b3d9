"""
Encode Dispatcher: ресайз + выбор кодека по mime.

Шаги encode():
1. options.optimize() (идемпотентно)
2. Кодек по options.mime, неизвестный mime -> UnsupportedFormatError
3. width > 0 -> ресайз до (trunc(width * dpr), height)
4. Кодирование в sink

ВАЖНО: в шаге 3 ширина умножается на dpr ещё раз, хотя optimize() уже
перевёл её в физические пиксели. width=100, dpr=2 -> optimize: 200 -> ресайз: 400.
"""

from typing import BinaryIO, Dict, Optional

import numpy as np
from loguru import logger
from pydantic import ValidationError

from ..domain.interfaces import IImageCodec, IImageResizer
from ..domain.exceptions import UnsupportedFormatError
from ..domain.contracts import EncodeResult, ContractValidationError
from ..domain.options import Options, truncate_int64
from .codecs import default_codecs
from .resizer import OpenCVResizer


class EncodeDispatcher:
    """
    Кодирует изображение согласно Options.

    ЦКП: байты изображения в sink + EncodeResult.
    """

    def __init__(
        self,
        resizer: Optional[IImageResizer] = None,
        codecs: Optional[Dict[str, IImageCodec]] = None
    ):
        self.resizer = resizer or OpenCVResizer()
        self.codecs = default_codecs()
        if codecs:
            self.codecs.update(codecs)
        logger.debug(f"[EncodeDispatcher] Инициализирован (форматы: {', '.join(self.codecs)})")

    def encode(self, sink: BinaryIO, image: np.ndarray, options: Options) -> EncodeResult:
        """
        Кодирует изображение в sink.

        Args:
            sink: Куда писать байты (file-like, режим wb)
            image: np.ndarray (BGR или Grayscale)
            options: Options запроса, изменяется на месте (optimize)

        Returns:
            EncodeResult

        Raises:
            UnsupportedFormatError: mime не поддерживается, в sink ничего не записано
            ImageEncodingError: кодек не смог закодировать изображение
        """
        options.optimize()

        codec = self.codecs.get(options.mime)
        if codec is None:
            logger.error(f"[EncodeDispatcher] Формат не поддерживается: {options.mime!r}")
            raise UnsupportedFormatError(options.mime, component="EncodeDispatcher")

        if options.width > 0:
            image = self.resizer.resize(
                truncate_int64(options.width * options.dpr),
                options.height,
                image,
                options.interpolation
            )

        written = codec.encode(sink, image, options.quality)

        h, w = image.shape[:2]
        try:
            result = EncodeResult(
                mime=options.mime,
                quality=options.quality,
                width=w,
                height=h,
                bytes_written=written
            )
        except ValidationError as e:
            raise ContractValidationError("EncodeDispatcher", "EncodeResult", e.errors())

        logger.debug(
            f"[EncodeDispatcher] {result.mime}: {w}x{h}, "
            f"качество {result.quality}, {result.bytes_written} байт"
        )
        return result


def encode(sink: BinaryIO, image: np.ndarray, options: Options) -> EncodeResult:
    """Кодирует изображение встроенными кодеками (см. EncodeDispatcher.encode)."""
    return EncodeDispatcher().encode(sink, image, options)
