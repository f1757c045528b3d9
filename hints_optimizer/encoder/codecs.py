"""
Кодеки форматов: JPEG, PNG, WEBP, GIF.

JPEG и PNG кодируются через cv2.imencode, WEBP и GIF через Pillow.
Каждый кодек сначала кодирует в память и только потом пишет в sink:
при ошибке кодирования в sink не попадает ни одного байта.
"""

import io
from typing import BinaryIO, Dict

import cv2
import numpy as np
from loguru import logger
from PIL import Image

from config.settings import (
    MIME_JPEG, MIME_PNG, MIME_WEBP, MIME_GIF,
    CODEC_MIN_QUALITY, CODEC_MAX_QUALITY
)
from ..domain.interfaces import IImageCodec
from ..domain.exceptions import ImageEncodingError


def clamp_quality(quality: int, codec: str) -> int:
    """Приводит quality к диапазону библиотеки, Options при этом не меняется."""
    clamped = min(max(quality, CODEC_MIN_QUALITY), CODEC_MAX_QUALITY)
    if clamped != quality:
        logger.warning(f"[Codec:{codec}] quality {quality} вне [{CODEC_MIN_QUALITY}, {CODEC_MAX_QUALITY}] -> {clamped}")
    return clamped


def to_pil(image: np.ndarray) -> Image.Image:
    """BGR/BGRA/Grayscale numpy -> PIL Image (RGB/RGBA/L)."""
    if image.ndim == 2:
        return Image.fromarray(image)
    channels = image.shape[2]
    if channels == 4:
        return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA))
    if channels == 1:
        return Image.fromarray(image[:, :, 0])
    return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))


def _write(sink: BinaryIO, data: bytes) -> int:
    sink.write(data)
    return len(data)


class _OpenCVCodec(IImageCodec):
    """Кодирование через cv2.imencode."""

    extension = ""

    def _params(self, quality: int) -> list[int]:
        return []

    def encode(self, sink: BinaryIO, image: np.ndarray, quality: int) -> int:
        success, buffer = cv2.imencode(self.extension, image, self._params(quality))

        if not success or buffer is None:
            logger.error(f"[Codec:{self.extension}] Ошибка кодирования")
            raise ImageEncodingError(
                f"Failed to encode image to {self.mime}",
                component=type(self).__name__
            )

        written = _write(sink, buffer.tobytes())
        logger.debug(f"[Codec:{self.extension}] Закодировано: {written} байт")
        return written


class JpegCodec(_OpenCVCodec):
    mime = MIME_JPEG
    extension = ".jpg"

    def _params(self, quality: int) -> list[int]:
        return [int(cv2.IMWRITE_JPEG_QUALITY), clamp_quality(quality, "jpeg")]


class PngCodec(_OpenCVCodec):
    """PNG без потерь, quality игнорируется."""

    mime = MIME_PNG
    extension = ".png"


class WebpCodec(IImageCodec):
    """WEBP через Pillow, quality передаётся как float."""

    mime = MIME_WEBP

    def encode(self, sink: BinaryIO, image: np.ndarray, quality: int) -> int:
        buffer = io.BytesIO()
        to_pil(image).save(buffer, format="WEBP", quality=float(clamp_quality(quality, "webp")))
        written = _write(sink, buffer.getvalue())
        logger.debug(f"[Codec:webp] Закодировано: {written} байт, качество {quality}")
        return written


class GifCodec(IImageCodec):
    """GIF с настройками Pillow по умолчанию, quality игнорируется."""

    mime = MIME_GIF

    def encode(self, sink: BinaryIO, image: np.ndarray, quality: int) -> int:
        buffer = io.BytesIO()
        to_pil(image).save(buffer, format="GIF")
        written = _write(sink, buffer.getvalue())
        logger.debug(f"[Codec:gif] Закодировано: {written} байт")
        return written


def default_codecs() -> Dict[str, IImageCodec]:
    """Встроенные кодеки по mime."""
    return {codec.mime: codec for codec in (JpegCodec(), PngCodec(), WebpCodec(), GifCodec())}
