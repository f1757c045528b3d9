"""Ресайз и кодирование изображений."""

from .codecs import JpegCodec, PngCodec, WebpCodec, GifCodec, default_codecs
from .dispatcher import EncodeDispatcher, encode
from .resizer import OpenCVResizer

__all__ = [
    "JpegCodec",
    "PngCodec",
    "WebpCodec",
    "GifCodec",
    "default_codecs",
    "EncodeDispatcher",
    "encode",
    "OpenCVResizer",
]
