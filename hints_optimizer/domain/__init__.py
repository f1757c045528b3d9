"""Hints Optimizer Domain exports."""

from .interfaces import IImageResizer, IImageCodec
from .exceptions import (
    HintsOptimizerError,
    UnsupportedFormatError,
    ImageEncodingError,
    ImageResizeError,
    ImageReadError,
    ImageNotFoundError,
)
from .contracts import EncodeResult, ContractValidationError
from .options import Options, build_options

__all__ = [
    'IImageResizer',
    'IImageCodec',
    'HintsOptimizerError',
    'UnsupportedFormatError',
    'ImageEncodingError',
    'ImageResizeError',
    'ImageReadError',
    'ImageNotFoundError',
    'EncodeResult',
    'ContractValidationError',
    'Options',
    'build_options',
]
