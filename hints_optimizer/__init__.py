"""
Hints Optimizer: параметры кодирования изображений из Client Hints.

1. OptionsDeriver: DPR, Save-Data, Viewport-Width, Width, Downlink, Accept -> Options
2. Options.optimize(): итоговые width и quality
3. EncodeDispatcher: ресайз + JPEG/PNG/WEBP/GIF
"""

from .domain import (
    Options,
    build_options,
    EncodeResult,
    HintsOptimizerError,
    UnsupportedFormatError,
    ImageEncodingError,
    ContractValidationError,
)
from .deriver import OptionsDeriver, derive_options, set_from_request
from .encoder import EncodeDispatcher, encode
from .application import HintsOptimizerComponentFactory, ClientHintsPipeline

__all__ = [
    "Options",
    "build_options",
    "EncodeResult",
    "HintsOptimizerError",
    "UnsupportedFormatError",
    "ImageEncodingError",
    "ContractValidationError",
    "OptionsDeriver",
    "derive_options",
    "set_from_request",
    "EncodeDispatcher",
    "encode",
    "HintsOptimizerComponentFactory",
    "ClientHintsPipeline",
]
