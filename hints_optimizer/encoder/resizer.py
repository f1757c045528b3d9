"""
Ресайзер на OpenCV.

Если одна из сторон 0, она вычисляется по пропорциям исходника:
new = trunc(0.7 + old / scale). Обе стороны 0 - изображение не меняется.
"""

import cv2
import numpy as np
from loguru import logger

from config.settings import ASPECT_ROUNDING_OFFSET, MAX_RESIZE_DIMENSION
from ..domain.interfaces import IImageResizer
from ..domain.exceptions import ImageResizeError

_CV2_INTERPOLATIONS = {
    "bicubic": cv2.INTER_CUBIC,
    "bilinear": cv2.INTER_LINEAR,
    "nearest": cv2.INTER_NEAREST,
    "lanczos": cv2.INTER_LANCZOS4,
    "area": cv2.INTER_AREA,
}


class OpenCVResizer(IImageResizer):
    """Ресайз через cv2.resize."""

    def compute_target_size(self, width: int, height: int, orig_w: int, orig_h: int) -> tuple[int, int]:
        """
        Вычисляет (width, height), дополняя нулевую сторону по пропорциям.

        Args:
            width: запрошенная ширина, 0 = по пропорциям
            height: запрошенная высота, 0 = по пропорциям
            orig_w: исходная ширина
            orig_h: исходная высота
        """
        if width == 0 and height == 0:
            return (orig_w, orig_h)

        if width == 0:
            scale_y = orig_h / height
            scale_x = scale_y
        else:
            scale_x = orig_w / width
            scale_y = orig_h / height if height > 0 else scale_x

        new_w = width if width > 0 else int(ASPECT_ROUNDING_OFFSET + orig_w / scale_x)
        new_h = height if height > 0 else int(ASPECT_ROUNDING_OFFSET + orig_h / scale_y)
        return (new_w, new_h)

    def resize(self, width: int, height: int, image: np.ndarray, interpolation: str = "bicubic") -> np.ndarray:
        """
        Масштабирует изображение до (width, height).

        Raises:
            ImageResizeError: если целевой размер получился нулевым или больше MAX_RESIZE_DIMENSION
        """
        h, w = image.shape[:2]
        target_w, target_h = self.compute_target_size(width, height, w, h)

        if (target_w, target_h) == (w, h):
            return image

        if target_w <= 0 or target_h <= 0:
            raise ImageResizeError(
                f"Invalid resize target {target_w}x{target_h} for {w}x{h} image",
                component="OpenCVResizer"
            )

        if max(target_w, target_h) > MAX_RESIZE_DIMENSION:
            raise ImageResizeError(
                f"Resize target {target_w}x{target_h} exceeds {MAX_RESIZE_DIMENSION}px",
                component="OpenCVResizer"
            )

        resized = cv2.resize(image, (target_w, target_h), interpolation=_CV2_INTERPOLATIONS[interpolation])
        logger.debug(f"[OpenCVResizer] {interpolation}: {w}x{h} -> {target_w}x{target_h}")
        return resized
