"""
Интерфейсы и абстракции Hints Optimizer.

Определяет контракты внешних коллабораторов: ресайзер и кодеки форматов.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO

import numpy as np
import numpy.typing as npt


class IImageResizer(ABC):
    """Ресайзер изображения (внешний коллаборатор)."""

    @abstractmethod
    def resize(
        self,
        width: int,
        height: int,
        image: npt.NDArray[np.uint8],
        interpolation: str
    ) -> npt.NDArray[np.uint8]:
        """
        Масштабирует изображение.

        Args:
            width: целевая ширина, 0 = по пропорциям
            height: целевая высота, 0 = по пропорциям
            image: np.ndarray (BGR или Grayscale)
            interpolation: имя алгоритма (bicubic, bilinear, ...)
        """
        pass


class IImageCodec(ABC):
    """Кодек одного формата (внешний коллаборатор)."""

    mime: str = ""

    @abstractmethod
    def encode(self, sink: BinaryIO, image: npt.NDArray[np.uint8], quality: int) -> int:
        """
        Кодирует изображение и пишет байты в sink.

        Returns:
            Количество записанных байт
        """
        pass
