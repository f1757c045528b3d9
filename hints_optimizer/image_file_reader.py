"""
Image File Reader.

Чтение и декодирование изображений из файлов.
Декодирование делегируется cv2.imdecode.
"""

from pathlib import Path
from typing import Tuple

import cv2
import numpy as np
from loguru import logger

from .domain.exceptions import ImageNotFoundError, ImageReadError


class ImageFileReader:
    """
    Читает изображение из файла и декодирует в numpy array.

    ЦКП: декодированное изображение (numpy.ndarray) и исходные байты.
    """

    @staticmethod
    def read(image_path: Path) -> Tuple[np.ndarray, bytes]:
        """
        Читает файл изображения и декодирует в numpy array.

        Args:
            image_path: Путь к файлу изображения

        Returns:
            Кортеж: (decoded_image, raw_bytes)
            - decoded_image: numpy.ndarray (BGR формат)
            - raw_bytes: исходные байты файла

        Raises:
            ImageNotFoundError: Если файл не найден
            ImageReadError: Если не удалось декодировать изображение
        """
        if not image_path.exists():
            raise ImageNotFoundError(f"Image not found: {image_path}", component="ImageFileReader")

        raw_bytes = image_path.read_bytes()

        # Через numpy, чтобы работали пути с Unicode
        nparr = np.frombuffer(raw_bytes, np.uint8)
        image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if image is None:
            raise ImageReadError(f"Failed to decode image: {image_path}", component="ImageFileReader")

        logger.debug(f"[ImageFileReader] Изображение прочитано: {image_path.name}, размер: {image.shape}")

        return image, raw_bytes
