import pytest
import numpy as np

from config.settings import MAX_RESIZE_DIMENSION
from hints_optimizer.encoder.resizer import OpenCVResizer
from hints_optimizer.domain.exceptions import ImageResizeError


@pytest.fixture
def resizer():
    return OpenCVResizer()


@pytest.fixture
def bgr_image():
    """Fixture: BGR изображение 50x40 (ширина x высота)."""
    image = np.zeros((40, 50, 3), dtype=np.uint8)
    image[:, :, 2] = 200
    return image


def test_width_only_keeps_aspect(resizer):
    """Тест: 50x40 -> ширина 400, высота trunc(0.7 + 40 / 0.125) = 320."""
    assert resizer.compute_target_size(400, 0, 50, 40) == (400, 320)


def test_height_only_keeps_aspect(resizer):
    assert resizer.compute_target_size(0, 20, 50, 40) == (25, 20)


def test_aspect_rounding_offset(resizer):
    """Тест: 33x10 -> ширина 10, высота 0.7 + 3.03 -> 3."""
    assert resizer.compute_target_size(10, 0, 33, 10) == (10, 3)


def test_both_zero_keeps_original(resizer):
    assert resizer.compute_target_size(0, 0, 50, 40) == (50, 40)


def test_both_given(resizer):
    assert resizer.compute_target_size(30, 90, 50, 40) == (30, 90)


def test_resize_changes_shape(resizer, bgr_image):
    resized = resizer.resize(400, 0, bgr_image, "bicubic")
    assert resized.shape == (320, 400, 3)


@pytest.mark.parametrize("interpolation", ["bicubic", "bilinear", "nearest", "lanczos", "area"])
def test_all_interpolations(resizer, bgr_image, interpolation):
    resized = resizer.resize(25, 0, bgr_image, interpolation)
    assert resized.shape == (20, 25, 3)


def test_same_size_returns_input(resizer, bgr_image):
    assert resizer.resize(50, 40, bgr_image, "bicubic") is bgr_image


def test_grayscale(resizer):
    image = np.full((40, 50), 128, dtype=np.uint8)
    assert resizer.resize(100, 0, image, "bicubic").shape == (80, 100)


def test_zero_target_raises(resizer):
    """Тест: очень широкая картинка, ширина 1 -> высота 0 -> ошибка."""
    image = np.zeros((2, 100, 3), dtype=np.uint8)
    with pytest.raises(ImageResizeError):
        resizer.resize(1, 0, image, "bicubic")


def test_oversized_target_raises(resizer, bgr_image):
    """Тест: сторона больше MAX_RESIZE_DIMENSION -> ошибка до вызова cv2."""
    with pytest.raises(ImageResizeError, match="exceeds"):
        resizer.resize(MAX_RESIZE_DIMENSION + 1, 0, bgr_image, "bicubic")


def test_max_dimension_allowed_for_grayscale(resizer):
    image = np.zeros((1, 2), dtype=np.uint8)
    assert resizer.resize(MAX_RESIZE_DIMENSION, 1, image, "nearest").shape == (1, MAX_RESIZE_DIMENSION)
