import io

import pytest
import numpy as np

from hints_optimizer.domain.exceptions import UnsupportedFormatError, ImageResizeError
from hints_optimizer.domain.interfaces import IImageCodec, IImageResizer
from hints_optimizer.domain.options import Options, INT64_MIN
from hints_optimizer.encoder.dispatcher import EncodeDispatcher, encode


class RecordingResizer(IImageResizer):
    """Ресайзер-заглушка: запоминает аргументы и возвращает картинку нужного размера."""

    def __init__(self):
        self.calls = []

    def resize(self, width, height, image, interpolation):
        self.calls.append((width, height, interpolation))
        return np.zeros((height or 10, width or 10, 3), dtype=np.uint8)


class RecordingCodec(IImageCodec):
    mime = "image/jpeg"

    def __init__(self):
        self.qualities = []

    def encode(self, sink, image, quality):
        self.qualities.append(quality)
        sink.write(b"fake")
        return 4


class FailingCodec(IImageCodec):
    mime = "image/jpeg"

    def encode(self, sink, image, quality):
        raise OSError("disk full")


@pytest.fixture
def bgr_image():
    return np.full((40, 50, 3), 90, dtype=np.uint8)


@pytest.fixture
def resizer():
    return RecordingResizer()


@pytest.fixture
def codec():
    return RecordingCodec()


@pytest.fixture
def dispatcher(resizer, codec):
    return EncodeDispatcher(resizer=resizer, codecs={"image/jpeg": codec})


@pytest.mark.parametrize("mime", ["image/bmp", "", "image/JPEG"])
def test_unsupported_mime(dispatcher, bgr_image, mime):
    """Тест: неизвестный mime -> UnsupportedFormatError, в sink пусто."""
    sink = io.BytesIO()

    with pytest.raises(UnsupportedFormatError) as exc:
        dispatcher.encode(sink, bgr_image, Options(mime=mime))

    assert exc.value.mime == mime
    assert f"Format {mime} is not supported" in str(exc.value)
    assert sink.getvalue() == b""


def test_unsupported_mime_does_not_resize(dispatcher, resizer, bgr_image):
    with pytest.raises(UnsupportedFormatError):
        dispatcher.encode(io.BytesIO(), bgr_image, Options(mime="image/bmp", width=100, dpr=2.0))
    assert resizer.calls == []


def test_dpr_applied_twice_before_resize(dispatcher, resizer, bgr_image):
    """Тест: width=100, dpr=2 -> optimize: 200 -> ресайз до 400."""
    options = Options(mime="image/jpeg", width=100, dpr=2.0)

    dispatcher.encode(io.BytesIO(), bgr_image, options)

    assert options.width == 200
    assert resizer.calls == [(400, 0, "bicubic")]


def test_height_and_interpolation_passed(dispatcher, resizer, bgr_image):
    options = Options(mime="image/jpeg", width=30, height=25, dpr=1.0, interpolation="lanczos")
    dispatcher.encode(io.BytesIO(), bgr_image, options)
    assert resizer.calls == [(30, 25, "lanczos")]


def test_no_width_no_resize(dispatcher, resizer, bgr_image):
    result = dispatcher.encode(io.BytesIO(), bgr_image, Options(mime="image/jpeg", height=20))
    assert resizer.calls == []
    assert (result.width, result.height) == (50, 40)


def test_options_optimized_in_place(dispatcher, codec, bgr_image):
    """Тест: encode() вызывает optimize() на переданных Options."""
    options = Options(mime="image/jpeg", dpr=2.0, save_data=True)

    result = dispatcher.encode(io.BytesIO(), bgr_image, options)

    assert options.optimized is True
    assert options.quality == 30
    assert codec.qualities == [30]
    assert result.quality == 30


def test_repeated_encode_does_not_rescale(dispatcher, resizer, bgr_image):
    """Тест: второй encode() с теми же Options не умножает ширину ещё раз."""
    options = Options(mime="image/jpeg", width=100, dpr=2.0)

    dispatcher.encode(io.BytesIO(), bgr_image, options)
    dispatcher.encode(io.BytesIO(), bgr_image, options)

    assert options.width == 200
    assert resizer.calls == [(400, 0, "bicubic"), (400, 0, "bicubic")]


def test_explicit_quality_passed_to_codec(dispatcher, codec, bgr_image):
    dispatcher.encode(io.BytesIO(), bgr_image, Options(mime="image/jpeg", quality=90, dpr=3.0))
    assert codec.qualities == [90]


def test_result_describes_output(dispatcher, bgr_image):
    sink = io.BytesIO()
    result = dispatcher.encode(sink, bgr_image, Options(mime="image/jpeg", width=20, dpr=1.0))

    assert result.mime == "image/jpeg"
    assert result.width == 20
    assert result.height == 10
    assert result.bytes_written == 4
    assert sink.getvalue() == b"fake"


def test_codec_error_propagates_unwrapped(resizer, bgr_image):
    """Тест: ошибка кодека не глотается и не оборачивается."""
    dispatcher = EncodeDispatcher(resizer=resizer, codecs={"image/jpeg": FailingCodec()})

    with pytest.raises(OSError, match="disk full"):
        dispatcher.encode(io.BytesIO(), bgr_image, Options(mime="image/jpeg"))


def test_builtin_codecs_kept_with_extra(resizer):
    dispatcher = EncodeDispatcher(resizer=resizer, codecs={"image/x-test": RecordingCodec()})
    assert {"image/jpeg", "image/png", "image/webp", "image/gif", "image/x-test"} <= set(dispatcher.codecs)


@pytest.mark.parametrize("mime, magic", [
    ("image/jpeg", b"\xff\xd8\xff"),
    ("image/png", b"\x89PNG"),
    ("image/webp", b"RIFF"),
    ("image/gif", b"GIF8"),
])
def test_encode_function_with_real_codecs(bgr_image, mime, magic):
    """Тест: encode() с реальными кодеками и ресайзом."""
    sink = io.BytesIO()
    options = Options(mime=mime, width=50, dpr=2.0)

    result = encode(sink, bgr_image, options)

    assert sink.getvalue().startswith(magic)
    # 50 * 2 = 100 после optimize, * 2 = 200 при ресайзе
    assert result.width == 200
    assert result.height == 160
    assert result.quality == 40
    assert result.bytes_written == len(sink.getvalue())


def test_huge_dpr_encodes_with_clamped_quality(bgr_image):
    """Тест: dpr=1e308 без ширины -> ресайза нет, кодек клампит качество."""
    sink = io.BytesIO()
    options = Options(mime="image/jpeg", dpr=1e308)

    result = encode(sink, bgr_image, options)

    assert options.quality == INT64_MIN
    assert result.quality == INT64_MIN
    assert (result.width, result.height) == (50, 40)
    assert sink.getvalue().startswith(b"\xff\xd8\xff")


def test_huge_dpr_with_width_rejected_by_resizer(bgr_image):
    """Тест: width + dpr=1e308 -> ImageResizeError вместо переполнения."""
    sink = io.BytesIO()

    with pytest.raises(ImageResizeError):
        encode(sink, bgr_image, Options(mime="image/jpeg", width=100, dpr=1e308))

    assert sink.getvalue() == b""
