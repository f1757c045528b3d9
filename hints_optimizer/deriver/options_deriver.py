"""
Options Deriver: Client Hints -> Options.

Приоритет источников для каждого поля:
  1. Заголовок запроса (DPR, Save-Data, Viewport-Width, Width, Downlink)
  2. Query/form параметр (dpr, save-data, viewport-width, width, downlink)
  3. Значение по умолчанию

Нераспознанные значения не считаются ошибкой: просто пробуется
следующий источник. Кривые hints никогда не прерывают запрос.
"""

from typing import Any, Mapping, Optional

from loguru import logger

from config.settings import (
    DEFAULT_MIME, DEFAULT_DPR, MIME_WEBP, WEBP_ACCEPT_TOKEN, SAVE_DATA_ON,
    HEADER_ACCEPT, HEADER_DPR, HEADER_SAVE_DATA, HEADER_VIEWPORT_WIDTH,
    HEADER_WIDTH, HEADER_DOWNLINK,
    PARAM_DPR, PARAM_SAVE_DATA, PARAM_VIEWPORT_WIDTH, PARAM_WIDTH, PARAM_DOWNLINK
)
from ..domain.options import Options
from .signal_parser import (
    SignalAttempt, first_parsed, first_value,
    parse_float, parse_int, parse_flag
)


class OptionsDeriver:
    """
    Собирает Options из сырых client hints.

    ЦКП: Options с заполненными mime, dpr, save_data, viewport_width,
    width и downlink. optimize() здесь не вызывается.
    """

    def derive(
        self,
        headers: Mapping[str, Any],
        params: Optional[Mapping[str, Any]] = None,
        base: Optional[Options] = None
    ) -> Options:
        """
        Создаёт новый Options на основе base (или дефолтов) и hints.

        Args:
            headers: Заголовки запроса (регистр ключей не важен)
            params: Query/form параметры
            base: Значения, выставленные вызывающим (mime, width, quality, ...)

        Returns:
            Новый Options; base не изменяется
        """
        options = base.model_copy() if base is not None else Options(mime=DEFAULT_MIME)
        return self.apply(options, headers, params)

    def apply(
        self,
        options: Options,
        headers: Mapping[str, Any],
        params: Optional[Mapping[str, Any]] = None
    ) -> Options:
        """Заполняет options на месте и возвращает его же."""

        def header(name: str) -> Optional[str]:
            return first_value(headers, name, case_insensitive=True)

        def param(name: str) -> Optional[str]:
            return first_value(params, name)

        # Формат
        accept = header(HEADER_ACCEPT)
        if accept and WEBP_ACCEPT_TOKEN in accept:
            options.mime = MIME_WEBP

        options.dpr = first_parsed(
            [
                SignalAttempt(f"header:{HEADER_DPR}", header(HEADER_DPR), parse_float),
                SignalAttempt(f"param:{PARAM_DPR}", param(PARAM_DPR), parse_float),
            ],
            default=DEFAULT_DPR,
        )

        save_data_on = parse_flag(SAVE_DATA_ON)
        options.save_data = first_parsed(
            [
                SignalAttempt(f"header:{HEADER_SAVE_DATA}", header(HEADER_SAVE_DATA), save_data_on),
                SignalAttempt(f"param:{PARAM_SAVE_DATA}", param(PARAM_SAVE_DATA), save_data_on),
            ],
            default=False,
        )

        options.viewport_width = first_parsed(
            [
                SignalAttempt(f"header:{HEADER_VIEWPORT_WIDTH}", header(HEADER_VIEWPORT_WIDTH), parse_float),
                SignalAttempt(f"param:{PARAM_VIEWPORT_WIDTH}", param(PARAM_VIEWPORT_WIDTH), parse_float),
            ],
            default=0.0,
        )

        # Ширина меняется только если пришло положительное значение
        width = first_parsed(
            [
                SignalAttempt(f"header:{HEADER_WIDTH}", header(HEADER_WIDTH), parse_int),
                SignalAttempt(f"param:{PARAM_WIDTH}", param(PARAM_WIDTH), parse_int),
            ],
            default=0,
        )
        if width > 0:
            options.width = width

        options.downlink = first_parsed(
            [
                SignalAttempt(f"header:{HEADER_DOWNLINK}", header(HEADER_DOWNLINK), parse_float),
                SignalAttempt(f"param:{PARAM_DOWNLINK}", param(PARAM_DOWNLINK), parse_float),
            ],
            default=0.0,
        )

        logger.debug(
            f"[OptionsDeriver] mime={options.mime}, dpr={options.dpr}, "
            f"save_data={options.save_data}, viewport_width={options.viewport_width}, "
            f"width={options.width}, downlink={options.downlink}"
        )

        return options


def derive_options(
    headers: Mapping[str, Any],
    params: Optional[Mapping[str, Any]] = None,
    base: Optional[Options] = None
) -> Options:
    """Client hints -> Options (см. OptionsDeriver.derive)."""
    return OptionsDeriver().derive(headers, params, base)


def set_from_request(
    options: Options,
    headers: Mapping[str, Any],
    params: Optional[Mapping[str, Any]] = None
) -> Options:
    """Заполняет переданный options из запроса на месте (см. OptionsDeriver.apply)."""
    return OptionsDeriver().apply(options, headers, params)
