"""Вывод Options из client hints."""

from .options_deriver import OptionsDeriver, derive_options, set_from_request

__all__ = ["OptionsDeriver", "derive_options", "set_from_request"]
