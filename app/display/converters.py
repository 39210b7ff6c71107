"""Optional per-field display conversion.

Consumers may register a converter for a field type (for example turning a
raw script hash into an address). Converted values are for display only and
are never written back into the transaction store.
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Union

logger = logging.getLogger(__name__)

Converter = Callable[[str], Union[str, None, Awaitable[Union[str, None]]]]

_converters: dict[str, Converter] = {}


def register_converter(field_type: str, converter: Converter | None) -> None:
    if converter is None:
        _converters.pop(field_type, None)
    else:
        _converters[field_type] = converter


def clear_converters() -> None:
    _converters.clear()


async def convert_value(field_type: str, value: str) -> str:
    converter = _converters.get(field_type)
    if converter is None:
        return value

    converted = converter(value)
    if inspect.isawaitable(converted):
        converted = await converted

    if not converted:
        logger.debug("Converter for %s returned nothing, keeping raw value", field_type)
        return value
    return converted
