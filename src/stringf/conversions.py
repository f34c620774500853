## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from types import MappingProxyType
from typing import Any, Mapping

from .types import Fixed, Computable, Conversion, ConversionTable
from .errors import ConfigurationError, ReservedConversionError


DEFAULT_CONVERSIONS: dict[str, Conversion] = {
    'n': Fixed('\n'),
    't': Fixed('\t'),
}

_MODIFIER_CHARS = '-.{}'


def check_marker(marker: Any) -> str:
    if not isinstance(marker, str) or len(marker) != 1 or marker.isspace():
        raise ConfigurationError(f"Marker must be a single non-whitespace character, got {marker!r}.")
    # These would be indistinguishable from the modifiers that follow a marker.
    if marker.isdigit() or marker in _MODIFIER_CHARS:
        raise ConfigurationError(f"Marker {marker!r} collides with placeholder modifiers.")
    return marker


def as_conversion(value: Any, *, key: str = '?') -> Conversion:
    """Normalize a caller-supplied string or callable into a tagged conversion."""
    if isinstance(value, (Fixed, Computable)):
        return value
    if isinstance(value, str):
        return Fixed(value)
    if callable(value):
        return Computable(value)
    raise ConfigurationError(f"Conversion `{key}` must be a string or a callable, got {type(value).__name__}.")


def build_conversion_table(conversions: Mapping[str, Any] | None, marker: str = '%',
                           *, defaults: bool = True) -> ConversionTable:
    marker = check_marker(marker)
    table: dict[str, Conversion] = dict(DEFAULT_CONVERSIONS) if defaults else {}

    for key, value in (conversions or {}).items():
        if key == marker:
            raise ReservedConversionError(f"Conversion `{marker}` is reserved for the literal marker.")
        if not isinstance(key, str) or len(key) != 1 or key.isspace():
            raise ConfigurationError(f"Conversion keys must be single non-whitespace characters, got {key!r}.")
        if key.isdigit() or key in _MODIFIER_CHARS:
            raise ConfigurationError(f"Conversion `{key}` would be read as a placeholder modifier.")
        table[key] = as_conversion(value, key=key)

    table[marker] = Fixed(marker)
    return MappingProxyType(table)
