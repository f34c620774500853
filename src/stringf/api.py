## stringf — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable, Mapping

from .types import Fixed, Computable, TextHunk, Placeholder
from .errors import *
from .formatter import Formatter, FormatterConfig, new_formatter


def stringfactory(conversions: Mapping[str, Any], *, marker: str = '%', unknown: str = 'literal') -> Callable[[str], str]:
    """Return a `format` callable primed with `conversions`, where codes map straight to replacements."""
    formatter = Formatter(conversions=conversions, marker=marker, replacer='argument', unknown=unknown)
    return formatter.format


def stringf(format_string: str, conversions: Mapping[str, Any] | None = None, *, marker: str = '%') -> str:
    """Expand `format_string` using `conversions` directly; unknown codes are left in place."""
    return stringfactory(conversions or {}, marker=marker)(format_string)


_NAMED = Formatter(conversions={'s': lambda value, _: value}, replacer='named')

def named_stringf(format_string: str, mapping: Mapping[str, Any]) -> str:
    """Expand `%{key}s` placeholders from `mapping`."""
    return _NAMED.format(format_string, mapping)
