## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Mapping

from .types import Hunk, Fixed, Computable, ConversionTable, UnknownPolicy, placeholders
from .errors import InputShapeError, UnknownConversionError, MissingNamedInputError


def _resolve(hunks: list[Hunk], table: ConversionTable, unknown: UnknownPolicy):
    """Yield `(placeholder, conversion)` pairs left to replace, settling escapes and unknown codes."""
    for hunk in placeholders(hunks):
        if hunk.escape:
            hunk.replacement = hunk.marker_char
            continue
        if (conversion := table.get(hunk.marker_char)) is not None:
            yield hunk, conversion
        elif unknown == 'literal':
            hunk.passthrough = True
        else:
            raise UnknownConversionError(f"Unknown conversion `{hunk.source}` in format string.",
                                         conversion=hunk.marker_char, source=hunk.source)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def positional_replace(hunks: list[Hunk], values: tuple, table: ConversionTable, unknown: UnknownPolicy = 'fail') -> None:
    cursor = 0
    for hunk, conversion in _resolve(hunks, table, unknown):
        match conversion:
            case Fixed(text):
                hunk.replacement = text
            case Computable():
                if cursor >= len(values):
                    raise InputShapeError(f"Not enough values for `{hunk.source}`, only {len(values)} given.")
                hunk.replacement = _as_text(conversion(values[cursor], hunk.argument, placeholder=hunk, index=cursor, values=values))
                cursor += 1


def named_replace(hunks: list[Hunk], mapping: Mapping, table: ConversionTable, unknown: UnknownPolicy = 'fail') -> None:
    for hunk, conversion in _resolve(hunks, table, unknown):
        match conversion:
            case Fixed(text):
                hunk.replacement = text
            case Computable():
                if (key := hunk.argument) is None or key not in mapping:
                    raise MissingNamedInputError(f"No input named {key!r} for `{hunk.source}`.", key=key)
                hunk.replacement = _as_text(conversion(mapping[key], key, placeholder=hunk, mapping=mapping))


def method_replace(hunks: list[Hunk], receiver: Any, table: ConversionTable, unknown: UnknownPolicy = 'fail') -> None:
    """Fixed conversions name an attribute of the receiver; computable ones get the receiver itself."""
    for hunk, conversion in _resolve(hunks, table, unknown):
        match conversion:
            case Fixed(name):
                value = getattr(receiver, name)
                if callable(value):
                    value = value() if hunk.argument is None else value(hunk.argument)
                hunk.replacement = _as_text(value)
            case Computable():
                hunk.replacement = _as_text(conversion(receiver, hunk.argument, placeholder=hunk))


def argument_replace(hunks: list[Hunk], _: None, table: ConversionTable, unknown: UnknownPolicy = 'fail') -> None:
    # No input at all: computable conversions see the text between braces, and the placeholder on request.
    for hunk, conversion in _resolve(hunks, table, unknown):
        match conversion:
            case Fixed(text):
                hunk.replacement = text
            case Computable():
                hunk.replacement = _as_text(conversion(hunk.argument or '', placeholder=hunk))


REPLACERS = {
    'positional': positional_replace,
    'named': named_replace,
    'method': method_replace,
    'argument': argument_replace,
}

# The input processor each replacer expects when none is configured explicitly.
DEFAULT_INPUT_PROCESSORS = {
    'positional': 'pass-through',
    'named': 'require-named',
    'method': 'require-single',
    'argument': 'forbid',
}
