## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Mapping

from .errors import InputShapeError


def return_input(args: tuple) -> tuple:
    return args

def require_named_input(args: tuple) -> Mapping:
    if len(args) != 1 or not isinstance(args[0], Mapping):
        raise InputShapeError(f"Named formatting takes exactly one mapping, got {_describe(args)}.")
    return args[0]

def require_single_input(args: tuple) -> Any:
    if len(args) != 1:
        raise InputShapeError(f"Formatting takes exactly one input, got {len(args)}.")
    return args[0]

def forbid_input(args: tuple) -> None:
    if args:
        raise InputShapeError(f"Formatting takes no input, got {len(args)}.")
    return None


def _describe(args: tuple) -> str:
    if len(args) == 1: return type(args[0]).__name__
    return f"{len(args)} arguments"


INPUT_PROCESSORS = {
    'pass-through': return_input,
    'require-named': require_named_input,
    'require-single': require_single_input,
    'forbid': forbid_input,
}
