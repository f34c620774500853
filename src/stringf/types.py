## stringf — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable, Literal, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class TextHunk:
    text: str


@dataclass
class Placeholder:
    marker_char: str
    source: str
    left_align: bool = False
    min_width: int | None = None
    max_width: int | None = None
    argument: str | None = None
    escape: bool = False
    # Filled in by the replacer stage.
    replacement: str | None = None
    passthrough: bool = False

    def __repr__(self):
        return f"<Placeholder {self.source!r} -> {self.replacement!r}>"


Hunk = TextHunk | Placeholder


# Conversions are normalized into one of these two shapes when a table is built.
@dataclass(frozen=True)
class Fixed:
    text: str

@dataclass(frozen=True)
class Computable:
    fn: Callable[..., Any]
    # Also hand the function keyword metadata about the placeholder being replaced.
    context: bool = False

    def __call__(self, *args, **context):
        return self.fn(*args, **context) if self.context else self.fn(*args)


Conversion = Fixed | Computable
ConversionTable = Mapping[str, Conversion]

UnknownPolicy = Literal['fail', 'literal']


# Stage signatures; each built-in strategy and any user-supplied one follows these.
Tokenizer = Callable[[str, str], list[Hunk]]
InputProcessor = Callable[[tuple], Any]
Replacer = Callable[[list[Hunk], Any, ConversionTable, UnknownPolicy], None]
HunkFormatter = Callable[[Placeholder], str]


def placeholders(hunks: list[Hunk]):
    return (h for h in hunks if isinstance(h, Placeholder))
