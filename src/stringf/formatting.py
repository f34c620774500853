## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Hunk, TextHunk, Placeholder, HunkFormatter


def format_simply(hunk: Placeholder) -> str:
    """Apply alignment, minimum width (padding) and maximum width (truncation) to a replacement."""
    if hunk.passthrough:
        return hunk.source

    replacement = hunk.replacement
    length = len(replacement)
    min_width = length if hunk.min_width is None else hunk.min_width
    max_width = length if hunk.max_width is None else hunk.max_width

    if min_width < length < max_width:
        return replacement
    if length > max_width:
        return replacement[:max_width]

    padding = ' ' * (min_width - length)
    return replacement + padding if hunk.left_align else padding + replacement


def assemble(hunks: list[Hunk], hunk_formatter: HunkFormatter = format_simply) -> str:
    return ''.join(h.text if isinstance(h, TextHunk) else hunk_formatter(h) for h in hunks)


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


HUNK_FORMATTERS = {
    'simple': format_simply,
}
