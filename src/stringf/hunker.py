## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import functools

import lark
from .types import Hunk, TextHunk, Placeholder
from .errors import MalformedFormatError


# Modifiers after the marker: alignment, minimum width, then `.` and maximum width.
_MODIFIERS = re.compile(r'(-)?([0-9]*)(?:\.([0-9]*))?')


def _match_braces(text: str) -> dict[int, int]:
    """Map the index of each balanced `{` to the index just past its closing `}`."""
    closes, opened = {}, []
    for i, ch in enumerate(text):
        if ch == '{':
            opened.append(i)
        elif ch == '}' and opened:
            closes[opened.pop()] = i + 1
    return closes


def _read_placeholder(text: str, start: int, marker: str, closes: dict[int, int]) -> Placeholder | None:
    align, min_width, max_width = (m := _MODIFIERS.match(text, start + 1)).groups()
    pos, argument = m.end(), None

    if pos < len(text) and text[pos] == '{':
        if (end := closes.get(pos)) is None: return None
        argument, pos = text[pos+1:end-1], end

    if pos >= len(text) or text[pos].isspace(): return None
    return Placeholder(
        marker_char=text[pos], source=text[start:pos+1], left_align=align is not None,
        min_width=int(min_width) if min_width else None,
        max_width=int(max_width) if max_width else None,
        argument=argument, escape=text[pos] == marker)


def hunk_format(format_string: str, marker: str = '%') -> list[Hunk]:
    """Split the format string into text and placeholder hunks; malformed placeholders stay as text."""
    hunks, pending, pos = [], [], 0
    closes = _match_braces(format_string)

    def _flush():
        if text := ''.join(pending): hunks.append(TextHunk(text))
        pending.clear()

    while (found := format_string.find(marker, pos)) != -1:
        if (hunk := _read_placeholder(format_string, found, marker, closes)) is None:
            pending.append(format_string[pos:found+1])
            pos = found + 1
            continue
        pending.append(format_string[pos:found])
        _flush()
        hunks.append(hunk)
        pos = found + len(hunk.source)

    pending.append(format_string[pos:])
    _flush()
    return hunks


GRAMMAR = r"""start: _hunk*
_hunk: literal | placeholder
literal: TEXT
placeholder: MARKER ALIGN? WIDTH? precision? argument? CONVERSION
precision: DOT WIDTH?
argument: LBRACE _nested* RBRACE
_nested: ARG_TEXT | LBRACE _nested* RBRACE

// TOKENS
TEXT: /[^@MARKER@]+/
MARKER: "@MARKER@"
ALIGN.2: "-"
WIDTH.2: /[0-9]+/
DOT.2: "."
LBRACE.2: "{"
RBRACE.2: "}"
ARG_TEXT: /[^{}]+/
CONVERSION: /\S/
"""


def _grammar_char(ch: str) -> str:
    # Lark unescapes grammar literals itself; `\uXXXX` survives that for anything but a backslash.
    if ch == '\\': return '\\\\'
    return f'\\u{ord(ch):04x}' if ord(ch) <= 0xffff else f'\\U{ord(ch):08x}'


@functools.lru_cache(maxsize=None)
def _strict_parser(marker: str) -> lark.Lark:
    grammar = GRAMMAR.replace('@MARKER@', _grammar_char(marker))
    return lark.Lark(grammar, start='start', parser='lalr', lexer='contextual', keep_all_tokens=True)


def _placeholder_from_tree(tree: lark.Tree, text: str, marker: str) -> Placeholder:
    first = last = None
    left_align, min_width, max_width, argument = False, None, None, None

    for child in tree.children:
        if isinstance(child, lark.Token):
            match child.type:
                case 'MARKER': first = child
                case 'ALIGN': left_align = True
                case 'WIDTH': min_width = int(child.value)
                case 'CONVERSION': last = child
        elif child.data == 'precision':
            digits = [t for t in child.children if t.type == 'WIDTH']
            max_width = int(digits[0].value) if digits else None
        elif child.data == 'argument':
            # Outermost braces are the first and last tokens, nested ones sit in between.
            argument = text[child.children[0].end_pos:child.children[-1].start_pos]

    return Placeholder(
        marker_char=last.value, source=text[first.start_pos:last.end_pos], left_align=left_align,
        min_width=min_width, max_width=max_width, argument=argument, escape=last.value == marker)


def hunk_format_strict(format_string: str, marker: str = '%') -> list[Hunk]:
    """Same language as `hunk_format`, but a marker that starts no valid placeholder is an error."""
    try:
        tree = _strict_parser(marker).parse(format_string)
    except lark.exceptions.UnexpectedInput as exc:
        def attr(k): return getattr(exc, k, None)
        position = attr('pos_in_stream')
        if position is None or position < 0:
            position = len(format_string)
        token = getattr(token, 'value', '') if (token := attr('token')) is not None else format_string[position:position+1]
        raise MalformedFormatError(f"Malformed placeholder at position {position} of {format_string!r}.",
                                   position=position, token=token) from None

    hunks = []
    for node in tree.children:
        if node.data == 'literal':
            hunks.append(TextHunk(node.children[0].value))
        else:
            hunks.append(_placeholder_from_tree(node, format_string, marker))
    return hunks


TOKENIZERS = {
    'default': hunk_format,
    'strict': hunk_format_strict,
}
