## stringf — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from stringf.hunker import hunk_format
from stringf.replacers import positional_replace, named_replace, method_replace, argument_replace
from stringf.conversions import build_conversion_table
from stringf.types import placeholders, Computable
from stringf.errors import InputShapeError, UnknownConversionError, MissingNamedInputError


def _replacements(hunks):
    return [h.replacement for h in placeholders(hunks)]


def test_positional_consumes_values_in_order():
    table = build_conversion_table({'s': lambda value, arg: value, 'u': lambda value, arg: value.upper()})
    hunks = hunk_format("%s %u %s")
    positional_replace(hunks, ('a', 'b', 'c'), table)
    assert _replacements(hunks) == ['a', 'B', 'c']


def test_positional_fixed_conversions_do_not_consume():
    table = build_conversion_table({'s': lambda value, arg: value, 'x': 'X'})
    hunks = hunk_format("%x%s%x%s")
    positional_replace(hunks, ('a', 'b'), table)
    assert _replacements(hunks) == ['X', 'a', 'X', 'b']


def test_positional_passes_brace_argument():
    table = build_conversion_table({'j': lambda value, arg: arg.join(value)})
    hunks = hunk_format("%{, }j")
    positional_replace(hunks, (['a', 'b'],), table)
    assert _replacements(hunks) == ['a, b']


def test_positional_non_string_results_are_stringified():
    table = build_conversion_table({'d': lambda value, arg: value * 2})
    hunks = hunk_format("%d")
    positional_replace(hunks, (21,), table)
    assert _replacements(hunks) == ['42']


def test_positional_runs_out_of_values():
    table = build_conversion_table({'s': lambda value, arg: value})
    with pytest.raises(InputShapeError):
        positional_replace(hunk_format("%s and %s"), ('only one',), table)


def test_escape_never_consults_the_table():
    table = build_conversion_table({}, defaults=False)
    hunks = hunk_format("100%%")
    positional_replace(hunks, (), table)
    assert _replacements(hunks) == ['%']


def test_unknown_conversion_fails_by_default():
    table = build_conversion_table({'s': lambda value, arg: value})
    with pytest.raises(UnknownConversionError) as info:
        positional_replace(hunk_format("%s %q"), ('a',), table)
    assert info.value.conversion == 'q'
    assert info.value.source == '%q'


def test_unknown_conversion_literal_policy_consumes_nothing():
    table = build_conversion_table({'s': lambda value, arg: value})
    hunks = hunk_format("%q %s")
    positional_replace(hunks, ('a',), table, 'literal')
    unknown, known = placeholders(hunks)
    assert unknown.passthrough and unknown.replacement is None
    assert known.replacement == 'a'


def test_named_looks_up_brace_argument():
    received = []
    def reverse(value, key):
        received.append((value, key))
        return key[::-1]

    table = build_conversion_table({'d': reverse, 's': lambda value, key: value})
    hunks = hunk_format("%{foo}d %{name}s")
    named_replace(hunks, {'foo': 1, 'name': 'Ada'}, table)
    assert _replacements(hunks) == ['oof', 'Ada']
    assert received == [(1, 'foo')]


def test_named_missing_key_fails():
    table = build_conversion_table({'s': lambda value, key: value})
    with pytest.raises(MissingNamedInputError) as info:
        named_replace(hunk_format("%{missing}s"), {'present': 1}, table)
    assert info.value.key == 'missing'


def test_named_placeholder_without_key_fails():
    table = build_conversion_table({'s': lambda value, key: value})
    with pytest.raises(MissingNamedInputError):
        named_replace(hunk_format("%s"), {'s': 1}, table)


def test_named_fixed_conversions_need_no_key():
    table = build_conversion_table({'s': lambda value, key: value})
    hunks = hunk_format("%{a}s%n")
    named_replace(hunks, {'a': 'x'}, table)
    assert _replacements(hunks) == ['x', '\n']


class Person:
    name = "Ada"

    def greet(self, whom=None):
        return f"hi {whom}" if whom else "hi"


def test_method_calls_named_attributes():
    table = build_conversion_table({'n': 'name', 'g': 'greet', 'u': lambda obj, arg: obj.name.upper()}, defaults=False)
    hunks = hunk_format("%n %g %{Bob}g %u")
    method_replace(hunks, Person(), table)
    assert _replacements(hunks) == ['Ada', 'hi', 'hi Bob', 'ADA']


def test_method_missing_attribute_propagates():
    table = build_conversion_table({'z': 'nothing_here'}, defaults=False)
    with pytest.raises(AttributeError):
        method_replace(hunk_format("%z"), Person(), table)


def test_argument_passes_only_the_brace_text():
    table = build_conversion_table({'d': lambda arg: arg[::-1], 'a': 'apples'})
    hunks = hunk_format("%{foo}d %d %a")
    argument_replace(hunks, None, table)
    assert _replacements(hunks) == ['oof', '', 'apples']


def test_positional_context_reports_cursor_and_values():
    seen = []
    def note(value, arg, *, placeholder, index, values):
        seen.append((placeholder.source, index, values))
        return value
    table = build_conversion_table({'s': Computable(note, context=True), 'x': 'X'})
    hunks = hunk_format("%s%x%{y}s")
    positional_replace(hunks, ('a', 'b', 'c'), table)
    assert _replacements(hunks) == ['a', 'X', 'b']
    assert seen == [('%s', 0, ('a', 'b', 'c')), ('%{y}s', 1, ('a', 'b', 'c'))]


def test_named_context_receives_the_mapping():
    table = build_conversion_table({'s': Computable(lambda value, key, *, placeholder, mapping: f"{key}/{len(mapping)}", context=True)})
    hunks = hunk_format("%{a}s")
    named_replace(hunks, {'a': 1, 'b': 2}, table)
    assert _replacements(hunks) == ['a/2']


def test_argument_context_receives_the_placeholder():
    table = build_conversion_table({'w': Computable(lambda arg, *, placeholder: f"{arg}:{placeholder.min_width}", context=True)})
    hunks = hunk_format("%3{foo}w")
    argument_replace(hunks, None, table)
    assert _replacements(hunks) == ['foo:3']


def test_method_context_receives_the_placeholder():
    table = build_conversion_table({'q': Computable(lambda receiver, arg, *, placeholder: placeholder.source, context=True)}, defaults=False)
    hunks = hunk_format("%{z}q")
    method_replace(hunks, object(), table)
    assert _replacements(hunks) == ['%{z}q']
