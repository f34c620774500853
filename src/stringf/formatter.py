## stringf — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable, Mapping
from dataclasses import dataclass, field, replace

from .types import Hunk, Tokenizer, InputProcessor, Replacer, HunkFormatter, UnknownPolicy
from .errors import ConfigurationError, InputShapeError
from .hunker import TOKENIZERS
from .inputs import INPUT_PROCESSORS
from .replacers import REPLACERS, DEFAULT_INPUT_PROCESSORS
from .formatting import HUNK_FORMATTERS, assemble
from .conversions import build_conversion_table, check_marker


@dataclass(frozen=True)
class FormatterConfig:
    conversions: Mapping[str, Any] = field(default_factory=dict)
    marker: str = '%'
    tokenizer: str | Tokenizer = 'default'
    input_processor: str | InputProcessor | None = None
    replacer: str | Replacer = 'positional'
    hunk_formatter: str | HunkFormatter = 'simple'
    unknown: UnknownPolicy = 'fail'
    defaults: bool | None = None


def _strategy(stage: str, choice: str | Callable, registry: dict[str, Callable]) -> Callable:
    if isinstance(choice, str):
        if (fn := registry.get(choice)) is None:
            known = ', '.join(sorted(registry))
            raise ConfigurationError(f"Unknown {stage} `{choice}`; expected one of: {known}.")
        return fn
    if callable(choice):
        return choice
    raise ConfigurationError(f"The {stage} must be a name or a callable, got {type(choice).__name__}.")


class Formatter:
    """A configured format pipeline, built once and reused for any number of `format()` calls."""

    def __init__(self, config: FormatterConfig | None = None, **options):
        config = FormatterConfig(**options) if config is None else replace(config, **options)
        if config.unknown not in ('fail', 'literal'):
            raise ConfigurationError(f"Unknown conversion policy must be `fail` or `literal`, got {config.unknown!r}.")

        self.config = config
        self.marker = check_marker(config.marker)

        # Without an explicit input processor, use the one the chosen replacer expects.
        input_processor = config.input_processor
        if input_processor is None:
            input_processor = DEFAULT_INPUT_PROCESSORS.get(config.replacer, 'pass-through') if isinstance(config.replacer, str) else 'pass-through'

        self.tokenizer: Tokenizer = _strategy('tokenizer', config.tokenizer, TOKENIZERS)
        self.input_processor: InputProcessor = _strategy('input processor', input_processor, INPUT_PROCESSORS)
        self.replacer: Replacer = _strategy('replacer', config.replacer, REPLACERS)
        self.hunk_formatter: HunkFormatter = _strategy('hunk formatter', config.hunk_formatter, HUNK_FORMATTERS)

        # Fixed conversions are method names for the `method` replacer, so `n` and `t` are opt-in there.
        defaults = config.defaults if config.defaults is not None else config.replacer != 'method'
        self.conversions = build_conversion_table(config.conversions, self.marker, defaults=defaults)

    # Pipeline ────────────────────────────────────────────────────────────────────────────────
    def hunk(self, format_string: str) -> list[Hunk]:
        if not isinstance(format_string, str):
            raise InputShapeError(f"Format string must be a str, got {type(format_string).__name__}.")
        return self.tokenizer(format_string, self.marker)

    def format(self, format_string: str, *args) -> str:
        hunks = self.hunk(format_string)
        inputs = self.input_processor(args)
        self.replacer(hunks, inputs, self.conversions, self.config.unknown)
        return assemble(hunks, self.hunk_formatter)

    __call__ = format

    def __repr__(self):
        return f"<Formatter marker={self.marker!r} conversions={''.join(sorted(self.conversions))!r}>"


def new_formatter(config: FormatterConfig | None = None, **options) -> Formatter:
    return Formatter(config, **options)
