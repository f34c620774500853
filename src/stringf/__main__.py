## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# stringf — printf-style formatting with conversions of your own.
#

import sys
import traceback
from dataclasses import dataclass

import click

from .errors import (MalformedFormatError, UnknownConversionError, MissingNamedInputError,
                     InputShapeError, ConfigurationError, ReservedConversionError)
from .formatting import write_without_ansi
from .formatter import Formatter


@dataclass(frozen=True)
class CliConfig:
    marker: str
    strict: bool
    lenient: bool
    named: bool
    plain: bool
    ignore: bool


def format_error_context(format_string: str, position: int, token: str) -> str:
    width = max(1, len(token or ''))
    return (f"\033[97m    {format_string}\033[0m\n"
            f"    {' ' * position}\033[1;33m{'^' * width}\033[0m\n")


class FormatRunner:
    def __init__(self, config: CliConfig):
        self.config = config
        self.failure = False

        if config.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '') -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        self.failure = True
        if not self.config.ignore: sys.exit(1)

    def _handle_exception(self, exc: Exception, format_string: str) -> None:
        if isinstance(exc, MalformedFormatError):
            context = format_error_context(format_string, exc.position, exc.token)
            self._maybe_fatal_error("SYNTAX ERROR.", "Format string has a malformed placeholder!", type(exc).__name__, context)
        elif isinstance(exc, (UnknownConversionError, MissingNamedInputError)):
            self._maybe_fatal_error("FORMAT ERROR.", str(exc), type(exc).__name__)
        elif isinstance(exc, InputShapeError):
            self._maybe_fatal_error("INPUT ERROR.", str(exc), type(exc).__name__)
        elif isinstance(exc, (ConfigurationError, ReservedConversionError)):
            self._maybe_fatal_error("CONFIG ERROR.", str(exc), type(exc).__name__)
        else:
            context = ''.join(traceback.format_exception(exc))
            self._maybe_fatal_error("RUNTIME ERROR.", "A conversion raised an error!", type(exc).__name__, context)

    def build(self, pairs: dict[str, str]) -> Formatter:
        tokenizer = 'strict' if self.config.strict else 'default'
        unknown = 'literal' if self.config.lenient else 'fail'
        if self.config.named:
            return Formatter(conversions={'s': lambda value, _: value}, replacer='named',
                             marker=self.config.marker, tokenizer=tokenizer, unknown=unknown)
        return Formatter(conversions=pairs, replacer='argument',
                         marker=self.config.marker, tokenizer=tokenizer, unknown=unknown)

    def run(self, format_string: str, pairs: dict[str, str]) -> None:
        try:
            formatter = self.build(pairs)
            result = formatter.format(format_string, pairs) if self.config.named else formatter.format(format_string)
        except Exception as exc:
            self._handle_exception(exc, format_string)
            print('')
        else:
            print(result)

    def finalize(self) -> int:
        return 1 if self.failure else 0


def _parse_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    result = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got `{pair}`.")
        result[name] = value
    return result


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--marker', '-m', default='%', envvar='STRINGF_MARKER', show_default=True, help='Character that starts a placeholder.')
@click.option('--strict', is_flag=True, help='Reject malformed placeholders instead of keeping them as text.')
@click.option('--lenient', '-l', is_flag=True, help='Leave unknown conversions in the output as written.')
@click.option('--named', '-n', is_flag=True, help='Expand `%{name}s` placeholders from the NAME=VALUE pairs.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--ignore', '-i', is_flag=True, help='Print an empty line instead of exiting when formatting fails.')
@click.argument('format_string', metavar='FORMAT')
@click.argument('pairs', nargs=-1, metavar='[NAME=VALUE]...')
@click.pass_context
def cli(ctx: click.Context, marker: str, strict: bool, lenient: bool, named: bool, plain: bool, ignore: bool,
        format_string: str, pairs: tuple[str, ...]) -> None:
    """Expand FORMAT, taking each one-character NAME as a conversion code."""
    config = CliConfig(marker=marker, strict=strict, lenient=lenient, named=named, plain=plain, ignore=ignore)
    if format_string == '-':
        format_string = click.get_text_stream('stdin').read()
        if format_string.endswith('\n'): format_string = format_string[:-1]

    runner = FormatRunner(config)
    runner.run(format_string, _parse_pairs(pairs))
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=list(sys.argv[1:] if argv is None else argv), prog_name='stringf')


if __name__ == "__main__":
    main()
