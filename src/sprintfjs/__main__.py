## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# sprintfjs — printf-style formatting in the sprintf.js dialect, from the command line.
#

import sys
import json
from dataclasses import dataclass

import click

from .errors import SprintfError, FormatParseError, FormatRenderError
from .parser import format_parse_error_context
from .formatting import write_without_ansi
from . import api


@dataclass(frozen=True)
class CliConfig:
    json_args: bool
    show_ast: bool
    newline: bool
    plain: bool


class FormatRunner:
    def __init__(self, config: CliConfig):
        self.config = config
        if config.plain:
            sys.stdout.write = write_without_ansi(sys.stdout.write)
            sys.stderr.write = write_without_ansi(sys.stderr.write)

    def _fatal_error(self, message: str, detail: str, exc_type: str, context: str = '') -> int:
        header = f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        return 1

    def _handle_exception(self, exc: SprintfError, fmt: str) -> int:
        if isinstance(exc, FormatParseError):
            context = format_parse_error_context(fmt, exc.line or 1, exc.column or 0, exc.token or '')
            context += f"\n\033[90m{str(exc)}\033[0m\n"
            return self._fatal_error("SYNTAX ERROR.", "Parsing the format string caused a problem!", type(exc).__name__, context)

        assert isinstance(exc, FormatRenderError)
        context = ''
        if (node := exc.placeholder) is not None:
            line = fmt.count('\n', 0, node.position) + 1
            column = node.position - (fmt.rfind('\n', 0, node.position) + 1) + 1
            context = format_parse_error_context(fmt, line, column, node.text)
        context += f"\n\033[90m{str(exc)}\033[0m\n"
        return self._fatal_error("FORMAT ERROR.", "Rendering a placeholder caused a problem!", type(exc).__name__, context)

    def run(self, fmt: str, args: list) -> int:
        try:
            ast = api.parse(fmt)
            if self.config.show_ast:
                for node in ast:
                    print(f"\033[90m{type(node).__name__:<12}\033[0m {node!r}")
                return 0
            output = api.format_ast(ast, *args)
        except SprintfError as exc:
            return self._handle_exception(exc, fmt)
        print(output, end='\n' if self.config.newline else '')
        return 0


def _decode_arguments(values: tuple[str, ...]) -> list:
    decoded = []
    for i, raw in enumerate(values):
        try:
            decoded.append(json.loads(raw))
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Argument {i+1} `{raw}` is not valid JSON: {exc.msg}.", param_hint='ARGS') from None
    return decoded


@click.command(context_settings={'ignore_unknown_options': True})
@click.option('--json', '-j', 'json_args', is_flag=True, help='Decode each argument as a JSON value.')
@click.option('--ast', 'show_ast', is_flag=True, help='Print the parsed nodes instead of rendering.')
@click.option('--no-newline', '-n', is_flag=True, help='Do not print the trailing newline.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from the output.')
@click.argument('fmt', metavar='FORMAT')
@click.argument('args', nargs=-1)
@click.pass_context
def cli(ctx: click.Context, json_args: bool, show_ast: bool, no_newline: bool, plain: bool,
        fmt: str, args: tuple[str, ...]) -> None:
    """Render FORMAT with ARGS, e.g. `sprintfjs '%2$s %1$s' world hello`."""
    config = CliConfig(json_args=json_args, show_ast=show_ast, newline=not no_newline, plain=plain)
    values = _decode_arguments(args) if config.json_args else list(args)
    runner = FormatRunner(config)
    ctx.exit(runner.run(fmt, values))


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='sprintfjs')


if __name__ == "__main__":
    main()
