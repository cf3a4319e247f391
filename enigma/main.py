import argparse
import logging
import sys
from typing import List, Optional

from . import config
from .errors import ConfigurationError


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigurationError(f'{message}\n{self.format_usage().strip()}')


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog='enigma', description='Rotor cipher machine simulator.')
    parser.add_argument('--verbose', action='store_true', help='Trace every keystroke on stderr.')
    parser.add_argument('config', help='Machine configuration file.')
    parser.add_argument('input', nargs='?', help='Messages to convert (default: stdin).')
    parser.add_argument('output', nargs='?', help='Where to write the result (default: stdout).')
    return parser


def _read_file(name: str) -> str:
    try:
        with open(name, 'r', encoding='utf-8') as file_:
            return file_.read()
    except OSError:
        raise ConfigurationError(f'could not open {name}') from None
    except UnicodeDecodeError as excp:
        raise ConfigurationError(f'{name} is not valid UTF-8: {excp.reason} at byte {excp.start}') from None


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except UnicodeDecodeError as excp:
        raise ConfigurationError(f'standard input is not valid text: {excp.reason} at byte {excp.start}') from None


def run(args: argparse.Namespace):
    machine = config.read_config(_read_file(args.config))

    if args.input:
        lines = _read_file(args.input).splitlines()
    else:
        lines = _read_stdin().splitlines()

    # convert everything before opening the output, so an error leaves no half written file
    output = [line + '\n' for line in config.process(machine, lines, verbose=args.verbose)]

    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as out_file:
                out_file.writelines(output)
        except OSError:
            raise ConfigurationError(f'could not open {args.output}') from None
    else:
        sys.stdout.writelines(output)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                            format='%(message)s', stream=sys.stderr)
        run(args)
    except ConfigurationError as excp:
        print(f'Error: {excp}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
