#!/usr/bin/env python3
"""Command-line shell for the unit converter.

Usage:
    conv [options] <value> <from_unit> <to_unit>

    # One-shot conversion
    conv 1 km m            -> 1 km is 1000 m
    conv -40 c f           -> -40 c is -40 f

    # List every registered unit
    conv --list

    # Interactive session, one "<value> <from> <to>" per line, EOF to quit
    conv --repl

Environment Variables:
    CONV_PRECISION: Decimal places in output (default: 4)
    CONV_LOG_LEVEL: Logging level when --verbose is not given (default: WARNING)

Exit codes: 0 on success, 1 on a conversion error or bad arguments.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence, TextIO

from conv import __version__
from conv.units.unitapi import describe_conversion, units_report
from conv.units.uniterrors import ConversionError
from conv.units.unitnorm import DEFAULT_PRECISION

logger = logging.getLogger(__name__)

USAGE = "conv [options] <value> <from_unit> <to_unit>"
REPL_USAGE = "Usage: <value> <from_unit> <to_unit>"
REPL_PROMPT = "conv> "
QUIT_COMMANDS = {"quit", "exit"}
PRECISION_OPTIONS = ("--precision", "-p")


def _precision(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid precision: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"precision must be non-negative, got {value}")
    return value


def _default_precision() -> int:
    raw = os.environ.get("CONV_PRECISION")
    if raw is None:
        return DEFAULT_PRECISION
    try:
        return _precision(raw)
    except argparse.ArgumentTypeError as e:
        logger.warning(f"Ignoring CONV_PRECISION: {e}")
        return DEFAULT_PRECISION


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr at DEBUG (verbose) or CONV_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(os.environ.get("CONV_LOG_LEVEL", "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conv",
        usage=USAGE,
        description="Convert a value between units of the same category.",
        epilog=units_report(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'values',
        nargs='*',
        metavar='ARG',
        help='<value> <from_unit> <to_unit>'
    )

    # Modes
    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List all available units'
    )
    parser.add_argument(
        '--repl', '-i',
        action='store_true',
        help='Start interactive REPL mode'
    )

    # Output options
    parser.add_argument(
        *PRECISION_OPTIONS,
        type=_precision,
        default=None,
        help=f'Decimal places in output (default: $CONV_PRECISION or {DEFAULT_PRECISION})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _takes_value(token: str) -> bool:
    if token in PRECISION_OPTIONS:
        return True
    # argparse accepts unambiguous prefixes such as --prec
    return token.startswith("--") and len(token) > 2 and "--precision".startswith(token)


def split_numeric_values(argv: Sequence[str]) -> List[str]:
    """Put positionals behind a "--" separator so argparse leaves them alone.

    argparse only reads -N and -N.N as negative numbers. Values such as
    -1e3 or -inf would otherwise be taken for options.

    Examples:
        >>> split_numeric_values(["-v", "-1e3", "m", "km"])
        ['-v', '--', '-1e3', 'm', 'km']

        >>> split_numeric_values(["-p", "2", "1", "mi", "km"])
        ['-p', '2', '--', '1', 'mi', 'km']
    """
    options, values = [], []
    expecting_value = False
    tokens = iter(argv)
    for token in tokens:
        if expecting_value:
            options.append(token)
            expecting_value = False
        elif token == "--":
            values.extend(tokens)
        elif token.startswith("-") and len(token) > 1 and not _is_number(token):
            options.append(token)
            expecting_value = _takes_value(token)
        else:
            values.append(token)

    if not values:
        return options
    return options + ["--"] + values


def run_once(
    tokens: Sequence[str],
    precision: int = DEFAULT_PRECISION,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Convert one "<value> <from> <to>" triple and print the result.

    Returns:
        0 on success, 1 if the conversion failed (message already printed)
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    value, from_name, to_name = tokens
    try:
        print(describe_conversion(value, from_name, to_name, precision=precision), file=out)
    except ConversionError as e:
        logger.debug(f"{e.error_code} for {list(tokens)}")
        print(f"Error: {e.message}", file=err)
        return 1
    return 0


def run_repl(
    stream: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    precision: int = DEFAULT_PRECISION,
) -> int:
    """Read "<value> <from> <to>" lines until EOF (or quit/exit).

    Malformed lines and conversion errors are reported on ``err`` and the
    loop carries on.
    """
    if stream is None:
        stream = sys.stdin
        # Undecodable input becomes U+FFFD and is reported like any bad token
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(errors="replace")
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    interactive = stream.isatty()
    logger.debug(f"Starting REPL (interactive={interactive}, precision={precision})")

    while True:
        if interactive:
            print(REPL_PROMPT, end="", file=out, flush=True)

        line = stream.readline()
        if not line:
            if interactive:
                print(file=out)
            break

        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) == 1 and tokens[0].lower() in QUIT_COMMANDS:
            break
        if len(tokens) != 3:
            print(REPL_USAGE, file=err)
            continue

        run_once(tokens, precision=precision, out=out, err=err)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(split_numeric_values(argv))

    configure_logging(args.verbose)
    precision = args.precision if args.precision is not None else _default_precision()

    if args.list:
        print(units_report())
        return 0

    if args.repl:
        return run_repl(precision=precision)

    if len(args.values) == 3:
        return run_once(args.values, precision=precision)

    parser.print_help(sys.stderr)
    return 1


if __name__ == '__main__':
    sys.exit(main())
