"""Command-line interface handler for strargv."""

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from . import baud
from . import config
from . import strutil
from . import tokenizer

console = Console(highlight=False, emoji=False)
err_console = Console(stderr=True, highlight=False, emoji=False)


def print_usage() -> None:
    """Print usage information."""
    print("""Usage: strargv [-h | --help] <command> [<args>]

Commands:
  split                    Split a string into arguments, one per line
      -s, --separators STR The separator characters (default: ASCII whitespace)
      -x, --hex            Print each argument as hex bytes
      <string>             The string to split

  check                    Validate every option string in an options file
      -c, --config FILE    The TOML options file (default: options.toml in the
                           user config directory)

  baud                     Show the lookups for a serial line rate
      <rate>               The rate, e.g. 9600

  help                     Show this help message
  version                  Show program version
""")


def print_version() -> None:
    """Print version information."""
    print("1.0")


def print_errors(errors: list[config.OptionError]) -> None:
    """Print option errors to stderr."""
    for error in errors:
        print(f"{error.path}:{error.key}: error.{error.message}", file=sys.stderr)


def cmd_split(args: argparse.Namespace) -> None:
    """Execute the split command."""
    if args.string is None:
        print("Please specify a string to split\n", file=sys.stderr)
        print_usage()
        sys.exit(1)

    try:
        argv = tokenizer.tokenize(args.string, args.separators)
    except (tokenizer.MalformedInput, ValueError) as e:
        err_console.print(f"[red]✗ Error: {escape(str(e))}[/red]")
        sys.exit(1)

    with argv:
        if args.hex:
            for token in argv.as_bytes():
                console.print(token.hex(" "), soft_wrap=True)
        else:
            for token in argv:
                console.print(repr(token), markup=False, soft_wrap=True)


def cmd_check(args: argparse.Namespace) -> None:
    """Execute the check command."""
    try:
        options_file = config.load_options(args.config)
    except config.InvalidConfig as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    stats, errors = config.check_options(options_file)
    if errors:
        print_errors(errors)
        sys.exit(1)

    console.print(f"[magenta]┃[/magenta] {stats.option_count:<6} Options")
    console.print(f"[magenta]┃[/magenta] {stats.token_count:<6} Arguments")


def cmd_baud(args: argparse.Namespace) -> None:
    """Execute the baud command."""
    rate = strutil.scan_int(args.rate or "")
    if rate < 0:
        err_console.print(f"[red]✗ Invalid rate: {escape(str(args.rate))}[/red]")
        sys.exit(1)

    val = baud.get_baud_rate(rate)
    if val is None:
        err_console.print(f"[red]✗ Unsupported rate: {rate}[/red]")
        sys.exit(1)

    cisco = baud.baud_to_cisco_baud(rate)
    console.print(f"[magenta]┃[/magenta] termios    {val:#o}")
    console.print(f"[magenta]┃[/magenta] display    {baud.get_baud_rate_str(val)}")
    console.print(
        f"[magenta]┃[/magenta] cisco      {cisco if cisco else 'unsupported'}"
    )


def main(argv=None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Shell-like option string splitter", add_help=False
    )

    # Add global help
    parser.add_argument("-h", "--help", action="store_true", help="Show help message")

    # Add subparsers for commands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Split command
    split_parser = subparsers.add_parser("split", add_help=False)
    split_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for split"
    )
    split_parser.add_argument(
        "-s", "--separators", type=str, help="Separator characters"
    )
    split_parser.add_argument(
        "-x", "--hex", action="store_true", help="Print arguments as hex bytes"
    )
    split_parser.add_argument("string", nargs="?", help="String to split")

    # Check command
    check_parser = subparsers.add_parser("check", add_help=False)
    check_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for check"
    )
    check_parser.add_argument("-c", "--config", type=str, help="Options file")

    # Baud command
    baud_parser = subparsers.add_parser("baud", add_help=False)
    baud_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for baud"
    )
    baud_parser.add_argument("rate", nargs="?", help="Line rate")

    # Help and version commands
    subparsers.add_parser("help", add_help=False)
    subparsers.add_parser("version", add_help=False)

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        print_usage()
        return

    args = parser.parse_args(argv)

    # Handle global help
    if args.help or args.command == "help":
        print_usage()
        return

    if args.command == "version":
        print_version()
        return

    # Execute commands
    if args.command == "split":
        cmd_split(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "baud":
        cmd_baud(args)
    else:
        print_usage()
