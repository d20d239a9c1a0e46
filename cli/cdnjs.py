#!/usr/bin/env python3
"""
Command-line lookup for the cdnjs package catalog.

Typical usage:
        # List every package whose name contains "jquery"
        python cli/cdnjs.py search jquery

        # Print the minified asset URL of a package (optionally pinned to a version)
        python cli/cdnjs.py url angular.js@1.0.0

        # Bare URLs only, handy for scripts
        python cli/cdnjs.py -u url jquery

An unknown verb is treated as a search term, so `cdnjs.py jquery` searches too.
Settings are read from an optional `cdnjs_config.json` in the current directory
(see `cdnjs_lib/config.py`); command-line flags take precedence.
"""
import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# ROOT points to the repository root (parent of cli/)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import colorama
from colorama import Fore, Style

from cdnjs_lib import CdnjsClient, CdnjsError, __version__
from cdnjs_lib.config import load_config
from cdnjs_lib.constants import SEARCH_FIELDS

HELP_EXAMPLES = ROOT / 'help-examples.txt'
METHODS = ('search', 'url')
NAME_WIDTH = 30


def _read_help_examples() -> str:
    try:
        return HELP_EXAMPLES.read_text(encoding='utf-8')
    except OSError:
        return ''


def positive_float(value: str) -> float:
    """argparse type for timeouts: a number greater than zero."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cdnjs',
        usage='%(prog)s [-u] <search|url> library',
        description='Search cdnjs packages and print their CDN URLs',
        epilog=_read_help_examples(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('args', nargs='*', help='Method (search or url) followed by a library name, optionally name@version')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--url-only', '-u', action='store_true', help='Output only the url')
    parser.add_argument('--by', choices=SEARCH_FIELDS, default='name', help='Field matched by search (default: name)')
    parser.add_argument('--config', '-c', help='Path to cdnjs_config.json (default: current directory)')
    parser.add_argument('--timeout', type=positive_float, help='Seconds to wait for the catalog (overrides config)')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log catalog fetches and cache use to stderr')
    parser.add_argument('--log-file', help='Also write a rotating log file at this path')
    return parser


def setup_logging(verbose: bool = False, log_file: str = None) -> logging.Logger:
    """Configure the `cdnjs` logger: stderr always, a rotating file when requested."""
    logger = logging.getLogger('cdnjs')
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    fmt = logging.Formatter('%(asctime)s %(levelname)s %(message)s')

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(ch)

    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=2 * 1024 * 1024, backupCount=3, encoding='utf-8')
        handler.setFormatter(fmt)
        handler.setLevel(logging.DEBUG)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def pick_method(positional):
    """Return `(method, term)` from the positional arguments.

    An unrecognised method means the user typed a search term directly.
    """
    method = positional[0]
    term = positional[1] if len(positional) > 1 else None
    if method not in METHODS:
        print(f"{Fore.RED}Unknown method, assuming search.{Style.RESET_ALL}")
        if term is None:
            term = method
        method = 'search'
    return method, term or ''


def format_result(result, term: str, url_only: bool = False) -> str:
    if url_only:
        return result.url
    name = result.name.ljust(NAME_WIDTH)
    if term == result.name:
        name = f"{Fore.GREEN}{name}{Style.RESET_ALL}"
    return f"{name}{Style.DIM}: {result.url}{Style.RESET_ALL}"


def main(argv=None, client: CdnjsClient = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.args:
        parser.print_help()
        return 0

    logger = setup_logging(args.verbose, args.log_file)
    colorama.init(strip=True if args.no_color else None)
    try:
        method, term = pick_method(args.args)
        logger.info(f"Running {method} for {term!r}")

        if client is None:
            cfg = load_config(args.config, logger=logger)
            if args.timeout is not None:
                cfg['network']['timeout'] = args.timeout
            client = CdnjsClient.from_config(cfg, logger=logger)

        try:
            if method == 'search':
                results = client.search(term, field=args.by)
            else:
                results = [client.resolve(term)]
        except CdnjsError as e:
            logger.debug(f"{method} {term!r} failed: {e!r}")
            print(f"{Fore.RED}{e}{Style.RESET_ALL}")
            raise SystemExit(1)

        for result in results:
            print(format_result(result, term, url_only=args.url_only))
        return 0
    finally:
        colorama.deinit()


if __name__ == '__main__':
    sys.exit(main())
