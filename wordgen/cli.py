#!/usr/bin/env python3
"""
wordgen CLI
===========
Command-line interface for learning word models and generating words.

Usage:
    wordgen learn -d 3 -i words.tsv -f novel.txt -t czech.model
    wordgen generate -n 20 --seed 42 -t czech.model
    wordgen info -t czech.model
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent to path
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from wordgen import __version__
from wordgen.settings import get_setting

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")

    def table(self, headers: list, rows: list, col_widths: list = None):
        """Print a formatted table."""
        if self.quiet:
            return

        if not col_widths:
            col_widths = [max(len(str(h)), max((len(str(r[i])) for r in rows), default=0)) + 2
                         for i, h in enumerate(headers)]

        header_line = ''.join(str(h).ljust(w) for h, w in zip(headers, col_widths))
        print(header_line)
        print('-' * len(header_line))

        for row in rows:
            print(''.join(str(c).ljust(w) for c, w in zip(row, col_widths)))


def setup_logging(level=None):
    """Configure logging."""
    if level is None:
        level = get_setting("logging.level", "WARNING")
    logging.basicConfig(
        level=level,
        format=get_setting("logging.format", "%(asctime)s - %(levelname)s - %(message)s"),
        datefmt=get_setting("logging.datefmt", "%Y-%m-%d %H:%M:%S"),
    )


def positive_int(value: str) -> int:
    """argparse type: integer >= 1"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def non_negative_int(value: str) -> int:
    """argparse type: integer >= 0"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate words from a saved model."""
    from wordgen.markov import make_random_source
    from wordgen.persistence import load_model

    model = load_model(args.dict)
    rng = make_random_source(args.seed)
    logger.debug(f"Generating {args.count} words (seed={args.seed})")

    for _ in range(args.count):
        print(model.generate_word(rng))
    return 0


def cmd_learn(args, out: Output):
    """Train a model from wordlists and text files and save it."""
    from wordgen.markov import train_model
    from wordgen.persistence import save_model

    wordlists = args.wordlists or []
    text_files = args.text_files or []
    out.print(f"Learning depth-{args.depth} model from "
              f"{len(wordlists)} wordlist(s) and {len(text_files)} text file(s)...")

    model = train_model(args.depth, wordlists=wordlists, text_files=text_files)
    save_model(model, args.dict)

    stats = model.stats()
    out.success(f"Saved {stats.contexts} contexts ({stats.observations} transitions) to {args.dict}")
    return 0


def cmd_info(args, out: Output):
    """Show model statistics."""
    from wordgen.persistence import load_model

    stats = load_model(args.dict).stats()
    out.table(['Property', 'Value'], [
        ['Model file', args.dict],
        ['Depth', stats.depth],
        ['Contexts', stats.contexts],
        ['Distinct transitions', stats.transitions],
        ['Observations', stats.observations],
        ['Alphabet size', stats.alphabet],
    ], [24, 30])
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    default_dict = get_setting("model.dict_file", "default.dict")

    parser = argparse.ArgumentParser(
        prog='wordgen',
        description='Generates random words based on n-gram character statistics.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wordgen learn -d 3 -i words.tsv -t czech.model
  wordgen generate -n 20 -s 42 -t czech.model
  wordgen info -t czech.model
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate random words')
    p.add_argument('-n', '--count', type=non_negative_int,
                   default=get_setting("generate.count", 1),
                   help='Number of generated words')
    p.add_argument('-s', '--seed', type=non_negative_int,
                   help='Random seed (reproducible output)')
    p.add_argument('-t', '--dict', default=default_dict,
                   help=f'Model file (default: {default_dict})')

    # --- learn ---
    p = subparsers.add_parser('learn', aliases=['l'],
                              help='Create a new model from wordlists and text files')
    p.add_argument('-d', '--depth', type=positive_int,
                   default=get_setting("model.depth", 2),
                   help='n-gram context depth')
    p.add_argument('-t', '--dict', default=default_dict,
                   help=f'Model file to write (default: {default_dict})')
    p.add_argument('-i', '--input-word-list', dest='wordlists', nargs='+', action='extend',
                   metavar='WL', help='Input wordlist file (word[TAB]count per line)')
    p.add_argument('-f', '--input-file', dest='text_files', nargs='+', action='extend',
                   metavar='IF', help='Input text file')

    # --- info ---
    p = subparsers.add_parser('info', help='Show model statistics')
    p.add_argument('-t', '--dict', default=default_dict,
                   help=f'Model file (default: {default_dict})')

    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'l': 'learn',
    }
    command = cmd_map.get(args.command, args.command)

    if command == 'learn' and not (args.wordlists or args.text_files):
        parser.error("learn requires at least one --input-word-list or --input-file")

    setup_logging(logging.DEBUG if args.verbose else None)
    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'learn': cmd_learn,
        'info': cmd_info,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
