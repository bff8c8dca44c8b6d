"""
Command line front ends.

    rsdump [-H] infile [outfile]   binary Range Series file -> text
    rsgen infile outfile           text -> binary Range Series file

Set RANGESERIES_DEBUG in the environment, or pass -v, for debug output on stderr.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .blocks import describe_blocks
from .decoder import decode
from .encoder import encode
from .exceptions import RangeSeriesError
from .lines import LineStream
from .reconcile import reconcile
from .textcodec import parse_text, render_text

logger = logging.getLogger(__name__)

DESCRIPTION = "Processes CODAR SeaSonde RangeSeries data files."

# text fields hold raw bytes, one character each
TEXT_ENCODING = 'latin-1'


def setup_logging(verbose: bool = False) -> None:
    if verbose or 'RANGESERIES_DEBUG' in os.environ:
        logging.basicConfig(stream=sys.stderr, level=logging.DEBUG,
                            format='debug: %(name)s: %(message)s')


def build_dump_parser(prog: str = 'rsdump') -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=DESCRIPTION + " Writes an editable text version of a binary file.",
    )
    parser.add_argument('-H', '--header-only', action='store_true',
                        help='Stop before the BODY block')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug output on stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('infile', help='Binary RS file')
    parser.add_argument('outfile', nargs='?', help='Text output (default: stdout)')
    return parser


def build_gen_parser(prog: str = 'rsgen') -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=DESCRIPTION + " Reads an ascii text infile and writes a binary version to outfile.",
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug output on stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('infile', help='Text file produced by rsdump')
    parser.add_argument('outfile', help='Binary RS file to write')
    return parser


def run_dump(args: argparse.Namespace) -> int:
    try:
        with open(args.infile, 'rb') as fd:
            data = fd.read()
    except OSError as e:
        print(f"Cannot open input file '{args.infile}': {e.strerror}", file=sys.stderr)
        return 1

    try:
        blocks = decode(data)
        logger.debug("block list:\n%s", describe_blocks(blocks))
        text = render_text(blocks, header_only=args.header_only).encode(TEXT_ENCODING)
    except RangeSeriesError as e:
        print(f"{args.infile}: {e}", file=sys.stderr)
        return 1

    if args.outfile is None:
        sys.stdout.flush()
        sys.stdout.buffer.write(text)
        sys.stdout.buffer.flush()
        return 0
    try:
        with open(args.outfile, 'wb') as fd:
            fd.write(text)
    except OSError as e:
        print(f"Cannot open output file '{args.outfile}': {e.strerror}", file=sys.stderr)
        return 1
    return 0


def run_gen(args: argparse.Namespace) -> int:
    try:
        with open(args.infile, 'rb') as fd:
            stream = LineStream(fd.read().decode(TEXT_ENCODING))
    except OSError as e:
        print(f"Cannot open input file '{args.infile}': {e.strerror}", file=sys.stderr)
        return 1

    # the whole image is built before the output file is touched
    try:
        blocks = parse_text(stream.lines)
        reconcile(blocks)
        data = encode(blocks)
    except RangeSeriesError as e:
        print(f"{args.infile}: {e}", file=sys.stderr)
        return 1
    print("Read %d lines" % len(stream.lines))

    try:
        with open(args.outfile, 'wb') as fd:
            fd.write(data)
    except OSError as e:
        print(f"Cannot open output file '{args.outfile}': {e.strerror}", file=sys.stderr)
        return 1
    return 0


def rsdump_main(argv: Optional[List[str]] = None) -> int:
    args = build_dump_parser().parse_args(argv)
    setup_logging(args.verbose)
    return run_dump(args)


def rsgen_main(argv: Optional[List[str]] = None) -> int:
    args = build_gen_parser().parse_args(argv)
    setup_logging(args.verbose)
    return run_gen(args)


def main(argv: Optional[List[str]] = None) -> int:
    """``python -m rangeseries dump|gen ...``; also picks the mode from the program name."""
    argv = sys.argv[1:] if argv is None else argv
    program = os.path.basename(sys.argv[0])
    if program == 'rsdump':
        return rsdump_main(argv)
    if program == 'rsgen':
        return rsgen_main(argv)

    if not argv or argv[0] not in ('dump', 'gen'):
        print("Usage: python -m rangeseries {dump,gen} ...", file=sys.stderr)
        return 2
    if argv[0] == 'dump':
        return rsdump_main(argv[1:])
    return rsgen_main(argv[1:])
