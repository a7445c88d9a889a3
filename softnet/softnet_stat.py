#!/usr/bin/env python3
"""
Parse /proc/net/softnet_stat and print it as a table, JSON or
Prometheus metrics.
"""

import argparse
import os
import sys
from typing import List, Optional

from .exceptions import SoftnetError
from .parser import SoftnetParser
from .render import DEFAULT_COLUMN_WIDTH, render_json, render_metrics, render_table
from .utils import DEFAULT_SOURCE, STDIN_SOURCE, log, read_source

SOURCE_ENV_VAR = 'SOFTNET_STAT_FILE'


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Print per-CPU network softnet statistics'
    )
    parser.add_argument(
        '-j', '--json',
        action='store_true',
        help='Use json output'
    )
    parser.add_argument(
        '-p', '--prometheus',
        action='store_true',
        help='Use prometheus output'
    )
    parser.add_argument(
        '-s', '--stdin',
        action='store_true',
        help='Read from stdin'
    )
    parser.add_argument(
        '-f', '--file',
        default=os.environ.get(SOURCE_ENV_VAR, DEFAULT_SOURCE),
        help=f'Statistics file to read (default: {DEFAULT_SOURCE}, overridden by ${SOURCE_ENV_VAR})'
    )
    parser.add_argument(
        '-w', '--column-width',
        type=int,
        default=DEFAULT_COLUMN_WIDTH,
        help=f'Column width for table output (default: {DEFAULT_COLUMN_WIDTH})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Print diagnostic information to stderr'
    )
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    
    if args.column_width < 1:
        parser.error('--column-width must be a positive integer')
    
    source = STDIN_SOURCE if args.stdin else args.file
    try:
        # Read everything first, then parse
        raw = read_source(args.file, use_stdin=args.stdin)
        log(f"Read {len(raw)} bytes from {source}", args.verbose)
        
        stats = SoftnetParser(raw, source=source).parse()
        log(f"Parsed statistics for {len(stats)} CPU(s)", args.verbose)
        
        # json takes precedence over prometheus
        if args.json:
            render_json(stats)
        elif args.prometheus:
            render_metrics(stats)
        else:
            render_table(stats, args.column_width)
    except SoftnetError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
