# Command line driver: scan + parse a C- source file and write its parse tree.

import argparse
import logging
import sys

from .config import ParserConfig
from .graphviz import write_dot
from .logging_config import level_from_env, setup_logging
from .parse_tree import render_text
from .parser import parse_source

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNTAX_ERROR = 1
EXIT_IO_ERROR = 2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

RULE = "=" * 61


def banner(title: str) -> str:
    return f"{RULE}\n{title.center(61).rstrip()}\n{RULE}\n"


def build_arg_parser(config: ParserConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cminus-parse",
        description="Parse a C- program and write its parse tree.")
    parser.add_argument("input", help="C- source file")
    parser.add_argument("output", nargs="?", default=config.default_output,
                        help=f"Output file (default {config.default_output})")
    parser.add_argument("-f", "--format", choices=("dot", "text"), default="dot",
                        help="Graphviz DOT or an indented text tree (default dot)")
    parser.add_argument("--log-level", default=level_from_env(), type=str.upper,
                        choices=LOG_LEVELS,
                        help="Logging level for diagnostics on stderr (default WARNING)")
    parser.add_argument("--log-file",
                        help="Also write a DEBUG level log to this file")
    parser.add_argument("--max-depth", type=depth_limit, default=config.max_depth,
                        help=f"Nesting limit for the parser (default {config.max_depth})")
    return parser


def depth_limit(value: str) -> int:
    # each nesting level costs one interpreter frame
    limit = sys.getrecursionlimit() // 2
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if not 1 <= depth <= limit:
        raise argparse.ArgumentTypeError(f"must be between 1 and {limit}")
    return depth


def main(argv=None) -> int:
    config = ParserConfig()
    args = build_arg_parser(config).parse_args(argv)
    config.max_depth = args.max_depth
    setup_logging(args.log_level, args.log_file)

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            source = f.read()
    except OSError as e:
        logger.error("Cannot open input %s: %s", args.input, e)
        print(f"Error: Cannot open file '{args.input}'", file=sys.stderr)
        return EXIT_IO_ERROR

    print(banner("Parser for C- Language (Enhanced Grammar)"))
    print(f"Input file: {args.input}")
    print(f"Output file: {args.output}\n")

    result = parse_source(source, config)

    if not result.ok:
        print("\n" + banner("PARSING FAILED"))
        print(result.error.format(), file=sys.stderr)
        return EXIT_SYNTAX_ERROR

    print(banner("PARSING SUCCESSFUL"))

    try:
        if args.format == "dot":
            write_dot(result.tree, args.output, config)
        else:
            with open(args.output, 'w', encoding='utf-8') as f:
                for ln in render_text(result.tree):
                    f.write(ln + '\n')
    except OSError as e:
        logger.error("Cannot write output %s: %s", args.output, e)
        print(f"Error: Could not open file '{args.output}' for writing", file=sys.stderr)
        return EXIT_IO_ERROR

    print(f"Parse tree saved to: {args.output}")
    if args.format == "dot":
        print(f"To visualize: dot -Tpng {args.output} -o parse_tree.png")
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
