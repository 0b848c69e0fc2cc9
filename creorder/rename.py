"""crename: rename a function of a C file, its definition, prototypes and calls."""
import argparse
import logging
import re
import sys
from typing import List, Tuple

from pycparser.c_ast import Decl

from .cli import add_common_arguments, setup_logging, options_from, report
from .frontend import SourceMap, ReorderError, DuplicateDeclarationError, \
    parse_source, extract_declarations
from .output import read_text, write_atomically
from .pipeline import ReorderOptions

logger = logging.getLogger(__name__)

C_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*\Z")

parser = argparse.ArgumentParser(
    prog="crename",
    description="Rename a function in a C file (definition, prototypes and calls).")
add_common_arguments(parser)
parser.add_argument("-before", type=str, required=True,
        help="initial function name")
parser.add_argument("-after", type=str, required=True,
        help="new function name")


def rename_function(text: str, before: str, after: str, filename="<source>",
                    options: ReorderOptions = None) -> Tuple[str, List[Tuple[int, int]]]:
    """Return the renamed text and the (line, column) of every replaced name.

Any `before` directly followed by `(` outside comments, literals and
directives is replaced: definitions, prototypes and calls alike. Macro
bodies and member calls through `.` or `->` are left alone.
    """
    if options is None:
        options = ReorderOptions(use_cpp=False)
    source_map = SourceMap(text, filename)
    ast = parse_source(source_map,
                       use_cpp=options.use_cpp,
                       cpp_path=options.cpp_path,
                       cpp_args=options.cpp_args)
    _, by_name = extract_declarations(ast, source_map)
    if before != after:
        if after in by_name:
            coord = by_name[after].coord
            raise DuplicateDeclarationError(
                after, [coord],
                reason=f"cannot rename `{before}`: `{after}` is already defined at {coord}"
            )
        for node in ast.ext:
            # prototypes, externs and globals share the name space
            if isinstance(node, Decl) and node.name == after:
                raise DuplicateDeclarationError(
                    after, [node.coord],
                    reason=f"cannot rename `{before}`: `{after}` is already declared at {node.coord}"
                )

    pieces = []
    locations = []
    cursor = 0
    for token in source_map.call_like_words(before):
        pieces.append(text[cursor:token.start])
        pieces.append(after)
        cursor = token.end
        location = (source_map.line_of(token.start), source_map.column_of(token.start))
        logger.info("%s renamed at %s:%d:%d", before, filename, *location)
        locations.append(location)
    pieces.append(text[cursor:])
    return "".join(pieces), locations


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    setup_logging(args)
    if not args.source_file:
        parser.print_help(sys.stderr)
        return 2
    for name in (args.before, args.after):
        if not C_IDENTIFIER.match(name):
            parser.error(f"`{name}` is not a C identifier")

    try:
        text = read_text(args.source_file)
        renamed, locations = rename_function(text, args.before, args.after,
                                             args.source_file, options_from(args))
        if not locations:
            raise ReorderError(reason=f"no definition or call of `{args.before}`",
                               coord=args.source_file)
        if renamed != text:
            write_atomically(args.source_file, renamed)
    except ReorderError as exception:
        report(exception, args.source_file)
        return 1

    for (line, column) in locations:
        print(f"{args.before} renamed at: {args.source_file}:{line}:{column}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
