import argparse
import sys

from .cli import add_common_arguments, setup_logging, options_from, report
from .frontend import ReorderError
from .pipeline import reorder_file, STDOUT

parser = argparse.ArgumentParser(
    prog="creorder",
    description="Reorder the function definitions of a C file so that "
                "every function is defined before it is called.")
add_common_arguments(parser)
parser.add_argument("-svg", "--graph", type=str, default=None, dest="graph_output",
        help="also draw the call graph to this file (format from the suffix, svg by default)")
parser.add_argument("-o", type=str, default=None, dest="output",
        help="output file instead of rewriting in place, '-' for stdout")
parser.add_argument("-callers-first", action="store_true",
        help="put callers before the functions they call")


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    setup_logging(args)
    if not args.source_file:
        parser.print_help(sys.stderr)
        return 2

    try:
        result = reorder_file(args.source_file, options_from(args),
                              output=args.output,
                              graph_output=args.graph_output)
    except ReorderError as exception:
        report(exception, args.source_file)
        return 1

    if result.export_error is not None:
        report(result.export_error, args.source_file, severity="warning")
    if args.output == STDOUT:
        sys.stdout.write(result.text)
    return 0


if __name__ == '__main__':
    sys.exit(main())
