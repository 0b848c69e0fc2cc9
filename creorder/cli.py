"""Arguments and logging setup shared by creorder and crename."""
import logging
import sys

from .frontend import ReorderError
from .pipeline import ReorderOptions

_nameToLevel = {
    'CRITICAL': logging.CRITICAL,
    'FATAL': logging.FATAL,
    'ERROR': logging.ERROR,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
    'NOTSET': logging.NOTSET,
}


def add_common_arguments(parser):
    parser.add_argument("source_file", type=str, nargs='?', default='')

    # Preprocessor
    parser.add_argument("-D", type=str, action="append",
            help="macros")
    parser.add_argument("-I", type=str, action="append",
            help="include directories")
    parser.add_argument("-cpp-path", type=str, default="cpp",
            help="preprocessor executable, default cpp")
    parser.add_argument("-skip-preprocess", action="store_false", dest="use_cpp",
            help="do not invoke `cpp`, only blank out comments and directives")

    # debug logs
    parser.add_argument("--log-level", type=str, choices=("DEBUG", "INFO", "WARNING", "ERROR", "FATAL"),
            default="FATAL",
            help="set log level, default FATAL (or CRITICAL)")
    parser.add_argument("--log-file", type=str, default="-",
            help="log file path (default: stderr)")
    return parser


def setup_logging(args):
    if args.log_file != "-":
        logging.basicConfig(filename=args.log_file, level=_nameToLevel[args.log_level])
    else:
        logging.basicConfig(level=_nameToLevel[args.log_level])


def options_from(args) -> ReorderOptions:
    cpp_args = []
    if args.I:
        cpp_args.extend(["-I" + path for path in args.I])
    if args.D:
        cpp_args.extend(["-D" + macro for macro in args.D])
    return ReorderOptions(
        use_cpp=args.use_cpp,
        cpp_path=args.cpp_path,
        cpp_args=cpp_args,
        callers_first=getattr(args, "callers_first", False),
    )


def report(error: ReorderError, source_file: str, severity="error"):
    print(f"{error.coord or source_file}: {severity}: {error.reason}", file=sys.stderr)
