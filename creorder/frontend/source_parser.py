import logging
import subprocess
from typing import List, Optional

from pycparser import preprocess_file
from pycparser.c_ast import FileAST
from pycparser.plyparser import ParseError as CParseError
from pycparserext.ext_c_parser import GnuCParser

from .reorder_error import ParseError
from .source_map import SourceMap

logger = logging.getLogger(__name__)


def parse_source(source_map: SourceMap, use_cpp=False, cpp_path="cpp",
                 cpp_args: Optional[List[str]] = None) -> FileAST:
    """Parse the file behind source_map into a pycparser FileAST.

With use_cpp the real preprocessor runs on the file on disk, and its line
markers keep coordinates pointing into it. Otherwise comments and directives
are blanked in place, which needs no compiler but leaves macros unexpanded
and header typedefs unknown.
    """
    filename = source_map.filename
    if use_cpp:
        logger.debug("preprocessing %s with %s %s", filename, cpp_path, cpp_args)
        try:
            text = preprocess_file(filename, cpp_path=cpp_path, cpp_args=cpp_args or [])
        except (RuntimeError, subprocess.CalledProcessError) as exception:
            raise ParseError(reason=f"preprocessing failed: {exception}",
                             coord=filename) from exception
    else:
        text = source_map.blanked()

    try:
        return GnuCParser().parse(text, filename)
    except CParseError as exception:
        # pycparser puts the coordinate in front of the message already
        raise ParseError(reason=str(exception)) from exception
