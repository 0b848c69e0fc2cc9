from .reorder_error import ReorderError, ParseError, ReadError, WriteError, \
    GraphExportError, DuplicateDeclarationError, CyclicDependencyError
from .source_map import SourceMap, Fragment, render
from .source_parser import parse_source
from .declaration import Declaration, extract_declarations
