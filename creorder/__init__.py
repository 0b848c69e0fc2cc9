"""
creorder: reorder the function definitions of a C file so that every
function is defined before it is called.
"""
from .frontend import ReorderError, ParseError, ReadError, WriteError, \
    GraphExportError, DuplicateDeclarationError, CyclicDependencyError
from .pipeline import ReorderOptions, Analysis, ReorderResult, \
    analyze, reorder, reorder_source, reorder_file
