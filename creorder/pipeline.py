"""Reordering pipeline: layout and parse, extract, build the call graph,
check for cycles, sort, rewrite.

Each call works on its own objects, nothing is shared between files.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pycparser.c_ast import FileAST

from .frontend import SourceMap, Declaration, CyclicDependencyError, \
    GraphExportError, parse_source, extract_declarations, render
from .graph import CallGraph, build_call_graph, find_cycle, topological_sort
from .output import rewrite_fragments, read_text, write_atomically, export_graph

logger = logging.getLogger(__name__)

STDOUT = "-"


@dataclass
class ReorderOptions:
    use_cpp: bool = True
    cpp_path: str = "cpp"
    cpp_args: List[str] = field(default_factory=list)
    callers_first: bool = False


@dataclass
class Analysis:
    source_map: SourceMap
    ast: FileAST
    declarations: List[Declaration]
    by_name: Dict[str, Declaration]
    graph: CallGraph
    # witness, None when acyclic
    cycle: Optional[List[str]]


@dataclass
class ReorderResult:
    analysis: Analysis
    order: List[str]
    text: str
    export_error: Optional[GraphExportError] = None

    @property
    def changed(self) -> bool:
        return self.text != self.analysis.source_map.text


def analyze(text: str, filename: str, options: ReorderOptions) -> Analysis:
    source_map = SourceMap(text, filename)
    ast = parse_source(source_map,
                       use_cpp=options.use_cpp,
                       cpp_path=options.cpp_path,
                       cpp_args=options.cpp_args)
    declarations, by_name = extract_declarations(ast, source_map)
    graph = build_call_graph(declarations)
    cycle = find_cycle(graph)
    return Analysis(source_map, ast, declarations, by_name, graph, cycle)


def reorder(analysis: Analysis, callers_first=False) -> ReorderResult:
    if analysis.cycle is not None:
        first = analysis.by_name[analysis.cycle[0]]
        raise CyclicDependencyError(analysis.cycle, coord=first.coord)
    order = topological_sort(analysis.graph, callers_first=callers_first)
    fragments = rewrite_fragments(analysis.source_map, analysis.declarations, order)
    return ReorderResult(analysis, order, render(fragments))


def reorder_source(text: str, filename="<source>", options: ReorderOptions = None) -> ReorderResult:
    """Reorder C text held in memory. The preprocessor is off unless options say otherwise."""
    if options is None:
        options = ReorderOptions(use_cpp=False)
    return reorder(analyze(text, filename, options), options.callers_first)


def reorder_file(path: str, options: ReorderOptions = None,
                 output: Optional[str] = None,
                 graph_output: Optional[str] = None) -> ReorderResult:
    """Reorder a file in place, or into output ("-" writes nothing).

The call graph is drawn before the cycle check, so a cyclic graph can be
inspected. A failed drawing is kept in ReorderResult.export_error and does
not stop the reordering. Nothing is written unless the whole run succeeds.
    """
    if options is None:
        options = ReorderOptions()
    analysis = analyze(read_text(path), path, options)

    export_error = None
    if graph_output:
        try:
            export_graph(analysis.graph, graph_output, analysis.cycle)
        except GraphExportError as exception:
            logger.warning("%s: %s", graph_output, exception.reason)
            export_error = exception

    result = reorder(analysis, options.callers_first)
    result.export_error = export_error
    logger.info("%s: order %s", path, ", ".join(result.order))

    target = output or path
    if target == STDOUT:
        return result
    if target == path and not result.changed:
        logger.info("%s: already in order", path)
        return result
    write_atomically(target, result.text)
    return result
