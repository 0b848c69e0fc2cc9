import logging
import os
from typing import List, Optional

import graphviz

from ..frontend.reorder_error import GraphExportError, WriteError
from ..graph.call_graph import CallGraph
from .file_writer import write_atomically

logger = logging.getLogger(__name__)

CYCLE_COLOR = "red"
# written as DOT text, no need for the dot executable
SOURCE_FORMATS = ("dot", "gv")


def build_digraph(graph: CallGraph, cycle: Optional[List[str]] = None) -> graphviz.Digraph:
    cycle = cycle or []
    cycle_edges = set(zip(cycle, cycle[1:] + cycle[:1]))
    dot = graphviz.Digraph(name="calls")
    dot.attr("node", shape="box")
    for name in graph.nodes:
        if name in cycle:
            dot.node(name, color=CYCLE_COLOR)
        else:
            dot.node(name)
    for (caller, callee) in graph.edge_list():
        if (caller, callee) in cycle_edges:
            dot.edge(caller, callee, color=CYCLE_COLOR)
        else:
            dot.edge(caller, callee)
    return dot


def export_graph(graph: CallGraph, path: str, cycle: Optional[List[str]] = None) -> None:
    """Render the call graph to path, in the format named by its suffix (svg by default)."""
    fmt = os.path.splitext(path)[1][1:].lower() or "svg"
    dot = build_digraph(graph, cycle)
    try:
        if fmt in SOURCE_FORMATS:
            data = dot.source
        else:
            data = dot.pipe(format=fmt)
        write_atomically(path, data)
    except (graphviz.ExecutableNotFound, graphviz.CalledProcessError, ValueError) as exception:
        raise GraphExportError(reason=f"cannot render call graph: {exception}",
                               coord=path) from exception
    except WriteError as exception:
        raise GraphExportError(reason=exception.reason, coord=path) from exception
    logger.info("call graph written to %s", path)
