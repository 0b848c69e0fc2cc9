import logging
from typing import Dict, Iterable, List, Tuple

from pycparser.c_ast import FuncCall, ID, NodeVisitor

from ..frontend.declaration import Declaration

logger = logging.getLogger(__name__)


class CallGraph:
    """Caller -> callee edges between the functions of one file.

The node set is fixed at construction. Edges are kept per caller in the
order they were first added, without duplicates and without self-edges.
    """
    def __init__(self, nodes: Iterable[str]):
        self.nodes: List[str] = list(nodes)
        self.edges: Dict[str, List[str]] = {name: [] for name in self.nodes}

    def __contains__(self, name) -> bool:
        return name in self.edges

    def __len__(self) -> int:
        return len(self.nodes)

    def add_edge(self, caller: str, callee: str) -> bool:
        if caller not in self.edges or callee not in self.edges:
            raise KeyError(f"{caller} -> {callee}: not a node of the graph")
        if caller == callee or callee in self.edges[caller]:
            return False
        self.edges[caller].append(callee)
        return True

    def successors(self, name: str) -> List[str]:
        return self.edges[name]

    def edge_list(self) -> List[Tuple[str, str]]:
        return [(caller, callee)
                for caller in self.nodes
                for callee in self.edges[caller]]


class CallCollector(NodeVisitor):
    """Visits one function body, adding an edge for each direct call by name."""
    def __init__(self, graph: CallGraph, caller: str):
        self.graph = graph
        self.caller = caller
        super().__init__()

    def visit_FuncCall(self, node: FuncCall):
        # fp(), s.f(), (*p)() are not edges
        if isinstance(node.name, ID) and node.name.name in self.graph:
            if self.graph.add_edge(self.caller, node.name.name):
                logger.debug("%s calls %s at %s", self.caller, node.name.name, node.coord)
        # calls nested in the arguments
        self.generic_visit(node)


def build_call_graph(declarations: List[Declaration]) -> CallGraph:
    graph = CallGraph(d.name for d in declarations)
    for declaration in declarations:
        CallCollector(graph, declaration.name).visit(declaration.node.body)
    logger.debug("call graph: %d nodes, %d edges", len(graph), len(graph.edge_list()))
    return graph
