import heapq
from typing import Dict, List

from .call_graph import CallGraph


def topological_sort(graph: CallGraph, callers_first=False) -> List[str]:
    """Kahn's algorithm over an acyclic call graph.

By default a callee comes before every caller, so each function is defined
above its first use. callers_first flips this. Whenever several functions
are ready at once the one earliest in the file wins, which makes the result
depend on the input alone, and leaves an already valid order untouched.
    """
    index: Dict[str, int] = {name: i for (i, name) in enumerate(graph.nodes)}
    # ready_after[u]: functions waiting on u
    ready_after: Dict[str, List[str]] = {name: [] for name in graph.nodes}
    pending: Dict[str, int] = {name: 0 for name in graph.nodes}
    for (caller, callee) in graph.edge_list():
        first, then = (caller, callee) if callers_first else (callee, caller)
        ready_after[first].append(then)
        pending[then] += 1

    queue = [index[name] for name in graph.nodes if pending[name] == 0]
    heapq.heapify(queue)
    result: List[str] = []
    while queue:
        name = graph.nodes[heapq.heappop(queue)]
        result.append(name)
        for waiting in ready_after[name]:
            pending[waiting] -= 1
            if pending[waiting] == 0:
                heapq.heappush(queue, index[waiting])

    if len(result) != len(graph.nodes):
        left = [name for name in graph.nodes if pending[name] > 0]
        raise RuntimeError(f"topological sort on a cyclic graph, unplaced: {', '.join(left)}")
    return result
