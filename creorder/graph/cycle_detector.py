from typing import Dict, List, Optional

from .call_graph import CallGraph

WHITE = 0
GRAY = 1
BLACK = 2


def find_cycle(graph: CallGraph) -> Optional[List[str]]:
    """Return the first cycle met by a three-colour depth-first search, or None.

Roots are taken in file order and successors in edge order, so the witness is
the same on every run. A gray node is on the current path; reaching one closes
a cycle made of the path from it to the current node. Black nodes are done and
only reconverge (a diamond), so they are skipped.

The search keeps its own stack of (node, successor iterator) frames instead
of recursing, which keeps long call chains away from the recursion limit.
    """
    color: Dict[str, int] = {name: WHITE for name in graph.nodes}
    for root in graph.nodes:
        if color[root] != WHITE:
            continue
        path = [root]
        color[root] = GRAY
        frames = [(root, iter(graph.successors(root)))]
        while frames:
            node, successors = frames[-1]
            successor = next(successors, None)
            if successor is None:
                color[node] = BLACK
                frames.pop()
                path.pop()
                continue
            if color[successor] == GRAY:
                return path[path.index(successor):]
            if color[successor] == WHITE:
                color[successor] = GRAY
                path.append(successor)
                frames.append((successor, iter(graph.successors(successor))))
    return None
