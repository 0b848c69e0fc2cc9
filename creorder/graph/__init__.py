from .call_graph import CallGraph, CallCollector, build_call_graph
from .cycle_detector import find_cycle
from .topo_sort import topological_sort
