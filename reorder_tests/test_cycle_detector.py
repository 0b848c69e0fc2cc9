import unittest

from creorder.graph import CallGraph, find_cycle


def make_graph(nodes, edges):
    graph = CallGraph(nodes)
    for (caller, callee) in edges:
        graph.add_edge(caller, callee)
    return graph


class TestFindCycle(unittest.TestCase):
    def test_acyclic(self):
        graph = make_graph(["main", "helper"], [("main", "helper")])
        self.assertIsNone(find_cycle(graph))

    def test_empty(self):
        self.assertIsNone(find_cycle(CallGraph([])))

    def test_two_cycle(self):
        graph = make_graph(["f", "g"], [("f", "g"), ("g", "f")])
        self.assertEqual(find_cycle(graph), ["f", "g"])

    def test_diamond_is_not_a_cycle(self):
        graph = make_graph(["a", "b", "c"], [("a", "c"), ("b", "c")])
        self.assertIsNone(find_cycle(graph))
        # reconverging inside one traversal as well
        graph = make_graph(["top", "left", "right", "bottom"],
                           [("top", "left"), ("top", "right"),
                            ("left", "bottom"), ("right", "bottom")])
        self.assertIsNone(find_cycle(graph))

    def test_witness_is_the_cycle_only(self):
        # entry -> a -> b -> c -> a
        graph = make_graph(["entry", "a", "b", "c"],
                           [("entry", "a"), ("a", "b"), ("b", "c"), ("c", "a")])
        self.assertEqual(find_cycle(graph), ["a", "b", "c"])

    def test_cycle_away_from_first_root(self):
        graph = make_graph(["x", "y", "p", "q"],
                           [("x", "y"), ("q", "p"), ("p", "q")])
        self.assertEqual(find_cycle(graph), ["p", "q"])

    def test_witness_edges_exist(self):
        graph = make_graph(["a", "b", "c", "d"],
                           [("a", "b"), ("a", "d"), ("b", "c"), ("d", "c"), ("c", "d")])
        cycle = find_cycle(graph)
        self.assertEqual(cycle, ["c", "d"])
        for (u, v) in zip(cycle, cycle[1:] + cycle[:1]):
            self.assertIn(v, graph.successors(u))

    def test_long_chain(self):
        names = [f"f{i}" for i in range(5000)]
        graph = make_graph(names, list(zip(names, names[1:])))
        self.assertIsNone(find_cycle(graph))
        graph.add_edge(names[-1], names[0])
        self.assertEqual(find_cycle(graph), names)


if __name__ == '__main__':
    unittest.main()
