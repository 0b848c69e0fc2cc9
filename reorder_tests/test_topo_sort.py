import random
import unittest

from creorder.graph import CallGraph, topological_sort

from .test_cycle_detector import make_graph


class TestTopologicalSort(unittest.TestCase):
    def test_helper_before_main(self):
        graph = make_graph(["main", "helper"], [("main", "helper")])
        self.assertEqual(topological_sort(graph), ["helper", "main"])

    def test_callers_first(self):
        graph = make_graph(["helper", "main"], [("main", "helper")])
        self.assertEqual(topological_sort(graph, callers_first=True), ["main", "helper"])

    def test_diamond(self):
        graph = make_graph(["a", "b", "c"], [("a", "c"), ("b", "c")])
        self.assertEqual(topological_sort(graph), ["c", "a", "b"])

    def test_ties_follow_file_order(self):
        graph = make_graph(["d", "b", "a", "c"], [])
        self.assertEqual(topological_sort(graph), ["d", "b", "a", "c"])
        # z is ready last but comes first in the file
        graph = make_graph(["z", "y", "x"], [("z", "x")])
        self.assertEqual(topological_sort(graph), ["y", "x", "z"])

    def test_valid_order_is_kept(self):
        graph = make_graph(["leaf", "mid", "top"],
                           [("mid", "leaf"), ("top", "mid"), ("top", "leaf")])
        self.assertEqual(topological_sort(graph), ["leaf", "mid", "top"])

    def test_cyclic_graph_is_an_internal_error(self):
        graph = make_graph(["f", "g", "h"], [("f", "g"), ("g", "f")])
        with self.assertRaises(RuntimeError):
            topological_sort(graph)

    def test_random_dags(self):
        rng = random.Random(1234)
        for _ in range(50):
            names = [f"fn{i}" for i in range(rng.randint(1, 30))]
            rng.shuffle(names)
            # edges only towards later names in `rank`, so the graph is acyclic
            rank = names[:]
            rng.shuffle(rank)
            graph = CallGraph(names)
            for _ in range(rng.randint(0, 60)):
                u, v = rng.sample(rank, 2) if len(rank) > 1 else (rank[0], rank[0])
                if rank.index(u) < rank.index(v):
                    graph.add_edge(u, v)

            order = topological_sort(graph)
            self.assertEqual(sorted(order), sorted(names))
            position = {name: i for (i, name) in enumerate(order)}
            for (caller, callee) in graph.edge_list():
                self.assertLess(position[callee], position[caller])
            self.assertEqual(topological_sort(graph), order)


if __name__ == '__main__':
    unittest.main()
