import unittest

from creorder.frontend import SourceMap, ParseError, parse_source, extract_declarations, render
from creorder.output import rewrite_fragments

SOURCE = """\
#include "local.h"

/* a */
void a(void) { }
int between = 1;
/* b */
void b(void) { }

// c
void c(void) { }
"""


class TestRewriteFragments(unittest.TestCase):
    def setUp(self):
        self.source_map = SourceMap(SOURCE, "rewrite.c")
        ast = parse_source(self.source_map)
        self.declarations, _ = extract_declarations(ast, self.source_map)

    def test_permutes_function_slots_only(self):
        fragments = rewrite_fragments(self.source_map, self.declarations, ["c", "a", "b"])
        self.assertEqual(render(fragments), """\
#include "local.h"

// c
void c(void) { }
int between = 1;
/* a */
void a(void) { }

/* b */
void b(void) { }
""")

    def test_positions(self):
        rewrite_fragments(self.source_map, self.declarations, ["b", "c", "a"])
        self.assertEqual({d.name: d.position for d in self.declarations},
                         {"a": 2, "b": 0, "c": 1})
        self.assertEqual([d.index for d in self.declarations], [0, 1, 2])

    def test_identity(self):
        fragments = rewrite_fragments(self.source_map, self.declarations, ["a", "b", "c"])
        self.assertEqual(render(fragments), SOURCE)
        # the map itself is not touched
        self.assertEqual(render(self.source_map.fragments), SOURCE)

    def test_order_must_be_a_permutation(self):
        for order in (["a", "b"], ["a", "b", "b"], ["a", "b", "c", "d"], ["a", "b", "x"]):
            with self.assertRaises(ValueError):
                rewrite_fragments(self.source_map, self.declarations, order)


CONDITIONAL = """\
int b(void) { return a(); }
#ifdef X
int d(void) { return c(); }
int c(void) { return 0; }
#else
int a(void) { return 0; }
#endif
"""


class TestConditionalRegions(unittest.TestCase):
    def setUp(self):
        self.source_map = SourceMap(CONDITIONAL, "conditional.c")
        ast = parse_source(self.source_map)
        self.declarations, _ = extract_declarations(ast, self.source_map)

    def test_reorder_inside_a_branch(self):
        fragments = rewrite_fragments(self.source_map, self.declarations, ["b", "c", "d", "a"])
        self.assertEqual(render(fragments), CONDITIONAL.replace(
            "int d(void) { return c(); }\nint c(void) { return 0; }",
            "int c(void) { return 0; }\nint d(void) { return c(); }"))

    def test_leaving_a_branch_is_refused(self):
        with self.assertRaises(ParseError) as context:
            rewrite_fragments(self.source_map, self.declarations, ["a", "b", "c", "d"])
        self.assertIn("`a`", context.exception.reason)
        self.assertIn("conditional compilation directive", context.exception.reason)
        self.assertEqual([d.position for d in self.declarations], [0, 1, 2, 3])

    def test_switching_branches_is_refused(self):
        with self.assertRaises(ParseError):
            rewrite_fragments(self.source_map, self.declarations, ["b", "a", "c", "d"])


if __name__ == '__main__':
    unittest.main()
