import unittest

from creorder.frontend import SourceMap, ParseError, DuplicateDeclarationError, \
    parse_source, extract_declarations

SOURCE = """\
int helper(int);

/* first */
int first(void)
{
    return helper(1);
}

int
helper(int n)
{
    return n;
}

int last(void) { return 0; }
"""


def extract(text, filename="decls.c"):
    source_map = SourceMap(text, filename)
    ast = parse_source(source_map, use_cpp=False)
    return source_map, extract_declarations(ast, source_map)


class TestDeclarationExtractor(unittest.TestCase):
    def test_definitions_in_file_order(self):
        source_map, (declarations, by_name) = extract(SOURCE)
        self.assertEqual([d.name for d in declarations], ["first", "helper", "last"])
        self.assertEqual([d.index for d in declarations], [0, 1, 2])
        self.assertEqual([d.position for d in declarations], [0, 1, 2])
        self.assertIs(by_name["helper"], declarations[1])

    def test_declaration_refers_to_tree_and_fragment(self):
        source_map, (declarations, _) = extract(SOURCE)
        first = declarations[0]
        self.assertEqual(first.node.decl.name, "first")
        self.assertEqual(first.comment, "/* first */\n")
        # return type on its own line
        helper = source_map.fragments[declarations[1].fragment]
        self.assertTrue(helper.text.startswith("int\nhelper(int n)"))
        self.assertEqual(declarations[1].coord.line, 10)

    def test_prototypes_are_not_definitions(self):
        _, (declarations, _) = extract("int f(void);\nint g(void);\n")
        self.assertEqual(declarations, [])

    def test_duplicate_definition(self):
        text = "int f(void) { return 1; }\nint f(void) { return 2; }\n"
        with self.assertRaises(DuplicateDeclarationError) as context:
            extract(text)
        error = context.exception
        self.assertEqual(error.error_info["name"], "f")
        self.assertEqual([c.line for c in error.error_info["coords"]], [1, 2])
        self.assertIn("`f`", error.reason)

    def test_syntax_error(self):
        with self.assertRaises(ParseError) as context:
            extract("int f(void) { return 1 }\n", "bad.c")
        self.assertIn("bad.c", context.exception.reason)


if __name__ == '__main__':
    unittest.main()
