import os
import shutil
import tempfile
import unittest

from creorder import ReorderOptions, reorder_source

module_abspath = os.path.abspath(os.path.dirname(__file__))
sources_dir = os.path.join(module_abspath, "sources")
EXPECTED_SUFFIX = ".expected.c"

# no C compiler needed
NO_CPP = ReorderOptions(use_cpp=False)


def read(filename: str) -> str:
    with open(filename, "r", encoding="utf-8", newline="") as f:
        return f.read()


def make_temp_source(self: unittest.TestCase, text: str, name="source.c") -> str:
    directory = tempfile.mkdtemp()
    self.addCleanup(shutil.rmtree, directory)
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def reorder_and_compare(self: unittest.TestCase, source_filename: str):
    """Reorder a fixture and compare with <name>.expected.c.

Without an expected file the fixture is already in order and must come back
unchanged. The result is reordered once more to check it is stable.
    """
    base = source_filename[:-len(".c")]
    expected_filename = base + EXPECTED_SUFFIX
    source = read(source_filename)
    expected = read(expected_filename) if os.path.exists(expected_filename) else source

    result = reorder_source(source, source_filename, NO_CPP)
    self.assertEqual(result.text, expected,
                     msg=f"{source_filename}: unexpected order {result.order}")
    again = reorder_source(result.text, source_filename, NO_CPP)
    self.assertEqual(again.text, result.text,
                     msg=f"{source_filename}: reordering is not stable")


def inject_class(target_class):
    for filename in sorted(os.listdir(sources_dir)):
        if not filename.endswith(".c") or filename.endswith(EXPECTED_SUFFIX):
            continue
        src_abspath = os.path.join(sources_dir, filename)
        base = os.path.splitext(filename)[0]
        setattr(target_class, "test_" + base,
                lambda self, path=src_abspath: reorder_and_compare(self, path))
