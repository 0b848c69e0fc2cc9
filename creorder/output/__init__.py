from .source_rewriter import rewrite_fragments
from .file_writer import read_text, write_atomically
from .graph_export import build_digraph, export_graph
