import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from pycparser.c_ast import FileAST, FuncDef, NodeVisitor

from .reorder_error import DuplicateDeclarationError, ParseError
from .source_map import SourceMap

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Declaration:
    name: str
    node: FuncDef = field(repr=False)
    # position among the function definitions of the file
    index: int
    # index into SourceMap.fragments
    fragment: int
    comment: str = ""
    # assigned by the rewriter
    position: int = -1

    def __post_init__(self):
        if self.position < 0:
            self.position = self.index

    @property
    def coord(self):
        return self.node.coord


class DeclarationExtractor(NodeVisitor):
    """Collects top-level function definitions and pairs each with its fragment.

Definitions and function fragments are both in file order, so a definition
takes the first remaining fragment whose lines contain its coordinate.
Fragments passed over (e.g. code the preprocessor removed) stay in place.
    """
    def __init__(self, source_map: SourceMap):
        self.source_map = source_map
        self.declarations: List[Declaration] = []
        self.by_name: Dict[str, Declaration] = {}
        self._fragments = source_map.functions()
        self._next_fragment = 0
        super().__init__()

    def visit_FileAST(self, node: FileAST):
        for child in node.ext:
            if isinstance(child, FuncDef):
                self.visit(child)

    def visit_FuncDef(self, node: FuncDef):
        coord = node.coord
        if coord is None or coord.file != self.source_map.filename:
            # pulled in from a header by the preprocessor
            logger.debug("ignoring %s defined at %s", node.decl.name, coord)
            return
        name = node.decl.name
        if name in self.by_name:
            raise DuplicateDeclarationError(name, [self.by_name[name].coord, coord])

        fragment = self._match_fragment(name, coord)
        declaration = Declaration(
            name=name,
            node=node,
            index=len(self.declarations),
            fragment=fragment,
            comment=self.source_map.fragments[fragment].comment,
        )
        self.declarations.append(declaration)
        self.by_name[name] = declaration

    def _match_fragment(self, name, coord) -> int:
        while self._next_fragment < len(self._fragments):
            idx, fragment = self._fragments[self._next_fragment]
            self._next_fragment += 1
            if fragment.first_line <= coord.line <= fragment.last_line:
                return idx
            logger.info("%s:%d: function-like text without a parsed definition, left in place",
                        self.source_map.filename, fragment.first_line)
        raise ParseError(
            reason=f"cannot locate the definition of `{name}` in the source text",
            coord=coord
        )


def extract_declarations(ast: FileAST, source_map: SourceMap) \
        -> Tuple[List[Declaration], Dict[str, Declaration]]:
    extractor = DeclarationExtractor(source_map)
    extractor.visit(ast)
    logger.debug("extracted %d function definitions", len(extractor.declarations))
    return extractor.declarations, extractor.by_name
