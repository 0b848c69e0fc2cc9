from typing import List

from ..frontend.declaration import Declaration
from ..frontend.reorder_error import ParseError
from ..frontend.source_map import Fragment, SourceMap


def rewrite_fragments(source_map: SourceMap, declarations: List[Declaration],
                      order: List[str]) -> List[Fragment]:
    """Put the function fragments of the file in the given order.

The fragments of the definitions, in file order, are the slots; slot i gets
the fragment of order[i], comments included. Every other fragment keeps its
place. Sets Declaration.position.

A definition never leaves its `#if`/`#else` branch: if the order needs that,
ParseError is raised and nothing is rewritten.
    """
    by_name = {d.name: d for d in declarations}
    if sorted(order) != sorted(by_name) or len(order) != len(declarations):
        raise ValueError(f"order {order} is not a permutation of the defined functions")

    slots = [d.fragment for d in declarations]
    for (position, name) in enumerate(order):
        declaration = by_name[name]
        moved = source_map.fragments[declaration.fragment]
        if moved.region != source_map.fragments[slots[position]].region:
            raise ParseError(
                reason=f"cannot move `{name}` across a conditional compilation directive",
                coord=declaration.coord
            )

    fragments = list(source_map.fragments)
    for (position, name) in enumerate(order):
        declaration = by_name[name]
        fragments[slots[position]] = source_map.fragments[declaration.fragment]
        declaration.position = position
    return fragments
