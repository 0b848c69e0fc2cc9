from typing import List


class ReorderError(Exception):
    """Base class of every failure reported by creorder.

error_info always has "reason" and "coord" keys, plus whatever the subclass adds.
    """
    def __init__(self, reason: str, coord=None, **kwargs):
        self.error_info = dict(reason=reason, coord=coord, **kwargs)
        super().__init__(reason)

    @property
    def reason(self) -> str:
        return self.error_info["reason"]

    @property
    def coord(self):
        return self.error_info["coord"]


class ParseError(ReorderError):
    pass


class ReadError(ReorderError):
    pass


class WriteError(ReorderError):
    pass


class GraphExportError(ReorderError):
    pass


class DuplicateDeclarationError(ReorderError):
    def __init__(self, name: str, coords: List, reason=None):
        if reason is None:
            reason = f"function `{name}` is defined more than once " \
                     f"(at {', '.join(str(c) for c in coords)})"
        super().__init__(
            reason=reason,
            coord=coords[-1],
            name=name,
            coords=coords,
        )


class CyclicDependencyError(ReorderError):
    def __init__(self, cycle: List[str], coord=None):
        # f -> g -> f
        path = " -> ".join(cycle + cycle[:1])
        super().__init__(
            reason=f"cyclic dependency between functions: {path}",
            coord=coord,
            cycle=list(cycle),
        )

    @property
    def cycle(self) -> List[str]:
        return self.error_info["cycle"]
