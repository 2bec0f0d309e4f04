"""Exception types raised by sjzon."""

from __future__ import annotations

type Position = int


class JSONDecodeError(ValueError):
    """
    Handles parsing failures with precise position and context information.

    Error state containing position, line/column numbers, and surrounding
    context to help users identify and fix syntax issues. When the input
    was given as bytes, ``byte_pos`` holds the offset into those bytes.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.byte_pos: Position | None = None

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(self) -> tuple[type, tuple[str, str, Position]]:
        return self.__class__, (self.msg, self.doc, self.pos)


class TreeError(ValueError):
    """Raised when a tree operation is applied to an unsuitable node."""


class DanglingReferenceError(TreeError):
    """Raised when a handle or alias points at a released node."""


class AllocationError(MemoryError):
    """Raised when a node arena has reached its capacity."""


class SerializationError(ValueError):
    """Raised when a tree cannot be rendered back to text."""
