"""
Slot storage for document nodes.

Every node of a document lives in one ``NodeArena`` and is addressed by its
slot index. Released slots are recycled through a free list; each release
bumps the slot's generation so that a handle taken before the release can
be told apart from the slot's next occupant.

An arena belongs to a single document and is not safe to share between
threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Final

from ._errors import AllocationError
from ._errors import DanglingReferenceError

if TYPE_CHECKING:
    from ._tree import NodeKind
    from ._tree import NumberForm

logger = logging.getLogger(__name__)

NIL: Final = -1


@dataclass
class Slot:
    """
    Storage record for one node.

    ``alias_of`` is NIL for owning nodes. For a reference node it holds the
    target slot index and ``alias_generation`` the target's generation at
    the time the alias was made; every other value field is unused.
    """

    kind: NodeKind | None = None
    value: str | float | None = None
    form: NumberForm | None = None
    first_child: int = NIL
    prev: int = NIL
    next: int = NIL
    parent: int = NIL
    name_hash: int = 0
    name: str | None = None
    alias_of: int = NIL
    alias_generation: int = 0
    generation: int = 0
    live: bool = False

    def reset(self) -> None:
        """Clears every field except the generation counter."""
        self.kind = None
        self.value = None
        self.form = None
        self.first_child = NIL
        self.prev = NIL
        self.next = NIL
        self.parent = NIL
        self.name_hash = 0
        self.name = None
        self.alias_of = NIL
        self.alias_generation = 0
        self.live = False


class NodeArena:
    """
    Allocates and releases node slots for one document.

    ``max_nodes`` caps the number of simultaneously live slots; allocating
    past it raises ``AllocationError``.
    """

    def __init__(self, max_nodes: int | None = None) -> None:
        if max_nodes is not None and (
            not isinstance(max_nodes, int) or max_nodes < 1
        ):
            raise ValueError("max_nodes must be a positive integer or None")

        self.max_nodes = max_nodes
        self._slots: list[Slot] = []
        self._free: list[int] = []
        self._live = 0

    def __len__(self) -> int:
        return self._live

    @property
    def live_count(self) -> int:
        """Number of slots currently allocated."""
        return self._live

    def allocate(self) -> int:
        """Returns the index of a fresh, zeroed, live slot."""
        if self.max_nodes is not None and self._live >= self.max_nodes:
            logger.debug("Node arena exhausted at %d nodes", self._live)
            raise AllocationError(
                f"node arena capacity of {self.max_nodes} exceeded"
            )

        if self._free:
            index = self._free.pop()
        else:
            index = len(self._slots)
            self._slots.append(Slot())

        self._slots[index].live = True
        self._live += 1
        return index

    def release(self, index: int) -> None:
        """Returns a slot to the free list and invalidates its handles."""
        slot = self.slot(index)
        slot.reset()
        slot.generation += 1
        self._free.append(index)
        self._live -= 1

    def slot(self, index: int) -> Slot:
        """Returns the live slot at ``index``."""
        if not 0 <= index < len(self._slots) or not self._slots[index].live:
            raise DanglingReferenceError(f"node {index} has been released")
        return self._slots[index]

    def is_live(self, index: int, generation: int) -> bool:
        """Checks that ``index`` still holds the node of ``generation``."""
        if not 0 <= index < len(self._slots):
            return False
        slot = self._slots[index]
        return slot.live and slot.generation == generation

    def clear(self) -> None:
        """Releases every slot at once."""
        for index, slot in enumerate(self._slots):
            if slot.live:
                self.release(index)
