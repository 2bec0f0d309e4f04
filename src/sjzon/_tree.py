"""
Document tree built by the parser and edited through the mutation API.

A ``Document`` owns a ``NodeArena`` and every node in it. Nodes form
doubly linked sibling chains; arrays and objects point at the head of their
child chain. ``Node`` values handed out to callers are lightweight handles
(document, slot index, generation) and stay valid until the node they name
is released.

Reference nodes are aliases: they store the target's slot index and
generation and nothing else. Reads go through to the target, teardown never
follows them, and reading an alias whose target has been released raises
``DanglingReferenceError``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import Any
from typing import cast

from ._arena import NIL
from ._arena import NodeArena
from ._arena import Slot
from ._errors import DanglingReferenceError
from ._errors import TreeError
from ._murmur import key_hash

logger = logging.getLogger(__name__)

type Key = str | int
type Scalar = str | float | bool | None


class NodeKind(Enum):
    """Value type of a node."""

    NULL = "null"
    FALSE = "false"
    TRUE = "true"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class NumberForm(Enum):
    """Lexical form of a number literal, fixed when the node is created."""

    INTEGER = "integer"
    REAL = "real"


_CONTAINERS = frozenset({NodeKind.ARRAY, NodeKind.OBJECT})


@dataclass(frozen=True, repr=False)
class Node:
    """
    Handle to one node of a ``Document``.

    Handles compare equal when they name the same live node. Reading
    through a handle whose node has been released raises
    ``DanglingReferenceError``.
    """

    document: Document
    index: int
    generation: int

    def __repr__(self) -> str:
        if not self.is_live:
            return f"<Node #{self.index} released>"
        ref = " ref" if self.is_reference else ""
        return f"<Node #{self.index} {self.kind.value}{ref}>"

    def __bool__(self) -> bool:
        return True

    @property
    def is_live(self) -> bool:
        """Whether the node this handle names still exists."""
        return self.document.arena.is_live(self.index, self.generation)

    def _live_index(self) -> int:
        if not self.is_live:
            raise DanglingReferenceError(
                f"node {self.index} has been released"
            )
        return self.index

    @property
    def _own(self) -> Slot:
        return self.document.arena.slot(self._live_index())

    @property
    def _target(self) -> Slot:
        target = self.document._resolve(self._live_index())
        return self.document.arena.slot(target)

    @property
    def kind(self) -> NodeKind:
        return cast(NodeKind, self._target.kind)

    @property
    def is_reference(self) -> bool:
        return self._own.alias_of != NIL

    @property
    def target(self) -> Node:
        """The aliased node for a reference, otherwise the node itself."""
        target = self.document._resolve(self._live_index())
        return self.document._handle(target)

    @property
    def is_container(self) -> bool:
        return self.kind in _CONTAINERS

    @property
    def value(self) -> Scalar:
        """
        Raw scalar value: None for null, a bool for booleans, a float for
        numbers and a str for strings. Containers have no scalar value and
        return None.
        """
        slot = self._target
        if slot.kind is NodeKind.TRUE:
            return True
        if slot.kind is NodeKind.FALSE:
            return False
        return slot.value

    @property
    def number(self) -> float:
        return cast(float, self._expect(NodeKind.NUMBER).value)

    @property
    def int_value(self) -> int:
        """The number truncated toward zero."""
        return math.trunc(self.number)

    @property
    def number_form(self) -> NumberForm:
        return cast(NumberForm, self._expect(NodeKind.NUMBER).form)

    @property
    def string(self) -> str:
        return cast(str, self._expect(NodeKind.STRING).value)

    @property
    def name_hash(self) -> int:
        """Hash of the member name; 0 for nodes that are not members."""
        return self._own.name_hash

    @property
    def name(self) -> str | None:
        """Member name, kept only when the document retains names."""
        return self._own.name

    @property
    def parent(self) -> Node | None:
        return self.document._handle_or_none(self._own.parent)

    @property
    def next_sibling(self) -> Node | None:
        return self.document._handle_or_none(self._own.next)

    @property
    def prev_sibling(self) -> Node | None:
        return self.document._handle_or_none(self._own.prev)

    @property
    def first_child(self) -> Node | None:
        return self.document._handle_or_none(self._target.first_child)

    def children(self) -> Iterator[Node]:
        """Yields the children of an array or object in order."""
        slot = self._target
        if slot.kind not in _CONTAINERS:
            raise TreeError(f"{slot.kind.value} node has no children")
        for index in self.document._child_indices(slot):
            yield self.document._handle(index)

    def __iter__(self) -> Iterator[Node]:
        return self.children()

    def __len__(self) -> int:
        return self.document.get_array_size(self)

    def __getitem__(self, key: Key) -> Node:
        """
        Array elements by position, object members by name or name hash.

        An int on an object is a precomputed ``key_hash``, not a position;
        use ``Document.get_array_item`` for positional access to members.
        """
        if isinstance(key, int) and self.kind is NodeKind.ARRAY:
            item = self.document.get_array_item(self, key)
            if item is None:
                raise IndexError(f"array index {key} out of range")
            return item

        item = self.document.get_object_item(self, key)
        if item is None:
            raise KeyError(key)
        return item

    def _expect(self, kind: NodeKind) -> Slot:
        slot = self._target
        if slot.kind is not kind:
            raise TreeError(
                f"expected a {kind.value} node, got {slot.kind.value}"
            )
        return slot


class Document:
    """
    Owner of a parsed or constructed tree.

    ``keep_names`` decides whether object members remember their names as
    text; without them members can still be found by hash but the tree can
    no longer be serialized. ``max_nodes`` bounds the arena.
    """

    def __init__(
        self, *, keep_names: bool = True, max_nodes: int | None = None
    ) -> None:
        self.keep_names = keep_names
        self.arena = NodeArena(max_nodes)
        self._root = NIL
        self._root_generation = 0

    def __repr__(self) -> str:
        return f"<Document root={self.root!r} nodes={len(self.arena)}>"

    def __enter__(self) -> Document:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def root(self) -> Node | None:
        if self._root == NIL or not self.arena.is_live(
            self._root, self._root_generation
        ):
            return None
        return self._handle(self._root)

    @root.setter
    def root(self, node: Node | None) -> None:
        if node is None:
            self._root = NIL
            return
        index = self._index(node)
        if self.arena.slot(index).parent != NIL:
            raise TreeError("an attached node cannot become the root")
        self._set_root(index)

    def close(self) -> None:
        """Releases every node of the document, detached ones included."""
        logger.debug("Closing document with %d live nodes", len(self.arena))
        self.arena.clear()
        self._root = NIL

    # Creation

    def create_null(self) -> Node:
        """Creates an unattached null node."""
        return self._handle(self._new(NodeKind.NULL))

    def create_true(self) -> Node:
        """Creates an unattached true node."""
        return self._handle(self._new(NodeKind.TRUE))

    def create_false(self) -> Node:
        """Creates an unattached false node."""
        return self._handle(self._new(NodeKind.FALSE))

    def create_bool(self, flag: bool) -> Node:
        """Creates a true or false node from ``flag``."""
        return self.create_true() if flag else self.create_false()

    def create_number(self, number: float) -> Node:
        """Creates a number; ints take the integer form, floats the real."""
        return self._handle(self._new_number(number))

    def create_string(self, text: str) -> Node:
        """Creates an unattached string node."""
        if not isinstance(text, str):
            raise TypeError(f"expected str, not {type(text).__name__}")
        return self._handle(self._new(NodeKind.STRING, text))

    def create_array(self) -> Node:
        """Creates an empty, unattached array."""
        return self._handle(self._new(NodeKind.ARRAY))

    def create_object(self) -> Node:
        """Creates an empty, unattached object."""
        return self._handle(self._new(NodeKind.OBJECT))

    def create_int_array(self, numbers: Iterable[int]) -> Node:
        """Creates an array of integer-form numbers."""
        return self._create_array_of(numbers, self._new_number)

    def create_float_array(self, numbers: Iterable[float]) -> Node:
        """Creates an array of real-form numbers."""
        return self._create_array_of(
            numbers, lambda n: self._new_number(float(n))
        )

    def create_string_array(self, strings: Iterable[str]) -> Node:
        """Creates an array of strings."""
        return self._create_array_of(
            strings, lambda s: self.create_string(s).index
        )

    def create_reference(self, node: Node) -> Node:
        """
        Creates an unattached alias of ``node``.

        The alias shares the target's value and children without owning
        them; releasing it never touches the target.
        """
        target = self._resolve(self._index(node))
        index = self.arena.allocate()
        slot = self.arena.slot(index)
        slot.alias_of = target
        slot.alias_generation = self.arena.slot(target).generation
        return self._handle(index)

    # Lookup

    def get_array_size(self, container: Node) -> int:
        """Counts the children of an array or object."""
        slot = self._container_slot(container)
        return sum(1 for _ in self._child_indices(slot))

    def get_array_item(self, container: Node, index: int) -> Node | None:
        """Returns the child at ``index`` or None when out of range."""
        found = self._find_position(container, index)
        return None if found == NIL else self._handle(found)

    def get_object_item(self, obj: Node, key: Key) -> Node | None:
        """
        Returns the first member named ``key`` or None.

        ``key`` is either the member name or its precomputed hash.
        """
        found = self._find_member(obj, key)
        return None if found == NIL else self._handle(found)

    # Mutation

    def add_to_array(self, array: Node, item: Node) -> None:
        """Appends ``item`` to the end of an array or object."""
        parent = self._owned_container(array)
        child = self._attachable(item, parent)
        self._append(parent, child)

    def add_to_object(self, obj: Node, key: str, item: Node) -> None:
        """Appends ``item`` to ``obj`` as member ``key``."""
        parent = self._owned_container(obj, NodeKind.OBJECT)
        child = self._attachable(item, parent)
        self._set_name(child, key)
        self._append(parent, child)

    def add_reference_to_array(self, array: Node, item: Node) -> Node:
        self._owned_container(array)
        ref = self.create_reference(item)
        self.add_to_array(array, ref)
        return ref

    def add_reference_to_object(self, obj: Node, key: str, item: Node) -> Node:
        self._owned_container(obj, NodeKind.OBJECT)
        ref = self.create_reference(item)
        self.add_to_object(obj, key, ref)
        return ref

    def add_null_to_object(self, obj: Node, key: str) -> Node:
        return self._add_new_member(obj, key, self.create_null)

    def add_true_to_object(self, obj: Node, key: str) -> Node:
        return self._add_new_member(obj, key, self.create_true)

    def add_false_to_object(self, obj: Node, key: str) -> Node:
        return self._add_new_member(obj, key, self.create_false)

    def add_number_to_object(self, obj: Node, key: str, number: float) -> Node:
        return self._add_new_member(
            obj, key, lambda: self.create_number(number)
        )

    def add_string_to_object(self, obj: Node, key: str, text: str) -> Node:
        return self._add_new_member(obj, key, lambda: self.create_string(text))

    def detach_from_array(self, container: Node, index: int) -> Node | None:
        """
        Unlinks the child at ``index`` and returns it.

        The detached node is not released; delete it or attach it again.
        """
        self._owned_container(container)
        found = self._find_position(container, index)
        if found == NIL:
            return None
        self._unlink(found)
        return self._handle(found)

    def detach_from_object(self, obj: Node, key: Key) -> Node | None:
        """Unlinks the first member named ``key`` and returns it."""
        self._owned_container(obj, NodeKind.OBJECT)
        found = self._find_member(obj, key)
        if found == NIL:
            return None
        self._unlink(found)
        return self._handle(found)

    def delete_from_array(self, container: Node, index: int) -> bool:
        node = self.detach_from_array(container, index)
        if node is None:
            return False
        self._release_tree(node.index)
        return True

    def delete_from_object(self, obj: Node, key: Key) -> bool:
        node = self.detach_from_object(obj, key)
        if node is None:
            return False
        self._release_tree(node.index)
        return True

    def replace_in_array(
        self, container: Node, index: int, new_item: Node
    ) -> bool:
        """
        Puts ``new_item`` in place of the child at ``index`` and releases
        the old child. Returns False when there is no such child.
        """
        parent = self._owned_container(container)
        child = self._attachable(new_item, parent)
        found = self._find_position(container, index)
        if found == NIL:
            return False
        self._splice(found, child)
        return True

    def replace_in_object(self, obj: Node, key: Key, new_item: Node) -> bool:
        """
        Replaces the first member named ``key`` with ``new_item``, which
        takes over the old member's name. ``key`` is a name or its hash.
        """
        parent = self._owned_container(obj, NodeKind.OBJECT)
        child = self._attachable(new_item, parent)
        found = self._find_member(obj, key)
        if found == NIL:
            return False
        self._splice(found, child)
        return True

    def delete(self, node: Node) -> None:
        """
        Releases ``node`` and everything it owns.

        An attached node is unlinked from its parent first. Aliases inside
        the subtree are released without touching their targets.
        """
        index = self._index(node)
        if self.arena.slot(index).parent != NIL:
            self._unlink(index)
        if index == self._root:
            self._root = NIL
        self._release_tree(index)

    # Internals shared with the parser

    def _handle(self, index: int) -> Node:
        return Node(self, index, self.arena.slot(index).generation)

    def _handle_or_none(self, index: int) -> Node | None:
        return None if index == NIL else self._handle(index)

    def _index(self, node: Node) -> int:
        if not isinstance(node, Node):
            raise TypeError(f"expected a Node, not {type(node).__name__}")
        if node.document is not self:
            raise TreeError("node belongs to a different document")
        if not node.is_live:
            raise DanglingReferenceError(
                f"node {node.index} has been released"
            )
        return node.index

    def _set_root(self, index: int) -> None:
        self._root = index
        self._root_generation = self.arena.slot(index).generation

    def _new(
        self,
        kind: NodeKind,
        value: str | float | None = None,
        form: NumberForm | None = None,
    ) -> int:
        index = self.arena.allocate()
        slot = self.arena.slot(index)
        slot.kind = kind
        slot.value = value
        slot.form = form
        return index

    def _new_number(self, number: float) -> int:
        if isinstance(number, bool) or not isinstance(number, int | float):
            raise TypeError(
                f"expected int or float, not {type(number).__name__}"
            )
        form = (
            NumberForm.INTEGER if isinstance(number, int) else NumberForm.REAL
        )
        return self._new(NodeKind.NUMBER, float(number), form)

    def _set_name(self, index: int, key: str) -> None:
        slot = self.arena.slot(index)
        slot.name_hash = key_hash(key)
        slot.name = key if self.keep_names else None

    def _link(self, parent: int, child: int, after: int) -> None:
        """Links ``child`` into ``parent`` after ``after``, or first on NIL."""
        slot = self.arena.slot(child)
        slot.parent = parent
        if after == NIL:
            parent_slot = self.arena.slot(parent)
            slot.next = parent_slot.first_child
            parent_slot.first_child = child
        else:
            prev_slot = self.arena.slot(after)
            slot.next = prev_slot.next
            prev_slot.next = child
        slot.prev = after
        if slot.next != NIL:
            self.arena.slot(slot.next).prev = child

    def _resolve(self, index: int) -> int:
        slot = self.arena.slot(index)
        if slot.alias_of == NIL:
            return index
        if not self.arena.is_live(slot.alias_of, slot.alias_generation):
            raise DanglingReferenceError(
                f"reference {index} points at a released node"
            )
        return slot.alias_of

    def _child_indices(self, slot: Slot) -> Iterator[int]:
        current = slot.first_child
        while current != NIL:
            yield current
            current = self.arena.slot(current).next

    def _container_slot(self, node: Node) -> Slot:
        slot = self.arena.slot(self._resolve(self._index(node)))
        if slot.kind not in _CONTAINERS:
            raise TreeError(
                f"expected an array or object, got {slot.kind.value}"
            )
        return slot

    def _owned_container(
        self, node: Node, kind: NodeKind | None = None
    ) -> int:
        index = self._index(node)
        slot = self.arena.slot(index)
        if slot.alias_of != NIL:
            raise TreeError("cannot modify a container through a reference")
        if kind is not None and slot.kind is not kind:
            raise TreeError(
                f"expected a {kind.value} node, got {slot.kind.value}"
            )
        if slot.kind not in _CONTAINERS:
            raise TreeError(
                f"expected an array or object, got {slot.kind.value}"
            )
        return index

    def _attachable(self, item: Node, parent: int) -> int:
        index = self._index(item)
        if self.arena.slot(index).parent != NIL:
            raise TreeError("node is already attached to a container")
        if index == self._root:
            raise TreeError("the document root cannot be attached")
        ancestor = parent
        while ancestor != NIL:
            if ancestor == index:
                raise TreeError("a node cannot be attached inside itself")
            ancestor = self.arena.slot(ancestor).parent
        return index

    def _append(self, parent: int, child: int) -> None:
        tail = NIL
        for tail in self._child_indices(self.arena.slot(parent)):
            pass
        self._link(parent, child, tail)

    def _add_new_member(
        self, obj: Node, key: str, factory: Callable[[], Node]
    ) -> Node:
        self._owned_container(obj, NodeKind.OBJECT)
        item = factory()
        self.add_to_object(obj, key, item)
        return item

    def _create_array_of(
        self, values: Iterable[Any], make: Callable[[Any], int]
    ) -> Node:
        array = self._new(NodeKind.ARRAY)
        tail = NIL
        for value in values:
            child = make(value)
            self._link(array, child, tail)
            tail = child
        return self._handle(array)

    def _find_position(self, container: Node, position: int) -> int:
        slot = self._container_slot(container)
        if position < 0:
            return NIL
        for index in self._child_indices(slot):
            if position == 0:
                return index
            position -= 1
        return NIL

    def _find_member(self, obj: Node, key: Key) -> int:
        slot = self.arena.slot(self._resolve(self._index(obj)))
        if slot.kind is not NodeKind.OBJECT:
            raise TreeError(f"expected an object node, got {slot.kind.value}")
        wanted = key if isinstance(key, int) else key_hash(key)
        for index in self._child_indices(slot):
            if self.arena.slot(index).name_hash == wanted:
                return index
        return NIL

    def _unlink(self, index: int) -> None:
        slot = self.arena.slot(index)
        if slot.prev != NIL:
            self.arena.slot(slot.prev).next = slot.next
        else:
            self.arena.slot(slot.parent).first_child = slot.next
        if slot.next != NIL:
            self.arena.slot(slot.next).prev = slot.prev
        slot.prev = slot.next = slot.parent = NIL

    def _splice(self, old: int, new: int) -> None:
        old_slot = self.arena.slot(old)
        new_slot = self.arena.slot(new)
        parent_slot = self.arena.slot(old_slot.parent)

        if parent_slot.kind is NodeKind.OBJECT:
            new_slot.name_hash = old_slot.name_hash
            new_slot.name = old_slot.name

        new_slot.parent = old_slot.parent
        new_slot.prev = old_slot.prev
        new_slot.next = old_slot.next
        if new_slot.prev != NIL:
            self.arena.slot(new_slot.prev).next = new
        else:
            parent_slot.first_child = new
        if new_slot.next != NIL:
            self.arena.slot(new_slot.next).prev = new

        old_slot.prev = old_slot.next = old_slot.parent = NIL
        self._release_tree(old)

    def _release_tree(self, index: int) -> None:
        pending = [index]
        while pending:
            current = pending.pop()
            slot = self.arena.slot(current)
            if slot.alias_of == NIL:
                pending.extend(self._child_indices(slot))
            self.arena.release(current)
