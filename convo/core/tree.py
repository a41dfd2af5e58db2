"""
Dialogue tree - the node container and its traversal state.

The tree owns every node by key and tracks two optional pointers:

- root: where a conversation starts
- current: where the conversation is right now

Whenever either pointer is set it names a node in the tree. Public methods
check this before writing; the only unchecked path is the private
_assemble() constructor used by the importer after it has already verified
the root key.

Usage:
    tree = Tree()
    start = tree.add_node(Node("start", "Hello there."))
    end = tree.add_node(Node("end", "Goodbye."))
    start.link_to(end, "Bye!")
    tree.set_root("start")      # also positions current at start

    tree.follow(0)              # current -> end
    tree.rewind()               # current -> start
"""

from __future__ import annotations

from collections import deque
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping, Optional, TextIO

from convo.core.errors import (
    CurrentNotSetError,
    InvalidChoiceError,
    NodeNotFoundError,
    RootNotSetError,
)
from convo.core.link import Link
from convo.core.node import Node

if TYPE_CHECKING:
    from convo.config import ConvoConfig


class Tree:
    """
    Container of dialogue nodes with a root and a current position.

    Node order is insertion order, which is also the order export writes.
    There is no terminal state: a tree can be walked indefinitely, including
    around cycles.
    """

    def __init__(self):
        self._nodes: dict[str, Node] = {}
        self._root_key: Optional[str] = None
        self._current_key: Optional[str] = None

    @classmethod
    def _assemble(cls, nodes: dict[str, Node], root_key: str) -> Tree:
        """
        Build a positioned tree without checking root_key.

        Only for callers that have just proven root_key is in nodes.
        """
        tree = cls()
        tree._nodes = nodes
        tree._root_key = root_key
        tree._current_key = root_key
        return tree

    # -- Construction / IO ----------------------------------------------------

    @classmethod
    def from_source(cls, source: str, config: Optional[ConvoConfig] = None) -> Tree:
        """Build a tree from YAML text."""
        from convo.io.importer import source_to_tree
        return source_to_tree(source, config)

    @classmethod
    def load(cls, source: str | Path | TextIO, config: Optional[ConvoConfig] = None) -> Tree:
        """Build a tree from a YAML file path or readable stream."""
        from convo.io.importer import import_tree
        return import_tree(source, config)

    def to_source(self, config: Optional[ConvoConfig] = None) -> str:
        """Serialize this tree to YAML text."""
        from convo.io.exporter import tree_to_source
        return tree_to_source(self, config)

    def export(self, sink: str | Path | TextIO, config: Optional[ConvoConfig] = None) -> None:
        """Write this tree to a file path or writable stream."""
        from convo.io.exporter import export_tree
        export_tree(self, sink, config)

    # -- Nodes ----------------------------------------------------------------

    @property
    def nodes(self) -> Mapping[str, Node]:
        """Read-only view of the nodes, keyed by node key."""
        return MappingProxyType(self._nodes)

    def add_node(self, node: Node) -> Node:
        """
        Insert a node keyed by its own key.

        A node with the same key is replaced in place, keeping its position.
        """
        self._nodes[node.key] = node
        return node

    def get_node(self, key: str) -> Optional[Node]:
        return self._nodes.get(key)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return (
            list(self._nodes.items()) == list(other._nodes.items())
            and self._root_key == other._root_key
            and self._current_key == other._current_key
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Tree(nodes={len(self._nodes)}, root={self._root_key!r}, "
            f"current={self._current_key!r})"
        )

    # -- Root -----------------------------------------------------------------

    @property
    def root_key(self) -> Optional[str]:
        return self._root_key

    @property
    def root_node(self) -> Optional[Node]:
        if self._root_key is None:
            return None
        return self._nodes.get(self._root_key)

    def set_root(self, key: str) -> None:
        """
        Set the root node.

        If no current node is set yet, current is positioned at the new root
        as well. An existing current position is left alone.

        Raises:
            NodeNotFoundError: key is not in the tree
        """
        if key not in self._nodes:
            raise NodeNotFoundError(key)

        self._root_key = key
        if self._current_key is None:
            self._current_key = key

    # -- Current --------------------------------------------------------------

    @property
    def current_key(self) -> Optional[str]:
        return self._current_key

    @property
    def current_node(self) -> Optional[Node]:
        if self._current_key is None:
            return None
        return self._nodes.get(self._current_key)

    def set_current(self, key: str) -> None:
        """
        Move the current position to key. Root is not touched.

        Raises:
            NodeNotFoundError: key is not in the tree
        """
        if key not in self._nodes:
            raise NodeNotFoundError(key)

        self._current_key = key

    def follow(self, index: int) -> Node:
        """
        Take the choice at index (0-based) on the current node.

        On failure the current position is unchanged.

        Returns:
            The node now current

        Raises:
            CurrentNotSetError: no current node
            InvalidChoiceError: index outside the current node's links
            NodeNotFoundError: the chosen link names a missing node
        """
        node = self.current_node
        if node is None:
            raise CurrentNotSetError()

        if not 0 <= index < len(node.links):
            raise InvalidChoiceError(index, len(node.links))

        self.set_current(node.links[index].target_key)
        return self._nodes[self._current_key]

    def rewind(self) -> None:
        """
        Move the current position back to the root.

        Raises:
            RootNotSetError: no root node
        """
        if self._root_key is None:
            raise RootNotSetError()

        self._current_key = self._root_key

    def reset(self) -> None:
        """Drop all nodes and both pointers."""
        self._nodes.clear()
        self._root_key = None
        self._current_key = None

    # -- Graph analysis -------------------------------------------------------

    def reachable_keys(self) -> set[str]:
        """Keys reachable from the root by following links (root included)."""
        if self._root_key is None:
            return set()

        seen = {self._root_key}
        queue = deque([self._root_key])
        while queue:
            node = self._nodes.get(queue.popleft())
            if node is None:
                continue
            for link in node.links:
                if link.target_key in self._nodes and link.target_key not in seen:
                    seen.add(link.target_key)
                    queue.append(link.target_key)
        return seen

    def unreachable_keys(self) -> list[str]:
        """Keys that cannot be reached from the root, in node order."""
        reachable = self.reachable_keys()
        return [key for key in self._nodes if key not in reachable]

    def dangling_links(self) -> list[tuple[str, Link]]:
        """(source key, link) pairs whose target is not in the tree."""
        return [
            (key, link)
            for key, node in self._nodes.items()
            for link in node.links
            if link.target_key not in self._nodes
        ]
