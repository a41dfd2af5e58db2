"""
Convo

Branching dialogue trees loaded from YAML, walked one choice at a time, and
written back out.

Quick Start:
    from convo import Tree

    tree = Tree.load("intro.convo.yml")
    while True:
        node = tree.current_node
        print(node.dialogue)
        if node.is_dead_end:
            break
        for i, link in enumerate(node.links):
            print(f"[{i}] {link.label}")
        tree.follow(int(input()))

    tree.export("intro.out.convo.yml")
"""

__version__ = "0.1.2"

from convo.core import (
    Link,
    Node,
    Tree,
    ConvoError,
    TreeError,
    NodeNotFoundError,
    RootNotSetError,
    CurrentNotSetError,
    InvalidChoiceError,
    ValidationRule,
    ValidationError,
    DialogueImportError,
    DialogueExportError,
)
from convo.config import ConvoConfig, load_config
from convo.io import import_tree, source_to_tree, export_tree, tree_to_source

__all__ = [
    # Model
    "Link",
    "Node",
    "Tree",
    # IO
    "import_tree",
    "source_to_tree",
    "export_tree",
    "tree_to_source",
    # Config
    "ConvoConfig",
    "load_config",
    # Errors
    "ConvoError",
    "TreeError",
    "NodeNotFoundError",
    "RootNotSetError",
    "CurrentNotSetError",
    "InvalidChoiceError",
    "ValidationRule",
    "ValidationError",
    "DialogueImportError",
    "DialogueExportError",
]
