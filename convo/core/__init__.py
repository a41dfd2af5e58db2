"""
Core dialogue model.

Exports:
- Link, Node: Choices and prompts
- Tree: Node container with root/current traversal
- Errors: ConvoError and its families
"""

from convo.core.link import Link
from convo.core.node import Node
from convo.core.tree import Tree
from convo.core.errors import (
    ConvoError,
    TreeError,
    NodeNotFoundError,
    RootNotSetError,
    CurrentNotSetError,
    InvalidChoiceError,
    ValidationRule,
    ValidationError,
    DialogueImportError,
    SourceReadError,
    SourceSyntaxError,
    DocumentCountError,
    ImportValidationError,
    DialogueExportError,
    SinkWriteError,
    EmitError,
    ExportValidationError,
)

__all__ = [
    # Model
    "Link",
    "Node",
    "Tree",
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
    "SourceReadError",
    "SourceSyntaxError",
    "DocumentCountError",
    "ImportValidationError",
    "DialogueExportError",
    "SinkWriteError",
    "EmitError",
    "ExportValidationError",
]
