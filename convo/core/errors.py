"""
Error types for dialogue trees.

Every failure raised by the library derives from ConvoError, so callers can
catch one type at the boundary. The families are:

- TreeError: traversal failures (bad key, missing root, bad choice index)
- DialogueImportError: reading or validating a source document
- DialogueExportError: validating or writing a tree

Structural problems are named by a ValidationRule member instead of a magic
string, so callers can branch on which rule failed.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class ConvoError(Exception):
    """Base class for all dialogue tree errors."""


# -- Traversal -----------------------------------------------------------------

class TreeError(ConvoError):
    """A traversal operation could not be applied to the tree."""


class NodeNotFoundError(TreeError, KeyError):
    """A node key does not exist in the tree."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Node not found: {self.key!r}"


class RootNotSetError(TreeError):
    """The tree has no root node."""

    def __init__(self):
        super().__init__("Root node is not set")


class CurrentNotSetError(TreeError):
    """The tree has no current node."""

    def __init__(self):
        super().__init__("Current node is not set")


class InvalidChoiceError(TreeError, IndexError):
    """A choice index is outside the current node's links."""

    def __init__(self, index: int, available: int):
        self.index = index
        self.available = available
        super().__init__(
            f"Choice {index} is out of range ({available} choices available)"
        )


# -- Validation ----------------------------------------------------------------

class ValidationRule(Enum):
    """Structural rules a dialogue document or tree must satisfy."""
    # Document level
    NOT_A_MAPPING = auto()
    ROOT_MISSING = auto()
    ROOT_NOT_STRING = auto()
    NODES_MISSING = auto()
    NODES_NOT_MAPPING = auto()
    NODES_EMPTY = auto()

    # Node level
    NODE_KEY_NOT_STRING = auto()
    NODE_NOT_MAPPING = auto()
    DIALOGUE_MISSING = auto()
    DIALOGUE_NOT_STRING = auto()

    # Link level
    LINKS_NOT_SEQUENCE = auto()
    LINKS_EMPTY = auto()
    LINK_NOT_SINGLE_MAPPING = auto()
    LINK_TARGET_NOT_STRING = auto()
    LINK_LABEL_NOT_STRING = auto()

    # Graph level
    ROOT_NOT_SET = auto()
    ROOT_NOT_FOUND = auto()
    DANGLING_LINK = auto()
    UNREACHABLE_NODE = auto()


class ValidationError(ConvoError):
    """
    A structural rule was violated.

    Attributes:
        rule: The rule that failed
        key: Offending node key, when the failure belongs to one node
    """

    def __init__(self, rule: ValidationRule, message: str, key: Optional[str] = None):
        self.rule = rule
        self.key = key
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if self.key is not None:
            return f"{self.message} (node {self.key!r})"
        return self.message


# -- Import --------------------------------------------------------------------

class DialogueImportError(ConvoError):
    """A dialogue document could not be turned into a tree."""


class SourceReadError(DialogueImportError):
    """The source could not be read."""


class SourceSyntaxError(DialogueImportError):
    """The source is not well-formed YAML."""


class DocumentCountError(DialogueImportError):
    """The source holds zero or several YAML documents."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Expected exactly one YAML document, found {count}")


class ImportValidationError(DialogueImportError, ValidationError):
    """The source parsed but does not describe a valid tree."""


# -- Export --------------------------------------------------------------------

class DialogueExportError(ConvoError):
    """A tree could not be written out."""


class SinkWriteError(DialogueExportError):
    """The destination could not be written."""


class EmitError(DialogueExportError):
    """The YAML emitter failed."""


class ExportValidationError(DialogueExportError, ValidationError):
    """The tree is not in an exportable state."""
