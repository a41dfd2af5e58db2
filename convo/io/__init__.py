"""
Import and export of YAML dialogue documents.
"""

from convo.io.importer import import_tree, source_to_tree, document_to_tree
from convo.io.exporter import export_tree, tree_to_source, tree_to_dict
from convo.io.validation import validate_document, check_graph

__all__ = [
    "import_tree",
    "source_to_tree",
    "document_to_tree",
    "export_tree",
    "tree_to_source",
    "tree_to_dict",
    "validate_document",
    "check_graph",
]
