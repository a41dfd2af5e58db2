"""
Exporter - trees to YAML dialogue documents.

Output is the inverse of the importer: root first, then nodes in the tree's
own order, each with `dialogue` and (only when non-empty) `links`. Exporting
a tree, importing the result and exporting again gives identical text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, TextIO

import yaml

from convo.config import DEFAULT_CONFIG, ConvoConfig
from convo.core.errors import (
    EmitError,
    ExportValidationError,
    SinkWriteError,
    ValidationRule,
)
from convo.core.tree import Tree
from convo.io.validation import check_graph, message_for

logger = logging.getLogger(__name__)


def tree_to_dict(tree: Tree, config: Optional[ConvoConfig] = None) -> dict[str, Any]:
    """
    Convert a tree to the plain document structure.

    Raises:
        ExportValidationError: Root not set, no nodes, or a strict graph
            rule failed
    """
    config = config or DEFAULT_CONFIG

    if tree.root_key is None:
        raise ExportValidationError(
            ValidationRule.ROOT_NOT_SET,
            message_for(ValidationRule.ROOT_NOT_SET),
        )

    if len(tree) == 0:
        raise ExportValidationError(
            ValidationRule.NODES_EMPTY,
            message_for(ValidationRule.NODES_EMPTY),
        )

    check_graph(tree, config, ExportValidationError)

    return {
        'root': tree.root_key,
        'nodes': {key: node.to_dict() for key, node in tree.nodes.items()},
    }


def tree_to_source(tree: Tree, config: Optional[ConvoConfig] = None) -> str:
    """
    Serialize a tree to YAML text.

    Raises:
        ExportValidationError: The tree is not exportable
        EmitError: The YAML emitter failed
    """
    config = config or DEFAULT_CONFIG
    data = tree_to_dict(tree, config)

    try:
        return yaml.safe_dump(
            data,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=config.allow_unicode,
            indent=config.indent,
            width=config.width,
        )
    except yaml.YAMLError as e:
        raise EmitError(f"YAML emit failed: {e}") from e


def export_tree(
    tree: Tree,
    sink: str | Path | TextIO,
    config: Optional[ConvoConfig] = None,
) -> None:
    """
    Write a tree to a file.

    Nothing is written unless the tree validates and serializes.

    Args:
        tree: Tree to export
        sink: Destination path, or a writable text stream
        config: Options (defaults to DEFAULT_CONFIG)

    Raises:
        ExportValidationError: The tree is not exportable
        EmitError: The YAML emitter failed
        SinkWriteError: The destination could not be written
    """
    config = config or DEFAULT_CONFIG
    source = tree_to_source(tree, config)

    if hasattr(sink, 'write'):
        name = getattr(sink, 'name', '<stream>')
        try:
            sink.write(source)
        except OSError as e:
            raise SinkWriteError(f"Failed to write {name}: {e}") from e
    else:
        name = str(sink)
        try:
            # Encode before opening so a failure leaves the file untouched
            data = source.encode(config.encoding)
            with open(sink, 'wb') as f:
                f.write(data)
        except (OSError, UnicodeEncodeError) as e:
            raise SinkWriteError(f"Failed to write {name}: {e}") from e

    logger.info(f"Exported {len(tree)} nodes to {name} (root '{tree.root_key}')")
