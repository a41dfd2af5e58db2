"""
Importer - YAML dialogue documents to trees.

Document format:

```
root: start
nodes:
  start:
    dialogue: "Hello, how are you?"
    links:
      - good: "I'm doing well."
      - end: "I'm in a hurry."
  good:
    dialogue: "Glad to hear it."
  end:
    dialogue: "Ok, let's talk some other time."
```

Import is all or nothing: the caller either gets a tree rooted and
positioned at `root`, or an exception and no tree.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, TextIO

import yaml

from convo.config import DEFAULT_CONFIG, ConvoConfig
from convo.core.errors import (
    DocumentCountError,
    ImportValidationError,
    SourceReadError,
    SourceSyntaxError,
    ValidationRule,
)
from convo.core.link import Link
from convo.core.node import Node
from convo.core.tree import Tree
from convo.io.validation import check_graph, message_for, validate_document

logger = logging.getLogger(__name__)


def import_tree(
    source: str | Path | TextIO,
    config: Optional[ConvoConfig] = None,
) -> Tree:
    """
    Import a tree from a file.

    Args:
        source: Path to a YAML file, or a readable text stream
        config: Options (defaults to DEFAULT_CONFIG)

    Raises:
        SourceReadError: The file could not be read
        SourceSyntaxError: The text is not valid YAML
        DocumentCountError: The text holds zero or several documents
        ImportValidationError: The document does not describe a valid tree
    """
    config = config or DEFAULT_CONFIG

    if hasattr(source, 'read'):
        name = getattr(source, 'name', '<stream>')
        try:
            text = source.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Failed to read {name}: {e}") from e
    else:
        name = str(source)
        try:
            with open(source, 'r', encoding=config.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Failed to read {name}: {e}") from e

    tree = source_to_tree(text, config)
    logger.info(
        f"Imported {len(tree)} nodes from {name} (root '{tree.root_key}')"
    )
    return tree


def source_to_tree(source: str, config: Optional[ConvoConfig] = None) -> Tree:
    """
    Import a tree from YAML text.

    Raises:
        SourceSyntaxError: The text is not valid YAML
        DocumentCountError: The text holds zero or several documents
        ImportValidationError: The document does not describe a valid tree
    """
    config = config or DEFAULT_CONFIG

    try:
        documents = list(yaml.safe_load_all(source))
    except yaml.YAMLError as e:
        raise SourceSyntaxError(f"Invalid YAML: {e}") from e

    if len(documents) != 1:
        raise DocumentCountError(len(documents))

    return document_to_tree(documents[0], config)


def document_to_tree(document: Any, config: Optional[ConvoConfig] = None) -> Tree:
    """
    Build a tree from an already parsed YAML document.

    Raises:
        ImportValidationError: The document does not describe a valid tree
    """
    config = config or DEFAULT_CONFIG
    validate_document(document, ImportValidationError)

    root_key: str = document['root']
    nodes: dict[str, Node] = {}

    # Later duplicates of a key replace earlier ones
    for key, body in document['nodes'].items():
        node = _build_node(key, body)
        nodes[node.key] = node

    # Node order is arbitrary, so root can only be resolved once all are in
    if root_key not in nodes:
        raise ImportValidationError(
            ValidationRule.ROOT_NOT_FOUND,
            message_for(ValidationRule.ROOT_NOT_FOUND),
            root_key,
        )

    tree = Tree._assemble(nodes, root_key)
    check_graph(tree, config, ImportValidationError)

    logger.debug(f"Built tree with {len(nodes)} nodes, root '{root_key}'")
    return tree


def _build_node(key: str, body: dict) -> Node:
    node = Node(key=key, dialogue=body['dialogue'])
    for entry in body.get('links', ()):
        for target_key, label in entry.items():
            node.links.append(Link(target_key, label))
    return node
