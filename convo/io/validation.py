"""
Structural and graph validation for dialogue documents and trees.

Document shape is described by a JSON schema (schemas/tree.schema.json) and
checked with jsonschema. Schema errors are translated into ValidationRule
members so callers never have to parse jsonschema messages.

Graph rules (link targets exist, every node reachable from root) are only
enforced when the config asks for it; otherwise they are logged.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import jsonschema
from jsonschema.exceptions import best_match

from convo.config import ConvoConfig
from convo.core.errors import ValidationError, ValidationRule
from convo.core.tree import Tree

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "tree.schema.json"

_MESSAGES: dict[ValidationRule, str] = {
    ValidationRule.NOT_A_MAPPING: "Document is not a mapping",
    ValidationRule.ROOT_MISSING: "Document does not contain a top-level `root`",
    ValidationRule.ROOT_NOT_STRING: "Top-level `root` is not a string",
    ValidationRule.NODES_MISSING: "Document does not contain a top-level `nodes`",
    ValidationRule.NODES_NOT_MAPPING: "Top-level `nodes` is not a mapping",
    ValidationRule.NODES_EMPTY: "Node map has a length of 0",
    ValidationRule.NODE_KEY_NOT_STRING: "Node key is not a string",
    ValidationRule.NODE_NOT_MAPPING: "Node body is not a mapping",
    ValidationRule.DIALOGUE_MISSING: "Node does not contain `dialogue`",
    ValidationRule.DIALOGUE_NOT_STRING: "Node `dialogue` is not a string",
    ValidationRule.LINKS_NOT_SEQUENCE: "Node `links` is not a sequence",
    ValidationRule.LINKS_EMPTY: "Node `links` has a length of 0",
    ValidationRule.LINK_NOT_SINGLE_MAPPING: "Link is not a single-entry mapping",
    ValidationRule.LINK_TARGET_NOT_STRING: "Link target is not a string",
    ValidationRule.LINK_LABEL_NOT_STRING: "Link label is not a string",
    ValidationRule.ROOT_NOT_SET: "Root node is not set",
    ValidationRule.ROOT_NOT_FOUND: "Root node not found",
    ValidationRule.DANGLING_LINK: "Link target does not exist",
    ValidationRule.UNREACHABLE_NODE: "Node is not reachable from root",
}


def message_for(rule: ValidationRule) -> str:
    return _MESSAGES[rule]


@lru_cache(maxsize=None)
def _validator() -> jsonschema.Draft7Validator:
    with open(SCHEMA_PATH, 'r', encoding='utf-8') as f:
        schema = json.load(f)
    jsonschema.Draft7Validator.check_schema(schema)
    return jsonschema.Draft7Validator(schema)


def _classify(error: jsonschema.ValidationError) -> tuple[ValidationRule, Optional[str]]:
    """Map a jsonschema error onto a rule and the offending node key."""
    path = list(error.absolute_path)
    kind = error.validator
    names = "propertyNames" in error.absolute_schema_path
    key = str(path[1]) if len(path) > 1 else None

    if not path:
        if kind == "required":
            instance = error.instance
            if "root" not in instance:
                return ValidationRule.ROOT_MISSING, None
            return ValidationRule.NODES_MISSING, None
        return ValidationRule.NOT_A_MAPPING, None

    if path[0] == "root":
        return ValidationRule.ROOT_NOT_STRING, None

    depth = len(path)
    if depth == 1:
        if names:
            return ValidationRule.NODE_KEY_NOT_STRING, None
        if kind == "minProperties":
            return ValidationRule.NODES_EMPTY, None
        return ValidationRule.NODES_NOT_MAPPING, None

    if depth == 2:
        if kind == "required":
            return ValidationRule.DIALOGUE_MISSING, key
        return ValidationRule.NODE_NOT_MAPPING, key

    if path[2] == "dialogue":
        return ValidationRule.DIALOGUE_NOT_STRING, key

    if depth == 3:
        if kind == "minItems":
            return ValidationRule.LINKS_EMPTY, key
        return ValidationRule.LINKS_NOT_SEQUENCE, key

    if depth == 4:
        if names:
            return ValidationRule.LINK_TARGET_NOT_STRING, key
        return ValidationRule.LINK_NOT_SINGLE_MAPPING, key

    return ValidationRule.LINK_LABEL_NOT_STRING, key


def validate_document(
    document: Any,
    error_type: type[ValidationError] = ValidationError,
) -> None:
    """
    Check a parsed YAML document against the tree schema.

    Raises:
        error_type: On the most relevant schema violation
    """
    error = best_match(_validator().iter_errors(document))
    if error is None:
        return

    rule, key = _classify(error)
    logger.debug(f"Schema violation at {list(error.absolute_path)}: {error.message}")
    raise error_type(rule, message_for(rule), key)


def check_graph(
    tree: Tree,
    config: ConvoConfig,
    error_type: type[ValidationError] = ValidationError,
) -> None:
    """
    Check link targets and reachability.

    Each check raises error_type when its strict flag is set and logs a
    warning otherwise.
    """
    for source_key, link in tree.dangling_links():
        if config.strict_links:
            raise error_type(
                ValidationRule.DANGLING_LINK,
                f"{message_for(ValidationRule.DANGLING_LINK)}: {link.target_key!r}",
                source_key,
            )
        logger.warning(
            f"Node '{source_key}' links to missing node '{link.target_key}'"
        )

    unreachable = tree.unreachable_keys()
    if unreachable:
        if config.strict_reachability:
            raise error_type(
                ValidationRule.UNREACHABLE_NODE,
                message_for(ValidationRule.UNREACHABLE_NODE),
                unreachable[0],
            )
        logger.warning(
            f"{len(unreachable)} node(s) unreachable from root "
            f"'{tree.root_key}': {', '.join(unreachable)}"
        )
