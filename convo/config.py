"""
Library configuration.

Settings can be built in code or read from a YAML file:

    # convo.yaml
    encoding: utf-8
    strict_links: true
    emitter:
      width: 120

Flat keys and the nested `emitter` section are both accepted.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class ConvoConfig(BaseModel):
    """
    Options shared by the importer and exporter.

    Attributes:
        encoding: Text encoding for files read and written by path
        strict_links: Fail when a link names a node that does not exist
        strict_reachability: Fail when a node cannot be reached from root
        indent: YAML indentation width on export
        width: Preferred YAML line width on export
        allow_unicode: Write non-ASCII text as-is instead of escaping it
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    encoding: str = "utf-8"
    strict_links: bool = False
    strict_reachability: bool = False
    indent: int = Field(default=2, ge=2, le=9)
    width: int = Field(default=80, gt=20)
    allow_unicode: bool = True

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value!r}") from e
        return value


DEFAULT_CONFIG = ConvoConfig()


def _get(d: dict, path: str, default: Any) -> Any:
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_config(path: str | Path) -> ConvoConfig:
    """
    Read configuration from a YAML file.

    A missing or empty file yields the defaults. Unknown keys and bad values
    raise pydantic.ValidationError.
    """
    p = Path(path)
    if not p.exists():
        logger.debug(f"Config file not found, using defaults: {p}")
        return ConvoConfig()

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{p}: config must be a mapping")

    emitter = data.pop("emitter", None) or {}
    for name in ("indent", "width", "allow_unicode"):
        value = _get(emitter, name, None)
        if value is not None:
            data.setdefault(name, value)

    config = ConvoConfig.model_validate(data)
    logger.debug(f"Loaded config from {p}: {config!r}")
    return config
