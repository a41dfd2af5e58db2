"""
Dialogue link - a labeled choice leading to another node.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Link:
    """
    A single choice offered by a node.

    Attributes:
        target_key: Key of the node this choice leads to
        label: Choice text shown to the player
    """
    target_key: str
    label: str

    def to_dict(self) -> dict[str, str]:
        """Single-entry mapping form used by the file format."""
        return {self.target_key: self.label}
