"""
Dialogue node - one prompt and its outgoing choices.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from convo.core.link import Link


@dataclass
class Node:
    """
    A vertex in a dialogue tree.

    Link order matters: it is the numbering shown to the player and is kept
    through import and export. Link targets are not checked here; the tree
    and the importer decide what to do with keys that do not resolve.

    Attributes:
        key: Unique key within the owning tree
        dialogue: Prompt text shown when the node is visited
        links: Outgoing choices, in display order
    """
    key: str
    dialogue: str
    links: list[Link] = field(default_factory=list)

    @property
    def prompt(self) -> str:
        return self.dialogue

    @property
    def has_links(self) -> bool:
        return len(self.links) > 0

    @property
    def is_dead_end(self) -> bool:
        """True when the node offers no way forward."""
        return not self.links

    def add_link(self, target_key: str, label: str) -> Link:
        """Append a choice leading to target_key."""
        link = Link(target_key, label)
        self.links.append(link)
        return link

    def link_to(self, other: Node, label: str) -> Link:
        """Append a choice leading to another node."""
        return self.add_link(other.key, label)

    def to_dict(self) -> dict:
        """Body mapping used by the file format (key excluded)."""
        data: dict = {'dialogue': self.dialogue}
        if self.links:
            data['links'] = [link.to_dict() for link in self.links]
        return data
