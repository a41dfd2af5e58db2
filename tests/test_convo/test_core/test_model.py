from dataclasses import FrozenInstanceError

import pytest

from convo.core.link import Link
from convo.core.node import Node


def test_link_equality():
    assert Link("end", "Bye") == Link("end", "Bye")
    assert Link("end", "Bye") != Link("end", "Later")
    assert Link("end", "Bye") != Link("start", "Bye")

def test_link_is_immutable():
    link = Link("end", "Bye")
    with pytest.raises(FrozenInstanceError):
        link.label = "Changed"

def test_link_to_dict():
    assert Link("end", "Bye").to_dict() == {"end": "Bye"}

def test_node_defaults():
    node = Node("start", "Hello.")
    assert node.key == "start"
    assert node.dialogue == "Hello."
    assert node.prompt == "Hello."
    assert node.links == []
    assert node.is_dead_end
    assert not node.has_links

def test_node_links_keep_order():
    a = Node("a", "A")
    b = Node("b", "B")
    a.link_to(b, "first")
    a.add_link("c", "second")   # target need not exist yet
    a.link_to(a, "third")

    assert [link.target_key for link in a.links] == ["b", "c", "a"]
    assert [link.label for link in a.links] == ["first", "second", "third"]
    assert a.has_links

def test_node_to_dict():
    node = Node("start", "Hi")
    assert node.to_dict() == {"dialogue": "Hi"}

    node.add_link("end", "Bye")
    assert node.to_dict() == {"dialogue": "Hi", "links": [{"end": "Bye"}]}

def test_nodes_do_not_share_links():
    a = Node("a", "A")
    b = Node("b", "B")
    a.add_link("b", "go")
    assert b.links == []
