import os
import sys

# Ensure convo can be imported without installing
sys.path.append(os.getcwd())

import pytest

from convo.core.node import Node
from convo.core.tree import Tree


MIN_SOURCE = """\
root: start
nodes:
  start:
    dialogue: "Hi"
    links:
      - end: "Bye"
  end:
    dialogue: "Later"
"""

BRANCHING_SOURCE = """\
---
root: start
nodes:
  start:
    dialogue: "Hello, how are you?"
    links:
      - good: "I'm doing well."
      - bad: "Not great."
      - end: "I'm in a hurry."
  good:
    dialogue: "Glad to hear it!"
    links:
      - start: "Let's start over."
  bad:
    dialogue: "Sorry to hear that."
    links:
      - end: "Thanks."
      - start: "Let's start over."
  end:
    dialogue: "Ok, let's talk some other time."
"""


@pytest.fixture
def min_source():
    return MIN_SOURCE


@pytest.fixture
def branching_source():
    return BRANCHING_SOURCE


@pytest.fixture
def built_tree():
    """Hand-built tree: start -> middle -> end, with middle looping back."""
    tree = Tree()
    start = tree.add_node(Node("start", "The start."))
    middle = tree.add_node(Node("middle", "The middle."))
    end = tree.add_node(Node("end", "The end."))
    start.link_to(middle, "Go on.")
    middle.link_to(end, "Finish.")
    middle.link_to(start, "Again.")
    return tree
