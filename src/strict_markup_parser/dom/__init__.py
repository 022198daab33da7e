"""Document model for parsed markup.

Provides the three immutable node variants and read-only helpers for
walking and rendering a parsed tree.
"""

from .nodes import Attribute, Comment, Element, Node, Text, visit
from .render import count_nodes, format_tree, to_dict, to_json

__all__ = [
    "Attribute",
    "Comment",
    "Element",
    "Node",
    "Text",
    "visit",
    "count_nodes",
    "format_tree",
    "to_dict",
    "to_json",
]
