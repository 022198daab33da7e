"""Plain-data views of a parsed tree.

These helpers sit outside the parser core. They turn a tree into
dictionaries (for JSON output) or into an indented outline for terminals;
neither form is meant to be parsed back.
"""

import json
from typing import Any, Dict, List

from .nodes import Comment, Element, Node, Text, visit

OUTLINE_INDENT = 2


def to_dict(node: Node) -> Dict[str, Any]:
    """Convert a node and its subtree to nested dictionaries."""
    return visit(
        node,
        on_element=lambda element: {
            "type": "element",
            "tag_name": element.tag_name,
            "attributes": [list(attr) for attr in element.attributes],
            "children": [to_dict(child) for child in element.children],
        },
        on_text=lambda text: {"type": "text", "content": text.content},
        on_comment=lambda comment: {"type": "comment", "content": comment.content},
    )


def to_json(node: Node, indent: int = 2) -> str:
    """Convert a node and its subtree to a JSON string."""
    return json.dumps(to_dict(node), indent=indent, ensure_ascii=False)


def _describe(node: Node) -> str:
    def element_line(element: Element) -> str:
        attrs = "".join(f' {name}="{value}"' for name, value in element.attributes)
        return f"<{element.tag_name}{attrs}>"

    def text_line(text: Text) -> str:
        return f"#text {text.content!r}"

    def comment_line(comment: Comment) -> str:
        return f"#comment {comment.content!r}"

    return visit(node, element_line, text_line, comment_line)


def format_tree(node: Node) -> str:
    """Render an indented outline, one node per line."""
    lines: List[str] = []
    stack = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        lines.append(" " * (depth * OUTLINE_INDENT) + _describe(current))
        if isinstance(current, Element):
            stack.extend((child, depth + 1) for child in reversed(current.children))
    return "\n".join(lines)


def count_nodes(node: Node) -> Dict[str, int]:
    """Count the nodes of each variant in a subtree."""
    counts = {"element": 0, "text": 0, "comment": 0}
    nodes = node.iter() if isinstance(node, Element) else [node]
    for current in nodes:
        kind = visit(current, lambda _: "element", lambda _: "text", lambda _: "comment")
        counts[kind] += 1
    return counts
