"""Immutable document model produced by the parser.

A parsed tree is made of exactly three node variants: :class:`Element`,
:class:`Text` and :class:`Comment`. ``Node`` is their union. Code that needs
to branch on the variant should go through :func:`visit`, which rejects
anything outside the three variants, so a new variant shows up as a failure
at every consumer instead of being silently skipped.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

Attribute = Tuple[str, str]


@dataclass(frozen=True)
class Text:
    """Raw character data between tags, whitespace included."""

    content: str


@dataclass(frozen=True)
class Comment:
    """Verbatim content between ``<!--`` and ``-->``."""

    content: str


@dataclass(frozen=True)
class Element:
    """A tagged container with ordered attributes and children.

    Attributes keep document order and duplicates; lookups by name return the
    first occurrence. Lists passed to the constructor are stored as tuples.
    """

    tag_name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "attributes", tuple((name, value) for name, value in self.attributes)
        )
        object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def new(cls, tag_name: str) -> "Element":
        """Create an element with no attributes and no children."""
        return cls(tag_name)

    @classmethod
    def with_attributes(cls, tag_name: str, attributes: Iterable[Attribute]) -> "Element":
        """Create an element with attributes and no children."""
        return cls(tag_name, tuple(attributes))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first value for ``name`` with optional default."""
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return default

    def get_attributes(self, name: str) -> List[str]:
        """Get every value given for ``name``, in document order."""
        return [value for attr_name, value in self.attributes if attr_name == name]

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return any(attr_name == name for attr_name, _ in self.attributes)

    @property
    def element_children(self) -> List["Element"]:
        """Direct children that are elements."""
        return [child for child in self.children if isinstance(child, Element)]

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant Text nodes, comments excluded."""
        return "".join(
            node.content for node in self.iter() if isinstance(node, Text)
        )

    def iter(self) -> Iterator["Node"]:
        """Iterate over this element and its descendants in document order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Element):
                stack.extend(reversed(node.children))

    def find_all(self, tag_name: str) -> List["Element"]:
        """Find all descendant elements (self excluded) with matching tag name."""
        return [
            node for node in self.iter()
            if isinstance(node, Element) and node is not self and node.tag_name == tag_name
        ]


Node = Union[Element, Text, Comment]


def visit(
    node: Node,
    on_element: Callable[[Element], T],
    on_text: Callable[[Text], T],
    on_comment: Callable[[Comment], T],
) -> T:
    """Dispatch ``node`` to the handler for its variant.

    Raises:
        TypeError: If ``node`` is not an Element, Text or Comment
    """
    if isinstance(node, Element):
        return on_element(node)
    if isinstance(node, Text):
        return on_text(node)
    if isinstance(node, Comment):
        return on_comment(node)
    raise TypeError(f"Unknown node variant: {type(node).__name__}")
