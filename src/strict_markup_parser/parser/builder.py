"""Recursive-descent tree builder.

:class:`Parser` walks the input once, left to right, and builds the node tree
directly from characters with no separate tokenization pass. Each markup
construct has its own routine; ``_parse_node`` classifies what comes next
and dispatches, and element parsing recurses into it for children.

The first malformed construct aborts the whole parse with a
:class:`~strict_markup_parser.errors.ParseError`; nothing is repaired and no
partial tree is returned.
"""

from typing import List, Optional, Tuple

from strict_markup_parser.dom import Attribute, Comment, Element, Node, Text
from strict_markup_parser.errors import (
    InvalidAttributeValueError,
    MismatchedClosingTagError,
    NestingDepthError,
    UnexpectedEOFError,
)
from strict_markup_parser.shared.config import ParserConfig
from strict_markup_parser.shared.logging import get_logger

from .scanner import Scanner

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
TAG_OPEN = "<"
TAG_CLOSE = ">"
CLOSING_TAG_OPEN = "</"
SELF_CLOSING_END = "/>"
QUOTE_CHARS = ('"', "'")


def _is_name_char(char: str) -> bool:
    return char.isalnum()


class Parser:
    """Single-use parser for one markup string.

    Examples:
        >>> Parser('<p class="x">hi</p>').parse()
        Element(tag_name='p', attributes=(('class', 'x'),), children=(Text(content='hi'),))

        The cursor is left just after the parsed node:

        >>> parser = Parser("<!-- x --> rest")
        >>> parser.parse()
        Comment(content=' x ')
        >>> parser.remaining
        ' rest'
    """

    def __init__(
        self,
        text: str,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.scanner = Scanner(text)
        self.logger = get_logger(
            __name__, correlation_id or self.config.correlation_id, "parser"
        )
        self.nodes_created = 0
        self.max_depth_reached = 0

    @property
    def position(self) -> int:
        """Current cursor offset."""
        return self.scanner.position

    @property
    def remaining(self) -> str:
        """Input not yet consumed."""
        return self.scanner.remaining

    def parse(self) -> Node:
        """Parse one node starting at the cursor.

        Leading whitespace before a tag is skipped. Text after the node is
        left unconsumed.

        Raises:
            ParseError: On the first malformed construct, including
                NestingDepthError when the interpreter stack runs out first
        """
        self.logger.debug(
            "Starting parse",
            extra={"offset": self.position, "input_length": len(self.scanner.text)},
        )
        try:
            node = self._parse_node(depth=0)
        except RecursionError as e:
            where = self.scanner.location()
            raise NestingDepthError(
                self.max_depth_reached, where.offset, where.line, where.column
            ) from e
        self.logger.debug(
            "Parse completed",
            extra={
                "offset": self.position,
                "nodes_created": self.nodes_created,
                "max_depth_reached": self.max_depth_reached,
            },
        )
        return node

    def _skip_separator(self) -> None:
        # Whitespace is only a separator in front of a tag or at end of input;
        # in front of text it belongs to the text node.
        end = self.scanner.whitespace_end()
        if end == len(self.scanner.text) or self.scanner.text.startswith(TAG_OPEN, end):
            self.scanner.position = end

    def _parse_node(self, depth: int, skip_separator: bool = True) -> Node:
        if skip_separator:
            self._skip_separator()
        if self.scanner.eof():
            raise self.scanner.error(UnexpectedEOFError, "expected a node")

        if self.scanner.starts_with(COMMENT_OPEN):
            node: Node = self._parse_comment()
        elif self.scanner.starts_with(TAG_OPEN):
            node = self._parse_element(depth + 1)
        else:
            node = self._parse_text()
        self.nodes_created += 1
        return node

    def _parse_comment(self) -> Comment:
        self.scanner.consume_string(COMMENT_OPEN)
        content = self.scanner.consume_until(COMMENT_CLOSE)
        self.scanner.consume_string(COMMENT_CLOSE)
        return Comment(content)

    def _parse_text(self) -> Text:
        return Text(self.scanner.consume_while(lambda char: char != TAG_OPEN))

    def _parse_tag_name(self) -> str:
        return self.scanner.consume_while(_is_name_char)

    def _parse_element(self, depth: int) -> Element:
        start = self.position
        if depth > self.config.max_depth:
            where = self.scanner.location(start)
            raise NestingDepthError(
                self.config.max_depth, where.offset, where.line, where.column
            )
        self.max_depth_reached = max(self.max_depth_reached, depth)

        self.scanner.consume_string(TAG_OPEN)
        tag_name = self._parse_tag_name()
        attributes = self._parse_attributes()

        if self.scanner.starts_with(SELF_CLOSING_END):
            self.scanner.consume_string(SELF_CLOSING_END)
            return Element(tag_name, attributes)

        self.scanner.consume_string(TAG_CLOSE)
        children = self._parse_children(depth)

        closing_start = self.position
        self.scanner.consume_string(CLOSING_TAG_OPEN)
        closing_name = self._parse_tag_name()
        if closing_name != tag_name:
            where = self.scanner.location(closing_start)
            raise MismatchedClosingTagError(
                tag_name, closing_name, where.offset, where.line, where.column
            )
        self.scanner.consume_string(TAG_CLOSE)
        return Element(tag_name, attributes, children)

    def _parse_children(self, depth: int) -> Tuple[Node, ...]:
        collapse_whitespace = self.config.collapse_whitespace_text
        children: List[Node] = []
        while True:
            if collapse_whitespace:
                self._skip_separator()
            if self.scanner.starts_with(CLOSING_TAG_OPEN):
                break
            if self.scanner.eof():
                raise self.scanner.error(UnexpectedEOFError, "unclosed element")
            children.append(self._parse_node(depth, skip_separator=collapse_whitespace))
        return tuple(children)

    def _parse_attributes(self) -> Tuple[Attribute, ...]:
        attributes: List[Attribute] = []
        while True:
            self.scanner.consume_whitespace()
            if self.scanner.peek() in (TAG_CLOSE, "/"):
                break
            name = self._parse_tag_name()
            # The "=" is consumed without checking it.
            self.scanner.next_char()
            value = self._parse_attribute_value()
            attributes.append((name, value))
        return tuple(attributes)

    def _parse_attribute_value(self) -> str:
        quote_start = self.position
        quote = self.scanner.next_char()
        if quote not in QUOTE_CHARS:
            raise self.scanner.error(
                InvalidAttributeValueError,
                f"expected a quote, found {quote!r}",
                offset=quote_start,
            )
        value = self.scanner.consume_while(lambda char: char != quote)
        if self.scanner.eof():
            raise self.scanner.error(UnexpectedEOFError, f"unterminated {quote} quote")
        self.scanner.next_char()
        return value


def parse_markup(text: str, config: Optional[ParserConfig] = None) -> Node:
    """Parse ``text`` and return its first node."""
    return Parser(text, config).parse()

