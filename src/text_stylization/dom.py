"""
In-memory document tree used as the default host for TextStylization.

The tree follows the small part of the DOM that the stylization engine relies
on: text nodes and elements with parent links, class lists, sibling access,
insert/append/remove, and a tree walker filtered by node type. HTML fragments
are parsed into this tree and serialized back through lxml.
"""

from __future__ import annotations

import html
from collections.abc import Iterator
from typing import Any

from lxml import etree
from lxml import html as lxml_html

from .constants import (
    CLASS_ATTRIBUTE,
    ELEMENT_NODE,
    SHOW_ALL,
    SHOW_ELEMENT,
    SHOW_TEXT,
    TEXT_NODE,
)
from .errors import MarkupError


class NodeFilter:
    """Filter flags for Document.create_tree_walker()."""

    SHOW_ALL = SHOW_ALL
    SHOW_ELEMENT = SHOW_ELEMENT
    SHOW_TEXT = SHOW_TEXT


class Node:
    """Base class for all nodes of the tree.

    Sibling links are kept on the nodes and updated by the parent on every
    insert and removal, so stepping to a neighbour never scans the parent's
    children.
    """

    node_type: int = 0

    def __init__(self) -> None:
        self.parent_node: Element | None = None
        self.previous_sibling: Node | None = None
        self.next_sibling: Node | None = None


class Text(Node):
    """A text leaf. Holds a string payload and never has children."""

    node_type = TEXT_NODE

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.node_value = data

    @property
    def text_content(self) -> str:
        return self.node_value

    def __repr__(self) -> str:
        return f"<Text {self.node_value!r}>"


class ClassList:
    """Ordered set view over an element's class attribute.

    Changes are written straight back to the attribute, and the attribute is
    dropped once the last class is removed.
    """

    def __init__(self, element: Element) -> None:
        self._element = element

    def _tokens(self) -> list[str]:
        return self._element.get_attribute(CLASS_ATTRIBUTE, "").split()

    def _store(self, tokens: list[str]) -> None:
        if tokens:
            self._element.attributes[CLASS_ATTRIBUTE] = " ".join(tokens)
        else:
            self._element.attributes.pop(CLASS_ATTRIBUTE, None)

    @staticmethod
    def _check_token(token: str) -> None:
        if not token or any(char.isspace() for char in token):
            raise ValueError(f"Invalid class token: {token!r}")

    def add(self, *tokens: str) -> None:
        current = self._tokens()
        for token in tokens:
            self._check_token(token)
            if token not in current:
                current.append(token)
        self._store(current)

    def remove(self, *tokens: str) -> None:
        for token in tokens:
            self._check_token(token)
        self._store([token for token in self._tokens() if token not in tokens])

    def __contains__(self, token: object) -> bool:
        return token in self._tokens()

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens())

    def __len__(self) -> int:
        return len(self._tokens())

    def __repr__(self) -> str:
        return f"ClassList({self._tokens()!r})"


class Element(Node):
    """An element node: a tag name, attributes and ordered children."""

    node_type = ELEMENT_NODE

    def __init__(self, tag_name: str, attributes: dict[str, str] | None = None) -> None:
        super().__init__()
        self.tag_name = tag_name.lower()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.child_nodes: list[Node] = []
        self.class_list = ClassList(self)

    @property
    def class_name(self) -> str:
        """The raw class attribute value ("" when absent)."""
        return self.get_attribute(CLASS_ATTRIBUTE, "")

    @property
    def first_child(self) -> Node | None:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def last_child(self) -> Node | None:
        return self.child_nodes[-1] if self.child_nodes else None

    @property
    def text_content(self) -> str:
        """Concatenated text of every descendant text node, in document order."""
        return "".join(
            node.node_value for node in self.iter_descendants() if node.node_type == TEXT_NODE
        )

    @property
    def outer_html(self) -> str:
        return to_html(self)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def index_of(self, child: Node) -> int:
        """Position of child among this element's children (identity match)."""
        try:
            return self.child_nodes.index(child)
        except ValueError:
            raise ValueError(f"{child!r} is not a child of {self!r}") from None

    def append_child(self, node: Node) -> Node:
        """Append node as the last child, detaching it from its old parent first."""
        return self.insert_before(node, None)

    def insert_before(self, node: Node, reference: Node | None) -> Node:
        """Insert node before reference, or at the end when reference is None."""
        if reference is not None and reference.parent_node is not self:
            raise ValueError(f"{reference!r} is not a child of {self!r}")
        if node is reference:
            return node
        if isinstance(node, Element) and (node is self or node.contains(self)):
            raise ValueError(f"Cannot insert {node!r} into its own subtree")
        if node.parent_node is not None:
            node.parent_node.remove_child(node)

        if reference is None:
            previous = self.last_child
            self.child_nodes.append(node)
        else:
            previous = reference.previous_sibling
            self.child_nodes.insert(self.index_of(reference), node)

        node.parent_node = self
        node.previous_sibling = previous
        node.next_sibling = reference
        if previous is not None:
            previous.next_sibling = node
        if reference is not None:
            reference.previous_sibling = node
        return node

    def remove_child(self, node: Node) -> Node:
        """Detach node from this element and return it."""
        del self.child_nodes[self.index_of(node)]
        if node.previous_sibling is not None:
            node.previous_sibling.next_sibling = node.next_sibling
        if node.next_sibling is not None:
            node.next_sibling.previous_sibling = node.previous_sibling
        node.parent_node = None
        node.previous_sibling = None
        node.next_sibling = None
        return node

    def contains(self, node: Node) -> bool:
        """True when node is this element or one of its descendants."""
        while node is not None:
            if node is self:
                return True
            node = node.parent_node
        return False

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant in depth-first document order (self excluded)."""
        for child in self.child_nodes:
            yield child
            if isinstance(child, Element):
                yield from child.iter_descendants()

    def __repr__(self) -> str:
        if self.class_name:
            return f"<Element {self.tag_name} class={self.class_name!r}>"
        return f"<Element {self.tag_name}>"


class TreeWalker:
    """Depth-first walker over the subtree of a root node.

    Mirrors the DOM TreeWalker: ``current_node`` starts at the root, and when
    ``next_node()`` runs out of accepted nodes it returns None and leaves
    ``current_node`` on the last node it accepted.
    """

    def __init__(self, root: Node, what_to_show: int = SHOW_ALL) -> None:
        self.root = root
        self.what_to_show = what_to_show
        self.current_node: Node = root

    def _accepts(self, node: Node) -> bool:
        return bool(self.what_to_show & (1 << (node.node_type - 1)))

    def _following(self, node: Node) -> Node | None:
        if isinstance(node, Element) and node.child_nodes:
            return node.child_nodes[0]
        while node is not self.root:
            sibling = node.next_sibling
            if sibling is not None:
                return sibling
            node = node.parent_node
            if node is None:
                return None
        return None

    def next_node(self) -> Node | None:
        node = self.current_node
        while True:
            node = self._following(node)
            if node is None:
                return None
            if self._accepts(node):
                self.current_node = node
                return node

    def __iter__(self) -> Iterator[Node]:
        while True:
            node = self.next_node()
            if node is None:
                return
            yield node


class Document:
    """Factory for nodes and tree walkers.

    Any object exposing these three methods can stand in for it when
    constructing a TextStylization.
    """

    def create_element(self, tag_name: str) -> Element:
        return Element(tag_name)

    def create_text_node(self, data: str) -> Text:
        return Text(data)

    def create_tree_walker(self, root: Node, what_to_show: int = SHOW_ALL) -> TreeWalker:
        return TreeWalker(root, what_to_show)


# =============================================================================
# HTML conversion
# =============================================================================


def parse_html(markup: str, document: Document | None = None) -> Element:
    """Parse an HTML fragment with exactly one root element.

    Comments and processing instructions are dropped; text around them is
    joined into a single text node.

    Args:
        markup: HTML source, e.g. ``"<div>Hello <b>world</b></div>"``
        document: Optional node factory (defaults to a new Document)

    Returns:
        The root Element of the parsed fragment

    Raises:
        MarkupError: If the markup is empty, has leading or trailing text, or
            holds more than one top-level element
    """
    if not markup or not markup.strip():
        raise MarkupError("Cannot parse empty markup")

    try:
        fragment = lxml_html.fragment_fromstring(markup)
    except (etree.ParserError, etree.XMLSyntaxError) as e:
        raise MarkupError(f"Could not parse markup: {e}") from e

    return _from_lxml(fragment, document or Document())


def _append_text(element: Element, text: str, document: Document) -> None:
    last = element.last_child
    if last is not None and last.node_type == TEXT_NODE:
        last.node_value += text
    else:
        element.append_child(document.create_text_node(text))


def _from_lxml(source: Any, document: Document) -> Element:
    element = document.create_element(source.tag)
    for name, value in source.attrib.items():
        element.set_attribute(name, value)

    if source.text:
        _append_text(element, source.text, document)

    for child in source:
        # Comments and processing instructions have a callable tag
        if isinstance(child.tag, str):
            element.append_child(_from_lxml(child, document))
        if child.tail:
            _append_text(element, child.tail, document)

    return element


def _to_lxml(element: Element) -> Any:
    target = etree.Element(element.tag_name, dict(element.attributes))
    last = None
    for child in element.child_nodes:
        if child.node_type == TEXT_NODE:
            if last is None:
                target.text = (target.text or "") + child.node_value
            else:
                last.tail = (last.tail or "") + child.node_value
        elif isinstance(child, Element):
            last = _to_lxml(child)
            target.append(last)
    return target


def to_html(node: Node) -> str:
    """Serialize a node (and its subtree) as HTML."""
    if node.node_type == TEXT_NODE:
        return html.escape(node.node_value, quote=False)
    return lxml_html.tostring(_to_lxml(node), encoding="unicode")