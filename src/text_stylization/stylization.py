"""
Styling of character ranges inside a tree of text nodes.

To stylize a range is to move its text into a ``<span>`` (the container) and
give that container the stylization's class name. The text under the root may
be split over any number of text nodes and nested spans, so a range can start
and end in the middle of different nodes.

The text under the root must consist of text nodes and inline ``<span>``
elements.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .constants import CONTAINER_TAG, LINE_BREAK, TEXT_NODE
from .dom import Document, NodeFilter
from .errors import InvalidRangeError, NotATextLeafError
from .models import NodeAndOffset, TextRange
from .offsets import group_node_and_offsets, iter_tree_walker

logger = logging.getLogger(__name__)


class TextStylization:
    """Applies and removes one class name over ranges of text under a root.

    Several instances with different class names can work on the same tree;
    a later style nests inside containers created by an earlier one.

    Attributes:
        root_element: Element whose text is addressed by global offsets
        class_name: Class name this instance adds and removes
        document_object: Node factory (create_element, create_text_node,
            create_tree_walker)
        node_filter_object: Provider of the SHOW_TEXT / SHOW_ELEMENT flags
    """

    def __init__(
        self,
        root_element: Any,
        class_name: str,
        document_object: Any = None,
        node_filter_object: Any = None,
    ) -> None:
        """Initialize the stylization.

        Args:
            root_element: Element whose text is to be stylized
            class_name: The class name to apply; only one name is supported
            document_object: Optional node factory. Defaults to the in-memory
                ``dom.Document``; pass another object to work on a different
                tree implementation.
            node_filter_object: Optional holder of the tree walker flags.
                Defaults to ``dom.NodeFilter``.
        """
        if not class_name or any(char.isspace() for char in class_name):
            raise ValueError(f"class_name must be a single class name, got {class_name!r}")

        self.root_element = root_element
        self.class_name = class_name
        self.document_object = document_object if document_object is not None else Document()
        self.node_filter_object = (
            node_filter_object if node_filter_object is not None else NodeFilter
        )

    def apply_to_ranges(self, text_ranges: Iterable[Any]) -> list[list[Any]]:
        """Stylize the text in each of the given ranges.

        When the root is an editable area, the caret may move after styling
        since text nodes get split and new containers inserted. Callers that
        track a selection by global offsets should simply set it again.

        Args:
            text_ranges: TextRange objects, ``(start, end)`` pairs, or any
                objects with ``start`` and ``end`` attributes. Ranges are
                expected not to overlap.

        Returns:
            The affected (or newly created) nodes, one list per range in the
            order the ranges were given, each list in document order.

        Raises:
            InvalidRangeError: If a range has negative or reversed offsets
        """
        ranges = [TextRange.coerce(text_range) for text_range in text_ranges]
        if not ranges:
            return []

        # Grouping needs the ranges in document order; remember where each
        # one came from so results go back in the caller's order.
        order = sorted(range(len(ranges)), key=lambda i: (ranges[i].start, ranges[i].end))
        node_and_offset_groups = self._find_node_and_offset_groups([ranges[i] for i in order])

        # Groups may share a text node, and styling a group splits its nodes.
        # Working from the last group back keeps the offsets of the groups
        # still waiting valid.
        affected_node_groups: list[list[Any]] = []
        for idx in range(len(node_and_offset_groups) - 1, -1, -1):
            affected_node_groups.append(self._apply_to_group(node_and_offset_groups[idx]))
        affected_node_groups.reverse()

        results: list[list[Any]] = [[] for _ in ranges]
        for sorted_idx, input_idx in enumerate(order):
            results[input_idx] = affected_node_groups[sorted_idx]

        logger.debug(
            "Applied '%s' to %d range(s), %d node(s) affected",
            self.class_name,
            len(ranges),
            sum(len(nodes) for nodes in results),
        )
        return results

    def _find_node_and_offset_groups(self, ranges: list[TextRange]) -> list[list[NodeAndOffset]]:
        """Find the nodes and offsets covered by each range."""
        walker = self.document_object.create_tree_walker(
            self.root_element, self.node_filter_object.SHOW_TEXT
        )
        return group_node_and_offsets(iter_tree_walker(walker), ranges)

    def _apply_to_group(self, node_and_offsets: list[NodeAndOffset]) -> list[Any]:
        """Stylize one range's nodes, from the last node back to the first."""
        affected_nodes: list[Any] = []

        if len(node_and_offsets) == 2 and node_and_offsets[0].node is node_and_offsets[1].node:
            # The whole range sits inside one text node
            head, tail = node_and_offsets
            affected_nodes.extend(self.apply_to_node(head.node, head.offset, tail.offset))

        elif len(node_and_offsets) >= 2:
            tail = node_and_offsets[-1]
            if tail.offset > 0:
                affected_nodes.extend(self.apply_to_node(tail.node, 0, tail.offset))
            # else: the range ended exactly where the previous node ends, so
            # nothing of the tail node belongs to it. In 'abcde' '\n' '12345'
            # the range 'cde' ends at offset 0 of the '\n' node.

            for node_and_offset in reversed(node_and_offsets[1:-1]):
                if node_and_offset.node.node_value == LINE_BREAK:
                    continue
                affected_nodes.append(self.apply_to_whole_node(node_and_offset.node))

            head = node_and_offsets[0]
            affected_nodes.extend(
                self.apply_to_node(head.node, head.offset, len(head.node.node_value))
            )

        affected_nodes.reverse()
        return affected_nodes

    def _check_text_node(self, node: Any) -> None:
        if getattr(node, "node_type", None) != TEXT_NODE:
            raise NotATextLeafError(node)

    def _create_container(self) -> Any:
        container = self.document_object.create_element(CONTAINER_TAG)
        container.class_list.add(self.class_name)
        return container

    def apply_to_node(self, node: Any, start_offset: int, end_offset: int) -> list[Any]:
        """Stylize all or part of a single text node.

        Args:
            node: The text node
            start_offset: Local offset where styling starts (inclusive)
            end_offset: Local offset where styling stops (exclusive)

        Returns:
            The affected or newly created containers

        Raises:
            NotATextLeafError: If node is not a text node
            InvalidRangeError: If the offsets are reversed or outside the node
        """
        self._check_text_node(node)
        node_value = node.node_value
        if not 0 <= start_offset <= end_offset <= len(node_value):
            raise InvalidRangeError(
                start_offset, end_offset, f"outside text node of length {len(node_value)}"
            )

        affected_nodes: list[Any] = []
        if start_offset == end_offset:
            return affected_nodes

        if start_offset == 0 and end_offset == len(node_value):
            affected_nodes.append(self.apply_to_whole_node(node))
            return affected_nodes

        parent_node = node.parent_node

        if start_offset == 0:
            # Only the head of the node is styled: it moves into a container
            # placed before the node, which keeps the rest.
            head_container = self._create_container()
            head_container.append_child(
                self.document_object.create_text_node(node_value[start_offset:end_offset])
            )
            parent_node.insert_before(head_container, node)
            affected_nodes.append(head_container)

            node.node_value = node_value[end_offset:]

        else:
            # The middle or the end is styled: the node keeps the head, the
            # styled part and any remaining tail follow it.
            node.node_value = node_value[:start_offset]

            # May be None, which insert_before() treats as "append"
            next_sibling = node.next_sibling

            middle_container = self._create_container()
            middle_container.append_child(
                self.document_object.create_text_node(node_value[start_offset:end_offset])
            )
            parent_node.insert_before(middle_container, next_sibling)
            affected_nodes.append(middle_container)

            if end_offset < len(node_value):
                tail_node = self.document_object.create_text_node(node_value[end_offset:])
                parent_node.insert_before(tail_node, next_sibling)

        return affected_nodes

    def apply_to_whole_node(self, node: Any) -> Any:
        """Stylize an entire text node.

        If the node is the only child of its parent, the parent gets the class
        name and no container is created. Otherwise the node is moved into a new
        container that takes its place.

        Returns:
            The element now carrying the class name

        Raises:
            NotATextLeafError: If node is not a text node
        """
        self._check_text_node(node)
        parent_node = node.parent_node

        if len(parent_node.child_nodes) == 1:
            parent_node.class_list.add(self.class_name)
            return parent_node

        # e.g. styling "hello world" in
        # <div><span class="style1">foo</span>hello world<span class="style1">bar</span></div>
        container = self._create_container()
        parent_node.insert_before(container, node)
        container.append_child(node)
        return container

    def clear(self) -> int:
        """Remove this stylization's class name from every element under the root.

        Returns:
            The number of elements that carried the class name (0 if none)
        """
        walker = self.document_object.create_tree_walker(
            self.root_element, self.node_filter_object.SHOW_ELEMENT
        )
        elements = [
            element
            for element in iter_tree_walker(walker)
            if self.class_name in element.class_list
        ]
        if self.class_name in self.root_element.class_list:
            elements.insert(0, self.root_element)

        # Last first, so that unwrapping a nested container never disturbs one
        # that is still waiting
        for idx in range(len(elements) - 1, -1, -1):
            self.clear_element(elements[idx])

        logger.debug("Cleared '%s' from %d element(s)", self.class_name, len(elements))
        return len(elements)

    def clear_element(self, element: Any) -> None:
        """Remove this stylization's class name from one element.

        A container holding only this class name and a single text node is
        dissolved, for example::

            <span class="parent"><span class="style1">Hello</span></span>
            becomes
            <span class="parent">Hello</span>

        and the text node is merged with neighbouring text nodes. Any other
        element only loses the class name::

            <span class="parent"><span class="style1 other">Hello</span></span>
            becomes
            <span class="parent"><span class="other">Hello</span></span>

        The root element is never dissolved.

        A class-less span that received the class because its only child was
        styled as a whole cannot be told apart from a container, so it is
        dissolved as well: styling ``cd`` in ``<div>ab<span>cd</span>ef</div>``
        and clearing gives ``<div>abcdef</div>``.
        """
        if (
            element is not self.root_element
            and element.tag_name == CONTAINER_TAG
            and list(element.class_list) == [self.class_name]
            and len(element.child_nodes) == 1
            and element.first_child.node_type == TEXT_NODE
        ):
            parent_node = element.parent_node
            text_node = element.first_child

            parent_node.insert_before(text_node, element)
            parent_node.remove_child(element)

            previous_sibling = text_node.previous_sibling
            if previous_sibling is not None and previous_sibling.node_type == TEXT_NODE:
                text_node.node_value = previous_sibling.node_value + text_node.node_value
                parent_node.remove_child(previous_sibling)

            next_sibling = text_node.next_sibling
            if next_sibling is not None and next_sibling.node_type == TEXT_NODE:
                text_node.node_value += next_sibling.node_value
                parent_node.remove_child(next_sibling)

        else:
            element.class_list.remove(self.class_name)
