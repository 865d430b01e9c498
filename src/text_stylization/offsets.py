"""
Offset resolution for text spread across many text nodes.

The text under a root is the concatenation of its text nodes in document
order, and callers address it with global character offsets. This module maps
those offsets back onto (text node, local offset) pairs in a single pass over
the nodes, and groups the pairs per requested range.

Algorithm Note:
    A boundary is matched with an inclusive test, ``start <= offset <=
    last_included``, for range starts and range ends alike. An end offset that
    sits exactly one past the last character of a node therefore lands at local
    offset 0 of the following node. Offsets that are still unmatched when the
    nodes run out are clamped to ``(last_node, len(last_node))``, the only
    exclusive position this module ever emits.
"""

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .models import NodeAndOffset, TextRange

logger = logging.getLogger(__name__)


def node_text_length(node: Any) -> int:
    """Length of a text node's payload (0 when it has none)."""
    value = node.node_value
    return 0 if value is None else len(value)


def iter_tree_walker(walker: Any) -> Iterator[Any]:
    """Yield the nodes a DOM-style tree walker accepts, in order."""
    while True:
        node = walker.next_node()
        if node is None:
            return
        yield node


@dataclass
class LeafVisit:
    """What the resolver found while visiting one text node.

    Attributes:
        node: The text node visited
        start: Global offset of the node's first character
        last_included: Global offset of the node's last character
            (``start - 1`` for an empty node)
        hits: Offsets that resolved into this node, in input order
        clamped: True for the trailing visit that holds offsets past the end
            of the text
    """

    node: Any
    start: int
    last_included: int
    hits: list[NodeAndOffset] = field(default_factory=list)
    clamped: bool = False


class OffsetResolver:
    """Resolves sorted global offsets to NodeAndOffset pairs.

    Args:
        leaves: Text nodes under the root, in document order. May be a lazy
            iterator; it is consumed once and only as far as needed.
    """

    def __init__(self, leaves: Iterable[Any]) -> None:
        self._leaves = leaves

    def visit(self, positions: Iterable[int]) -> Iterator[LeafVisit]:
        """Walk the text nodes, yielding one LeafVisit per node.

        Stops as soon as every position has been resolved. If positions remain
        once the nodes are exhausted, one last clamped visit of the final node
        carries them all.

        Args:
            positions: Global offsets in non-decreasing order
        """
        pending = deque(positions)
        if not pending:
            return

        cursor = 0
        last_node = None
        for node in self._leaves:
            length = node_text_length(node)
            visit = LeafVisit(node=node, start=cursor, last_included=cursor + length - 1)

            while pending and cursor <= pending[0] <= visit.last_included:
                visit.hits.append(NodeAndOffset(node, pending.popleft() - cursor))

            yield visit

            if not pending:
                return
            cursor += length
            last_node = node

        if last_node is None:
            logger.debug("No text nodes to resolve %d offset(s) against", len(pending))
            return

        past_end = sum(1 for position in pending if position > cursor)
        if past_end:
            logger.warning(
                "Clamped %d offset(s) beyond the end of the text (%d characters)",
                past_end,
                cursor,
            )

        length = node_text_length(last_node)
        yield LeafVisit(
            node=last_node,
            start=cursor - length,
            last_included=cursor - 1,
            hits=[NodeAndOffset(last_node, length) for _ in pending],
            clamped=True,
        )

    def resolve(self, positions: Iterable[int]) -> list[NodeAndOffset]:
        """Resolve every position to a NodeAndOffset, in input order."""
        return [hit for visit in self.visit(positions) for hit in visit.hits]


def group_node_and_offsets(
    leaves: Iterable[Any], ranges: list[TextRange]
) -> list[list[NodeAndOffset]]:
    """Collect the NodeAndOffset pairs that make up each range.

    In a group the first element is the start boundary and the last element
    the end boundary. Every text node lying wholly between them is added in
    between, in document order, with offset 0. A range inside a single node
    gives two pairs on the same node, and a range ending at the end of the
    text ends with ``(last_node, len(last_node))`` rather than also listing
    the last node as interior.

    Args:
        leaves: Text nodes under the root, in document order
        ranges: Ranges ordered by start offset

    Returns:
        One group per range, in the order of ``ranges``. Groups are empty when
        there is no text at all.
    """
    groups: list[list[NodeAndOffset]] = [[] for _ in ranges]
    positions = [
        position for text_range in ranges for position in (text_range.start, text_range.end)
    ]

    # Index of the next position to match; even indexes are starts, odd are ends
    index = 0
    for visit in OffsetResolver(leaves).visit(positions):
        finding_end = index % 2 == 1
        if finding_end and not visit.hits and not visit.clamped:
            groups[index // 2].append(NodeAndOffset(visit.node, 0))

        for hit in visit.hits:
            group = groups[index // 2]
            if visit.clamped and index % 2 == 1 and len(group) > 1 and group[-1].node is visit.node:
                # The last node was taken as interior; the clamped end replaces it
                group.pop()
            group.append(hit)
            index += 1

    logger.debug("Resolved %d range(s) into %d node group(s)", len(ranges), len(groups))
    return groups
