"""The advancing front: a doubly linked list of nodes along the sweep line."""

from __future__ import annotations

from typing import Optional

from polytri.shapes import Point, Triangle


class Node:
    """A node of the advancing front."""

    __slots__ = ("point", "triangle", "next", "prev", "value")

    def __init__(self, point: Point, triangle: Optional[Triangle] = None) -> None:
        self.point = point
        self.triangle = triangle
        self.next: Optional[Node] = None
        self.prev: Optional[Node] = None
        self.value = point.x

    def __repr__(self) -> str:
        return f"Node({self.point!r})"


class AdvancingFront:
    """The front of the sweep, with a cached search position."""

    def __init__(self, head: Node, tail: Node) -> None:
        self.head = head
        self.tail = tail
        self.search = head

    def _find_search_node(self, x: float) -> Node:
        return self.search

    def locate_node(self, x: float) -> Optional[Node]:
        """The node whose span along x holds ``x``, or None."""
        node: Optional[Node] = self.search
        if x < node.value:
            node = node.prev
            while node is not None:
                if x >= node.value:
                    self.search = node
                    return node
                node = node.prev
        else:
            node = node.next
            while node is not None:
                if x < node.value:
                    self.search = node.prev
                    return node.prev
                node = node.next
        return None

    def locate_point(self, point: Point) -> Optional[Node]:
        """The node that holds ``point`` (by identity), or None."""
        px = point.x
        node: Optional[Node] = self._find_search_node(px)
        nx = node.point.x

        if px == nx:
            if point is not node.point:
                # Two nodes may share an x value for a short time.
                if node.prev is not None and point is node.prev.point:
                    node = node.prev
                elif node.next is not None and point is node.next.point:
                    node = node.next
        elif px < nx:
            node = node.prev
            while node is not None and point is not node.point:
                node = node.prev
        else:
            node = node.next
            while node is not None and point is not node.point:
                node = node.next

        if node is not None:
            self.search = node
        return node