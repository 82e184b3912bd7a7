"""Live view over the nodes between two boundary sentinels."""

from typing import Iterator, Optional, Tuple, Union

from bs4.element import PageElement, Tag

from partwire.runtime.host import HostTree, Sentinel


class BoundaryError(Exception):
    """Raised when a boundary node was detached from the tree by third-party code."""

    pass


class NodeRange:
    """The dynamic children of a node-range part.

    Nothing is cached: length, items and iteration are recomputed by walking
    from the start sentinel to the end sentinel, since the surrounding tree
    belongs to the caller and may change between calls.
    """

    def __init__(self, start: Sentinel, end: Sentinel, host: HostTree) -> None:
        self.start = start
        self.end = end
        self.host = host

    @property
    def parent(self) -> Tag:
        parent = self.start.parent
        if parent is None or self.end.parent is not parent:
            raise BoundaryError(
                "The boundary nodes of this node range are no longer children "
                "of the same parent node, so the range cannot be located"
            )
        return parent

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __iter__(self) -> Iterator[PageElement]:
        node = self.start.next_sibling
        while node is not self.end:
            if node is None:
                raise BoundaryError(
                    "The end boundary node of this node range does not follow "
                    "its start boundary node"
                )
            following = node.next_sibling
            yield node
            node = following

    def entries(self) -> Iterator[Tuple[int, PageElement]]:
        return enumerate(self)

    def item(self, index: int) -> Optional[PageElement]:
        if index < 0:
            return None
        for position, node in enumerate(self):
            if position == index:
                return node
        return None

    def __getitem__(self, index: int) -> PageElement:
        if index < 0:
            index += len(self)
        node = self.item(index)
        if node is None:
            raise IndexError("node range index out of range")
        return node

    def __setitem__(self, index: int, value: Union[str, PageElement]) -> None:
        node = self._normalize(value)
        current = self.item(index)
        if current is not None:
            self.replace(node, current)
        elif index == len(self):
            self.append(node)
        else:
            raise IndexError("node range assignment index out of range")

    def __delitem__(self, index: int) -> None:
        self.remove(self[index])

    def insert_before(
        self, node: PageElement, reference: Optional[PageElement] = None
    ) -> None:
        """Insert ``node`` before ``reference``, or at the end of the range."""
        self.host.insert_before(
            self.parent, node, self.end if reference is None else reference
        )

    def append(self, node: PageElement) -> None:
        self.host.insert_before(self.parent, node, self.end)

    def remove(self, node: PageElement) -> None:
        self.host.remove_child(self.parent, node)

    def replace(self, new: PageElement, old: PageElement) -> None:
        self.host.replace_child(self.parent, new, old)

    def _normalize(self, value: Union[str, PageElement]) -> PageElement:
        if self.host.is_node(value):
            return value
        if isinstance(value, str):
            return self.host.create_text(value)
        raise TypeError(
            "Only strings and tree nodes can be set to indexes of a NodeRange, "
            f"{value!r} was provided"
        )

    def __repr__(self) -> str:
        return f"NodeRange(length={len(self)})"
