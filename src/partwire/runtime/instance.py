"""Materialization of compiled templates into live instances."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from partwire.compiler.scanner import MARKER_DELIMITER
from partwire.runtime.node_range import BoundaryError, NodeRange
from partwire.runtime.parts import (
    AttributePart,
    ElementPart,
    NodeRangePart,
    Part,
    PartList,
)

if TYPE_CHECKING:
    from partwire.compiler.template import StaticTemplate

logger = logging.getLogger(__name__)

Processor = Callable[["Instance", Any], None]


class RootNodes:
    """Live view of the top-level nodes an instance contributed.

    Only the first and last root node are remembered; the nodes in between
    are found by walking siblings on every access, so the view stays correct
    after the nodes were moved as a block into another tree, for example into
    an ancestor's node range. When that range drops the instance, the nodes
    are handed back to the instance's own fragment.
    """

    def __init__(self, first: Optional[PageElement], last: Optional[PageElement]):
        self.first = first
        self.last = last

    def __iter__(self) -> Iterator[PageElement]:
        if self.first is None:
            return
        node = self.first
        while node is not self.last:
            following = node.next_sibling
            yield node
            if following is None:
                raise BoundaryError(
                    "The root nodes of this instance are no longer adjacent, "
                    "the last root node does not follow the first one"
                )
            node = following
        yield node

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getitem__(self, index: int) -> PageElement:
        nodes = list(self)
        return nodes[index]

    def item(self, index: int) -> Optional[PageElement]:
        if index < 0:
            return None
        for position, node in enumerate(self):
            if position == index:
                return node
        return None


class Instance:
    """One independently mutable realization of a static template.

    The cloned tree is owned by whoever holds the instance; the engine never
    detaches or removes it.
    """

    def __init__(
        self,
        template: "StaticTemplate",
        fragment: BeautifulSoup,
        parts: PartList,
        processor: Optional[Processor] = None,
        arguments: Any = None,
    ) -> None:
        self.template = template
        self.fragment = fragment
        self.parts = parts
        self.processor = processor
        self.arguments = arguments
        contents = fragment.contents
        self.root_nodes = RootNodes(
            contents[0] if contents else None, contents[-1] if contents else None
        )

    def update(self, arguments: Any = None) -> None:
        """Re-render by calling the processor with new arguments."""
        if self.processor is None:
            raise TypeError("This instance was created without a processor")
        self.arguments = arguments
        self.processor(self, arguments)

    def render(self) -> str:
        """Serialize the instance's root nodes; boundary nodes render as nothing."""
        return self.template.host.serialize(self.root_nodes)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Instance(parts={len(self.parts)}, svg={self.template.svg})"


def _bind_attribute_parts(element: Tag, names: str) -> List[Part]:
    parts: List[Part] = []
    # One part per name on this element, shared by repeated placeholders
    memo: Dict[str, Part] = {}
    for name in names.split(MARKER_DELIMITER):
        part = memo.get(name)
        if part is None:
            part = AttributePart(element, name) if name else ElementPart(element)
            memo[name] = part
        parts.append(part)
    return parts


def materialize(
    template: "StaticTemplate",
    processor: Optional[Processor] = None,
    arguments: Any = None,
) -> Instance:
    """Clone ``template`` and bind its parts; run ``processor`` as the first update."""
    host = template.host
    markers = template.markers
    fragment = host.clone(template.fragment)

    places = [
        node
        for node in fragment.descendants
        if isinstance(node, Tag)
        and (markers.attribute in node.attrs or markers.nodes in node.attrs)
    ]

    parts: List[Part] = []
    for place in places:
        if markers.attribute in place.attrs:
            parts.extend(_bind_attribute_parts(place, place[markers.attribute]))
            del place[markers.attribute]

        if markers.nodes in place.attrs:
            parent = place.parent
            start = host.create_sentinel()
            end = host.create_sentinel()
            host.replace_child(parent, end, place)
            host.insert_before(parent, start, end)
            parts.append(NodeRangePart(NodeRange(start, end, host)))

    logger.debug("Materialized instance with %d parts", len(parts))
    instance = Instance(template, fragment, PartList(parts), processor, arguments)
    if processor is not None:
        processor(instance, arguments)
    return instance
