"""Typed handles bound to the holes of a materialized instance."""

from enum import IntEnum
from typing import (
    TYPE_CHECKING,
    ClassVar,
    Iterator,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
    overload,
)

from bs4.element import PageElement, Tag

from partwire.runtime.node_range import BoundaryError, NodeRange

if TYPE_CHECKING:
    from partwire.runtime.instance import Instance


class PartType(IntEnum):
    ATTRIBUTE_PART = 0
    ELEMENT_PART = 1
    NODE_RANGE_PART = 2


class AttributePart:
    """A hole inside the value of one attribute of one element."""

    part_type: ClassVar[PartType] = PartType.ATTRIBUTE_PART

    def __init__(self, element: Tag, attribute_name: str) -> None:
        self.element = element
        self.attribute_name = attribute_name

    @property
    def value(self) -> Optional[str]:
        return self.element.get(self.attribute_name)

    @value.setter
    def value(self, value: Optional[str]) -> None:
        if value is None:
            if self.attribute_name in self.element.attrs:
                del self.element[self.attribute_name]
            return
        if not isinstance(value, str):
            raise TypeError(
                f"Attribute values must be strings or None, {value!r} was provided"
            )
        self.element[self.attribute_name] = value

    def __repr__(self) -> str:
        return f"AttributePart(<{self.element.name}> {self.attribute_name}={self.value!r})"


class ElementPart:
    """A hole standing for a whole element, used for ref-style bindings."""

    part_type: ClassVar[PartType] = PartType.ELEMENT_PART

    def __init__(self, element: Tag) -> None:
        self.element = element

    def __repr__(self) -> str:
        return f"ElementPart(<{self.element.name}>)"


class NodeRangePart:
    """A run of dynamic children between two boundary sentinels."""

    part_type: ClassVar[PartType] = PartType.NODE_RANGE_PART

    def __init__(self, nodes: NodeRange) -> None:
        self.nodes = nodes
        # Nested instances placed by the last replace_with call
        self._instances: List["Instance"] = []

    @property
    def parent(self) -> Tag:
        return self.nodes.parent

    def replace_with(self, *values: Union[str, PageElement, "Instance"]) -> None:
        """Make the range hold exactly ``values``, in order.

        Strings become text nodes, reusing current text nodes with the same
        text; instances contribute their root nodes. The update is a greedy
        single pass rather than a minimal diff: unused nodes are removed,
        preserved nodes are moved into order, then new nodes are inserted.
        Calling it twice with the same values mutates nothing the second time.

        A nested instance that is no longer among the values gets its root
        nodes back in its own fragment, so it can be placed again later.
        """
        from partwire.runtime.instance import Instance

        host = self.nodes.host
        wanted = self._flatten(values)

        current_nodes = list(self.nodes)
        current_ids = {id(node) for node in current_nodes}
        wanted_ids = {id(value) for value in wanted if host.is_node(value)}

        released = self._released_spans(values, current_ids, wanted_ids)
        released_ids = {id(node) for _, span in released for node in span}
        reusable_texts = [
            node
            for node in current_nodes
            if host.is_text(node)
            and id(node) not in wanted_ids
            and id(node) not in released_ids
        ]

        normalized: List[PageElement] = []
        for value in wanted:
            if host.is_node(value):
                normalized.append(value)
                continue
            for index, text_node in enumerate(reusable_texts):
                if str(text_node) == value:
                    normalized.append(reusable_texts.pop(index))
                    break
            else:
                normalized.append(host.create_text(value))

        normalized_ids = {id(node) for node in normalized}

        for node in current_nodes:
            if id(node) not in normalized_ids and id(node) not in released_ids:
                self.nodes.remove(node)
        for instance, span in released:
            for node in span:
                host.insert_before(instance.fragment, node, None)

        preserved = [node for node in current_nodes if id(node) in normalized_ids]
        if preserved:
            cursor = preserved[0]
            for node in normalized:
                if id(node) not in current_ids:
                    continue
                if node is cursor:
                    cursor = cursor.next_sibling
                else:
                    self.nodes.insert_before(node, cursor)

        cursor = self.nodes.start.next_sibling
        for node in normalized:
            if node is cursor:
                cursor = cursor.next_sibling
            else:
                self.nodes.insert_before(node, cursor)

        self._instances = [value for value in values if isinstance(value, Instance)]

    def _released_spans(
        self,
        values: Sequence[Union[str, PageElement, "Instance"]],
        current_ids: Set[int],
        wanted_ids: Set[int],
    ) -> List[Tuple["Instance", List[PageElement]]]:
        kept = {id(value) for value in values}
        released = []
        for instance in self._instances:
            if id(instance) in kept:
                continue
            try:
                span = list(instance.root_nodes)
            except BoundaryError:
                # Broken up elsewhere, nothing of it is left to hand back
                continue
            span_ids = {id(node) for node in span}
            # Only spans still placed here as a whole
            if span_ids <= current_ids and not span_ids & wanted_ids:
                released.append((instance, span))
        return released

    def _flatten(
        self, values: Sequence[Union[str, PageElement, "Instance"]]
    ) -> List[Union[str, PageElement]]:
        from partwire.runtime.instance import Instance

        host = self.nodes.host
        flattened: List[Union[str, PageElement]] = []
        for value in values:
            if isinstance(value, Instance):
                flattened.extend(value.root_nodes)
            elif host.is_node(value) or isinstance(value, str):
                flattened.append(value)
            else:
                raise TypeError(
                    "Only strings, tree nodes and template instances can be "
                    f"placed in a node range, {value!r} was provided"
                )

        seen = set()
        for value in flattened:
            if not host.is_node(value):
                continue
            if value is self.nodes.start or value is self.nodes.end:
                raise ValueError("A node range cannot contain its own boundary nodes")
            if id(value) in seen:
                raise ValueError(f"The node {value!r} was provided more than once")
            seen.add(id(value))
        return flattened

    def __repr__(self) -> str:
        return f"NodeRangePart(length={len(self.nodes)})"


Part = Union[AttributePart, ElementPart, NodeRangePart]


class PartList(Sequence[Part]):
    """The parts of one instance, in placeholder order. Its length is fixed."""

    def __init__(self, parts: Sequence[Part]) -> None:
        self._parts: Tuple[Part, ...] = tuple(parts)

    def __len__(self) -> int:
        return len(self._parts)

    @overload
    def __getitem__(self, index: int) -> Part: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Part]: ...

    def __getitem__(self, index):
        return self._parts[index]

    def __iter__(self) -> Iterator[Part]:
        return iter(self._parts)

    def item(self, index: int) -> Optional[Part]:
        if 0 <= index < len(self._parts):
            return self._parts[index]
        return None

    def keys(self) -> Iterator[int]:
        return iter(range(len(self._parts)))

    def values(self) -> Iterator[Part]:
        return iter(self._parts)

    def entries(self) -> Iterator[Tuple[int, Part]]:
        return enumerate(self._parts)

    def __repr__(self) -> str:
        return f"PartList({list(self._parts)!r})"
