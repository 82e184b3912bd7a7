"""Default processor mapping positional values onto an instance's parts."""

from typing import Any, List, Sequence, Union

from bs4.element import PageElement

from partwire.core.ref import Ref
from partwire.runtime.instance import Instance
from partwire.runtime.parts import PartType


def _attribute_value(value: Any) -> Union[str, None]:
    if value is None or value is False:
        return None
    if value is True:
        return ""
    return str(value)


def _node_values(value: Any) -> List[Union[str, PageElement, Instance]]:
    items = value if isinstance(value, (list, tuple)) else [value]
    normalized: List[Union[str, PageElement, Instance]] = []
    for item in items:
        if item is None or item is False:
            continue
        if isinstance(item, (str, PageElement, Instance)):
            normalized.append(item)
        else:
            normalized.append(str(item))
    return normalized


def values_processor(instance: Instance, values: Sequence[Any]) -> None:
    """Apply ``values[i]`` to ``instance.parts[i]``.

    Attributes: None/False removes the attribute, True leaves it empty, any
    other value is converted with ``str()``.
    Elements: a :class:`Ref` receives the element, a callable is called with it.
    Node ranges: a single value or a list of values; None/False entries are
    dropped, strings, nodes and nested instances are placed as they are and
    anything else is converted with ``str()``.

    Missing trailing values count as None.
    """
    values = values or ()
    for index, part in enumerate(instance.parts):
        value = values[index] if index < len(values) else None

        if part.part_type is PartType.ATTRIBUTE_PART:
            part.value = _attribute_value(value)
        elif part.part_type is PartType.ELEMENT_PART:
            if isinstance(value, Ref):
                value.current = part.element
            elif callable(value):
                value(part.element)
        elif part.part_type is PartType.NODE_RANGE_PART:
            part.replace_with(*_node_values(value))
