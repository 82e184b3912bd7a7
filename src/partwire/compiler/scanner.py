"""Fragment scanner that marks every placeholder in the markup itself.

The scanner walks the literal fragments of a template once, left to right,
tracking whether the cursor is in text, inside a tag, inside a quoted
attribute value or inside a comment. Every fragment boundary is a
placeholder; depending on where it falls the fragment is rewritten so the
hole survives parsing:

* inside a tag, the hole's attribute name (or an empty name for a
  whole-element hole) is queued and emitted as one marker attribute when the
  tag closes;
* in text, an empty marker element is appended to the fragment.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from partwire.compiler.exceptions import (
    MalformedMarkupError,
    UnterminatedCommentError,
)

# Whitespace never occurs in an attribute name
MARKER_DELIMITER = " "

_TAG_NAME_RE = re.compile(r"/?\s*[^\s/>]*")
_TAG_SPACE_RE = re.compile(r"[\s/]*")
_ATTRIBUTE_NAME_RE = re.compile(r"[^\s/>=]*")
_SPACE_RE = re.compile(r"\s*")
_UNQUOTED_VALUE_RE = re.compile(r"[^\s>]*")


class ScanState(Enum):
    TEXT = "text"
    TAG = "tag"
    ATTRIBUTE_VALUE = "attribute_value"
    COMMENT = "comment"


@dataclass(frozen=True)
class Markers:
    """Names of the marker attributes written into the markup."""

    attribute: str = "data-dtpp-attributes"
    nodes: str = "data-dtpp-nodes"

    def element(self, svg: bool) -> str:
        tag = "g" if svg else "span"
        return f'<{tag} {self.nodes}=""></{tag}>'


class MarkupScanner:
    """Rewrites template fragments so that each placeholder leaves a marker."""

    def __init__(self, svg: bool = False, markers: Markers = Markers()) -> None:
        self.svg = svg
        self.markers = markers
        self._reset()

    def _reset(self) -> None:
        self.state = ScanState.TEXT
        self._pending: List[str] = []
        self._quote = ""
        self._attribute = ""

    def scan(self, fragments: Sequence[str]) -> List[str]:
        """Return the rewritten fragments, ready to be joined and parsed."""
        self._reset()
        last = len(fragments) - 1
        return [
            self._scan_fragment(fragment, index, index == last)
            for index, fragment in enumerate(fragments)
        ]

    def _scan_fragment(self, fragment: str, index: int, is_last: bool) -> str:
        position = 0
        while True:
            if self.state is ScanState.COMMENT:
                end = fragment.find("-->", position)
                if end == -1:
                    raise UnterminatedCommentError(
                        "Unterminated comment, placeholders inside comments "
                        "are not supported",
                        fragment_index=index,
                        position=len(fragment),
                    )
                position = end + 3
                self.state = ScanState.TEXT

            elif self.state is ScanState.ATTRIBUTE_VALUE:
                end = fragment.find(self._quote, position)
                if end == -1:
                    # Another placeholder inside the same quoted value
                    self._queue_hole(self._attribute, fragment, index, is_last)
                    return fragment
                position = end + 1
                self.state = ScanState.TAG

            elif self.state is ScanState.TAG:
                fragment, position = self._scan_tag(fragment, position, index, is_last)
                if position == -1:
                    return fragment

            else:
                start = fragment.find("<", position)
                if start == -1:
                    if not is_last:
                        fragment += self.markers.element(self.svg)
                    return fragment
                if fragment.startswith("<!--", start):
                    self.state = ScanState.COMMENT
                    position = start + 4
                else:
                    self.state = ScanState.TAG
                    match = _TAG_NAME_RE.match(fragment, start + 1)
                    position = _SPACE_RE.match(fragment, match.end()).end()

    def _scan_tag(
        self, fragment: str, position: int, index: int, is_last: bool
    ) -> tuple[str, int]:
        """Skip attributes up to the end of the tag or of the fragment.

        Returns the (possibly rewritten) fragment and the position after the
        tag, or -1 when the fragment ended inside the tag.
        """
        length = len(fragment)
        while True:
            position = _TAG_SPACE_RE.match(fragment, position).end()
            if position >= length:
                # Nothing pending: the placeholder stands for the element
                self._queue_hole("", fragment, index, is_last)
                return fragment, -1

            if fragment[position] == ">":
                return self._close_tag(fragment, position)

            name_end = _ATTRIBUTE_NAME_RE.match(fragment, position).end()
            name = fragment[position:name_end]
            position = _SPACE_RE.match(fragment, name_end).end()
            if position >= length:
                self._queue_hole("", fragment, index, is_last)
                return fragment, -1
            if fragment[position] != "=":
                continue

            position = _SPACE_RE.match(fragment, position + 1).end()
            if position >= length:
                # The placeholder is the whole unquoted value
                self._queue_hole(name, fragment, index, is_last)
                return fragment + '""', -1

            quote = fragment[position]
            if quote in "\"'":
                end = fragment.find(quote, position + 1)
                if end == -1:
                    self._queue_hole(name, fragment, index, is_last)
                    self.state = ScanState.ATTRIBUTE_VALUE
                    self._quote = quote
                    self._attribute = self._attribute_name(name)
                    return fragment, -1
                position = end + 1
            else:
                position = _UNQUOTED_VALUE_RE.match(fragment, position).end()
                if position >= length:
                    # Unquoted value continued by the placeholder
                    self._queue_hole(name, fragment, index, is_last)
                    return fragment, -1

    def _close_tag(self, fragment: str, end: int) -> tuple[str, int]:
        self.state = ScanState.TEXT
        if not self._pending:
            return fragment, end + 1

        insert_at = end - 1 if end and fragment[end - 1] == "/" else end
        note = f' {self.markers.attribute}="{MARKER_DELIMITER.join(self._pending)}"'
        self._pending = []
        return (
            fragment[:insert_at] + note + fragment[insert_at:],
            end + len(note) + 1,
        )

    def _queue_hole(self, name: str, fragment: str, index: int, is_last: bool) -> None:
        if is_last:
            raise MalformedMarkupError(
                "Markup ends inside a tag", fragment_index=index, position=len(fragment)
            )
        self._pending.append(self._attribute_name(name))

    def _attribute_name(self, name: str) -> str:
        # HTML tree builders lower-case attribute names
        return name if self.svg else name.lower()

