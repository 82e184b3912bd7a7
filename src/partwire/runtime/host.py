"""Host tree primitives backed by BeautifulSoup.

Every tree mutation the engine performs goes through a :class:`HostTree`,
which keeps the engine independent of bs4 details and lets tests count
mutations by subclassing it.
"""

import copy
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PageElement, PreformattedString, Tag

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class Sentinel(Comment):
    """Boundary node of a node range. It renders as nothing."""

    PREFIX = ""
    SUFFIX = ""


class HostTree:
    """Parses markup into bs4 trees and mutates them.

    ``html_parser`` names the bs4 tree builder used for HTML templates.
    Builders other than ``html.parser`` produce whole documents, so the
    template is parsed inside a wrapper element whose children are promoted
    into a plain fragment.
    """

    def __init__(self, html_parser: str = "html.parser") -> None:
        self.html_parser = html_parser

    def new_fragment(self) -> BeautifulSoup:
        """Return an empty document fragment."""
        return BeautifulSoup("", "html.parser", multi_valued_attributes=None)

    def parse(self, markup: str, svg: bool = False) -> BeautifulSoup:
        """Parse ``markup`` into a fragment whose children are the top-level nodes."""
        if svg:
            # XML parsing needs a root that establishes the SVG namespace
            document = BeautifulSoup(f'<svg xmlns="{SVG_NAMESPACE}">{markup}</svg>', "xml")
            root = document.find("svg")
        elif self.html_parser == "html.parser":
            return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
        else:
            # Document builders add html/body and wrap bare text in <p>
            document = BeautifulSoup(
                f"<div>{markup}</div>", self.html_parser, multi_valued_attributes=None
            )
            root = document.find("div")

        fragment = self.new_fragment()
        if root is None:
            return fragment
        for child in list(root.contents):
            fragment.append(child.extract())
        return fragment

    def clone(self, fragment: Tag) -> BeautifulSoup:
        """Deep-copy the children of ``fragment`` into a new fragment."""
        clone = self.new_fragment()
        for child in fragment.contents:
            clone.append(copy.copy(child))
        return clone

    def create_text(self, text: str) -> NavigableString:
        return NavigableString(text)

    def create_sentinel(self) -> Sentinel:
        return Sentinel("")

    def insert_before(
        self, parent: Tag, node: PageElement, reference: Optional[PageElement]
    ) -> None:
        """Insert (or move) ``node`` before ``reference``; append when it is None."""
        if node.parent is not None:
            node.extract()
        if reference is None:
            parent.append(node)
        else:
            parent.insert(parent.index(reference), node)

    def replace_child(self, parent: Tag, new: PageElement, old: PageElement) -> None:
        if new.parent is not None:
            new.extract()
        index = parent.index(old)
        old.extract()
        parent.insert(index, new)

    def remove_child(self, parent: Tag, node: PageElement) -> None:
        if node.parent is not parent:
            raise ValueError("The node to remove is not a child of this parent")
        node.extract()

    @staticmethod
    def is_node(value: object) -> bool:
        return isinstance(value, PageElement)

    @staticmethod
    def is_text(node: PageElement) -> bool:
        return isinstance(node, NavigableString) and not isinstance(
            node, PreformattedString
        )

    @staticmethod
    def serialize(nodes: Iterable[PageElement]) -> str:
        return "".join(
            node.output_ready() if isinstance(node, NavigableString) else node.decode()
            for node in nodes
        )
