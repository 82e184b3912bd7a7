"""Compile fragment sequences into reusable static templates."""

import logging
from collections import OrderedDict
from typing import Any, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from partwire.compiler.exceptions import InvalidFragmentsError, MalformedMarkupError
from partwire.compiler.namespace import detect_svg
from partwire.compiler.scanner import MARKER_DELIMITER, Markers, MarkupScanner
from partwire.runtime.host import HostTree
from partwire.runtime.instance import Instance, Processor, materialize

logger = logging.getLogger(__name__)


class StaticTemplate:
    """The parsed, marker-annotated tree of one fragment sequence.

    It is shared by every instance created from it and never mutated after
    compilation; instances work on deep clones.
    """

    def __init__(
        self,
        fragments: Sequence[str],
        fragment: BeautifulSoup,
        markup: str,
        svg: bool,
        host: HostTree,
        markers: Markers,
    ) -> None:
        self.fragments = fragments
        self.fragment = fragment
        self.markup = markup
        self.svg = svg
        self.host = host
        self.markers = markers

    @property
    def placeholder_count(self) -> int:
        return len(self.fragments) - 1

    def instantiate(
        self, processor: Optional[Processor] = None, arguments: Any = None
    ) -> Instance:
        return materialize(self, processor, arguments)

    def __repr__(self) -> str:
        mode = "svg" if self.svg else "html"
        return f"StaticTemplate({mode}, placeholders={self.placeholder_count})"


def _count_markers(fragment: BeautifulSoup, markers: Markers) -> int:
    count = 0
    for node in fragment.descendants:
        if not isinstance(node, Tag):
            continue
        if markers.attribute in node.attrs:
            count += len(node[markers.attribute].split(MARKER_DELIMITER))
        if markers.nodes in node.attrs:
            count += 1
    return count


_CacheEntry = Tuple[Sequence[str], StaticTemplate]


class TemplateCompiler:
    """Scans and parses fragment sequences, caching one template per sequence.

    The cache is keyed by the identity of the fragment sequence: a template
    site is expected to declare its fragments once and reuse the same object
    on every render, so an equal but distinct sequence compiles again. At
    most ``cache_size`` templates are kept; the least recently used entry is
    evicted first.
    """

    def __init__(
        self,
        host: Optional[HostTree] = None,
        markers: Markers = Markers(),
        cache: bool = True,
        cache_size: int = 256,
    ) -> None:
        if cache_size < 1:
            raise ValueError("cache_size must be at least 1")
        self.host = host or HostTree()
        self.markers = markers
        self.use_cache = cache
        self.cache_size = cache_size
        self._cache: OrderedDict[
            Tuple[int, Optional[bool]], _CacheEntry
        ] = OrderedDict()

    def compile(
        self, fragments: Sequence[str], svg: Optional[bool] = None
    ) -> StaticTemplate:
        """Compile ``fragments``; ``svg`` forces the namespace mode when given."""
        key = (id(fragments), svg)
        if self.use_cache:
            cached = self._cache.get(key)
            if cached is not None and cached[0] is fragments:
                logger.debug("Template cache hit for %d fragments", len(fragments))
                self._cache.move_to_end(key)
                return cached[1]

        template = self._compile(fragments, svg)
        if self.use_cache:
            # The cache entry keeps the sequence alive so its id is never reused
            self._cache[key] = (fragments, template)
            self._cache.move_to_end(key)
            if len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return template

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compile(self, fragments: Sequence[str], svg: Optional[bool]) -> StaticTemplate:
        self._validate(fragments)

        if svg is None:
            svg = detect_svg("".join(fragments))
        logger.debug(
            "Compiling %d fragments in %s mode", len(fragments), "SVG" if svg else "HTML"
        )

        scanned: List[str] = MarkupScanner(svg, self.markers).scan(fragments)
        markup = "".join(scanned)
        fragment = self.host.parse(markup, svg)

        placeholders = len(fragments) - 1
        found = _count_markers(fragment, self.markers)
        if found != placeholders:
            raise MalformedMarkupError(
                f"Expected {placeholders} placeholder markers after parsing, "
                f"found {found}; placeholders inside raw text elements such as "
                "<script> or <style> are not supported"
            )

        return StaticTemplate(fragments, fragment, markup, svg, self.host, self.markers)

    @staticmethod
    def _validate(fragments: Sequence[str]) -> None:
        if isinstance(fragments, str):
            raise InvalidFragmentsError(
                "Expected a sequence of fragments, not a single string"
            )
        if not len(fragments):
            raise InvalidFragmentsError("At least one markup fragment must be provided")
        for index, fragment in enumerate(fragments):
            if not isinstance(fragment, str):
                raise InvalidFragmentsError(
                    f"Fragment {index} must be a string, {type(fragment).__name__} "
                    "was provided"
                )
