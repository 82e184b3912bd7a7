"""Engine object bundling configuration, host tree and template cache."""

import logging
from typing import Any, Optional, Sequence

from partwire.compiler.scanner import Markers
from partwire.compiler.template import StaticTemplate, TemplateCompiler
from partwire.runtime.host import HostTree
from partwire.runtime.instance import Instance, Processor


class TemplateEngine:
    """Compiles and instantiates templates.

    Usage:
        engine = TemplateEngine()
        ITEM = ('<li class="', '">', "</li>")
        item = engine.compile(ITEM).instantiate(values_processor, ["done", "Milk"])
    """

    def __init__(
        self,
        html_parser: str = "html.parser",
        attribute_marker: str = "data-dtpp-attributes",
        node_marker: str = "data-dtpp-nodes",
        cache: bool = True,
        cache_size: int = 256,
        debug: bool = False,
        host: Optional[HostTree] = None,
    ) -> None:
        self.html_parser = html_parser
        self.debug = debug
        self.markers = Markers(attribute=attribute_marker, nodes=node_marker)
        self.host = host or HostTree(html_parser=html_parser)
        self.compiler = TemplateCompiler(
            self.host, self.markers, cache=cache, cache_size=cache_size
        )

        if debug:
            logging.getLogger("partwire").setLevel(logging.DEBUG)

    @property
    def cache_enabled(self) -> bool:
        return self.compiler.use_cache

    def compile(
        self, fragments: Sequence[str], svg: Optional[bool] = None
    ) -> StaticTemplate:
        return self.compiler.compile(fragments, svg=svg)

    def instantiate(
        self,
        fragments: Sequence[str],
        processor: Optional[Processor] = None,
        arguments: Any = None,
    ) -> Instance:
        """Compile (or reuse) the template of ``fragments`` and instantiate it."""
        return self.compile(fragments).instantiate(processor, arguments)

    def clear_cache(self) -> None:
        self.compiler.clear_cache()


_default_engine: Optional[TemplateEngine] = None


def get_engine() -> TemplateEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine


def compile(fragments: Sequence[str], svg: Optional[bool] = None) -> StaticTemplate:
    """Compile ``fragments`` with the default engine."""
    return get_engine().compile(fragments, svg=svg)
