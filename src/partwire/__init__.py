try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("partwire")
    except PackageNotFoundError:
        __version__ = "unknown"

from partwire.compiler.exceptions import (
    InvalidFragmentsError,
    MalformedMarkupError,
    TemplateSyntaxError,
    UnterminatedCommentError,
)
from partwire.compiler.template import StaticTemplate
from partwire.core.ref import Ref
from partwire.runtime.engine import TemplateEngine, compile, get_engine
from partwire.runtime.instance import Instance, RootNodes
from partwire.runtime.node_range import BoundaryError, NodeRange
from partwire.runtime.parts import (
    AttributePart,
    ElementPart,
    NodeRangePart,
    Part,
    PartList,
    PartType,
)
from partwire.runtime.processor import values_processor

__all__ = [
    "TemplateEngine",
    "compile",
    "get_engine",
    "StaticTemplate",
    "Instance",
    "RootNodes",
    "NodeRange",
    "Part",
    "PartList",
    "PartType",
    "AttributePart",
    "ElementPart",
    "NodeRangePart",
    "Ref",
    "values_processor",
    "TemplateSyntaxError",
    "MalformedMarkupError",
    "UnterminatedCommentError",
    "InvalidFragmentsError",
    "BoundaryError",
]
