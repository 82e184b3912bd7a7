"""Decide whether a template's markup is SVG or HTML."""

import logging
import re

from bs4 import BeautifulSoup
from lxml import etree

from partwire.compiler.exceptions import MalformedMarkupError

logger = logging.getLogger(__name__)

SVG_ONLY_ELEMENTS = frozenset(
    {
        "altGlyph",
        "altGlyphDef",
        "altGlyphItem",
        "animate",
        "animateColor",
        "animateMotion",
        "animateTransform",
        "circle",
        "clipPath",
        "color-profile",
        "cursor",
        "defs",
        "desc",
        "ellipse",
        "feBlend",
        "feColorMatrix",
        "feComponentTransfer",
        "feComposite",
        "feConvolveMatrix",
        "feDiffuseLighting",
        "feDisplacementMap",
        "feDistantLight",
        "feFlood",
        "feFuncA",
        "feFuncB",
        "feFuncG",
        "feFuncR",
        "feGaussianBlur",
        "feImage",
        "feMerge",
        "feMergeNode",
        "feMorphology",
        "feOffset",
        "fePointLight",
        "feSpecularLighting",
        "feSpotLight",
        "feTile",
        "feTurbulence",
        "filter",
        "font-face",
        "font-face-format",
        "font-face-name",
        "font-face-src",
        "font-face-uri",
        "foreignObject",
        "g",
        "glyph",
        "glyphRef",
        "hkern",
        "line",
        "linearGradient",
        "marker",
        "mask",
        "metadata",
        "missing-glyph",
        "mpath",
        "path",
        "pattern",
        "polygon",
        "polyline",
        "radialGradient",
        "rect",
        "set",
        "stop",
        "switch",
        "symbol",
        "text",
        "textPath",
        "tref",
        "tspan",
        "use",
        "view",
        "vkern",
    }
)

# Element names that exist in both vocabularies
SHARED_ELEMENTS = frozenset({"a", "font", "image", "script", "style", "title"})

_ELEMENT_NAME_RE = re.compile(r"\s*([^\s:=/>]+)")


def first_element_name(markup: str) -> tuple[int, str]:
    """Return the position of the first ``<`` and the element name after it.

    Returns ``(-1, "")`` for markup without any ``<``.
    """
    start = markup.find("<")
    if start == -1:
        return -1, ""

    match = _ELEMENT_NAME_RE.match(markup, start + 1)
    if not match:
        raise MalformedMarkupError("Missing element name", position=start)
    return start, match.group(1)


def _is_well_formed_xml(markup: str) -> bool:
    parser = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)
    try:
        etree.fromstring(markup.encode("utf-8"), parser)
    except etree.XMLSyntaxError:
        return False
    return True


def detect_svg(markup: str) -> bool:
    """Return True when ``markup`` (placeholders elided) should be parsed as SVG.

    This is a best-effort guess made once per template: SVG-only element
    names settle it, names unknown to SVG mean HTML, and names shared by both
    vocabularies are resolved by checking that the markup is well-formed XML
    without an ``<svg>`` element of its own.
    """
    start, name = first_element_name(markup)
    if start == -1:
        return False

    if name in SVG_ONLY_ELEMENTS:
        logger.debug("SVG mode: first element <%s> only exists in SVG", name)
        return True

    if name not in SHARED_ELEMENTS:
        return False

    if not _is_well_formed_xml(markup):
        logger.debug("HTML mode: <%s> markup is not well-formed XML", name)
        return False

    # An <svg> inside means HTML embedding SVG, not SVG itself
    if BeautifulSoup(markup, "html.parser").find("svg") is not None:
        logger.debug("HTML mode: <%s> markup embeds an <svg> element", name)
        return False

    logger.debug("SVG mode: <%s> markup is well-formed XML", name)
    return True
