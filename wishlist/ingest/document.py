"""Read-only document views that extractors query.

Extractors never touch Playwright directly. They read the page through
``Document``, which has a live implementation backed by a Playwright page and
a static one backed by a selectolax parse of an HTML snapshot.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import urljoin

from playwright.async_api import Error as PlaywrightError, Page
from selectolax.parser import HTMLParser, Node

logger = logging.getLogger(__name__)

# Attributes that may carry an image URL, in priority order (lazy loaders and
# Angular bindings keep the real URL outside of src)
IMAGE_SOURCE_ATTRIBUTES = (
    "src",
    "data-src",
    "data-lazy-src",
    "ng-src",
    "data-original",
    "data-ng-src",
)

# Elements that start a new line in rendered text; everything else flows inline
BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "dd", "details", "dialog",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
    "ol", "p", "pre", "section", "summary", "table", "tbody", "td", "tfoot",
    "th", "thead", "tr", "ul",
})

# Source whitespace collapses to one space; no-break spaces render as-is
_SOURCE_WHITESPACE = re.compile(r"[ \t\r\n\f\v]+")


@dataclass
class ImageCandidate:
    """An <img> element's source and rendered size."""

    src: Optional[str]
    width: float = 0.0
    height: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height


class Document(ABC):
    """Async read-only view of a loaded page."""

    @property
    @abstractmethod
    def url(self) -> str:
        """URL of the loaded page (after redirects)."""
        pass

    @abstractmethod
    async def base_url(self) -> str:
        """Base URL relative references resolve against."""
        pass

    @abstractmethod
    async def title(self) -> str:
        """Contents of <title>, or empty string."""
        pass

    @abstractmethod
    async def body_text(self) -> str:
        """Visible text of the page body."""
        pass

    @abstractmethod
    async def first_text(self, selector: str) -> Optional[str]:
        """Stripped text of the first element matching selector, None if missing or empty."""
        pass

    @abstractmethod
    async def all_texts(self, selector: str) -> List[str]:
        """Stripped text of every element matching selector."""
        pass

    @abstractmethod
    async def first_attribute(self, selector: str, name: str) -> Optional[str]:
        """Attribute value of the first element matching selector."""
        pass

    @abstractmethod
    async def images(
        self,
        selector: str = "img",
        within: Optional[str] = None,
    ) -> List[ImageCandidate]:
        """
        Image candidates matching selector.

        Args:
            selector: CSS selector for image elements
            within: Optional selector of a container; the first match scopes
                the search, the whole document is used if nothing matches
        """
        pass


# JavaScript evaluated in the page. Invalid selectors are swallowed here so a
# bad entry in a selector table behaves like a miss.
_FIRST_TEXT_JS = """
(selector) => {
    let el = null;
    try { el = document.querySelector(selector); } catch (e) { return null; }
    if (!el) return null;
    const text = (el.textContent || '').trim();
    return text || null;
}
"""

_ALL_TEXTS_JS = """
(selector) => {
    let nodes = [];
    try { nodes = document.querySelectorAll(selector); } catch (e) { return []; }
    return Array.from(nodes).map((el) => (el.textContent || '').trim());
}
"""

_FIRST_ATTRIBUTE_JS = """
([selector, name]) => {
    let el = null;
    try { el = document.querySelector(selector); } catch (e) { return null; }
    return el ? el.getAttribute(name) : null;
}
"""

_IMAGES_JS = """
([selector, within, attributes]) => {
    let root = document;
    if (within) {
        try { root = document.querySelector(within) || document; } catch (e) { root = document; }
    }
    let nodes = [];
    try { nodes = root.querySelectorAll(selector); } catch (e) { return []; }
    return Array.from(nodes).map((img) => {
        let src = null;
        for (const name of attributes) {
            const value = img.getAttribute(name);
            if (value && value.trim()) { src = value.trim(); break; }
        }
        const rect = img.getBoundingClientRect();
        return {
            src: src,
            width: rect.width || parseFloat(img.getAttribute('width')) || 0,
            height: rect.height || parseFloat(img.getAttribute('height')) || 0,
        };
    });
}
"""

_BODY_TEXT_JS = "() => document.body ? document.body.innerText : ''"


class PlaywrightDocument(Document):
    """Document view over a live Playwright page."""

    def __init__(self, page: Page):
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def _evaluate(self, script: str, arg=None, default=None):
        try:
            return await self._page.evaluate(script, arg)
        except PlaywrightError as e:
            logger.debug(f"Page evaluation failed on {self._page.url}: {e}")
            return default

    async def base_url(self) -> str:
        base = await self._evaluate("() => document.baseURI")
        return base or self._page.url

    async def title(self) -> str:
        try:
            return await self._page.title()
        except PlaywrightError as e:
            logger.debug(f"Could not read title of {self._page.url}: {e}")
            return ""

    async def body_text(self) -> str:
        return await self._evaluate(_BODY_TEXT_JS, default="") or ""

    async def first_text(self, selector: str) -> Optional[str]:
        return await self._evaluate(_FIRST_TEXT_JS, selector)

    async def all_texts(self, selector: str) -> List[str]:
        return await self._evaluate(_ALL_TEXTS_JS, selector, default=[]) or []

    async def first_attribute(self, selector: str, name: str) -> Optional[str]:
        return await self._evaluate(_FIRST_ATTRIBUTE_JS, [selector, name])

    async def images(
        self,
        selector: str = "img",
        within: Optional[str] = None,
    ) -> List[ImageCandidate]:
        rows = await self._evaluate(
            _IMAGES_JS,
            [selector, within, list(IMAGE_SOURCE_ATTRIBUTES)],
            default=[],
        ) or []
        return [
            ImageCandidate(
                src=row.get("src"),
                width=float(row.get("width") or 0),
                height=float(row.get("height") or 0),
            )
            for row in rows
        ]


def _parse_dimension(value: Optional[str]) -> float:
    """Parse an HTML width/height attribute ("300", "300px")."""
    if not value:
        return 0.0
    try:
        return float(value.strip().lower().removesuffix("px"))
    except ValueError:
        return 0.0


def _first_source(node: Node, attributes: Sequence[str]) -> Optional[str]:
    for name in attributes:
        value = node.attributes.get(name)
        if value and value.strip():
            return value.strip()
    return None


def _collect_text(node: Node, parts: List[str]) -> None:
    child = node.child
    while child is not None:
        tag = child.tag
        if tag == "-text":
            parts.append(_SOURCE_WHITESPACE.sub(" ", child.text()))
        elif tag == "br":
            parts.append("\n")
        elif tag in BLOCK_TAGS:
            parts.append("\n")
            _collect_text(child, parts)
            parts.append("\n")
        else:
            _collect_text(child, parts)
        child = child.next


def visible_text(node: Node) -> str:
    """
    Approximate innerText: inline siblings share a line, block elements and
    <br> break lines, blank lines are dropped.
    """
    parts: List[str] = []
    _collect_text(node, parts)
    lines = (_SOURCE_WHITESPACE.sub(" ", line).strip(" ") for line in "".join(parts).split("\n"))
    return "\n".join(line for line in lines if line)


class StaticDocument(Document):
    """
    Document view over an HTML snapshot, parsed with selectolax.

    There is no layout engine here, so image sizes come from the width and
    height attributes only.
    """

    # Elements whose text never renders
    INVISIBLE_TAGS = ["script", "style", "noscript", "template"]

    def __init__(self, html: str, url: str):
        self._html = html
        self._url = url
        self._tree = HTMLParser(html)
        self._body_text: Optional[str] = None

    @property
    def url(self) -> str:
        return self._url

    def _css(self, selector: str) -> List[Node]:
        try:
            return self._tree.css(selector)
        except Exception as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
            return []

    def _css_first(self, selector: str) -> Optional[Node]:
        nodes = self._css(selector)
        return nodes[0] if nodes else None

    async def base_url(self) -> str:
        base = self._css_first("base[href]")
        if base is not None and base.attributes.get("href"):
            return urljoin(self._url, base.attributes["href"].strip())
        return self._url

    async def title(self) -> str:
        node = self._css_first("title")
        return node.text(deep=True).strip() if node is not None else ""

    async def body_text(self) -> str:
        if self._body_text is None:
            # Separate parse: stripping tags mutates the tree
            tree = HTMLParser(self._html)
            tree.strip_tags(self.INVISIBLE_TAGS)
            body = tree.body
            self._body_text = visible_text(body) if body is not None else ""
        return self._body_text

    async def first_text(self, selector: str) -> Optional[str]:
        node = self._css_first(selector)
        if node is None:
            return None
        text = node.text(deep=True).strip()
        return text or None

    async def all_texts(self, selector: str) -> List[str]:
        return [node.text(deep=True).strip() for node in self._css(selector)]

    async def first_attribute(self, selector: str, name: str) -> Optional[str]:
        node = self._css_first(selector)
        if node is None:
            return None
        return node.attributes.get(name)

    async def images(
        self,
        selector: str = "img",
        within: Optional[str] = None,
    ) -> List[ImageCandidate]:
        root = self._tree
        if within:
            container = self._css_first(within)
            if container is not None:
                root = container

        try:
            nodes = root.css(selector)
        except Exception as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
            return []

        return [
            ImageCandidate(
                src=_first_source(node, IMAGE_SOURCE_ATTRIBUTES),
                width=_parse_dimension(node.attributes.get("width")),
                height=_parse_dimension(node.attributes.get("height")),
            )
            for node in nodes
        ]
