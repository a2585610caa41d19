"""
Markup parser adapter.

The page checks only need four lookups on a parsed document, described by
``MarkupDocument``. ``LxmlDocument`` provides them on top of ``lxml.html``;
any other HTML library can be plugged into the analyzer through a
``parse`` callable returning an object with the same methods.
"""

from typing import Callable, List, Optional, Protocol

from lxml import etree
from lxml import html as lxml_html
from lxml.html import HtmlElement


class MarkupDocument(Protocol):
    def first_element(self, tag: str) -> Optional[object]:
        ...

    def all_elements(self, tag: str) -> List[object]:
        ...

    def attribute(self, element: object, name: str) -> Optional[str]:
        ...

    def text_content(self, element: object) -> str:
        ...


ParseFn = Callable[[str], MarkupDocument]


class LxmlDocument:
    """``MarkupDocument`` backed by an lxml HTML tree.

    An empty or unparseable input produces a document with no elements, so
    every check sees the signal as missing instead of failing.
    """

    def __init__(self, root: Optional[HtmlElement] = None):
        self._root = root

    @classmethod
    def from_string(cls, raw_html: str) -> "LxmlDocument":
        return cls(_parse_html(raw_html))

    def first_element(self, tag: str) -> Optional[HtmlElement]:
        elements = self.all_elements(tag)
        return elements[0] if elements else None

    def all_elements(self, tag: str) -> List[HtmlElement]:
        if self._root is None:
            return []
        return self._root.xpath(f"//{tag}")

    def attribute(self, element: HtmlElement, name: str) -> Optional[str]:
        return element.get(name)

    def text_content(self, element: HtmlElement) -> str:
        return str(element.text_content() or "")


def _parse_html(raw_html: str) -> Optional[HtmlElement]:
    """Parse HTML string into an lxml tree, returning None on failure."""
    if not raw_html or not raw_html.strip():
        return None
    try:
        return lxml_html.document_fromstring(raw_html)
    except ValueError:
        # lxml refuses str input that carries an XML encoding declaration
        try:
            return lxml_html.document_fromstring(raw_html.encode("utf-8"))
        except (etree.ParserError, ValueError):
            return None
    except etree.ParserError:
        return None
