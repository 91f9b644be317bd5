"""
Noteful Backend — Text Sanitizer
==================================

What:  Neutralizes active HTML in user-supplied text before it leaves the API.
Why:   Note titles and bodies are rendered by browsers. Stored text is kept
       verbatim; every response goes through the sanitizer so a stored
       `<script>` can never run on a client.
How:   Whitelist filtering with bleach:
       - Tags outside the whitelist are escaped, so they show up as text
         (`<script>` → `&lt;script&gt;`) and their inner text is preserved
       - Attributes outside the whitelist are dropped (`onerror`, `onclick`)
       - URLs are limited to http, https and mailto
       - Whitelisted inert markup (`<strong>`, `<img src>`, ...) passes through

Design Decision:
    The sanitizer is an interface with a single method. NoteService only ever
    calls `sanitize(text)`, so the filtering library can be swapped (or a
    stricter policy plugged in) without touching the request handling.
"""

from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, List, Optional

from bleach.sanitizer import Cleaner


# Formatting and structural markup that cannot execute anything on its own
ALLOWED_TAGS: FrozenSet[str] = frozenset({
    "a", "abbr", "address", "article", "aside", "b", "bdi", "bdo", "big",
    "blockquote", "br", "caption", "center", "cite", "code", "col",
    "colgroup", "dd", "del", "details", "div", "dl", "dt", "em", "figcaption",
    "figure", "font", "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hr", "i", "img", "ins", "kbd", "li", "mark", "nav", "ol", "p", "pre", "s",
    "section", "small", "span", "strike", "strong", "sub", "summary", "sup",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "tt", "u", "ul",
})

# No event handlers (on*) and no style attribute anywhere
ALLOWED_ATTRIBUTES: Dict[str, List[str]] = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "bdi": ["dir"],
    "bdo": ["dir"],
    "blockquote": ["cite"],
    "col": ["align", "valign", "span", "width"],
    "colgroup": ["align", "valign", "span", "width"],
    "del": ["datetime"],
    "details": ["open"],
    "font": ["color", "size", "face"],
    "img": ["src", "alt", "title", "width", "height"],
    "ins": ["datetime"],
    "table": ["width", "border", "align", "valign"],
    "tbody": ["align", "valign"],
    "td": ["width", "rowspan", "colspan", "align", "valign"],
    "tfoot": ["align", "valign"],
    "th": ["width", "rowspan", "colspan", "align", "valign"],
    "thead": ["align", "valign"],
    "tr": ["rowspan", "align", "valign"],
}

ALLOWED_PROTOCOLS: FrozenSet[str] = frozenset({"http", "https", "mailto"})


class Sanitizer(ABC):
    """Makes a piece of text safe to embed in an HTML document."""

    @abstractmethod
    def sanitize(self, text: str) -> str:
        ...


class BleachSanitizer(Sanitizer):
    """
    Sanitizer backed by bleach's html5lib-based cleaner.

    The default policy is the module-level whitelist; callers may narrow or
    widen it per instance.
    """

    def __init__(
        self,
        tags: Optional[FrozenSet[str]] = None,
        attributes: Optional[Dict[str, List[str]]] = None,
        protocols: Optional[FrozenSet[str]] = None,
    ):
        self._cleaner = Cleaner(
            tags=tags if tags is not None else ALLOWED_TAGS,
            attributes=attributes if attributes is not None else ALLOWED_ATTRIBUTES,
            protocols=protocols if protocols is not None else ALLOWED_PROTOCOLS,
            strip=False,  # escape disallowed tags instead of deleting them
            strip_comments=True,
        )

    def sanitize(self, text: str) -> str:
        return self._cleaner.clean(text)


# Default instance. Cleaner is not thread-safe; all requests share the event loop thread.
sanitizer = BleachSanitizer()
