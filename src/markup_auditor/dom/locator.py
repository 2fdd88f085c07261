# src/markup_auditor/dom/locator.py
"""
Best-effort mapping of parsed elements back to the raw markup.

The default strategy searches the raw text for a token derived from the
element (id, class, src, or the opening tag) and reports the line of the
first occurrence. A match can belong to an unrelated, earlier element that
shares the token; the resulting line is approximate, not exact.
"""
import logging
from typing import Optional

from bs4 import Tag

from ..model import Location, NOT_FOUND

logger = logging.getLogger(__name__)

DEFAULT_SNIPPET_LENGTH = 60
ELLIPSIS = "..."


def _attr_text(element: Tag, name: str) -> str:
    value = element.get(name)
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value or ""


class TokenSearchStrategy:
    """Plain substring search using the id > class > src > tag-open priority."""

    name = "token"

    def search_token(self, element: Tag) -> str:
        element_id = _attr_text(element, 'id')
        if element_id:
            return f'id="{element_id}"'
        class_name = _attr_text(element, 'class')
        if class_name:
            return f'class="{class_name}"'
        src = _attr_text(element, 'src')
        if src:
            return f'src="{src}"'
        return f"<{element.name.lower()}"

    def find_line(self, raw_html: str, element: Tag) -> Optional[int]:
        index = raw_html.find(self.search_token(element))
        if index == -1:
            return None
        return raw_html.count("\n", 0, index) + 1


class SourcePositionStrategy:
    """
    Uses the line recorded by the parser when available ('html.parser' and
    'html5lib' record it), falling back to the token search otherwise.
    html5lib records the line where the start tag ends, so a start tag split
    over several lines reports its last line.
    """

    name = "source"

    def __init__(self, fallback: Optional[TokenSearchStrategy] = None):
        self.fallback = fallback or TokenSearchStrategy()

    def find_line(self, raw_html: str, element: Tag) -> Optional[int]:
        line = getattr(element, 'sourceline', None)
        if isinstance(line, int) and line >= 1:
            return line
        return self.fallback.find_line(raw_html, element)


STRATEGIES = {
    TokenSearchStrategy.name: TokenSearchStrategy,
    SourcePositionStrategy.name: SourcePositionStrategy,
}


class LocationResolver:
    """Recovers a 1-based line number and a short snippet for an element."""

    def __init__(self, strategy=None, snippet_length: int = DEFAULT_SNIPPET_LENGTH):
        self.strategy = strategy or TokenSearchStrategy()
        self.snippet_length = snippet_length

    @classmethod
    def from_settings(cls, strategy_name: str = TokenSearchStrategy.name,
                      snippet_length: int = DEFAULT_SNIPPET_LENGTH) -> 'LocationResolver':
        strategy_cls = STRATEGIES.get(strategy_name)
        if strategy_cls is None:
            raise ValueError(f"Unknown locator strategy '{strategy_name}'. Choose from {sorted(STRATEGIES)}")
        return cls(strategy_cls(), snippet_length)

    def locate(self, raw_html: str, element: Optional[Tag]) -> Location:
        if element is None:
            return NOT_FOUND
        try:
            line = self.strategy.find_line(raw_html, element)
            if line is None:
                return NOT_FOUND
            lines = raw_html.split("\n")
            if line > len(lines):
                return NOT_FOUND
            return Location(line=line, snippet=self.snippet(lines[line - 1]))
        except Exception as e:
            # Location is best-effort; a failure here must never abort a rule.
            logger.debug("Could not locate <%s>: %s", getattr(element, 'name', '?'), e)
            return NOT_FOUND

    def snippet(self, line_text: str) -> str:
        text = line_text.strip()
        if len(text) > self.snippet_length:
            return text[:self.snippet_length] + ELLIPSIS
        return text
