# src/markup_auditor/dom/models.py
from typing import Any, Iterator, List, Mapping, Optional, Union

from bs4 import BeautifulSoup, Tag

from .locator import LocationResolver
from ..model import Location


class DocumentTree:
    """
    The parsed document handed to every rule.

    Wraps the BeautifulSoup tree with the query helpers the rules need and
    the resolver used to point findings back at the raw markup.
    """

    def __init__(self, soup: BeautifulSoup, raw_html: str, resolver: LocationResolver,
                 options: Optional[Mapping[str, Any]] = None):
        self.soup = soup
        self.raw_html = raw_html
        self.resolver = resolver
        self.options = dict(options or {})

    def option(self, name: str, default: Any) -> Any:
        """Rule tuning value from the 'rules' settings section."""
        value = self.options.get(name)
        return default if value is None else value

    # --- Queries ---

    def find(self, *args, **kwargs) -> Optional[Tag]:
        return self.soup.find(*args, **kwargs)

    def find_all(self, *args, **kwargs) -> List[Tag]:
        return self.soup.find_all(*args, **kwargs)

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def iter_elements(self) -> Iterator[Tag]:
        """All elements in document order."""
        return iter(self.soup.find_all(True))

    @property
    def html(self) -> Optional[Tag]:
        return self.soup.find('html')

    @property
    def body_root(self) -> Union[BeautifulSoup, Tag]:
        """
        The <body> element. html5lib always creates one; with other builders
        a fragment falls back to the document itself, so top-level elements
        still sit at depth 1.
        """
        return self.soup.body or self.soup

    # --- Locations ---

    def locate(self, element: Optional[Tag], raw_html: Optional[str] = None) -> Location:
        return self.resolver.locate(self.raw_html if raw_html is None else raw_html, element)


def element_children(tag: Union[BeautifulSoup, Tag]) -> List[Tag]:
    """Child elements only, skipping text, comments and doctype nodes."""
    return [child for child in tag.children if isinstance(child, Tag)]
