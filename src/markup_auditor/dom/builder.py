# src/markup_auditor/dom/builder.py
import logging
from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup, FeatureNotFound

from .locator import LocationResolver
from .models import DocumentTree
from ..errors import TreeBuildError

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = "html5lib"


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into a DocumentTree.

    The default html5lib builder follows the HTML5 tree-construction rules a
    browser uses: optional end tags close implicitly, and <html>, <head> and
    <body> are created when omitted. Unclosed or unknown tags become
    best-effort nodes instead of errors. Attribute values, class included,
    are kept as written so they can be found again in the raw markup.

    The builder keeps no per-document state, so one instance can serve any
    number of audits.
    """

    def __init__(
            self,
            features: str = DEFAULT_FEATURES,
            resolver: Optional[LocationResolver] = None,
            rule_options: Optional[Mapping[str, Any]] = None
    ):
        self.features = features
        self.resolver = resolver or LocationResolver()
        self.rule_options = dict(rule_options or {})

    def parse_doc(self, raw_html: str) -> DocumentTree:
        """
        Parses raw HTML into a DocumentTree.

        Raises:
            TreeBuildError: if the parser is unavailable or produces no tree.
        """
        # A leading BOM would end up as text before the first tag
        clean_html = raw_html.replace('\ufeff', '')
        try:
            soup = BeautifulSoup(clean_html, self.features, multi_valued_attributes=None)
        except FeatureNotFound as e:
            raise TreeBuildError(f"HTML parser '{self.features}' is not installed") from e
        except Exception as e:
            raise TreeBuildError(f"Could not parse markup: {e}") from e

        if soup is None:
            raise TreeBuildError("Parser returned no document tree")

        logger.debug("Parsed %d characters with '%s'", len(raw_html), self.features)
        return DocumentTree(soup=soup, raw_html=raw_html, resolver=self.resolver, options=self.rule_options)
