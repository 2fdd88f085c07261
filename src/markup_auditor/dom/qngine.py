# src/markup_auditor/dom/qngine.py
import datetime
import logging
from typing import Any, Iterable, List, Mapping, Optional

from .builder import DOMBuilder, DEFAULT_FEATURES
from .core import CategoryDefinition
from .locator import LocationResolver, DEFAULT_SNIPPET_LENGTH
from .registry import RuleRegistry
from ..errors import EmptyInputError, RegistryError
from ..managers.config_manager import lookup_nested
from ..model import Category, Report, ReportMetadata, CATEGORY_ORDER, DEFAULT_SOURCE
from ..scoring import Scorer

logger = logging.getLogger(__name__)


class AuditEngine:
    """
    Quality engine for auditing HTML documents.

    Parses the markup once, runs the four rule categories against the tree
    in their fixed order, scores each category and assembles the Report.
    Holds no state between runs besides the reusable builder.
    """

    def __init__(
            self,
            settings: Optional[Mapping[str, Any]] = None,
            categories: Optional[List[CategoryDefinition]] = None,
            ignored_codes: Optional[Iterable[str]] = None
    ):
        """
        Args:
            settings: Mapping shaped like settings.json. Missing keys fall back
                      to the built-in defaults.
            categories: Explicit category definitions, in report order.
                        Defaults to the discovered registry.
            ignored_codes: Issue codes dropped before scoring.
        """
        settings = dict(settings or {})
        resolver = LocationResolver.from_settings(
            lookup_nested(settings, 'locator.strategy', 'token'),
            lookup_nested(settings, 'locator.snippet_length', DEFAULT_SNIPPET_LENGTH),
        )
        self.builder = DOMBuilder(
            features=lookup_nested(settings, 'parser.features', DEFAULT_FEATURES),
            resolver=resolver,
            rule_options=lookup_nested(settings, 'rules', {}),
        )
        self.scorer = Scorer(lookup_nested(settings, 'scoring.weights'))
        self.ignored_codes = frozenset(ignored_codes or ())

        if categories is None:
            RuleRegistry.discover()
            categories = RuleRegistry.get_categories()
        names = tuple(c.name for c in categories)
        if names != CATEGORY_ORDER:
            raise RegistryError(f"Engine requires categories {CATEGORY_ORDER}, got {names}")
        self.categories = categories

    def run(self, raw_html: str, source_label: str = DEFAULT_SOURCE) -> Report:
        """
        Runs the full audit suite on raw markup.

        Raises:
            EmptyInputError: if the markup is empty or whitespace only.
            TreeBuildError: if no document tree could be built.
        """
        if not raw_html or not raw_html.strip():
            raise EmptyInputError()

        tree = self.builder.parse_doc(raw_html)

        results: List[Category] = []
        for definition in self.categories:
            issues = [i for i in definition.inspect(tree, raw_html) if i.code not in self.ignored_codes]
            category = self.scorer.categorize(definition.name, issues)
            logger.debug("%s: %d issue(s), score %d", category.name, len(category.issues), category.score)
            results.append(category)

        report = Report(
            metadata=ReportMetadata(
                length=len(raw_html),
                date=datetime.date.today(),
                source=source_label or DEFAULT_SOURCE,
            ),
            overall_score=self.scorer.overall(results),
            categories=results,
        )
        logger.info("Audit of '%s' finished: overall score %d", report.metadata.source, report.overall_score)
        return report


def run(raw_html: str, source_label: str = DEFAULT_SOURCE) -> Report:
    """Audits markup with the default rules and scoring."""
    return AuditEngine().run(raw_html, source_label)

