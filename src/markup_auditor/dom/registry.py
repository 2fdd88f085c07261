# src/markup_auditor/dom/registry.py
import importlib
import logging
import pkgutil
from typing import Dict, List

from .core import CategoryDefinition
from ..errors import RegistryError
from ..model import CATEGORY_ORDER

logger = logging.getLogger(__name__)

RULES_PACKAGE = "markup_auditor.dom.rules"


class RuleRegistry:
    """
    Central registry for rule categories.

    Dynamically discovers the modules of the 'markup_auditor.dom.rules'
    package and registers each module's DEFINITION (a CategoryDefinition).
    """

    _categories: Dict[str, CategoryDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all category definitions found in the rules package.
        """
        if cls._loaded:
            return

        try:
            rules_pkg = importlib.import_module(RULES_PACKAGE)
        except ImportError as e:
            logger.error("Could not find rules package: %s", e)
            return

        for _, name, _ in pkgutil.iter_modules(rules_pkg.__path__):
            full_name = f"{RULES_PACKAGE}.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error("Error loading rule module %s: %s", full_name, e)
                continue
            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, CategoryDefinition):
                cls.register(defn)
                logger.debug("Category loaded: %s (%d rules)", defn.name, len(defn.audit_rules))

        cls._loaded = True

    @classmethod
    def register(cls, definition: CategoryDefinition) -> None:
        if definition.name in cls._categories and cls._categories[definition.name] is not definition:
            logger.warning("Category '%s' registered twice; keeping the latest definition.", definition.name)
        cls._categories[definition.name] = definition

    @classmethod
    def get_category(cls, name: str) -> CategoryDefinition:
        definition = cls._categories.get(name)
        if definition is None:
            raise RegistryError(f"Rule category '{name}' is not registered")
        return definition

    @classmethod
    def get_categories(cls) -> List[CategoryDefinition]:
        """All four categories in report order."""
        return [cls.get_category(name) for name in CATEGORY_ORDER]

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """Every issue code any registered rule can emit."""
        codes = set()
        for definition in cls._categories.values():
            codes.update(definition.codes)
        return sorted(codes)
