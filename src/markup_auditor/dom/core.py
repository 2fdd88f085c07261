# src/markup_auditor/dom/core.py
from functools import update_wrapper
from typing import Any, Callable, List, Optional, Sequence, Set

from ..model import Issue, CATEGORY_ORDER

# A rule body: (tree, raw_html) -> issues
RuleFunc = Callable[[Any, str], List[Issue]]


class AuditRule:
    """
    One independent check. Every rule exposes the same capability,
    `inspect(tree, raw_html)`, and declares the issue codes it can emit.
    """

    def __init__(self, func: RuleFunc, codes: Sequence[str]):
        self.func = func
        self.codes: List[str] = list(codes)
        self.name = func.__name__
        update_wrapper(self, func)

    def inspect(self, tree: Any, raw_html: str) -> List[Issue]:
        issues = self.func(tree, raw_html) or []
        unknown = [i.code for i in issues if i.code not in self.codes]
        if unknown:
            raise ValueError(f"Rule {self.name} emitted undeclared codes: {unknown}")
        return issues

    __call__ = inspect

    def __repr__(self) -> str:
        return f"AuditRule({self.name}, codes={self.codes})"


def audit_rule(codes: List[str]):
    """
    Decorator turning a rule function into an AuditRule and declaring which
    issue codes it returns. Facilitates auto-discovery by the RuleRegistry.
    """
    def decorator(func: RuleFunc) -> AuditRule:
        return AuditRule(func, codes)
    return decorator


class CategoryDefinition:
    """
    Declarative binding of a report category to its ordered rules.
    """

    def __init__(self, name: str, audit_rules: Optional[List[AuditRule]] = None):
        if name not in CATEGORY_ORDER:
            raise ValueError(f"Unknown category: {name}")
        self.name = name
        self.audit_rules = audit_rules or []

        final_codes: Set[str] = set()
        for rule in self.audit_rules:
            final_codes.update(rule.codes)
        self.codes = sorted(final_codes)

    def inspect(self, tree: Any, raw_html: str) -> List[Issue]:
        """Runs every rule in declaration order. No rule short-circuits another."""
        issues: List[Issue] = []
        for rule in self.audit_rules:
            issues.extend(rule.inspect(tree, raw_html))
        return issues
