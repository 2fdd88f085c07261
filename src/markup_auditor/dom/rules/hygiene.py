# src/markup_auditor/dom/rules/hygiene.py
import logging
from typing import List

from ..core import CategoryDefinition, audit_rule
from ..models import DocumentTree, element_children
from ...model import Issue, Severity

logger = logging.getLogger(__name__)

INLINE_STYLE_REPORT_LIMIT = 3
DIV_SOUP_REPORT_LIMIT = 3
MAX_NESTING_DEPTH = 8


def measure_depth(root) -> int:
    """Deepest element nesting below `root`; the root itself is depth 0."""
    max_depth = 0
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            max_depth = depth
        for child in element_children(node):
            stack.append((child, depth + 1))
    return max_depth


# --- RULES ---

@audit_rule(codes=["INLINE_STYLE", "INLINE_STYLE_ROLLUP"])
def check_inline_styles(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """The first few offenders are reported one by one, the rest as a single rollup."""
    limit = tree.option('inline_style_report_limit', INLINE_STYLE_REPORT_LIMIT)
    styled = tree.find_all(style=True)
    res = []
    for element in styled[:limit]:
        res.append(Issue.create(
            Severity.WARNING, "INLINE_STYLE", f"Inline style used on <{element.name.lower()}>.",
            "Move CSS to an external stylesheet or <style> block using classes.",
            tree.locate(element, raw_html),
        ))
    if len(styled) > limit:
        res.append(Issue.create(
            Severity.WARNING, "INLINE_STYLE_ROLLUP",
            f"...and {len(styled) - limit} more elements with inline styles.",
            "Refactor styles into CSS classes to improve maintainability.",
        ))
    return res


@audit_rule(codes=["DEEP_NESTING"])
def check_nesting_depth(tree: DocumentTree, raw_html: str) -> List[Issue]:
    limit = tree.option('max_nesting_depth', MAX_NESTING_DEPTH)
    depth = measure_depth(tree.body_root)
    if depth <= limit:
        return []
    return [Issue.create(
        Severity.WARNING, "DEEP_NESTING", f"Excessive DOM nesting detected (Depth: {depth}).",
        "Flatten your HTML structure. Remove unnecessary wrapper divs.",
    )]


@audit_rule(codes=["DIV_SOUP"])
def check_div_soup(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """A <div> whose only child element is another <div>. Only the first few are surfaced."""
    limit = tree.option('div_soup_report_limit', DIV_SOUP_REPORT_LIMIT)
    res = []
    wrappers = 0
    for div in tree.find_all('div'):
        children = element_children(div)
        if len(children) == 1 and children[0].name == 'div':
            wrappers += 1
            if wrappers <= limit:
                res.append(Issue.create(
                    Severity.INFO, "DIV_SOUP", 'Potential "Div Soup" (nested container).',
                    "Remove this wrapper if it serves no styling or layout purpose.",
                    tree.locate(div, raw_html),
                ))
    if wrappers > limit:
        logger.debug("Div soup: %d wrapper(s) found, %d not reported", wrappers, wrappers - limit)
    return res


# --- DEFINITION ---
DEFINITION = CategoryDefinition(
    name="UI & Markup Hygiene",
    audit_rules=[check_inline_styles, check_nesting_depth, check_div_soup]
)
