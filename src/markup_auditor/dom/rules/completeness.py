# src/markup_auditor/dom/rules/completeness.py
from typing import List

from ..core import CategoryDefinition, audit_rule
from ..models import DocumentTree
from ...model import Issue, Severity

DEPRECATED_TAGS = ['font', 'center', 'strike', 'marquee', 'blink']


# --- RULES ---

@audit_rule(codes=["MISSING_TITLE"])
def check_title(tree: DocumentTree, raw_html: str) -> List[Issue]:
    title = tree.find('title')
    if title is not None and title.get_text(strip=True):
        return []
    return [Issue.create(
        Severity.CRITICAL, "MISSING_TITLE", "Missing or empty <title> tag.",
        "Add a descriptive <title> in the <head> section.",
    )]


@audit_rule(codes=["MISSING_VIEWPORT"])
def check_viewport(tree: DocumentTree, raw_html: str) -> List[Issue]:
    if tree.find('meta', attrs={'name': 'viewport'}) is not None:
        return []
    return [Issue.create(
        Severity.CRITICAL, "MISSING_VIEWPORT", 'Missing <meta name="viewport"> tag.',
        'Add <meta name="viewport" content="width=device-width, initial-scale=1.0"> for mobile responsiveness.',
    )]


@audit_rule(codes=["MISSING_OPEN_GRAPH"])
def check_open_graph(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """og:title and og:image are checked as a pair."""
    og_title = tree.find('meta', attrs={'property': 'og:title'})
    og_image = tree.find('meta', attrs={'property': 'og:image'})
    if og_title is not None and og_image is not None:
        return []
    return [Issue.create(
        Severity.INFO, "MISSING_OPEN_GRAPH", "Missing Open Graph meta tags (og:title, og:image).",
        'Add <meta property="og:title" ...> and og:image to improve social sharing previews.',
    )]


@audit_rule(codes=["DEPRECATED_TAG"])
def check_deprecated_tags(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """One warning per deprecated tag name, located at its first instance."""
    res = []
    for tag in DEPRECATED_TAGS:
        first = tree.find(tag)
        if first is None:
            continue
        res.append(Issue.create(
            Severity.WARNING, "DEPRECATED_TAG", f"Deprecated HTML tag <{tag}> found.",
            f"Remove <{tag}> and use modern CSS property instead.",
            tree.locate(first, raw_html),
        ))
    return res


# --- DEFINITION ---
DEFINITION = CategoryDefinition(
    name="Document Completeness",
    audit_rules=[check_title, check_viewport, check_open_graph, check_deprecated_tags]
)
