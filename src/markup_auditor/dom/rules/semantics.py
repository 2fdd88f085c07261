# src/markup_auditor/dom/rules/semantics.py
from typing import List, Set

from ..core import CategoryDefinition, audit_rule
from ..models import DocumentTree
from ...model import Issue, Severity

LANDMARK_TAGS = ['header', 'nav', 'footer', 'section', 'article', 'aside']


# --- RULES ---

@audit_rule(codes=["MISSING_MAIN", "MULTIPLE_MAIN"])
def check_main_landmark(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """Exactly one <main> per page."""
    mains = tree.find_all('main')
    if not mains:
        return [Issue.create(
            Severity.CRITICAL, "MISSING_MAIN", "Missing <main> landmark.",
            "Wrap your primary content in a <main> tag to help screen readers identify the core content.",
        )]
    if len(mains) > 1:
        return [Issue.create(
            Severity.WARNING, "MULTIPLE_MAIN", "Multiple <main> landmarks found.",
            'Ensure only one <main> element exists per page, or use the "hidden" attribute on others.',
            tree.locate(mains[1], raw_html),
        )]
    return []


@audit_rule(codes=["MISSING_H1", "MULTIPLE_H1"])
def check_single_h1(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """Exactly one <h1> per page."""
    headings = tree.find_all('h1')
    if not headings:
        return [Issue.create(
            Severity.CRITICAL, "MISSING_H1", "Missing <h1> heading.",
            "Add a single <h1> heading to describe the page topic.",
        )]
    if len(headings) > 1:
        return [Issue.create(
            Severity.WARNING, "MULTIPLE_H1", "Multiple <h1> tags found.",
            "Use only one <h1> per page for the main title, and use <h2>-<h6> for subsections.",
            tree.locate(headings[1], raw_html),
        )]
    return []


@audit_rule(codes=["NO_LANDMARKS"])
def check_landmarks(tree: DocumentTree, raw_html: str) -> List[Issue]:
    if any(tree.find(tag) for tag in LANDMARK_TAGS):
        return []
    return [Issue.create(
        Severity.WARNING, "NO_LANDMARKS", "No semantic landmarks (<header>, <nav>, etc.) found.",
        "Replace generic <div> wrappers with semantic tags like <header>, <nav>, or <footer> where appropriate.",
    )]


@audit_rule(codes=["DUPLICATE_ID"])
def check_duplicate_ids(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """Every repeat of an id already seen earlier in document order is reported."""
    res = []
    seen: Set[str] = set()
    for element in tree.find_all(id=True):
        element_id = element.get('id')
        if not element_id:
            continue
        if element_id in seen:
            res.append(Issue.create(
                Severity.CRITICAL, "DUPLICATE_ID", f'Duplicate ID found: "{element_id}".',
                f'Rename the ID "{element_id}" to be unique on the page. IDs must not be repeated.',
                tree.locate(element, raw_html),
            ))
        seen.add(element_id)
    return res


@audit_rule(codes=["ARIA_MAIN_DIV"])
def check_div_role_main(tree: DocumentTree, raw_html: str) -> List[Issue]:
    div_main = tree.find('div', attrs={'role': 'main'})
    if div_main is None:
        return []
    return [Issue.create(
        Severity.INFO, "ARIA_MAIN_DIV", 'Found <div role="main">.',
        'Replace <div role="main"> with the native <main> element for better standard compliance.',
        tree.locate(div_main, raw_html),
    )]


# --- DEFINITION ---
DEFINITION = CategoryDefinition(
    name="Semantic Structure",
    audit_rules=[check_main_landmark, check_single_h1, check_landmarks, check_duplicate_ids, check_div_role_main]
)
