# src/markup_auditor/dom/rules/accessibility.py
from typing import List

from bs4 import Tag

from ..core import CategoryDefinition, audit_rule
from ..models import DocumentTree
from ...model import Issue, Severity

# Input types that do not take typed text and need no label
UNLABELLED_INPUT_TYPES = {'hidden', 'submit', 'button'}


def _has_aria_name(element: Tag) -> bool:
    return bool(element.get('aria-label') or element.get('aria-labelledby'))


# --- RULES ---

@audit_rule(codes=["MISSING_ALT"])
def check_img_alt(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """
    Every <img> needs an alt attribute. An empty alt is a valid marker for
    decorative images, so only absence is reported.
    """
    res = []
    for img in tree.find_all('img'):
        if img.get('alt') is not None:
            continue
        src = img.get('src') or 'unknown'
        res.append(Issue.create(
            Severity.CRITICAL, "MISSING_ALT", f"Image missing 'alt' attribute (src=\"{src}\").",
            'Add alt="..." describing the image content (e.g., alt="Company Logo").',
            tree.locate(img, raw_html),
        ))
    return res


@audit_rule(codes=["INPUT_WITHOUT_LABEL"])
def check_input_labels(tree: DocumentTree, raw_html: str) -> List[Issue]:
    res = []
    for control in tree.find_all('input'):
        input_type = (control.get('type') or '').strip().lower()
        if input_type in UNLABELLED_INPUT_TYPES:
            continue

        has_label = _has_aria_name(control)
        control_id = control.get('id')
        if not has_label and control_id and tree.find('label', attrs={'for': control_id}):
            has_label = True
        if not has_label and control.find_parent('label') is not None:
            has_label = True

        if not has_label:
            res.append(Issue.create(
                Severity.CRITICAL, "INPUT_WITHOUT_LABEL", "Input missing associated <label> or aria-label.",
                'Link a <label for="id"> to this input, or add an aria-label attribute.',
                tree.locate(control, raw_html),
            ))
    return res


@audit_rule(codes=["MISSING_LANG"])
def check_html_lang(tree: DocumentTree, raw_html: str) -> List[Issue]:
    """A present but blank lang attribute counts as missing."""
    html = tree.html
    lang = html.get('lang') if html is not None else None
    if isinstance(lang, str) and lang.strip():
        return []
    return [Issue.create(
        Severity.CRITICAL, "MISSING_LANG", '<html> element missing "lang" attribute (e.g., lang="en").',
        'Add lang="en" (or your language code) to the <html> tag.',
    )]


@audit_rule(codes=["EMPTY_BUTTON"])
def check_button_names(tree: DocumentTree, raw_html: str) -> List[Issue]:
    res = []
    for button in tree.find_all('button'):
        if button.get_text(strip=True) or _has_aria_name(button):
            continue
        res.append(Issue.create(
            Severity.CRITICAL, "EMPTY_BUTTON", "Button has no text content or aria-label.",
            'Add text content inside the button or use aria-label="..." to describe its action.',
            tree.locate(button, raw_html),
        ))
    return res


# --- DEFINITION ---
DEFINITION = CategoryDefinition(
    name="Accessibility Basics",
    audit_rules=[check_img_alt, check_input_labels, check_html_lang, check_button_names]
)
