# src/markup_auditor/model.py
import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

CATEGORY_ORDER = (
    "Semantic Structure",
    "Accessibility Basics",
    "UI & Markup Hygiene",
    "Document Completeness",
)

DEFAULT_SOURCE = "Raw Input"


class Severity(str, Enum):
    """Impact class of a finding. Compares by impact, not by name."""
    CRITICAL = "Critical"
    WARNING = "Warning"
    INFO = "Info"

    @property
    def impact(self) -> int:
        return _IMPACT[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.impact < other.impact

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.impact <= other.impact

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.impact > other.impact

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.impact >= other.impact


_IMPACT = {Severity.CRITICAL: 2, Severity.WARNING: 1, Severity.INFO: 0}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Location(_Frozen):
    """Approximate position of an element in the raw markup."""
    line: Optional[int] = None
    snippet: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.line is not None and self.snippet is not None


NOT_FOUND = Location()


class Issue(_Frozen):
    """
    A single finding produced by an audit rule.

    `line_number` and `context` travel together: either the resolver located
    the element in the raw text and both are set, or neither is.
    """
    severity: Severity
    code: str
    description: str
    suggestion: Optional[str] = None
    line_number: Optional[int] = Field(default=None, ge=1)
    context: Optional[str] = None

    @field_validator('description')
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Issue description must not be empty")
        return v

    @model_validator(mode='after')
    def location_is_paired(self) -> 'Issue':
        if (self.line_number is None) != (self.context is None):
            raise ValueError("line_number and context must be set together")
        return self

    @classmethod
    def create(
            cls,
            severity: Severity,
            code: str,
            description: str,
            suggestion: Optional[str] = None,
            location: Optional[Location] = None
    ) -> 'Issue':
        """Builds an issue, attaching the location only when it was actually found."""
        if location is not None and location.found:
            return cls(severity=severity, code=code, description=description, suggestion=suggestion,
                       line_number=location.line, context=location.snippet)
        return cls(severity=severity, code=code, description=description, suggestion=suggestion)


class Category(_Frozen):
    name: str
    issues: Tuple[Issue, ...] = ()
    score: int = Field(ge=0, le=100)

    @field_validator('name')
    @classmethod
    def known_category(cls, v: str) -> str:
        if v not in CATEGORY_ORDER:
            raise ValueError(f"Unknown category: {v}")
        return v


class ReportMetadata(_Frozen):
    length: int = Field(ge=0)
    date: datetime.date
    source: str = DEFAULT_SOURCE


class Report(_Frozen):
    """
    The complete result of one audit run: metadata, overall score and the
    four categories in their fixed order.
    """
    metadata: ReportMetadata
    overall_score: int = Field(ge=0, le=100)
    categories: Tuple[Category, ...]

    @field_validator('categories')
    @classmethod
    def fixed_categories(cls, v: Tuple[Category, ...]) -> Tuple[Category, ...]:
        names = tuple(c.name for c in v)
        if names != CATEGORY_ORDER:
            raise ValueError(f"Report requires categories {CATEGORY_ORDER}, got {names}")
        return v

    def get_category(self, name: str) -> Optional[Category]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    @property
    def issues(self) -> List[Issue]:
        return [issue for category in self.categories for issue in category.issues]

    def issue_counts(self) -> Dict[str, int]:
        counts = {sev.value: 0 for sev in Severity}
        for issue in self.issues:
            counts[issue.severity.value] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Serializes to the camelCase shape consumed by renderers and exports."""
        return self.model_dump(mode='json', by_alias=True)
