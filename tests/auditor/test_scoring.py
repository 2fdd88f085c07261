# tests/auditor/test_scoring.py
import pytest

from markup_auditor.model import Issue, Category, Severity, CATEGORY_ORDER
from markup_auditor.scoring import Scorer


def _issues(critical=0, warning=0, info=0):
    return (
        [Issue.create(Severity.CRITICAL, "C", "critical")] * critical
        + [Issue.create(Severity.WARNING, "W", "warning")] * warning
        + [Issue.create(Severity.INFO, "I", "info")] * info
    )


@pytest.fixture
def scorer():
    return Scorer()


def test_no_issues_scores_100(scorer):
    assert scorer.score([]) == 100


def test_penalties(scorer):
    assert scorer.score(_issues(critical=1)) == 85
    assert scorer.score(_issues(warning=1)) == 95
    assert scorer.score(_issues(critical=2, warning=3)) == 55


def test_info_never_affects_score(scorer):
    base = _issues(critical=1, warning=2)
    assert scorer.score(base) == scorer.score(base + _issues(info=1))
    assert scorer.score(_issues(info=50)) == 100


def test_score_is_clamped_at_zero(scorer):
    assert scorer.score(_issues(warning=20)) == 0
    assert scorer.score(_issues(critical=7)) == 0


def test_score_never_increases_with_more_issues(scorer):
    issues = []
    previous = scorer.score(issues)
    for severity in [Severity.WARNING, Severity.CRITICAL] * 6:
        issues.append(Issue.create(severity, "X", "x"))
        current = scorer.score(issues)
        assert current <= previous
        previous = current


@pytest.mark.parametrize("scores, expected", [
    ((100, 100, 100, 100), 100),
    ((100, 100, 100, 85), 96),   # 96.25
    ((100, 95, 100, 95), 98),    # 97.5 rounds up
    ((85, 90, 95, 100), 93),     # 92.5 rounds up
    ((0, 0, 0, 5), 1),           # 1.25
])
def test_overall_is_rounded_mean(scores, expected):
    categories = [Category(name=n, issues=[], score=s) for n, s in zip(CATEGORY_ORDER, scores)]
    assert Scorer.overall(categories) == expected


def test_custom_weights_from_settings():
    scorer = Scorer({"Critical": -20, "Warning": -1})
    assert scorer.score(_issues(critical=1, warning=1)) == 79
    assert scorer.weights[Severity.INFO] == 0


def test_positive_weights_are_rejected():
    with pytest.raises(ValueError):
        Scorer({"Info": 5})


def test_categorize_builds_category(scorer):
    category = scorer.categorize("Document Completeness", _issues(critical=1, info=1))
    assert category.name == "Document Completeness"
    assert category.score == 85
    assert len(category.issues) == 2
